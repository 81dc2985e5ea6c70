"""Configuration module for the on-demand certificate pre-check.

Loads and validates environment variables.
"""

import os
from dataclasses import dataclass
from typing import List


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # Address Registry Configuration
    public_ips: List[str]
    scan_interfaces: bool

    # Verification Configuration
    precheck_timeout: int
    max_labels: int
    dns_port: int

    # Operational Configuration
    verbose: bool

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        Raises:
            ValueError: If variables are invalid.

        Returns:
            Config: Validated configuration instance.
        """
        # Address literals are validated when the registry is built
        public_ips_str = os.getenv("PUBLIC_IPS", "")
        public_ips = [ip.strip() for ip in public_ips_str.split(",") if ip.strip()]

        scan_interfaces = cls._get_bool_env("PRECHECK_SCAN_INTERFACES", "true")

        precheck_timeout = cls._get_int_env("PRECHECK_TIMEOUT", "5")
        if not 1 <= precheck_timeout <= 60:
            raise ValueError("PRECHECK_TIMEOUT must be between 1 and 60 seconds")

        max_labels = cls._get_int_env("PRECHECK_MAX_LABELS", "10")
        if not 1 <= max_labels <= 127:
            raise ValueError("PRECHECK_MAX_LABELS must be between 1 and 127")

        dns_port = cls._get_int_env("DNS_PORT", "53")
        if not 1 <= dns_port <= 65535:
            raise ValueError("DNS_PORT must be between 1 and 65535")

        verbose = cls._get_bool_env("VERBOSE", "false")

        return cls(
            public_ips=public_ips,
            scan_interfaces=scan_interfaces,
            precheck_timeout=precheck_timeout,
            max_labels=max_labels,
            dns_port=dns_port,
            verbose=verbose,
        )

    @staticmethod
    def _get_int_env(key: str, default: str) -> int:
        """Get integer environment variable or raise ValueError.

        Args:
            key: Environment variable name.
            default: Value used when the variable is unset.

        Returns:
            int: Parsed value.

        Raises:
            ValueError: If the value is not an integer.
        """
        value = os.getenv(key, default)
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"{key} must be an integer, got {value!r}") from None

    @staticmethod
    def _get_bool_env(key: str, default: str) -> bool:
        return os.getenv(key, default).lower() in ("true", "1", "yes")
