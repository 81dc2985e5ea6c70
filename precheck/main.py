"""Command-line entry point for the on-demand certificate pre-check."""

import argparse
import logging
import sys
from typing import Optional, Sequence

from precheck.config import Config
from precheck.models.address_registry import AddressRegistry
from precheck.services.decision_gate import DecisionGate
from precheck.services.logger import log_registry, setup_logging


logger = logging.getLogger(__name__)


def build_gate(config: Config) -> DecisionGate:
    """Build the address registry and decision gate from configuration.

    Args:
        config: Application configuration.

    Returns:
        DecisionGate: Gate ready to verify hostnames.
    """
    registry = AddressRegistry.build(
        configured=config.public_ips,
        scan_interfaces=config.scan_interfaces,
    )
    log_registry(registry)
    return DecisionGate(
        registry,
        timeout=config.precheck_timeout,
        max_labels=config.max_labels,
        dns_port=config.dns_port,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main execution function.

    Returns:
        int: Exit code (0 if every hostname is allowed, 1 if any is denied,
             2 for configuration errors).
    """
    parser = argparse.ArgumentParser(
        prog="precheck",
        description="Verify that hostnames resolve to this server before "
        "issuing certificates for them.",
    )
    parser.add_argument("hostnames", nargs="+", help="hostnames to verify")
    args = parser.parse_args(argv)

    try:
        config = Config.from_env()
    except ValueError as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        return 2

    setup_logging(verbose=config.verbose)
    gate = build_gate(config)

    denied = 0
    for hostname in args.hostnames:
        if not gate.verify(hostname).allowed:
            denied += 1

    logger.info(
        "Verification run completed",
        extra={"total": len(args.hostnames), "denied": denied},
    )
    return 1 if denied else 0


if __name__ == "__main__":
    sys.exit(main())
