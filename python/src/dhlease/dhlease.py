#!/usr/bin/env python3
"""
dhlease -- DHCP lease viewer

Parses an ISC dhcpd lease database and prints a column-aligned table of
leases, optionally filtered by state, client, IP or MAC address.

Usage:
    dhlease [-haxvd] [-f file] [-i ip_addr] [-c client] [-m mac_addr]

Exit codes:
    0 - Report printed (possibly with no matching rows)
    1 - Help requested, unreadable file or parse error
    2 - Invalid command-line arguments
"""

import argparse
import logging
import sys
from pathlib import Path

import custom_logging
from lease_config import LOG_LEVELS, load_config
from lease_dedup import remove_duplicates
from lease_errors import LeaseError
from lease_parser import parse_lease_file
from lease_report import LeaseFilter, export_leases, filter_leases, print_report


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='dhlease',
        description="dhcp lease viewer",
        add_help=False,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Active leases from the default lease file
  dhlease -a

  # Most recent lease per MAC for clients named like 'printer'
  dhlease -d -c printer -f /var/lib/dhcp/dhcpd.leases

  # Expired leases in a subnet, exported to YAML
  dhlease -x -i 10.0.4. -o expired.yml
        """
    )

    parser.add_argument('-h', dest='help', action='store_true', help='this help')
    state = parser.add_mutually_exclusive_group()
    state.add_argument('-a', dest='active', action='store_true',
                       help='show active leases, mutually exclusive with -x')
    state.add_argument('-x', dest='expired', action='store_true',
                       help='show expired leases, mutually exclusive with -a')
    parser.add_argument('-d', dest='dedup', action='store_true',
                        help='remove duplicate MAC-leases; show only most recent lease')
    parser.add_argument('-f', dest='lease_file', type=Path, metavar='FILE',
                        help='path to dhcp lease file (default: /var/db/dhcpd.leases)')
    parser.add_argument('-i', dest='ipaddr', metavar='IP_ADDR', help='search for ip address')
    parser.add_argument('-c', dest='client', metavar='CLIENT', help='search for client')
    parser.add_argument('-m', dest='macaddr', metavar='MAC_ADDR', help='search for mac address')
    parser.add_argument('-v', dest='verbose', action='store_true', help='slightly more verbose')
    parser.add_argument('--utc', action='store_true', default=None,
                        help='lease times are UTC (as written by ISC dhcpd)')
    parser.add_argument('--config', type=Path, metavar='PATH', help='YAML config file')
    parser.add_argument('--log-level', choices=LOG_LEVELS, help='logging level (default: WARNING)')
    parser.add_argument('--syslog', action='store_true', default=None, help='also log to syslog')
    parser.add_argument('-o', '--export', type=Path, metavar='EXPORT',
                        help='also write the displayed leases to a YAML file')
    return parser


def main(argv=None) -> int:
    """Main entry point for dhlease."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.help:
        parser.print_help(sys.stderr)
        return 1

    custom_logging.setup_logging('dhlease', args.log_level or 'WARNING')

    try:
        config = load_config(args.config)
        if args.lease_file is not None:
            config.lease_file = args.lease_file
        if args.log_level:
            config.log_level = args.log_level
        if args.utc is not None:
            config.utc = args.utc
        if args.syslog is not None:
            config.syslog = args.syslog
        if args.verbose and logging.getLevelName(config.log_level) > logging.INFO:
            config.log_level = 'INFO'

        custom_logging.setup_logging('dhlease', config.log_level, use_syslog=config.syslog)
        logger.debug(f"Configuration: {config}")

        if args.verbose:
            print(f"using lease file: {config.lease_file}")

        result = parse_lease_file(config.lease_file, utc=config.utc)
        leases = result.leases
        if args.dedup:
            leases = remove_duplicates(leases)

        lease_filter = LeaseFilter(
            client=args.client,
            ipaddr=args.ipaddr,
            macaddr=args.macaddr,
            active_only=args.active,
            expired_only=args.expired,
        )
        selected = filter_leases(leases, lease_filter)

        if args.export:
            export_leases(selected, args.export)

    except LeaseError as e:
        logger.error(f"dhlease: {e}")
        return 1

    print_report(selected, result.widths, utc=config.utc)
    return 0


if __name__ == '__main__':
    sys.exit(main())
