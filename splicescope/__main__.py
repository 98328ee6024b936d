"""
SpliceScope CLI

Command-line interface with subcommands for plotting and site listing.
"""

import argparse
import sys
from .cli import plot, sites


def main():
    parser = argparse.ArgumentParser(
        prog='splicescope',
        description='SpliceScope: splice donor/acceptor overview and detail figures'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Add subcommand parsers
    plot.add_parser(subparsers)
    sites.add_parser(subparsers)

    # Parse arguments
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Execute the appropriate subcommand
    if args.command == 'plot':
        plot.run(args)
    elif args.command == 'sites':
        sites.run(args)


if __name__ == "__main__":
    main()
