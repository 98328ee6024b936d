"""Sites subcommand - splice-site table"""

from __future__ import annotations
from argparse import ArgumentParser, Namespace, _SubParsersAction
from pathlib import Path
import logging

from ..io import write_site_table
from .common import add_input_arguments, configure_logging, load_inputs

logger = logging.getLogger(__name__)


def add_parser(subparsers: _SubParsersAction) -> ArgumentParser:
    """
    Add sites subcommand parser

    Args:
        subparsers: Subparser action from main argument parser

    Returns:
        Configured ArgumentParser for sites subcommand
    """
    parser = subparsers.add_parser(
        'sites',
        help='List donor and acceptor sites with their read support'
    )
    add_input_arguments(parser)
    return parser  # type: ignore[no-any-return]


def run(args: Namespace) -> None:
    """
    Execute sites subcommand

    Writes <prefix>.splicescope_sites.tsv with one row per site.
    """
    configure_logging(getattr(args, 'debug', False))

    output_dir = Path(args.output_dir)
    output_file = output_dir / f"{args.prefix}.splicescope_sites.tsv"

    transcriptome, tracks = load_inputs(args)
    sites = tracks.site_records(transcriptome)

    n_donors = sum(1 for s in sites if s['kind'] == 'donor')
    logger.info(f"{n_donors} donors, {len(sites) - n_donors} acceptors")
    write_site_table(sites, output_file)
