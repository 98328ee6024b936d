"""Arguments, logging and input loading shared by the subcommands"""

from __future__ import annotations
from typing import Optional, Tuple
from argparse import ArgumentParser, Namespace
import logging

from ..io import BedReader, TranscriptomeReader, read_genome_length
from ..models import SiteTracks, Transcriptome

logger = logging.getLogger(__name__)


def add_input_arguments(parser: ArgumentParser) -> None:
    """Sample and input file options common to all subcommands"""
    parser.add_argument('--prefix', required=True,
                        help='Sample prefix for output files')
    parser.add_argument('--output-dir', default='.',
                        help='Output directory (default: current directory)')
    parser.add_argument('-g', '--gtf', required=True,
                        help='Transcript annotation GTF file')
    parser.add_argument('-d', '--donors', required=True,
                        help='Donor read-support track (BED/bedGraph)')
    parser.add_argument('-a', '--acceptors', required=True,
                        help='Acceptor read-support track (BED/bedGraph)')
    parser.add_argument('-r', '--reference',
                        help='Reference FASTA; its length sets the coordinate space '
                             '(default: furthest annotated feature)')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug logging for troubleshooting')


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        force=True
    )

    # Silence very noisy third-party loggers (matplotlib font discovery etc.)
    for noisy in ("matplotlib", "matplotlib.font_manager", "PIL", "PIL.Image", "fontTools"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def load_inputs(args: Namespace) -> Tuple[Transcriptome, SiteTracks]:
    """
    Load transcriptome and score tracks named on the command line

    Args:
        args: Parsed arguments with gtf, donors, acceptors, reference

    Returns:
        Tuple of (transcriptome, tracks)
    """
    genome_length: Optional[int] = None
    if args.reference:
        genome_length = read_genome_length(args.reference)
        logger.info(f"Genome length from {args.reference}: {genome_length} bp")

    transcriptome = TranscriptomeReader.load(args.gtf, genome_length=genome_length)
    tracks = SiteTracks(
        donors=BedReader.load(args.donors),
        acceptors=BedReader.load(args.acceptors),
    )
    return transcriptome, tracks
