"""Plot subcommand - composite splice figure"""

from __future__ import annotations
from argparse import ArgumentParser, Namespace, _SubParsersAction
from pathlib import Path
import logging

from ..config import PlotConfig
from ..visualizer import SplicePlotter
from .common import add_input_arguments, configure_logging, load_inputs

logger = logging.getLogger(__name__)

PRESETS = {
    'default': PlotConfig,
    'publication': PlotConfig.publication,
    'presentation': PlotConfig.presentation,
    'compact': PlotConfig.compact,
}


def add_parser(subparsers: _SubParsersAction) -> ArgumentParser:
    """
    Add plot subcommand parser

    Args:
        subparsers: Subparser action from main argument parser

    Returns:
        Configured ArgumentParser for plot subcommand
    """
    parser = subparsers.add_parser(
        'plot',
        help='Render the splice-site figure'
    )
    add_input_arguments(parser)

    # Canvas
    parser.add_argument('--width', type=int,
                        help='Canvas width in pixels (default: from preset)')
    parser.add_argument('--height', type=int,
                        help='Canvas height in pixels (default: from preset)')
    parser.add_argument('--font-size', type=float,
                        help='Base font size (default: from preset)')
    parser.add_argument('--preset', choices=sorted(PRESETS), default='default',
                        help='Styling preset (default: default)')
    parser.add_argument('--no-acceptors', action='store_true',
                        help='Skip the acceptor coverage track and lanes')

    return parser  # type: ignore[no-any-return]


def run(args: Namespace) -> None:
    """
    Execute plot subcommand

    Args:
        args: Parsed command-line arguments from argparse
    """
    configure_logging(getattr(args, 'debug', False))

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    plot_file = output_dir / f"{args.prefix}.splicescope.png"

    logger.info(f"Sample prefix: {args.prefix}")
    logger.info(f"Output: {plot_file}")
    logger.info(f"Preset: {args.preset}")

    transcriptome, tracks = load_inputs(args)

    config = PRESETS[args.preset]()
    if args.no_acceptors:
        config.plot_acceptors = False

    plotter = SplicePlotter(
        transcriptome,
        tracks,
        width=args.width,
        height=args.height,
        font_size=args.font_size,
        config=config,
    )
    plotter.plot(output_file=plot_file)

    logger.info(f"Plot saved: {plot_file}")
