"""
SpliceScope Configuration

Grid geometry for the composite splice figure plus the visual parameters
of lanes, connectors and colours.
"""
from dataclasses import dataclass, field
from typing import List, Tuple
import math

RATIO_TOLERANCE: float = 1e-6
"""Allowed deviation of a ratio sequence's sum from 1"""

SPLICE_FIGURE_ROWS: List[float] = [
    0.1,    # ORF annotation
    0.45,   # transcript schematic
    0.025,  # spacer
    0.05,   # donor full-genome coverage
    0.025,  # donor connectors
    0.15,   # donor detail lanes
    0.025,  # spacer
    0.05,   # acceptor full-genome coverage
    0.025,  # acceptor connectors
    0.15,   # acceptor detail lanes
]
"""Relative row heights of the splice figure; they sum to 1.05 and are
normalised by GridConfig.splice_figure()"""


class ConfigError(ValueError):
    """Raised when a grid configuration violates its ratio invariants"""


def normalize_ratios(weights: List[float]) -> List[float]:
    """Scale weights so they sum to 1"""
    total = sum(weights)
    if total <= 0:
        raise ConfigError(f"weights must have a positive sum, got {total}")
    return [w / total for w in weights]


def _check_ratios(ratios: List[float], what: str) -> None:
    if len(ratios) == 0:
        raise ConfigError(f"{what}: at least one ratio is required")
    for ratio in ratios:
        if not isinstance(ratio, (int, float)) or not math.isfinite(ratio) or ratio < 0:
            raise ConfigError(f"{what}: invalid ratio {ratio!r}")
    total = sum(ratios)
    if abs(total - 1.0) > RATIO_TOLERANCE:
        raise ConfigError(f"{what}: ratios sum to {total:.8f}, expected 1")


@dataclass
class GridConfig:
    """
    Panel grid described by ratios

    Columns split the canvas width; each column splits the canvas height
    into its own list of rows, so columns may have different row counts.
    """

    columns: int
    """Number of columns"""

    column_ratios: List[float]
    """Width fraction per column (sums to 1)"""

    row_ratios_per_column: List[List[float]]
    """Height fractions of the rows of each column (each sums to 1)"""

    def validate(self) -> None:
        """
        Check the ratio invariants

        Raises:
            ConfigError: if counts disagree or any ratio sequence is malformed
        """
        if not isinstance(self.columns, int) or self.columns <= 0:
            raise ConfigError(f"columns must be a positive integer, got {self.columns!r}")
        if len(self.column_ratios) != self.columns:
            raise ConfigError(
                f"{len(self.column_ratios)} column ratios given for {self.columns} columns")
        if len(self.row_ratios_per_column) != self.columns:
            raise ConfigError(
                f"{len(self.row_ratios_per_column)} row ratio lists given for {self.columns} columns")

        _check_ratios(self.column_ratios, "column_ratios")
        for col, rows in enumerate(self.row_ratios_per_column):
            _check_ratios(rows, f"row_ratios_per_column[{col}]")

    def row_count(self, col: int) -> int:
        """Number of rows in a column (0 if out of range)"""
        if 0 <= col < self.columns:
            return len(self.row_ratios_per_column[col])
        return 0

    @classmethod
    def splice_figure(cls) -> 'GridConfig':
        """
        Fixed layout of the splice figure

        Column 0 holds the plots, column 1 their labels, column 2 the legend.
        """
        return cls(
            columns=3,
            column_ratios=[0.8, 0.1, 0.1],
            row_ratios_per_column=[
                normalize_ratios(SPLICE_FIGURE_ROWS),
                normalize_ratios(SPLICE_FIGURE_ROWS),
                [1.0],
            ],
        )


@dataclass
class LaneConfig:
    """Detail lanes under the coverage tracks"""

    lane_width: float = 100.0
    """Nominal lane width (px); lanes shrink uniformly when they do not fit"""

    mapping_half_width: float = 1.0
    """Half-width of the overview interval a lane maps back to (px)"""

    zoom_flank: int = 10
    """Bases shown on each side of a site in its detail lane"""

    background_alpha: float = 0.75
    """Opacity of the shaded lane background"""

    container_color: str = '#F2F2F2'
    """Fill of the lane array container"""

    baseline_linewidth: float = 0.5
    """Width of the container baseline (px)"""


@dataclass
class ConnectorConfig:
    """Funnels joining overview positions to their lanes"""

    fill_alpha: float = 0.2
    """Opacity of the funnel fill"""

    edge_linewidth: float = 0.8
    """Width of the apex-to-base strokes (px)"""

    mid_linewidth: float = 0.4
    """Width of the apex-to-midpoint alignment stroke (px)"""

    mid_alpha: float = 0.5
    """Opacity of the alignment stroke"""


@dataclass
class ColorConfig:
    """Figure colours"""

    donor: str = '#F78154'
    acceptor: str = '#5FAD56'
    detail_line: str = 'red'
    connector: str = 'red'
    exon: str = '#4D9DE0'
    intron: str = '#555555'
    orf: str = '#3B3B98'
    text: str = 'black'


@dataclass
class PlotConfig:
    """
    Complete plot configuration
    """

    grid: GridConfig = field(default_factory=GridConfig.splice_figure)
    """Panel grid"""

    lanes: LaneConfig = field(default_factory=LaneConfig)
    """Lane configuration"""

    connector: ConnectorConfig = field(default_factory=ConnectorConfig)
    """Connector configuration"""

    colors: ColorConfig = field(default_factory=ColorConfig)
    """Colour scheme"""

    # ============================================================
    # CANVAS
    # ============================================================
    width: int = 1600
    """Canvas width (px)"""

    height: int = 1000
    """Canvas height (px)"""

    font_size: float = 8.0
    """Base font size (pt)"""

    dpi: int = 100
    """Pixels per inch used for the figure and saved images"""

    # ============================================================
    # REFERENCE LINES
    # ============================================================
    reference_line_dashes: Tuple[float, float] = (5.0, 5.0)
    """Dash pattern (on, off) of the donor/acceptor reference lines"""

    reference_linewidth: float = 1.0
    """Width of the reference lines (px)"""

    plot_acceptors: bool = True
    """Draw the acceptor coverage track and lanes"""

    # ============================================================
    # PRESET CONFIGURATIONS
    # ============================================================

    @classmethod
    def publication(cls) -> 'PlotConfig':
        """
        High-resolution output for print

        Example:
            >>> config = PlotConfig.publication()
        """
        config = cls()
        config.dpi = 300
        config.font_size = 7.0
        config.connector.edge_linewidth = 0.6
        return config

    @classmethod
    def presentation(cls) -> 'PlotConfig':
        """Larger fonts and stronger strokes for screens"""
        config = cls()
        config.font_size = 12.0
        config.reference_linewidth = 1.5
        config.connector.edge_linewidth = 1.2
        config.connector.fill_alpha = 0.3
        return config

    @classmethod
    def compact(cls) -> 'PlotConfig':
        """Narrow lanes for transcriptomes with many splice sites"""
        config = cls()
        config.lanes.lane_width = 40.0
        config.lanes.zoom_flank = 5
        config.font_size = 6.0
        return config
