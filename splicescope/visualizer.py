"""
Splice figure orchestrator

Builds the composite splicing figure: ORF annotation, transcript
schematic, dashed splice-site reference lines, genome-wide donor and
acceptor coverage, and one zoomed detail lane per site connected back to
its overview position.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
from pathlib import Path
import logging

import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.patches import Rectangle as RectanglePatch

from .config import PlotConfig
from .layout import (
    ConnectorPoints,
    GeneCoordinate,
    GridLayout,
    LaneAllocator,
    TriangleConnector,
)
from .models import SiteTracks, Transcriptome
from .renderers import (
    BarPlot,
    LegendPlot,
    LinePlot,
    ORFPlot,
    TranscriptomePlot,
    TranscriptomePlotLabels,
)
from .types import PathLike, SiteKind
from .utils import LinearScale, unique_sorted

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SiteRows:
    """
    Column-0 rows used by one splice-site kind

    Attributes:
        coverage: Genome-wide coverage bar row
        connector: Spacer row holding the connectors
        lanes: Detail lane row
        overlay: Rows spanned by the dashed reference lines
    """
    coverage: int
    connector: int
    lanes: int
    overlay: Tuple[int, ...]


ANNOTATION_CELL = (0, 0)
SCHEMATIC_CELL = (0, 1)
LABEL_CELL = (1, 1)
LEGEND_CELL = (2, 0)

DONOR_ROWS = SiteRows(coverage=3, connector=4, lanes=5, overlay=(0, 1, 2))
ACCEPTOR_ROWS = SiteRows(coverage=7, connector=8, lanes=9, overlay=(0, 1, 2, 3, 4, 5, 6))


class SplicePlotter:
    """
    Renders the splice figure for one transcriptome

    Every call to plot() builds a new figure and grid; nothing is kept
    between calls.
    """

    def __init__(
        self,
        transcriptome: Transcriptome,
        tracks: SiteTracks,
        width: Optional[int] = None,
        height: Optional[int] = None,
        font_size: Optional[float] = None,
        config: Optional[PlotConfig] = None
    ) -> None:
        """
        Initialize SplicePlotter

        Args:
            transcriptome: Transcripts, ORFs and coordinate length
            tracks: Donor and acceptor score tracks
            width: Canvas width in px (default: config.width)
            height: Canvas height in px (default: config.height)
            font_size: Base font size (default: config.font_size)
            config: Plot configuration. If None, uses default settings.

        Example:
            >>> plotter = SplicePlotter(transcriptome, SiteTracks(donors, acceptors))
            >>> fig = plotter.plot('splice.png')
        """
        self.config: PlotConfig = config or PlotConfig()
        self.transcriptome = transcriptome
        self.tracks = tracks
        self.width: int = width if width is not None else self.config.width
        self.height: int = height if height is not None else self.config.height
        self.font_size: float = font_size if font_size is not None else self.config.font_size

    def plot(self, output_file: Optional[PathLike] = None, show: bool = False) -> Figure:
        """
        Generate the splice figure

        Args:
            output_file: Path to save the figure (not saved if None)
            show: Whether to display the plot

        Returns:
            matplotlib Figure object

        Raises:
            ValueError: if the canvas size or the coordinate space is empty
            ConfigError: if the grid configuration is invalid
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Invalid canvas size: {self.width}x{self.height}")
        end = self.transcriptome.end()
        if end <= 0:
            raise ValueError("Transcriptome has an empty coordinate space")

        dpi = self.config.dpi
        fig = plt.figure(figsize=(self.width / dpi, self.height / dpi), dpi=dpi)
        grid = GridLayout(fig, self.height, self.width, self.config.grid)

        logger.info(f"Plotting {len(self.transcriptome)} transcripts over {end} bp, "
                    f"{len(self.transcriptome.donors())} donors, "
                    f"{len(self.transcriptome.acceptors())} acceptors")

        self._plot_annotation(grid)
        genes = self._plot_schematic(grid)
        self._plot_gene_labels(grid, genes)

        colors = self.config.colors
        self._plot_reference_lines(grid, self.transcriptome.donors(), DONOR_ROWS, colors.donor)
        self._plot_reference_lines(grid, self.transcriptome.acceptors(), ACCEPTOR_ROWS, colors.acceptor)

        promoted = [ANNOTATION_CELL]
        self._plot_sites(grid, 'donor', DONOR_ROWS, colors.donor)
        promoted += [(0, DONOR_ROWS.coverage), (0, DONOR_ROWS.lanes)]

        if self.config.plot_acceptors:
            self._plot_sites(grid, 'acceptor', ACCEPTOR_ROWS, colors.acceptor)
            promoted += [(0, ACCEPTOR_ROWS.coverage), (0, ACCEPTOR_ROWS.lanes)]

        self._plot_legend(grid)

        for col, row in promoted:
            grid.promote(col, row)

        if output_file is not None:
            Path(output_file).parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(output_file, dpi=dpi, facecolor='white', edgecolor='none')
            logger.info(f"Plot saved to {output_file}")

        if show:
            plt.show()

        return fig

    # ------------------------------------------------------------
    # Panels
    # ------------------------------------------------------------

    def _plot_annotation(self, grid: GridLayout) -> None:
        surface = grid.get_cell_surface(*ANNOTATION_CELL)
        if surface is None:
            return
        orf_plot = ORFPlot(surface, grid.get_cell_dimensions(*ANNOTATION_CELL, self.font_size),
                           self.transcriptome, color=self.config.colors.orf)
        grid.set_cell_data(*ANNOTATION_CELL, orf_plot)
        orf_plot.plot()

    def _plot_schematic(self, grid: GridLayout) -> List[GeneCoordinate]:
        surface = grid.get_cell_surface(*SCHEMATIC_CELL)
        if surface is None:
            return []
        schematic = TranscriptomePlot(surface, grid.get_cell_dimensions(*SCHEMATIC_CELL, self.font_size),
                                      self.transcriptome,
                                      exon_color=self.config.colors.exon,
                                      intron_color=self.config.colors.intron)
        grid.set_cell_data(*SCHEMATIC_CELL, schematic)
        return schematic.plot()

    def _plot_gene_labels(self, grid: GridLayout, genes: Sequence[GeneCoordinate]) -> None:
        surface = grid.get_cell_surface(*LABEL_CELL)
        if surface is None:
            return
        labels = TranscriptomePlotLabels(surface, grid.get_cell_dimensions(*LABEL_CELL, self.font_size),
                                         genes, color=self.config.colors.text)
        grid.set_cell_data(*LABEL_CELL, labels)
        labels.plot()

    def _plot_reference_lines(
        self,
        grid: GridLayout,
        positions: Sequence[int],
        rows: SiteRows,
        color: str
    ) -> None:
        """Dashed vertical line at every site, across the overlay rows"""
        overlay = grid.create_overlay_surface(0, rows.overlay)
        schematic_rect = grid.get_cell_rectangle(*SCHEMATIC_CELL)
        if overlay is None or schematic_rect is None:
            return

        end = self.transcriptome.end()
        for position in positions:
            x = position / end * schematic_rect.width
            overlay.plot([x, x], [0, self.height], color=color,
                         linewidth=self.config.reference_linewidth,
                         linestyle=(0, self.config.reference_line_dashes))

    def _plot_sites(self, grid: GridLayout, kind: SiteKind, rows: SiteRows, color: str) -> None:
        """Coverage bars, detail lanes and connectors for one site kind"""
        track = self.tracks.track(kind)
        end = self.transcriptome.end()

        coverage_surface = grid.get_cell_surface(0, rows.coverage)
        if coverage_surface is not None:
            dimensions = grid.get_cell_dimensions(0, rows.coverage, self.font_size)
            coverage = BarPlot(coverage_surface, dimensions, track,
                               x_scale=LinearScale((0, end), (0, dimensions.width)),
                               color=color)
            grid.set_cell_data(0, rows.coverage, coverage)
            coverage.plot()

        lane_surface = grid.get_cell_surface(0, rows.lanes)
        if lane_surface is None:
            return

        raw_positions = (self.transcriptome.donors() if kind == 'donor'
                         else self.transcriptome.acceptors())
        positions = unique_sorted(raw_positions)
        flank = self.config.lanes.zoom_flank
        # lanes share the highest value any of them draws
        windows = [track.get_range(p - flank, p + flank).explode() for p in positions]
        max_value = max((w.max_score() for w in windows), default=0.0)

        lanes = LaneAllocator(
            lane_surface,
            grid.get_cell_rectangle(0, rows.lanes),
            coordinate_length=end,
            positions=positions,
            lane_width=self.config.lanes.lane_width,
            max_value=max_value,
            config=self.config.lanes,
        )
        grid.set_cell_data(0, rows.lanes, lanes)
        lanes.plot(font_size=self.font_size * 0.75)

        connector_surface = grid.get_cell_surface(0, rows.connector)
        connector_rect = grid.get_cell_rectangle(0, rows.connector)

        for i, (position, window) in enumerate(zip(positions, windows)):
            surface = lanes.get_lane_surface(i)
            if surface is None:
                continue
            dimensions = lanes.lane_dimensions(i, self.font_size)
            logger.debug(f"{kind} {position}: lane {i} at x={dimensions.x:.1f}, width={dimensions.width:.1f}")

            surface.add_patch(RectanglePatch(
                (0, 0), dimensions.width, dimensions.height,
                facecolor=color, alpha=self.config.lanes.background_alpha, edgecolor='none'))

            detail = LinePlot(surface, dimensions, window,
                              x_scale=LinearScale((position - flank, position + flank),
                                                  (0, dimensions.width)),
                              color=self.config.colors.detail_line,
                              y_max=lanes.max_value)
            detail.plot()

            if connector_surface is not None:
                connector = TriangleConnector(
                    connector_surface,
                    connector_rect,
                    ConnectorPoints.from_mapping(lanes.get_lane_mapping(i)),
                    color=self.config.colors.connector,
                    config=self.config.connector,
                )
                connector.plot()

    def _plot_legend(self, grid: GridLayout) -> None:
        surface = grid.get_cell_surface(*LEGEND_CELL)
        if surface is None:
            return
        entries = [('Donor', self.config.colors.donor)]
        if self.config.plot_acceptors:
            entries.append(('Acceptor', self.config.colors.acceptor))
        legend = LegendPlot(surface, grid.get_cell_dimensions(*LEGEND_CELL, self.font_size), entries)
        grid.set_cell_data(*LEGEND_CELL, legend)
        legend.plot()
