"""
Panel renderers

Each renderer draws into one panel surface whose data coordinates are
panel-local pixels (origin top-left, y down). Renderers receive the
panel placement and the slice of data they show; none of them know
about the grid.
"""

from __future__ import annotations
from typing import List, Optional, Sequence, Tuple
import logging
import numpy as np
from matplotlib.axes import Axes
from matplotlib.patches import Rectangle as RectanglePatch

from .layout.types import GeneCoordinate, PanelDimensions
from .models import BedData, Transcriptome
from .utils import LinearScale

logger = logging.getLogger(__name__)


class PanelRenderer:
    """Base class: a surface plus its placement"""

    def __init__(self, surface: Axes, dimensions: PanelDimensions) -> None:
        self.surface = surface
        self.dimensions = dimensions

    @property
    def width(self) -> float:
        return self.dimensions.width

    @property
    def height(self) -> float:
        return self.dimensions.height

    def plot(self):
        raise NotImplementedError


class ORFPlot(PanelRenderer):
    """
    ORF annotation track

    ORFs are stacked in three rows by reading frame (start % 3) above a
    genome backbone spanning [0, end).
    """

    def __init__(
        self,
        surface: Axes,
        dimensions: PanelDimensions,
        transcriptome: Transcriptome,
        color: str = '#3B3B98'
    ) -> None:
        super().__init__(surface, dimensions)
        self.transcriptome = transcriptome
        self.color = color

    def plot(self) -> None:
        end = self.transcriptome.end()
        if end <= 0:
            logger.debug("ORFPlot: empty coordinate space")
            return

        x_scale = LinearScale((0, end), (0, self.width))
        row_height = self.height / 4
        backbone_y = self.height - row_height / 2
        self.surface.plot([0, self.width], [backbone_y, backbone_y], color='gray', linewidth=1)

        for orf in self.transcriptome.orfs:
            frame = orf.start % 3
            top = frame * row_height + row_height * 0.15
            x0 = x_scale(orf.start)
            width = max(x_scale(orf.end) - x0, 0.5)
            self.surface.add_patch(RectanglePatch(
                (x0, top), width, row_height * 0.7,
                facecolor=self.color, edgecolor='none', alpha=0.85))

            # Label only boxes wide enough to hold the name
            if width > len(orf.name) * self.dimensions.font_size * 0.6:
                self.surface.text(x0 + width / 2, top + row_height * 0.35, orf.name,
                                  ha='center', va='center', color='white',
                                  fontsize=self.dimensions.font_size * 0.8)


class TranscriptomePlot(PanelRenderer):
    """
    Transcript schematic: one row per transcript, exons as boxes joined
    by intron lines
    """

    def __init__(
        self,
        surface: Axes,
        dimensions: PanelDimensions,
        transcriptome: Transcriptome,
        exon_color: str = '#4D9DE0',
        intron_color: str = '#555555'
    ) -> None:
        super().__init__(surface, dimensions)
        self.transcriptome = transcriptome
        self.exon_color = exon_color
        self.intron_color = intron_color

    def plot(self) -> List[GeneCoordinate]:
        """
        Draw the transcripts

        Returns:
            Drawn position of each transcript, top to bottom
        """
        transcripts = self.transcriptome.transcripts
        end = self.transcriptome.end()
        if not transcripts or end <= 0:
            return []

        x_scale = LinearScale((0, end), (0, self.width))
        row_height = self.height / len(transcripts)
        exon_height = min(row_height * 0.6, 12.0)

        coordinates: List[GeneCoordinate] = []
        for i, tx in enumerate(transcripts):
            y = (i + 0.5) * row_height
            start_x = x_scale(tx.start)
            end_x = x_scale(tx.end)

            self.surface.plot([start_x, end_x], [y, y], color=self.intron_color, linewidth=0.8)
            for exon_start, exon_end in tx.exons:
                x0 = x_scale(exon_start)
                self.surface.add_patch(RectanglePatch(
                    (x0, y - exon_height / 2), max(x_scale(exon_end) - x0, 0.5), exon_height,
                    facecolor=self.exon_color, edgecolor='none'))

            coordinates.append(GeneCoordinate(
                id=tx.transcript_id,
                start_x=start_x,
                end_x=end_x,
                y=y,
                label=f"{tx.gene_name} ({tx.transcript_id})" if tx.gene_name != tx.transcript_id
                else tx.transcript_id,
            ))

        return coordinates


class TranscriptomePlotLabels(PanelRenderer):
    """Transcript names aligned with the schematic rows"""

    def __init__(
        self,
        surface: Axes,
        dimensions: PanelDimensions,
        genes: Sequence[GeneCoordinate],
        color: str = 'black'
    ) -> None:
        super().__init__(surface, dimensions)
        self.genes = list(genes)
        self.color = color

    def plot(self) -> None:
        for gene in self.genes:
            self.surface.text(4, gene.y, gene.label, ha='left', va='center',
                              fontsize=self.dimensions.font_size, color=self.color)


class BarPlot(PanelRenderer):
    """Score bars along a linear x scale, growing up from the panel bottom"""

    def __init__(
        self,
        surface: Axes,
        dimensions: PanelDimensions,
        bed_data: BedData,
        x_scale: LinearScale,
        color: str
    ) -> None:
        super().__init__(surface, dimensions)
        self.bed_data = bed_data
        self.x_scale = x_scale
        self.color = color

    def plot(self) -> None:
        max_score = self.bed_data.max_score()
        if self.bed_data.empty or max_score <= 0:
            logger.debug("BarPlot: nothing to draw")
            return

        df = self.bed_data.data
        x0 = self.x_scale(df['start'].to_numpy(dtype=float))
        widths = np.maximum(self.x_scale(df['end'].to_numpy(dtype=float)) - x0, 0.5)
        heights = df['score'].to_numpy(dtype=float) / max_score * self.height

        # y grows downwards, so bars rise from the bottom with negative height
        self.surface.bar(x0, -heights, width=widths, bottom=self.height, align='edge',
                         color=self.color, linewidth=0)


class LinePlot(PanelRenderer):
    """Per-position score line"""

    def __init__(
        self,
        surface: Axes,
        dimensions: PanelDimensions,
        bed_data: BedData,
        x_scale: LinearScale,
        color: str,
        y_max: Optional[float] = None
    ) -> None:
        super().__init__(surface, dimensions)
        self.bed_data = bed_data
        self.x_scale = x_scale
        self.color = color
        self.y_max = y_max

    def plot(self) -> None:
        if self.bed_data.empty:
            return

        y_max = self.y_max if self.y_max else self.bed_data.max_score()
        if y_max <= 0:
            return

        x = self.x_scale(self.bed_data.positions().astype(float))
        usable = self.height * 0.9
        y = self.height - np.clip(self.bed_data.scores() / y_max, 0, 1) * usable
        self.surface.plot(x, y, color=self.color, linewidth=1.0)


class LegendPlot(PanelRenderer):
    """Colour swatches with labels"""

    def __init__(
        self,
        surface: Axes,
        dimensions: PanelDimensions,
        entries: Sequence[Tuple[str, str]]
    ) -> None:
        super().__init__(surface, dimensions)
        self.entries = list(entries)

    def plot(self) -> None:
        step = self.dimensions.font_size * 2.5
        size = self.dimensions.font_size * 1.2
        for i, (label, color) in enumerate(self.entries):
            y = step * (i + 1)
            self.surface.add_patch(RectanglePatch(
                (4, y - size / 2), size, size, facecolor=color, edgecolor='none'))
            self.surface.text(8 + size, y, label, ha='left', va='center',
                              fontsize=self.dimensions.font_size)
