"""
Grid layout engine for SpliceScope

Partitions a figure canvas into a grid of panels sized by ratios. Every
panel gets its own matplotlib Axes used as a pixel-addressed drawing
surface with the origin at the panel's top-left corner.

Stacking is an explicit list of layers (bottom to top). Surfaces are
appended when created and moved to the end when promoted; the list is
written back to the Axes z-order after every change.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging

from matplotlib.axes import Axes
from matplotlib.figure import Figure

from ..config import ConfigError, GridConfig
from .types import PanelDimensions, Rectangle

logger = logging.getLogger(__name__)

CellKey = Tuple[int, int]


def prepare_surface(ax: Axes, width: float, height: float) -> Axes:
    """
    Turn an Axes into a bare pixel surface

    Data coordinates equal panel pixels: x in [0, width] left to right,
    y in [0, height] top to bottom. No frame, ticks or background.
    """
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.set_autoscale_on(False)
    ax.set_axis_off()
    ax.patch.set_facecolor('none')
    return ax


def _cumulative(ratios: Sequence[float]) -> List[float]:
    """Offsets before each ratio, plus the total"""
    offsets = [0.0]
    for ratio in ratios:
        offsets.append(offsets[-1] + ratio)
    return offsets


class GridLayout:
    """
    Ratio-driven panel grid on a matplotlib figure

    Example:
        >>> fig = plt.figure(figsize=(10, 5), dpi=100)
        >>> grid = GridLayout(fig, 500, 1000, GridConfig.splice_figure())
        >>> ax = grid.get_cell_surface(0, 1)
    """

    def __init__(
        self,
        figure: Figure,
        canvas_height: float,
        canvas_width: float,
        config: GridConfig
    ) -> None:
        """
        Initialize the grid

        Args:
            figure: Figure the panel surfaces are added to
            canvas_height: Canvas height (px)
            canvas_width: Canvas width (px)
            config: Grid ratios

        Raises:
            ConfigError: if the config or the canvas size is invalid
        """
        config.validate()
        if canvas_height <= 0 or canvas_width <= 0:
            raise ConfigError(f"Canvas must have a positive size, got {canvas_width}x{canvas_height}")

        self.figure = figure
        self.canvas_height = float(canvas_height)
        self.canvas_width = float(canvas_width)
        self.config = config

        self._column_offsets = _cumulative(config.column_ratios)
        self._row_offsets = [_cumulative(rows) for rows in config.row_ratios_per_column]

        self._surfaces: Dict[CellKey, Axes] = {}
        self._cell_data: Dict[CellKey, Any] = {}
        self._layers: List[Axes] = []

        logger.info(f"GridLayout {self.canvas_width:.0f}x{self.canvas_height:.0f} px, "
                    f"rows per column: {[len(r) for r in config.row_ratios_per_column]}")

    # ------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------

    def in_range(self, col: int, row: int) -> bool:
        """Whether (col, row) addresses an existing panel"""
        return 0 <= col < self.config.columns and 0 <= row < self.config.row_count(col)

    def get_cell_rectangle(self, col: int, row: int) -> Optional[Rectangle]:
        """
        Pixel rectangle of a panel

        Args:
            col: Column index
            row: Row index within the column

        Returns:
            Rectangle in canvas pixels, or None if (col, row) is out of range
        """
        if not self.in_range(col, row):
            return None

        column_ratio = self.config.column_ratios[col]
        row_ratio = self.config.row_ratios_per_column[col][row]
        return Rectangle(
            x=self.canvas_width * self._column_offsets[col],
            y=self.canvas_height * self._row_offsets[col][row],
            width=self.canvas_width * column_ratio,
            height=self.canvas_height * row_ratio,
        )

    def get_cell_dimensions(self, col: int, row: int, font_size: float) -> Optional[PanelDimensions]:
        """Renderer placement of a panel, or None if out of range"""
        rect = self.get_cell_rectangle(col, row)
        if rect is None:
            return None
        return PanelDimensions.from_rectangle(rect, font_size)

    def get_overlay_rectangle(self, col: int, rows: Sequence[int]) -> Optional[Rectangle]:
        """
        Rectangle spanned by a set of rows of one column

        The span runs from the top of the lowest row index to the bottom of
        the highest one, so a gapped list such as [0, 2] also covers row 1.

        Returns:
            Rectangle, or None if rows is empty or references a missing row
        """
        if len(rows) == 0 or not all(self.in_range(col, row) for row in rows):
            return None

        first = self.get_cell_rectangle(col, min(rows))
        last = self.get_cell_rectangle(col, max(rows))
        return Rectangle(
            x=first.x,
            y=first.y,
            width=first.width,
            height=last.bottom - first.y,
        )

    # ------------------------------------------------------------
    # Surfaces
    # ------------------------------------------------------------

    def _add_surface(self, rect: Rectangle, label: str) -> Axes:
        """Create a pixel surface covering rect and put it on top of the stack"""
        bounds = [
            rect.x / self.canvas_width,
            1.0 - rect.bottom / self.canvas_height,
            rect.width / self.canvas_width,
            rect.height / self.canvas_height,
        ]
        ax = self.figure.add_axes(bounds, label=label)
        prepare_surface(ax, rect.width, rect.height)
        self._layers.append(ax)
        self._restack()
        return ax

    def get_cell_surface(self, col: int, row: int) -> Optional[Axes]:
        """
        Drawing surface of a panel

        Created on first access and reused afterwards.

        Returns:
            Axes in panel-local pixels, or None if (col, row) is out of range
        """
        key = (col, row)
        if key in self._surfaces:
            return self._surfaces[key]

        rect = self.get_cell_rectangle(col, row)
        if rect is None:
            logger.debug(f"No panel at ({col}, {row})")
            return None

        ax = self._add_surface(rect, label=f"cell-{col}-{row}")
        self._surfaces[key] = ax
        return ax

    def create_overlay_surface(self, col: int, rows: Sequence[int]) -> Optional[Axes]:
        """
        New surface spanning several rows of a column

        Overlays sit above everything created before them. Each call
        creates a separate surface.

        Returns:
            Axes in overlay-local pixels, or None if the rows are invalid
        """
        rect = self.get_overlay_rectangle(col, rows)
        if rect is None:
            logger.debug(f"No overlay for column {col}, rows {list(rows)}")
            return None
        return self._add_surface(rect, label=f"overlay-{col}-{min(rows)}-{max(rows)}")

    # ------------------------------------------------------------
    # Per-panel state
    # ------------------------------------------------------------

    def set_cell_data(self, col: int, row: int, value: Any) -> None:
        self._cell_data[(col, row)] = value

    def get_cell_data(self, col: int, row: int) -> Any:
        return self._cell_data.get((col, row))

    # ------------------------------------------------------------
    # Stacking
    # ------------------------------------------------------------

    def layers(self) -> List[Axes]:
        """Surfaces from bottom to top"""
        return list(self._layers)

    def promote(self, col: int, row: int) -> bool:
        """
        Move a panel's surface to the top of the stack

        Returns:
            False if the panel does not exist or has no surface yet
        """
        ax = self._surfaces.get((col, row))
        if ax is None:
            logger.debug(f"Nothing to promote at ({col}, {row})")
            return False

        self._layers.remove(ax)
        self._layers.append(ax)
        self._restack()
        return True

    def _restack(self) -> None:
        for z, ax in enumerate(self._layers):
            ax.set_zorder(z)
