"""
Lane allocator for SpliceScope

Splits one host panel into N equal-width lanes, one per site, laid out
left to right in the order the sites are given. Each lane maps back to
the overview pixel of its site so a connector can join the two.
"""
from __future__ import annotations
from typing import Dict, List, Optional, Sequence
import logging

from matplotlib.axes import Axes
from matplotlib.patches import Rectangle as RectanglePatch

from ..config import LaneConfig
from .grid import prepare_surface
from .types import LaneMapping, PanelDimensions, Rectangle

logger = logging.getLogger(__name__)


class LaneAllocator:
    """
    Equal-width lanes inside a host panel

    When the nominal lane width does not fit, all lanes shrink to
    host width / N so they always stay inside the host.

    Example:
        >>> lanes = LaneAllocator(ax, rect, 1000, [100, 500], lane_width=10)
        >>> lanes.get_lane_mapping(1)
        LaneMapping(overview=(399.0, 401.0), lane=(10.0, 20.0))
    """

    def __init__(
        self,
        surface: Axes,
        rectangle: Rectangle,
        coordinate_length: float,
        positions: Sequence[float],
        lane_width: float,
        max_value: float = 0.0,
        config: Optional[LaneConfig] = None
    ) -> None:
        """
        Initialize lanes

        Args:
            surface: Host panel surface (panel-local pixels)
            rectangle: Host panel rectangle (canvas pixels)
            coordinate_length: Length of the coordinate space the overview spans
            positions: Site coordinates, ascending
            lane_width: Nominal lane width (px)
            max_value: Shared y maximum of the detail plots
            config: Lane styling; defaults to LaneConfig()

        Raises:
            ValueError: if coordinate_length or lane_width is not positive
        """
        if coordinate_length <= 0:
            raise ValueError(f"coordinate_length must be positive, got {coordinate_length}")
        if lane_width <= 0:
            raise ValueError(f"lane_width must be positive, got {lane_width}")

        self.surface = surface
        self.rectangle = rectangle
        self.coordinate_length = coordinate_length
        self.positions: List[float] = list(positions)
        self.max_value = max_value
        self.config = config or LaneConfig()
        self.requested_lane_width = float(lane_width)

        if any(b < a for a, b in zip(self.positions, self.positions[1:])):
            logger.warning("Lane positions are not ascending; lanes follow the given order")

        n_lanes = len(self.positions)
        if n_lanes * self.requested_lane_width > rectangle.width:
            self.lane_width = rectangle.width / n_lanes
            logger.warning(f"{n_lanes} lanes of {self.requested_lane_width:.1f} px exceed "
                           f"{rectangle.width:.1f} px, shrinking to {self.lane_width:.2f} px")
        else:
            self.lane_width = self.requested_lane_width

        self._lane_surfaces: Dict[int, Axes] = {}
        logger.info(f"LaneAllocator: {n_lanes} lanes of {self.lane_width:.2f} px")

    @property
    def n_lanes(self) -> int:
        return len(self.positions)

    @property
    def total_width(self) -> float:
        """Width covered by all lanes (px)"""
        return self.n_lanes * self.lane_width

    def overview_x(self, position: float) -> float:
        """Overview pixel offset of a coordinate"""
        return position / self.coordinate_length * self.rectangle.width

    def _valid(self, index: int) -> bool:
        return 0 <= index < self.n_lanes

    def get_lane_rectangle(self, index: int) -> Optional[Rectangle]:
        """Lane rectangle in host-local pixels, or None if out of range"""
        if not self._valid(index):
            return None
        return Rectangle(
            x=index * self.lane_width,
            y=0.0,
            width=self.lane_width,
            height=self.rectangle.height,
        )

    def lane_dimensions(self, index: int, font_size: float) -> Optional[PanelDimensions]:
        """Renderer placement of a lane in canvas pixels"""
        rect = self.get_lane_rectangle(index)
        if rect is None:
            return None
        return PanelDimensions.from_rectangle(
            rect.offset(self.rectangle.x, self.rectangle.y), font_size)

    def get_lane_surface(self, index: int) -> Optional[Axes]:
        """
        Drawing surface of a lane

        Lanes are child axes of the host surface, so they move with it
        when the host panel is promoted.
        """
        if index in self._lane_surfaces:
            return self._lane_surfaces[index]

        rect = self.get_lane_rectangle(index)
        if rect is None:
            return None

        host_width = self.rectangle.width
        host_height = self.rectangle.height
        bounds = [
            rect.x / host_width,
            1.0 - rect.bottom / host_height,
            rect.width / host_width,
            rect.height / host_height,
        ]
        ax = self.surface.inset_axes(bounds, transform=self.surface.transAxes)
        prepare_surface(ax, rect.width, rect.height)
        self._lane_surfaces[index] = ax
        return ax

    def get_lane_mapping(self, index: int) -> Optional[LaneMapping]:
        """
        Overview interval and lane interval of a lane

        The overview interval is centred on the site's overview pixel.
        """
        rect = self.get_lane_rectangle(index)
        if rect is None:
            return None

        center = self.overview_x(self.positions[index])
        half = self.config.mapping_half_width
        return LaneMapping(
            overview=(center - half, center + half),
            lane=(rect.x, rect.right),
        )

    def plot(self, font_size: float = 6.0) -> None:
        """Draw the lane container; lane contents are drawn by the caller"""
        if self.n_lanes == 0:
            return

        height = self.rectangle.height
        self.surface.add_patch(RectanglePatch(
            (0, 0), self.total_width, height,
            facecolor=self.config.container_color, edgecolor='none', zorder=0))
        self.surface.plot([0, self.total_width], [height, height],
                          color='gray', linewidth=self.config.baseline_linewidth, zorder=1)

        label_x = self.total_width + 4
        if self.max_value > 0 and label_x < self.rectangle.width:
            self.surface.text(label_x, 0, f"max {self.max_value:g}",
                              ha='left', va='top', fontsize=font_size, color='gray')
