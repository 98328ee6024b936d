"""
Connector geometry for SpliceScope

A funnel from a single overview position (top edge of the connector
panel) to the full width of a detail lane (bottom edge).
"""
from __future__ import annotations
from typing import List, Optional, Tuple

from matplotlib.axes import Axes
from matplotlib.patches import Polygon

from ..config import ConnectorConfig
from .types import ConnectorPoints, Rectangle


class TriangleConnector:
    """Funnel joining an overview point to a lane"""

    def __init__(
        self,
        surface: Axes,
        rectangle: Rectangle,
        points: ConnectorPoints,
        color: str,
        config: Optional[ConnectorConfig] = None
    ) -> None:
        """
        Args:
            surface: Connector panel surface (panel-local pixels)
            rectangle: Connector panel rectangle
            points: Apex and base positions in panel-local x
            color: Stroke and fill colour
            config: Stroke styling; defaults to ConnectorConfig()
        """
        self.surface = surface
        self.rectangle = rectangle
        self.points = points
        self.color = color
        self.config = config or ConnectorConfig()

    def polygon(self) -> List[Tuple[float, float]]:
        """Apex at the top edge, lane bounds at the bottom edge"""
        height = self.rectangle.height
        return [
            (self.points.top, 0.0),
            (self.points.left, height),
            (self.points.right, height),
        ]

    def plot(self) -> None:
        apex, left, right = self.polygon()
        height = self.rectangle.height

        self.surface.add_patch(Polygon(
            [apex, left, right], closed=True,
            facecolor=self.color, edgecolor='none', alpha=self.config.fill_alpha))

        for base in (left, right):
            self.surface.plot([apex[0], base[0]], [apex[1], base[1]],
                              color=self.color, linewidth=self.config.edge_linewidth)

        self.surface.plot([apex[0], self.points.mid], [0.0, height],
                          color=self.color, linewidth=self.config.mid_linewidth,
                          alpha=self.config.mid_alpha, linestyle=':')
