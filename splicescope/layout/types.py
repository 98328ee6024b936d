"""
Layout types for SpliceScope
Geometry shared by the grid, the lane allocator and the connectors

All coordinates are pixels with the origin at the top-left corner,
x growing right and y growing down.
"""
from dataclasses import dataclass
from typing import NamedTuple, Tuple


@dataclass(frozen=True)
class Rectangle:
    """
    Pixel rectangle

    Attributes:
        x: Left edge (px)
        y: Top edge (px)
        width: Width (px)
        height: Height (px)
    """
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        """Right edge (px)"""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Bottom edge (px)"""
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def offset(self, dx: float, dy: float) -> 'Rectangle':
        """Same rectangle shifted by (dx, dy)"""
        return Rectangle(self.x + dx, self.y + dy, self.width, self.height)


@dataclass(frozen=True)
class PanelDimensions:
    """
    Placement handed to a panel renderer

    Attributes:
        x: Global left edge (px)
        y: Global top edge (px)
        width: Width (px)
        height: Height (px)
        font_size: Base font size (pt)
    """
    x: float
    y: float
    width: float
    height: float
    font_size: float

    @classmethod
    def from_rectangle(cls, rect: Rectangle, font_size: float) -> 'PanelDimensions':
        return cls(rect.x, rect.y, rect.width, rect.height, font_size)


class LaneMapping(NamedTuple):
    """
    Overview interval and lane interval joined by a connector

    Indexable like ``[[overview_lo, overview_hi], [lane_lo, lane_hi]]``.
    """
    overview: Tuple[float, float]
    lane: Tuple[float, float]

    @property
    def overview_center(self) -> float:
        return (self.overview[0] + self.overview[1]) / 2

    @property
    def lane_center(self) -> float:
        return (self.lane[0] + self.lane[1]) / 2


class ConnectorPoints(NamedTuple):
    """
    Named x-positions of a connector

    Attributes:
        top: Apex on the overview axis (top edge)
        left: Left bound of the destination lane (bottom edge)
        right: Right bound of the destination lane (bottom edge)
        mid: Midpoint of the destination lane
    """
    top: float
    left: float
    right: float
    mid: float

    @classmethod
    def from_mapping(cls, mapping: LaneMapping) -> 'ConnectorPoints':
        return cls(
            top=mapping.overview_center,
            left=mapping.lane[0],
            right=mapping.lane[1],
            mid=mapping.lane_center,
        )


@dataclass(frozen=True)
class GeneCoordinate:
    """
    Drawn position of one transcript in the schematic panel

    Produced by the schematic renderer and consumed by the label renderer.

    Attributes:
        id: Transcript identifier
        start_x: Left end of the drawn transcript (px, panel-local)
        end_x: Right end of the drawn transcript (px, panel-local)
        y: Vertical centre of the transcript row (px, panel-local)
        label: Text to show next to the transcript
    """
    id: str
    start_x: float
    end_x: float
    y: float
    label: str
