"""
Layout Module for SpliceScope
Panel grid, detail lanes and connectors for the composite splice figure

Public API:
    - GridLayout: Ratio-driven panel grid with overlays and stacking
    - LaneAllocator: Equal-width lanes inside one panel
    - TriangleConnector: Funnel from an overview point to a lane
    - Rectangle, PanelDimensions, LaneMapping, ConnectorPoints, GeneCoordinate
"""

from .grid import GridLayout, prepare_surface
from .lanes import LaneAllocator
from .connector import TriangleConnector
from .types import (
    Rectangle,
    PanelDimensions,
    LaneMapping,
    ConnectorPoints,
    GeneCoordinate,
)

__all__ = [
    'GridLayout',
    'prepare_surface',
    'LaneAllocator',
    'TriangleConnector',
    'Rectangle',
    'PanelDimensions',
    'LaneMapping',
    'ConnectorPoints',
    'GeneCoordinate',
]
