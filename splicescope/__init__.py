"""SpliceScope: splice donor/acceptor overview and detail figures"""

from .config import ConfigError, GridConfig, PlotConfig
from .models import BedData, ORF, SiteTracks, Transcript, Transcriptome
from .layout import GridLayout, LaneAllocator, TriangleConnector
from . import utils
from .visualizer import SplicePlotter

__version__ = "0.1.0"
__all__ = ["ConfigError", "GridConfig", "PlotConfig", "BedData", "ORF", "SiteTracks",
           "Transcript", "Transcriptome", "GridLayout", "LaneAllocator", "TriangleConnector",
           "utils", "SplicePlotter"]
