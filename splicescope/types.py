"""
Type definitions for SpliceScope

Common types used throughout the package for type checking and documentation.
"""

from __future__ import annotations
from typing import TypedDict, Literal, Tuple, Union
from pathlib import Path

# Type aliases
PathLike = Union[str, Path]
"""File path as string or Path object"""

Strand = Literal['+', '-']
"""Transcript strand"""

SiteKind = Literal['donor', 'acceptor']
"""Kind of splice site"""

Interval = Tuple[int, int]
"""0-based half-open genomic interval (start, end)"""


# Structured data types

class SiteRecord(TypedDict):
    """One splice site row of the site table"""
    kind: SiteKind
    position: int
    score: float
    lane_index: int


class GtfFeature(TypedDict):
    """Exon or CDS row parsed from a GTF file (0-based half-open)"""
    seqname: str
    feature: str
    start: int
    end: int
    strand: str
    transcript_id: str
    gene_name: str
