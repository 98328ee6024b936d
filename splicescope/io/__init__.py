"""I/O utilities for SpliceScope"""

from .readers import TranscriptomeReader, BedReader, read_genome_length
from .writers import SiteTableWriter, write_site_table

__all__ = [
    'TranscriptomeReader',
    'BedReader',
    'read_genome_length',
    'SiteTableWriter',
    'write_site_table']
