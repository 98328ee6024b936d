"""
I/O Writers

Handles writing of splice-site tables.
"""

from typing import List
import pandas as pd
from pathlib import Path
import logging

from ..types import PathLike, SiteRecord

logger = logging.getLogger(__name__)

SITE_COLUMNS = ['kind', 'position', 'score', 'lane_index']


class SiteTableWriter:
    """Writes splice sites in TSV format"""

    def write(self, sites: List[SiteRecord], output_file: PathLike) -> None:
        """
        Write one row per splice site

        Args:
            sites: Site records (see SiteTracks.site_records)
            output_file: Path to output TSV file
        """
        if len(sites) == 0:
            logger.warning("No splice sites to save")

        Path(output_file).parent.mkdir(parents=True, exist_ok=True)
        df = pd.DataFrame(sites, columns=SITE_COLUMNS)
        df.to_csv(output_file, sep='\t', index=False)
        logger.info(f"Saved {len(df)} splice sites to {output_file}")


def write_site_table(sites: List[SiteRecord], output_file: PathLike) -> None:
    """
    Convenience function to write the site table

    Args:
        sites: Site records
        output_file: Path to output TSV file
    """
    SiteTableWriter().write(sites, output_file)
