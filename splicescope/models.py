"""
Data models for SpliceScope

Transcript annotations and per-position score tracks. All coordinates
are 0-based and half-open.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple
import numpy as np
import pandas as pd

from .types import Interval, SiteKind, SiteRecord, Strand


@dataclass(frozen=True)
class Transcript:
    """
    Spliced transcript

    Attributes:
        transcript_id: Transcript identifier
        gene_name: Gene the transcript belongs to
        strand: '+' or '-'
        exons: Exon intervals, sorted by start
    """
    transcript_id: str
    gene_name: str
    strand: Strand
    exons: Tuple[Interval, ...]

    @property
    def start(self) -> int:
        return self.exons[0][0]

    @property
    def end(self) -> int:
        return self.exons[-1][1]

    def introns(self) -> List[Interval]:
        """Gaps between consecutive exons"""
        return [
            (left[1], right[0])
            for left, right in zip(self.exons, self.exons[1:])
            if right[0] > left[1]
        ]

    def donors(self) -> List[int]:
        """
        Donor coordinates (5' end of each intron)

        On '+' the first intron base; on '-' the intron end.
        """
        if self.strand == '-':
            return [end for _, end in self.introns()]
        return [start for start, _ in self.introns()]

    def acceptors(self) -> List[int]:
        """Acceptor coordinates (3' end of each intron)"""
        if self.strand == '-':
            return [start for start, _ in self.introns()]
        return [end for _, end in self.introns()]


@dataclass(frozen=True)
class ORF:
    """Open reading frame on the genome"""
    name: str
    start: int
    end: int
    strand: Strand = '+'


class Transcriptome:
    """
    Transcripts and ORFs of one genome

    Example:
        >>> tx = Transcript('t1', 'g1', '+', ((0, 100), (200, 300)))
        >>> Transcriptome([tx], genome_length=1000).donors()
        [100]
    """

    def __init__(
        self,
        transcripts: Iterable[Transcript] = (),
        orfs: Iterable[ORF] = (),
        genome_length: Optional[int] = None
    ) -> None:
        self.transcripts: List[Transcript] = sorted(transcripts, key=lambda t: (t.start, t.transcript_id))
        self.orfs: List[ORF] = sorted(orfs, key=lambda o: o.start)
        self.genome_length = genome_length

    def __len__(self) -> int:
        return len(self.transcripts)

    def donors(self) -> List[int]:
        """Distinct donor coordinates, ascending"""
        return sorted({pos for tx in self.transcripts for pos in tx.donors()})

    def acceptors(self) -> List[int]:
        """Distinct acceptor coordinates, ascending"""
        return sorted({pos for tx in self.transcripts for pos in tx.acceptors()})

    def end(self) -> int:
        """
        Length of the coordinate space

        The genome length when known, otherwise the furthest feature end.
        """
        if self.genome_length is not None:
            return self.genome_length
        ends = [tx.end for tx in self.transcripts] + [orf.end for orf in self.orfs]
        return max(ends) if ends else 0


class BedRecord(NamedTuple):
    """Score at one position"""
    position: int
    score: float


class BedData:
    """
    Interval score track (BED / bedGraph)

    Backed by a DataFrame with columns chrom, start, end, score,
    sorted by start.
    """

    COLUMNS = ['chrom', 'start', 'end', 'score']

    def __init__(self, data: Optional[pd.DataFrame] = None) -> None:
        if data is None:
            data = pd.DataFrame({
                'chrom': pd.Series(dtype=str),
                'start': pd.Series(dtype='int64'),
                'end': pd.Series(dtype='int64'),
                'score': pd.Series(dtype=float),
            })
        missing = [c for c in self.COLUMNS if c not in data.columns]
        if missing:
            raise ValueError(f"BedData is missing columns: {missing}")
        self.data: pd.DataFrame = (
            data[self.COLUMNS].sort_values('start', kind='stable').reset_index(drop=True)
        )

    @classmethod
    def from_records(
        cls,
        records: Sequence[Tuple[int, int, float]],
        chrom: str = '.'
    ) -> 'BedData':
        """Build from (start, end, score) tuples"""
        if not records:
            return cls()
        df = pd.DataFrame(list(records), columns=['start', 'end', 'score'])
        df.insert(0, 'chrom', chrom)
        return cls(df)

    def __len__(self) -> int:
        return len(self.data)

    @property
    def empty(self) -> bool:
        return self.data.empty

    def positions(self) -> np.ndarray:
        return self.data['start'].to_numpy()

    def scores(self) -> np.ndarray:
        return self.data['score'].to_numpy(dtype=float)

    def max_score(self) -> float:
        """Highest score, 0 for an empty track"""
        if self.empty:
            return 0.0
        return float(self.data['score'].max())

    def get_range(self, lo: int, hi: int) -> 'BedData':
        """Records overlapping [lo, hi]"""
        df = self.data
        mask = (df['start'] <= hi) & (df['end'] > lo)
        return BedData(df[mask])

    def get_pos(self, position: int) -> List[BedRecord]:
        """Scores of every record covering a position"""
        df = self.data
        mask = (df['start'] <= position) & (df['end'] > position)
        return [BedRecord(position, float(score)) for score in df.loc[mask, 'score']]

    def max_score_at(self, positions: Iterable[int]) -> float:
        """Highest score covering any of the positions, 0 if none"""
        return max(
            (record.score for pos in positions for record in self.get_pos(pos)),
            default=0.0,
        )

    def explode(self) -> 'BedData':
        """
        One single-base record per covered position

        Scores of overlapping records are summed per position.
        """
        if self.empty:
            return BedData()

        df = self.data
        lengths = (df['end'] - df['start']).clip(lower=0).to_numpy(dtype='int64')
        total = int(lengths.sum())
        if total == 0:
            return BedData()

        first = np.cumsum(lengths) - lengths
        offsets = np.arange(total) - np.repeat(first, lengths)
        positions = np.repeat(df['start'].to_numpy(dtype='int64'), lengths) + offsets

        exploded = pd.DataFrame({
            'chrom': np.repeat(df['chrom'].to_numpy(), lengths),
            'start': positions,
            'end': positions + 1,
            'score': np.repeat(df['score'].to_numpy(dtype=float), lengths),
        })
        exploded = exploded.groupby(['chrom', 'start', 'end'], as_index=False, sort=True)['score'].sum()
        return BedData(exploded)


@dataclass
class SiteTracks:
    """Donor and acceptor read-support tracks"""
    donors: BedData = field(default_factory=BedData)
    acceptors: BedData = field(default_factory=BedData)

    def track(self, kind: SiteKind) -> BedData:
        return self.donors if kind == 'donor' else self.acceptors

    def site_records(self, transcriptome: Transcriptome) -> List[SiteRecord]:
        """
        One row per distinct splice site

        lane_index is the site's lane in the detail panel of its kind.
        """
        records: List[SiteRecord] = []
        for kind, positions in (('donor', transcriptome.donors()),
                                ('acceptor', transcriptome.acceptors())):
            track = self.track(kind)
            for lane_index, position in enumerate(positions):
                records.append({
                    'kind': kind,
                    'position': position,
                    'score': track.max_score_at([position]),
                    'lane_index': lane_index,
                })
        return records
