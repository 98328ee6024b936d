"""
I/O Readers

Handles reading of transcript annotations, score tracks and references.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Tuple
from pathlib import Path
import csv
import re
import logging
import pandas as pd
from Bio import SeqIO

from ..models import BedData, ORF, Transcript, Transcriptome
from ..types import GtfFeature, PathLike

logger = logging.getLogger(__name__)

GTF_COLUMNS = ['seqname', 'source', 'feature', 'start', 'end', 'score', 'strand', 'frame', 'attributes']


def _attribute(attributes: str, key: str) -> Optional[str]:
    """Value of key "value"; in a GTF attribute column"""
    match = re.search(rf'{key}\s+"([^"]*)"', attributes)
    return match.group(1) if match else None


class TranscriptomeReader:
    """Reads transcripts and ORFs from GTF"""

    @staticmethod
    def read_features(gtf_file: PathLike) -> List[GtfFeature]:
        """
        Exon and CDS rows of a GTF file

        Coordinates are converted from 1-based inclusive to 0-based half-open.

        Args:
            gtf_file: Path to GTF file

        Returns:
            List of feature dicts
        """
        if not Path(gtf_file).exists():
            raise FileNotFoundError(f"GTF file not found: {gtf_file}")

        gtf = pd.read_csv(gtf_file, sep='\t', comment='#', header=None,
                          names=GTF_COLUMNS, dtype={'seqname': str}, quoting=csv.QUOTE_NONE)
        gtf = gtf[gtf['feature'].isin(['exon', 'CDS'])]

        features: List[GtfFeature] = []
        for row in gtf.itertuples(index=False):
            transcript_id = _attribute(row.attributes, 'transcript_id')
            if transcript_id is None:
                logger.warning(f"Skipping {row.feature} without transcript_id at {row.seqname}:{row.start}")
                continue
            gene_name = (_attribute(row.attributes, 'gene_name')
                         or _attribute(row.attributes, 'gene_id')
                         or transcript_id)
            features.append({
                'seqname': row.seqname,
                'feature': row.feature,
                'start': int(row.start) - 1,
                'end': int(row.end),
                'strand': row.strand if row.strand in ('+', '-') else '+',
                'transcript_id': transcript_id,
                'gene_name': gene_name,
            })
        return features

    @staticmethod
    def load(gtf_file: PathLike, genome_length: Optional[int] = None) -> Transcriptome:
        """
        Build a Transcriptome from a GTF file

        Each transcript's CDS rows are merged into one ORF spanning
        the first to the last coding base.

        Args:
            gtf_file: Path to GTF file
            genome_length: Coordinate space length (default: furthest feature end)

        Returns:
            Transcriptome
        """
        features = TranscriptomeReader.read_features(gtf_file)

        exons: Dict[str, List[Tuple[int, int]]] = {}
        cds: Dict[str, List[Tuple[int, int]]] = {}
        info: Dict[str, Tuple[str, str]] = {}
        for feature in features:
            tid = feature['transcript_id']
            target = exons if feature['feature'] == 'exon' else cds
            target.setdefault(tid, []).append((feature['start'], feature['end']))
            info.setdefault(tid, (feature['gene_name'], feature['strand']))

        transcripts = [
            Transcript(
                transcript_id=tid,
                gene_name=info[tid][0],
                strand=info[tid][1],  # type: ignore[arg-type]
                exons=tuple(sorted(intervals)),
            )
            for tid, intervals in exons.items()
        ]
        orfs = [
            ORF(
                name=info[tid][0],
                start=min(s for s, _ in intervals),
                end=max(e for _, e in intervals),
                strand=info[tid][1],  # type: ignore[arg-type]
            )
            for tid, intervals in cds.items()
        ]

        logger.info(f"Loaded {len(transcripts)} transcripts and {len(orfs)} ORFs from {gtf_file}")
        return Transcriptome(transcripts, orfs, genome_length=genome_length)


class BedReader:
    """Reads score tracks from BED or bedGraph files"""

    @staticmethod
    def load(bed_file: PathLike) -> BedData:
        """
        Load a score track

        bedGraph (chrom, start, end, score) and BED6+ (score in column 5)
        are both accepted; track/browser header lines are skipped.

        Args:
            bed_file: Path to BED/bedGraph file

        Returns:
            BedData
        """
        if not Path(bed_file).exists():
            raise FileNotFoundError(f"Score track not found: {bed_file}")

        rows = []
        with open(bed_file, 'r') as f:
            for line in f:
                if not line.strip() or line.startswith(('#', 'track', 'browser')):
                    continue
                rows.append(line.rstrip('\n').split('\t'))

        if not rows:
            logger.warning(f"No records in {bed_file}")
            return BedData()

        n_fields = min(len(r) for r in rows)
        if n_fields < 4:
            raise ValueError(f"{bed_file}: expected at least 4 columns, found {n_fields}")

        # BED6+ rows keep the score in column 5, bedGraph rows in column 4
        scores = [r[4] if len(r) >= 6 else r[3] for r in rows]

        df = pd.DataFrame({
            'chrom': [r[0] for r in rows],
            'start': pd.to_numeric([r[1] for r in rows], errors='coerce'),
            'end': pd.to_numeric([r[2] for r in rows], errors='coerce'),
            'score': pd.to_numeric(scores, errors='coerce'),
        })
        invalid = df.isna().any(axis=1)
        if invalid.any():
            logger.warning(f"Dropping {int(invalid.sum())} unparseable records from {bed_file}")
            df = df[~invalid]

        df = df.astype({'start': 'int64', 'end': 'int64', 'score': float})
        logger.info(f"Loaded {len(df)} score records from {bed_file}")
        return BedData(df)


def read_genome_length(fasta_file: PathLike) -> int:
    """
    Length of the first sequence in a FASTA file

    Args:
        fasta_file: Path to reference FASTA

    Returns:
        Sequence length (bp)
    """
    if not Path(fasta_file).exists():
        raise FileNotFoundError(f"Reference FASTA not found: {fasta_file}")

    record = next(SeqIO.parse(str(fasta_file), 'fasta'), None)
    if record is None:
        raise ValueError(f"No sequences in {fasta_file}")
    return len(record.seq)
