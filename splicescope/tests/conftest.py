"""
Shared pytest fixtures for SpliceScope tests

Supports both development mode (python -m splicescope) and installed mode (pip install -e .)
"""
import sys
from pathlib import Path

import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest


@pytest.fixture(scope="session", autouse=True)
def setup_splicescope_path():
    """
    Add repository root to Python path for development mode

    Structure:
      repo/                 <- repo root (added to sys.path)
      └── splicescope/      <- package
          └── tests/
              └── conftest.py   <- we are here
    """
    repo_root = Path(__file__).parent.parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


@pytest.fixture(autouse=True)
def close_figures():
    """Close every figure a test opened"""
    yield
    plt.close('all')


@pytest.fixture
def figure():
    """1000x500 px canvas"""
    return plt.figure(figsize=(10, 5), dpi=100)


@pytest.fixture
def scenario_config():
    """Three columns, column 0 split in two rows"""
    from splicescope.config import GridConfig
    return GridConfig(
        columns=3,
        column_ratios=[0.8, 0.1, 0.1],
        row_ratios_per_column=[[0.5, 0.5], [1.0], [1.0]],
    )


@pytest.fixture
def transcriptome():
    """
    Two '+' isoforms and one '-' transcript on a 1000 bp genome

    Donors: 100, 300 (+) and 800 (-)
    Acceptors: 200, 400 (+) and 700 (-)
    """
    from splicescope.models import ORF, Transcript, Transcriptome
    return Transcriptome(
        transcripts=[
            Transcript('tx1', 'geneA', '+', ((0, 100), (200, 300), (400, 450))),
            Transcript('tx2', 'geneA', '+', ((50, 100), (200, 500))),
            Transcript('tx3', 'geneB', '-', ((600, 700), (800, 950))),
        ],
        orfs=[ORF('ORF1', 20, 440), ORF('ORF2', 620, 900, '-')],
        genome_length=1000,
    )


@pytest.fixture
def tracks():
    """Read support around every splice site"""
    from splicescope.models import BedData, SiteTracks
    return SiteTracks(
        donors=BedData.from_records([
            (95, 105, 3.0), (100, 101, 12.0), (300, 301, 8.0), (500, 502, 4.0), (800, 801, 6.0),
        ], chrom='chr1'),
        acceptors=BedData.from_records([
            (200, 201, 9.0), (398, 402, 2.0), (700, 701, 5.0),
        ], chrom='chr1'),
    )


# Pytest configuration
def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Tests rendering the full figure or running the CLI"
    )
