"""
SpliceScope Integration Tests

Renders the full splice figure and runs both subcommands end to end.

Run: pytest splicescope/tests/integration/ -v
"""
from argparse import Namespace

import matplotlib.image as mpimg
import pandas as pd
import pytest

from splicescope.cli import plot as plot_cmd
from splicescope.cli import sites as sites_cmd
from splicescope.config import ConfigError, GridConfig, PlotConfig
from splicescope.models import Transcriptome
from splicescope.visualizer import SplicePlotter


def _axes_by_label(fig):
    return {ax.get_label(): ax for ax in fig.axes}


# ============================================================================
# FIGURE STRUCTURE
# ============================================================================

@pytest.mark.integration
def test_plot_writes_png_of_canvas_size(tmp_path, transcriptome, tracks):
    output = tmp_path / "figs" / "splice.png"
    SplicePlotter(transcriptome, tracks, width=800, height=500).plot(output_file=output)

    assert output.exists()
    image = mpimg.imread(output)
    assert image.shape[:2] == (500, 800)


@pytest.mark.integration
def test_promoted_panels_are_on_top(transcriptome, tracks):
    fig = SplicePlotter(transcriptome, tracks, width=800, height=500).plot()

    stacked = sorted(fig.axes, key=lambda ax: ax.get_zorder())
    assert [ax.get_label() for ax in stacked[-5:]] == [
        'cell-0-0', 'cell-0-3', 'cell-0-5', 'cell-0-7', 'cell-0-9',
    ]
    # reference line overlays sit under the promoted panels
    labels = _axes_by_label(fig)
    assert labels['overlay-0-0-2'].get_zorder() < labels['cell-0-0'].get_zorder()
    assert labels['overlay-0-0-6'].get_zorder() < labels['cell-0-3'].get_zorder()


@pytest.mark.integration
def test_one_lane_per_site(transcriptome, tracks):
    fig = SplicePlotter(transcriptome, tracks, width=800, height=500).plot()
    labels = _axes_by_label(fig)

    assert len(labels['cell-0-5'].child_axes) == len(transcriptome.donors())
    assert len(labels['cell-0-9'].child_axes) == len(transcriptome.acceptors())
    # one funnel per donor in the connector row
    assert len(labels['cell-0-4'].patches) == 3


@pytest.mark.integration
def test_lane_peaks_are_not_clipped(transcriptome, tracks):
    fig = SplicePlotter(transcriptome, tracks, width=800, height=500).plot()
    lanes = _axes_by_label(fig)["cell-0-5"].child_axes

    # overlapping records at donor 100 sum to 3 + 12
    tops = []
    for lane in lanes:
        height = lane.get_ylim()[0]
        ceiling = height * 0.1
        top = min(lane.lines[0].get_ydata())
        assert top >= ceiling - 1e-6
        tops.append(top)

    height = lanes[0].get_ylim()[0]
    assert tops[0] == pytest.approx(height * 0.1)
    assert tops[1] == pytest.approx(height - 8 / 15 * height * 0.9)
    assert tops[2] > tops[1]


@pytest.mark.integration
def test_donor_lanes_follow_overview_order(transcriptome, tracks):
    fig = SplicePlotter(transcriptome, tracks, width=800, height=500).plot()
    lanes = _axes_by_label(fig)['cell-0-5'].child_axes
    lefts = [ax.get_position().x0 for ax in lanes]
    assert lefts == sorted(lefts)


@pytest.mark.integration
def test_acceptors_can_be_skipped(transcriptome, tracks):
    config = PlotConfig()
    config.plot_acceptors = False
    fig = SplicePlotter(transcriptome, tracks, width=800, height=500, config=config).plot()

    labels = _axes_by_label(fig)
    assert 'cell-0-9' not in labels
    assert 'cell-0-5' in labels


@pytest.mark.integration
def test_each_plot_builds_a_new_figure(transcriptome, tracks):
    plotter = SplicePlotter(transcriptome, tracks, width=800, height=500)
    first = plotter.plot()
    second = plotter.plot()
    assert first is not second
    assert len(first.axes) == len(second.axes)


# ============================================================================
# ERRORS
# ============================================================================

@pytest.mark.integration
def test_empty_transcriptome_rejected(tracks):
    with pytest.raises(ValueError):
        SplicePlotter(Transcriptome(), tracks).plot()


@pytest.mark.integration
def test_invalid_grid_rejected(transcriptome, tracks):
    config = PlotConfig(grid=GridConfig(columns=1, column_ratios=[0.5], row_ratios_per_column=[[1.0]]))
    with pytest.raises(ConfigError):
        SplicePlotter(transcriptome, tracks, config=config).plot()


@pytest.mark.integration
def test_invalid_canvas_rejected(transcriptome, tracks):
    with pytest.raises(ValueError):
        SplicePlotter(transcriptome, tracks, width=-10).plot()


@pytest.mark.integration
@pytest.mark.parametrize("size", [{"width": 0}, {"height": 0}])
def test_zero_canvas_rejected(transcriptome, tracks, size):
    with pytest.raises(ValueError):
        SplicePlotter(transcriptome, tracks, **size).plot()


# ============================================================================
# COMMAND LINE
# ============================================================================

GTF = "\n".join([
    'chr1\ttest\texon\t1\t100\t.\t+\t.\tgene_id "g1"; transcript_id "t1"; gene_name "GENE1";',
    'chr1\ttest\texon\t201\t300\t.\t+\t.\tgene_id "g1"; transcript_id "t1"; gene_name "GENE1";',
    'chr1\ttest\texon\t401\t500\t.\t+\t.\tgene_id "g1"; transcript_id "t1"; gene_name "GENE1";',
    'chr1\ttest\tCDS\t51\t450\t.\t+\t0\tgene_id "g1"; transcript_id "t1"; gene_name "GENE1";',
]) + "\n"


@pytest.fixture
def cli_args(tmp_path):
    gtf = tmp_path / "genes.gtf"
    gtf.write_text(GTF)
    donors = tmp_path / "donors.bedgraph"
    donors.write_text("chr1\t100\t101\t10\nchr1\t300\t301\t4\n")
    acceptors = tmp_path / "acceptors.bedgraph"
    acceptors.write_text("chr1\t200\t201\t7\n")
    reference = tmp_path / "ref.fa"
    reference.write_text(">chr1\n" + "A" * 600 + "\n")

    return Namespace(
        prefix='sample', output_dir=str(tmp_path / "out"),
        gtf=str(gtf), donors=str(donors), acceptors=str(acceptors),
        reference=str(reference), debug=False,
        width=800, height=500, font_size=None, preset='default', no_acceptors=False,
    )


@pytest.mark.integration
def test_sites_command(cli_args, tmp_path):
    sites_cmd.run(cli_args)

    table = pd.read_csv(tmp_path / "out" / "sample.splicescope_sites.tsv", sep='\t')
    assert table['kind'].tolist() == ['donor', 'donor', 'acceptor', 'acceptor']
    assert table['position'].tolist() == [100, 300, 200, 400]
    assert table['score'].tolist() == [10.0, 4.0, 7.0, 0.0]


@pytest.mark.integration
def test_plot_command(cli_args, tmp_path):
    plot_cmd.run(cli_args)

    output = tmp_path / "out" / "sample.splicescope.png"
    assert output.exists()
    assert mpimg.imread(output).shape[:2] == (500, 800)


@pytest.mark.integration
@pytest.mark.parametrize("preset", sorted(plot_cmd.PRESETS))
def test_plot_command_presets(cli_args, tmp_path, preset):
    cli_args.preset = preset
    cli_args.no_acceptors = True
    plot_cmd.run(cli_args)
    assert (tmp_path / "out" / "sample.splicescope.png").exists()
