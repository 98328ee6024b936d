"""
Unit tests for connector geometry
"""
import pytest

from splicescope.layout import (
    ConnectorPoints,
    LaneMapping,
    Rectangle,
    TriangleConnector,
    prepare_surface,
)


@pytest.fixture
def spacer(figure):
    rect = Rectangle(0.0, 280.0, 800.0, 20.0)
    ax = prepare_surface(figure.add_axes([0.0, 0.4, 0.8, 0.04]), rect.width, rect.height)
    return ax, rect


def test_points_from_mapping():
    points = ConnectorPoints.from_mapping(LaneMapping((399.0, 401.0), (10.0, 20.0)))
    assert points == ConnectorPoints(top=400.0, left=10.0, right=20.0, mid=15.0)


def test_polygon_apex_and_base(spacer):
    ax, rect = spacer
    connector = TriangleConnector(ax, rect, ConnectorPoints(400.0, 10.0, 20.0, 15.0), 'red')
    assert connector.polygon() == [(400.0, 0.0), (10.0, 20.0), (20.0, 20.0)]


def test_polygon_follows_panel_height(figure):
    rect = Rectangle(0.0, 0.0, 100.0, 55.0)
    ax = prepare_surface(figure.add_axes([0, 0, 1, 1]), rect.width, rect.height)
    connector = TriangleConnector(ax, rect, ConnectorPoints(50.0, 0.0, 100.0, 50.0), 'red')
    apex, left, right = connector.polygon()
    assert apex[1] == 0.0
    assert left[1] == right[1] == 55.0


def test_plot_draws_funnel(spacer):
    ax, rect = spacer
    TriangleConnector(ax, rect, ConnectorPoints(400.0, 10.0, 20.0, 15.0), 'red').plot()
    assert len(ax.patches) == 1
    assert len(ax.lines) == 3
    xy = ax.patches[0].get_xy()
    assert tuple(xy[0]) == pytest.approx((400.0, 0.0))
