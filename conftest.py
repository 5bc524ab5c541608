import pytest
from flowcanvas.config import SnapConfig
from flowcanvas.core.diagram import Diagram
from flowcanvas.core.geometry import ConnectionPoint, GripType, Point
from flowcanvas.core.shapes import Box, Connector
from flowcanvas.canvas.controller import CanvasController


class SignalCatcher:
    """A simple callable class to catch and store signal emissions."""

    def __init__(self):
        self.calls = []

    def __call__(self, sender, **kwargs):
        self.calls.append({"sender": sender, **kwargs})

    @property
    def call_count(self):
        return len(self.calls)

    def last(self, key):
        return self.calls[-1][key] if self.calls else None


class PortBox(Box):
    """A box with a single connection point on its right edge."""

    def __init__(self, *args, port: Point = Point(150, 120), **kwargs):
        super().__init__(*args, **kwargs)
        self.port = port

    def get_connection_points(self):
        return [ConnectionPoint(self.port, GripType.RIGHT_MIDDLE)]

    def move(self, delta):
        super().move(delta)
        self.port = self.port + delta


@pytest.fixture
def signal_catcher():
    return SignalCatcher()


@pytest.fixture
def snap_config():
    return SnapConfig(
        element_snap_range=10,
        connection_point_snap_range=8,
        detach_velocity=15,
        connection_point_marker_size=3,
    )


@pytest.fixture
def diagram():
    return Diagram()


@pytest.fixture
def rect_r():
    """Rectangle R at (100,100)-(150,150) with a port at (150,120)."""
    return PortBox(100, 100, 50, 50, name="R")


@pytest.fixture
def line_l():
    """Connector L whose end handle sits at (160,120)."""
    return Connector(Point(60, 120), Point(160, 120), name="L")


@pytest.fixture
def scene(diagram, rect_r, line_l):
    diagram.add(rect_r)
    diagram.add(line_l)
    return diagram


@pytest.fixture
def controller(scene, snap_config):
    return CanvasController(scene, snap_config)
