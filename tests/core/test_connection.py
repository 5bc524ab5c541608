import pytest
from flowcanvas.core.connection import Connection, ConnectionGraph
from flowcanvas.core.geometry import ConnectionPoint, GripType, Point
from flowcanvas.core.shapes import Box, Connector


@pytest.fixture
def graph():
    return ConnectionGraph()


@pytest.fixture
def box():
    return Box(100, 100, 50, 50, name="box")


@pytest.fixture
def other_box():
    return Box(300, 100, 50, 50, name="other")


@pytest.fixture
def line():
    return Connector(Point(60, 125), Point(150, 125), name="line")


def right_of(box):
    return next(
        cp
        for cp in box.get_connection_points()
        if cp.type is GripType.RIGHT_MIDDLE
    )


def end_of(line):
    return ConnectionPoint(line.end, GripType.END)


def start_of(line):
    return ConnectionPoint(line.start, GripType.START)


def test_connect_records_edge_on_anchor(graph, box, line):
    connection = graph.connect(box, right_of(box), line, end_of(line))

    assert connection == Connection(line, end_of(line), right_of(box))
    assert graph.connections_from(box) == [connection]
    assert graph.connections_from(line) == []
    assert graph.connected_shape(line, GripType.END) is box
    assert graph.connected_shape(line, GripType.START) is None
    assert graph.bound_grips(line) == [GripType.END]
    assert len(graph) == 1
    assert list(graph) == [(box, connection)]


def test_connect_same_binding_twice_is_idempotent(graph, box, line):
    first = graph.connect(box, right_of(box), line, end_of(line))
    second = graph.connect(box, right_of(box), line, end_of(line))
    assert first is second
    assert len(graph) == 1


def test_rebinding_a_handle_replaces_the_old_edge(
    graph, box, other_box, line
):
    graph.connect(box, right_of(box), line, end_of(line))
    graph.connect(other_box, right_of(other_box), line, end_of(line))

    assert graph.connections_from(box) == []
    assert len(graph.connections_from(other_box)) == 1
    assert graph.connected_shape(line, GripType.END) is other_box
    assert len(graph) == 1


def test_disconnect_handle(graph, box, line, signal_catcher):
    graph.disconnected.connect(signal_catcher)
    graph.connect(box, right_of(box), line, end_of(line))
    graph.connect(box, right_of(box), line, start_of(line))

    removed = graph.disconnect_handle(line, GripType.END)

    assert len(removed) == 1
    assert removed[0].to_connection_point.type is GripType.END
    assert graph.connected_shape(line, GripType.END) is None
    assert graph.connected_shape(line, GripType.START) is box
    assert signal_catcher.call_count == 1
    assert signal_catcher.last("anchor") is box


def test_disconnect_unbound_handle_is_a_noop(graph, box, line):
    assert graph.disconnect_handle(line, GripType.END) == []
    assert graph.disconnect_handle(box, GripType.START) == []


def test_disconnect_none_removes_every_handle(graph, box, other_box, line):
    graph.connect(box, right_of(box), line, end_of(line))
    graph.connect(other_box, right_of(other_box), line, start_of(line))

    removed = graph.disconnect_handle(line, GripType.NONE)

    assert len(removed) == 2
    assert len(graph) == 0
    assert graph.bound_grips(line) == []


def test_remove_element_as_anchor(graph, box, line):
    graph.connect(box, right_of(box), line, end_of(line))
    graph.remove_element(box)
    assert len(graph) == 0
    assert graph.connected_shape(line, GripType.END) is None


def test_remove_element_as_connector(graph, box, other_box, line):
    graph.connect(box, right_of(box), line, end_of(line))
    graph.connect(other_box, right_of(other_box), line, start_of(line))
    graph.remove_element(line)
    assert graph.connections_from(box) == []
    assert graph.connections_from(other_box) == []


def test_connected_signal(graph, box, line, signal_catcher):
    graph.connected.connect(signal_catcher)
    connection = graph.connect(box, right_of(box), line, end_of(line))
    assert signal_catcher.call_count == 1
    assert signal_catcher.last("sender") is graph
    assert signal_catcher.last("connection") == connection


def test_clear(graph, box, other_box, line):
    graph.connect(box, right_of(box), line, end_of(line))
    graph.connect(other_box, right_of(other_box), line, start_of(line))
    graph.clear()
    assert len(graph) == 0
