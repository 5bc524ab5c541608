import pytest
from flowcanvas.core.diagram import Diagram
from flowcanvas.core.geometry import Point
from flowcanvas.core.shapes import Box
from flowcanvas.canvas.repaint import (
    DrawBottomToTop,
    EraseRegion,
    UpdateScreen,
)
from flowcanvas.canvas.selection import SelectionManager


@pytest.fixture
def boxes():
    diagram = Diagram()
    a = diagram.add(Box(0, 0, 50, 50, name="a"))
    b = diagram.add(Box(30, 30, 50, 50, name="b"))
    far = diagram.add(Box(300, 300, 20, 20, name="far"))
    return diagram, a, b, far


def test_select_marks_and_notifies(boxes, signal_catcher):
    diagram, a, b, far = boxes
    manager = SelectionManager(diagram)
    manager.selection_changed.connect(signal_catcher)

    manager.select(a)

    assert a.selected
    assert manager.selected_element is a
    assert signal_catcher.call_count == 1
    assert signal_catcher.last("element") is a


def test_select_without_notify(boxes, signal_catcher):
    diagram, a, b, far = boxes
    manager = SelectionManager(diagram)
    manager.selection_changed.connect(signal_catcher)
    manager.select(a, notify=False)
    assert a.selected
    assert signal_catcher.call_count == 0


def test_select_repaints_overlapping_elements_bottom_to_top(boxes):
    diagram, a, b, far = boxes
    manager = SelectionManager(diagram)

    commands = manager.select(b)

    assert [type(c) for c in commands] == [
        EraseRegion,
        DrawBottomToTop,
        UpdateScreen,
    ]
    assert commands[1].elements == (a, b)
    assert commands[0].region == b.update_rectangle()


def test_selecting_another_element_deselects_first(boxes):
    diagram, a, b, far = boxes
    manager = SelectionManager(diagram)
    manager.select(a)

    commands = manager.select(far)

    assert not a.selected
    assert far.selected
    assert manager.selected_element is far
    # Deselect cycle for a, then the select cycle for far
    assert len(commands) == 6
    assert commands[1].elements == (a, b)
    assert commands[4].elements == (far,)
    assert [e for e in diagram if e.selected] == [far]


def test_deselect_current(boxes):
    diagram, a, b, far = boxes
    manager = SelectionManager(diagram)
    assert manager.deselect_current() == []

    manager.select(a)
    commands = manager.deselect_current()
    assert len(commands) == 3
    assert not a.selected
    assert manager.selected_element is None


def test_select_at_hits_topmost(boxes):
    diagram, a, b, far = boxes
    manager = SelectionManager(diagram)

    element, commands = manager.select_at(Point(40, 40))
    assert element is b
    assert commands

    element, commands = manager.select_at(Point(200, 200))
    assert element is None
    assert commands == []
    # A miss leaves the selection alone
    assert manager.selected_element is b
