import pytest
from flowcanvas.core.diagram import Diagram
from flowcanvas.core.geometry import Point, Rect
from flowcanvas.core.shapes import Box
from flowcanvas.canvas.controller import CanvasController
from flowcanvas.canvas.pointer import PointerEvent
from flowcanvas.canvas.repaint import Redraw, RepaintCommand
from flowcanvas.render.surface import SurfaceRenderer

RED = (255, 0, 0, 255)
WHITE = (255, 255, 255, 255)


@pytest.fixture
def red_box():
    return Box(10, 10, 50, 50, background=(1, 0, 0, 1))


@pytest.fixture
def renderer(red_box):
    diagram = Diagram()
    diagram.add(red_box)
    renderer = SurfaceRenderer(diagram, 200, 200)
    renderer.paint_all()
    return renderer


def test_paint_all(renderer):
    assert renderer.size() == (200, 200)
    assert renderer.pixel(30, 30) == RED
    assert renderer.pixel(100, 100) == WHITE
    assert renderer.damage == [Rect(0, 0, 200, 200)]


def test_screen_updated_signal(renderer, signal_catcher):
    renderer.screen_updated.connect(signal_catcher)
    renderer.paint_all()
    assert signal_catcher.call_count == 1
    assert signal_catcher.last("region") == Rect(0, 0, 200, 200)


def test_redraw_damages_the_update_rectangle(renderer, red_box):
    renderer.apply([Redraw(red_box, 3, 3)])
    assert renderer.damage[-1] == red_box.update_rectangle(3, 3)


def test_pan_clears_the_old_position(renderer):
    controller = CanvasController(renderer.diagram, renderer=renderer)
    controller.on_pointer_down(PointerEvent(Point(150, 150)))
    controller.on_pointer_move(PointerEvent(Point(250, 150)))

    assert renderer.pixel(30, 30) == WHITE
    assert renderer.pixel(130, 30) == RED


def test_hover_paints_anchors(renderer):
    controller = CanvasController(renderer.diagram, renderer=renderer)
    assert renderer.pixel(11, 11) == RED

    controller.on_pointer_move(PointerEvent(Point(30, 30)))

    # The top left anchor is filled white
    assert renderer.pixel(11, 11) == WHITE
    assert renderer.pixel(30, 30) == RED


def test_unknown_command(renderer):
    with pytest.raises(TypeError):
        renderer.apply([RepaintCommand()])


def test_removed_element_is_erased(renderer, red_box):
    controller = CanvasController(renderer.diagram, renderer=renderer)
    controller.on_pointer_down(PointerEvent(Point(30, 30)))

    renderer.diagram.remove(red_box)

    assert controller.selected_element is None
    assert renderer.pixel(30, 30) == WHITE
    assert renderer.damage[-1] == red_box.update_rectangle()
