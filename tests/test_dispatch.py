import pytest

from rendergraph.scene.models import (
    WidgetType, Point, TextModel, CircleModel, RectModel, TriangleModel, CircleTextModel,
)
from rendergraph.ui import primitives
from rendergraph.ui.dispatch import RenderDispatcher
from rendergraph.ui.style import create_font, create_pen


@pytest.fixture
def dispatcher():
    return RenderDispatcher()


@pytest.fixture
def font():
    return create_font("Arial", 12, "white", "black")


@pytest.fixture
def pen():
    return create_pen(2, None, "red")


def test_text_widget_draws_model_fields(dispatcher, registry, view, font, monkeypatch):
    calls = []
    monkeypatch.setattr(primitives, "text", lambda *args: calls.append(args))

    model = TextModel(text="hello", font=font, position=Point(5, 6))
    widget = registry.create("label", "text", model)

    assert dispatcher.render(view, widget) is True
    assert calls == [(view, "hello", font, Point(5, 6))]


def test_unknown_type_draws_nothing(dispatcher, registry, view, surface):
    widget = registry.create("mystery", "unknown_type", {"text": "x"})

    assert dispatcher.render(view, widget) is False
    batch = surface.finalize()
    assert batch.triangles == [] and batch.lines == [] and batch.texts == []


def test_group_has_no_routine(dispatcher, registry, view):
    group = registry.create("root", WidgetType.GROUP, {})
    assert dispatcher.routine_for(WidgetType.GROUP) is None
    assert dispatcher.render(view, group) is False


def test_mapping_models_are_accepted(dispatcher, registry, view, font, monkeypatch):
    calls = []
    monkeypatch.setattr(primitives, "text", lambda *args: calls.append(args))

    widget = registry.create("label", "text", {"text": "hi", "font": font, "position": (1, 2)})
    dispatcher.render(view, widget)

    assert calls == [(view, "hi", font, (1, 2))]


def test_enum_and_string_tags_dispatch_alike(dispatcher, registry, view, pen, monkeypatch):
    calls = []
    monkeypatch.setattr(primitives, "circle", lambda v, p, pos, r: calls.append(r))

    model_a = CircleModel(pen=pen, position=Point(0, 0), radius=3)
    model_b = CircleModel(pen=pen, position=Point(0, 0), radius=4)
    dispatcher.render(view, registry.create("a", WidgetType.CIRCLE, model_a))
    dispatcher.render(view, registry.create("b", "circle", model_b))

    assert calls == [3, 4]


def test_shape_routines_receive_model_fields(dispatcher, registry, view, pen, font, monkeypatch):
    calls = {}
    monkeypatch.setattr(primitives, "rect", lambda v, p, tl, br: calls.setdefault("rect", (p, tl, br)))
    monkeypatch.setattr(primitives, "triangle", lambda v, p, a, b, c: calls.setdefault("triangle", (p, a, b, c)))
    monkeypatch.setattr(primitives, "circle_text", lambda v, *args: calls.setdefault("circle_text", args))

    dispatcher.render(view, registry.create("r", "rect", RectModel(pen, Point(0, 0), Point(4, 4))))
    dispatcher.render(view, registry.create("t", "triangle", TriangleModel(pen, Point(0, 0), Point(1, 0), Point(0, 1))))
    dispatcher.render(view, registry.create("c", "circle_text", CircleTextModel("abc", font, Point(9, 9), 10, 3.0, 0.0)))

    assert calls["rect"] == (pen, Point(0, 0), Point(4, 4))
    assert calls["triangle"] == (pen, Point(0, 0), Point(1, 0), Point(0, 1))
    assert calls["circle_text"] == ("abc", font, Point(9, 9), 10, 3.0, 0.0)


def test_register_custom_type(dispatcher, registry, view):
    seen = []

    @dispatcher.register("badge")
    def draw_badge(v, model):
        seen.append((v, model))

    widget = registry.create("b", "badge", {"label": "new"})
    assert dispatcher.render(view, widget)
    assert seen == [(view, {"label": "new"})]
    assert dispatcher.routine_for("badge") is draw_badge
    assert "badge" in dispatcher.tags

    assert dispatcher.unregister("badge") is draw_badge
    assert not dispatcher.render(view, widget)


def test_register_replaces_existing_routine(dispatcher, registry, view, font):
    seen = []
    dispatcher.register(WidgetType.TEXT, lambda v, m: seen.append(m.text))

    dispatcher.render(view, registry.create("t", WidgetType.TEXT, TextModel("x", font, Point(0, 0))))
    assert seen == ["x"]


def test_render_all_counts_drawn_widgets(dispatcher, registry, view, font, surface):
    registry.create("root", WidgetType.GROUP)
    registry.create("label", WidgetType.TEXT, TextModel("ok", font, Point(1, 1)))
    registry.create("odd", "unknown_type")

    assert dispatcher.render_all(view, registry) == 1
    assert [t.text for t in surface.finalize().texts] == ["ok", "ok"]


def test_empty_routine_table(registry, view, font):
    dispatcher = RenderDispatcher(routines={})
    widget = registry.create("label", WidgetType.TEXT, TextModel("x", font, Point(0, 0)))
    assert dispatcher.render(view, widget) is False
