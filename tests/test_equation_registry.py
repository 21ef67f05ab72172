from __future__ import annotations

import pytest

from function_plotter import ColorPalette, EquationInput, EquationRegistry


@pytest.fixture
def registry() -> EquationRegistry:
    return EquationRegistry(ColorPalette(["red", "green", "blue"]))


def test_sync_drops_blank_entries_and_reports_failures(registry) -> None:
    failures = registry.sync(["x^2", "", "   ", "x +", "sin(x)"])
    assert [eq.expression for eq in registry.equations] == ["x^2", "sin(x)"]
    assert [eq.source_index for eq in registry.equations] == [0, 4]
    assert len(failures) == 1
    assert failures[0].source_index == 3
    assert failures[0].text == "x +"
    assert registry.failures == tuple(failures)


def test_colors_follow_position_among_compiling_entries(registry) -> None:
    registry.sync(["bad(", "x", "x^2", "x^3", "x^4"])
    assert [eq.color for eq in registry.equations] == ["red", "green", "blue", "red"]


def test_hidden_equations_keep_their_palette_slot(registry) -> None:
    registry.sync([("x", True), ("x^2", False), EquationInput("x^3")])
    assert [eq.color for eq in registry.equations] == ["red", "green", "blue"]
    assert [eq.expression for eq in registry.visible()] == ["x", "x^3"]


def test_sync_replaces_previous_state_wholesale(registry) -> None:
    registry.sync(["x", "x^2"])
    registry.sync(["x^2"])
    assert len(registry.equations) == 1
    assert registry.equations[0].color == "red"


def test_invalid_entry_type_raises(registry) -> None:
    with pytest.raises(TypeError):
        registry.sync([42])


def test_palette_wraps_and_requires_colors() -> None:
    palette = ColorPalette(["a", "b"])
    assert palette.color_for(3) == "b"
    assert len(palette) == 2
    with pytest.raises(ValueError):
        ColorPalette([])


@pytest.mark.parametrize("visible", ["False", 0, None])
def test_visibility_flag_must_be_a_bool(registry, visible) -> None:
    with pytest.raises(TypeError, match="visibility must be a bool"):
        registry.sync([("x", visible)])
