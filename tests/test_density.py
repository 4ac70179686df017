import pytest

from ascii_art.errors import DegenerateNormalization, EmptyCharacterSet
from ascii_art.matching.density import (
    DEGENERATE,
    Normal,
    density_table,
    glyph_density,
    normalize_densities,
    resolution_divisor,
    resolve_densities,
)


def test_glyph_density_divides_by_chars_per_row_squared(make_rasterizer):
    r = make_rasterizer({"#": 64})
    assert resolution_divisor(4) == 16
    assert glyph_density("#", 4, r) == 4.0
    assert glyph_density("#", 8, r) == 1.0


def test_glyph_density_renders_at_glyph_size_with_font(make_rasterizer):
    r = make_rasterizer({"#": 3})
    glyph_density("#", 2, r, glyph_size=12, font_name="Mono")
    assert r.calls == [("#", 12, "Mono")]


def test_normalize_stretches_onto_unit_interval():
    out = normalize_densities({"a": 2.0, "b": 3.0, "c": 6.0})
    assert out == {"a": Normal(0.0), "b": Normal(0.25), "c": Normal(1.0)}


def test_normalized_values_within_bounds(make_rasterizer):
    r = make_rasterizer()
    table = density_table("abcdefghij", 4, r)
    assert set(table) == set("abcdefghij")
    assert all(0.0 <= v <= 1.0 for v in table.values())
    assert min(table.values()) == 0.0
    assert max(table.values()) == 1.0


def test_normalization_ignores_resolution(make_rasterizer):
    r = make_rasterizer()
    assert density_table("abc", 2, r) == pytest.approx(density_table("abc", 8, r))


def test_normalize_empty_raises():
    with pytest.raises(EmptyCharacterSet):
        normalize_densities({})


def test_all_equal_is_degenerate():
    out = normalize_densities({"x": 0.5, "y": 0.5})
    assert out == {"x": DEGENERATE, "y": DEGENERATE}


def test_midpoint_policy_resolves_degenerate():
    assert resolve_densities(normalize_densities({"x": 1.0})) == {"x": 0.5}


def test_raise_policy_rejects_degenerate():
    with pytest.raises(DegenerateNormalization):
        resolve_densities(normalize_densities({"x": 1.0, "y": 1.0}), policy="raise")


def test_raise_policy_passes_normal_values():
    out = resolve_densities(normalize_densities({"x": 0.0, "y": 2.0}), policy="raise")
    assert out == {"x": 0.0, "y": 1.0}


def test_unknown_policy():
    with pytest.raises(ValueError):
        resolve_densities({"x": Normal(0.0)}, policy="nearest")
