"""Tests for gradient fields, coherent noise and the noise synthesizers."""

import numpy as np
import pytest


def _context(seed=1234):
    from noisemaps import GenerationContext, RandomSource
    return GenerationContext(rng=RandomSource(seed))


def test_fade_endpoints():
    from noisemaps.noise import _fade
    assert _fade(0.0) == 0.0
    assert _fade(1.0) == 1.0
    assert _fade(0.5) == pytest.approx(0.5)


def test_gradient_field_unit_vectors():
    from noisemaps import RandomSource
    from noisemaps.noise import GradientField
    field = GradientField.regenerate(6, RandomSource(7))
    assert field.nodes == 6
    assert field.vectors.shape == (6, 6, 2)
    lengths = np.hypot(field.vectors[..., 0], field.vectors[..., 1])
    np.testing.assert_allclose(lengths, 1.0)
    assert not field.vectors.flags.writeable


def test_gradient_field_draw_order():
    from noisemaps import RandomSource
    from noisemaps.noise import GradientField
    field = GradientField.regenerate(3, RandomSource(11))
    reference = RandomSource(11)
    angles = [reference.draw() * 2 * np.pi for _ in range(9)]
    # Second draw lands at row 0, column 1
    assert field.vectors[0, 1, 0] == pytest.approx(np.cos(angles[1]))
    assert field.vectors[0, 1, 1] == pytest.approx(np.sin(angles[1]))
    assert field.vectors[2, 0, 1] == pytest.approx(np.sin(angles[6]))


@pytest.mark.parametrize("nodes", [0, 1, -3, 2.5])
def test_gradient_field_rejects_small_lattice(nodes):
    from noisemaps import InvalidParameterError, RandomSource
    from noisemaps.noise import GradientField
    with pytest.raises(InvalidParameterError):
        GradientField.regenerate(nodes, RandomSource(1))


def test_coherent_noise_range():
    from noisemaps import RandomSource
    from noisemaps.noise import GradientField, coherent_noise
    field = GradientField.regenerate(8, RandomSource(3))
    coords = np.random.RandomState(0).uniform(0, 6.999, size=(2, 500))
    values = coherent_noise(coords[0], coords[1], field)
    assert values.shape == (500,)
    assert values.min() >= 0.0
    assert values.max() <= 1.0


def test_coherent_noise_at_lattice_point():
    from noisemaps import RandomSource
    from noisemaps.noise import GradientField, coherent_noise
    field = GradientField.regenerate(5, RandomSource(99))
    for x, y in [(0, 0), (1, 2), (3, 3)]:
        assert coherent_noise(x, y, field) == 0.5


def test_coherent_noise_scalar_returns_float():
    from noisemaps import RandomSource
    from noisemaps.noise import GradientField, coherent_noise
    field = GradientField.regenerate(4, RandomSource(5))
    assert isinstance(coherent_noise(1.25, 0.75, field), float)


def test_coherent_noise_out_of_range():
    from noisemaps import RandomSource
    from noisemaps.noise import GradientField, coherent_noise
    field = GradientField.regenerate(4, RandomSource(5))
    with pytest.raises(IndexError):
        coherent_noise(3.0, 0.5, field)
    with pytest.raises(IndexError):
        coherent_noise(0.5, -0.5, field)


def test_coherent_noise_wraps():
    from noisemaps import RandomSource
    from noisemaps.noise import GradientField, coherent_noise
    field = GradientField.regenerate(4, RandomSource(5))
    base = coherent_noise(1.3, 2.6, field, wrap=True)
    shifted = coherent_noise(1.3 + 4, 2.6 + 8, field, wrap=True)
    assert shifted == pytest.approx(base, abs=1e-9)
    assert 0.0 <= coherent_noise(7.9, 3.5, field, wrap=True) <= 1.0


@pytest.mark.parametrize("kind", ["perlin", "static", "ridged", "terrain", "river"])
def test_synthesize_shape_and_range(kind):
    from noisemaps.noise import synthesize
    field = synthesize(kind, 24, 16, context=_context())
    assert field.shape == (16, 24)
    assert field.dtype == np.float64
    assert field.min() >= 0.0
    assert field.max() <= 1.0
    assert not field.flags.writeable


@pytest.mark.parametrize("seed", [1, 42, 1234])
def test_perlin_deterministic(seed):
    from noisemaps.noise import NoiseKind, synthesize
    a = synthesize(NoiseKind.PERLIN, 32, 32, scale=6, context=_context(seed))
    b = synthesize(NoiseKind.PERLIN, 32, 32, scale=6, context=_context(seed))
    np.testing.assert_array_equal(a, b)


def test_different_seeds_differ():
    from noisemaps.noise import synthesize
    a = synthesize("perlin", 32, 32, context=_context(1))
    b = synthesize("perlin", 32, 32, context=_context(2))
    assert not np.array_equal(a, b)


def test_perlin_is_smooth():
    from noisemaps.noise import synthesize
    field = synthesize("perlin", 64, 64, scale=4, context=_context())
    assert np.abs(np.diff(field, axis=1)).max() < 0.1
    assert np.abs(np.diff(field, axis=0)).max() < 0.1


def test_ridged_extremes():
    from noisemaps.noise import ridged
    np.testing.assert_array_equal(ridged(np.array([0.0, 1.0, 0.5])),
                                  [0.0, 0.0, 1.0])


def test_river_extremes():
    from noisemaps.noise import river
    np.testing.assert_array_equal(river(np.array([0.0, 1.0, 0.5])),
                                  [1.0, 1.0, 0.0])


def test_river_is_complement_of_ridged():
    from noisemaps.noise import synthesize
    ridges = synthesize("ridged", 20, 20, scale=5, context=_context(8))
    rivers = synthesize("river", 20, 20, scale=5, context=_context(8))
    np.testing.assert_array_equal(rivers, 1 - ridges)


def test_terrain_is_power_of_perlin():
    from noisemaps.noise import synthesize
    base = synthesize("perlin", 20, 20, context=_context(8))
    terrain = synthesize("terrain", 20, 20, context=_context(8))
    np.testing.assert_allclose(terrain, base ** 1.5)


def test_static_ignores_gradients():
    from noisemaps.noise import synthesize
    context = _context()
    synthesize("static", 4, 4, scale=1, context=context)
    assert context.gradients is None


def test_scale_zero_uses_default():
    from noisemaps.noise import synthesize
    context = _context()
    synthesize("perlin", 8, 8, scale=0, context=context)
    assert context.gradients.nodes == 4
    synthesize("perlin", 8, 8, scale=None, context=context)
    assert context.gradients.nodes == 4


def test_gradients_replaced_per_call():
    from noisemaps.noise import synthesize
    context = _context()
    synthesize("perlin", 8, 8, scale=5, context=context)
    first = context.gradients
    synthesize("perlin", 8, 8, scale=3, context=context)
    assert context.gradients is not first
    assert context.gradients.nodes == 3
    assert first.nodes == 5


@pytest.mark.parametrize("kwargs", [
    {"kind": "perlin", "width": 0, "height": 4},
    {"kind": "perlin", "width": 4, "height": -1},
    {"kind": "perlin", "width": 4.0, "height": 4},
    {"kind": "perlin", "width": 4, "height": 4, "scale": 1},
    {"kind": "simplex", "width": 4, "height": 4},
])
def test_synthesize_rejects_bad_parameters(kwargs):
    from noisemaps import InvalidParameterError
    from noisemaps.noise import synthesize
    context = _context(77)
    with pytest.raises(InvalidParameterError):
        synthesize(context=context, **kwargs)
    # Nothing was drawn
    assert context.rng.next() == _context(77).rng.next()


def test_layered_single_octave_matches_perlin():
    from noisemaps.noise import synthesize, synthesize_layered
    plain = synthesize("perlin", 40, 30, scale=6, context=_context(5))
    layered = synthesize_layered(40, 30, 1, scale=6, context=_context(5))
    np.testing.assert_array_equal(layered, plain)


def test_layered_range_and_shape():
    from noisemaps.noise import synthesize_layered
    field = synthesize_layered(48, 32, 5, scale=4, persistence=0.6,
                               context=_context())
    assert field.shape == (32, 48)
    assert field.min() >= 0.0
    assert field.max() <= 1.0


def test_layered_draws_one_lattice_per_octave():
    from noisemaps.noise import synthesize_layered
    context = _context(21)
    synthesize_layered(16, 16, 3, scale=4, context=context)
    reference = _context(21).rng
    for _ in range(3 * 4 * 4):
        reference.next()
    assert context.rng.next() == reference.next()
    assert context.gradients.nodes == 4


def test_layered_adds_detail():
    from noisemaps.noise import synthesize, synthesize_layered
    plain = synthesize("perlin", 64, 64, context=_context(3))
    layered = synthesize_layered(64, 64, 4, context=_context(3))
    rough_plain = np.abs(np.diff(plain, axis=1)).mean()
    rough_layered = np.abs(np.diff(layered, axis=1)).mean()
    assert rough_layered > rough_plain * 0.5
    assert not np.array_equal(plain, layered)


@pytest.mark.parametrize("persistence", [1.5, -0.5, float("nan")])
def test_layered_rejects_bad_persistence(persistence):
    from noisemaps import InvalidParameterError
    from noisemaps.noise import synthesize_layered
    with pytest.raises(InvalidParameterError):
        synthesize_layered(8, 8, 2, persistence=persistence, context=_context())


@pytest.mark.parametrize("layers", [0, -1, 2.0])
def test_layered_rejects_bad_layers(layers):
    from noisemaps import InvalidParameterError
    from noisemaps.noise import synthesize_layered
    with pytest.raises(InvalidParameterError):
        synthesize_layered(8, 8, layers, context=_context())


def test_layered_persistence_zero_uses_default():
    from noisemaps.noise import synthesize_layered
    a = synthesize_layered(16, 16, 3, persistence=0, context=_context(4))
    b = synthesize_layered(16, 16, 3, persistence=0.5, context=_context(4))
    np.testing.assert_array_equal(a, b)
