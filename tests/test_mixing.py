import numpy as np
import pytest

from pigment_match.colorspace import OKLab
from pigment_match.errors import InvalidInputError
from pigment_match.mixing import (
    WHITE,
    SubtractiveMixer,
    WeightedColor,
    darkening_factor,
    mix_oklab,
)

YELLOW = OKLab(0.88, 0.02, 0.18)
ULTRAMARINE = OKLab(0.42, 0.08, -0.25)


def wc(L, a, b, w):
    return WeightedColor(OKLab(L, a, b), w)


def test_empty_and_zero_weight_fall_back_to_white():
    assert mix_oklab([]) == WHITE
    assert mix_oklab([wc(0.3, 0.1, 0.1, 0.0), wc(0.6, -0.1, 0.0, 0.0)]) == WHITE
    assert WHITE.coords() == (1.0, 0.0, 0.0)


def test_darkening_factor_scales_with_pigment_count():
    assert darkening_factor(0) == pytest.approx(0.15)
    assert darkening_factor(1) == pytest.approx(0.20)
    assert darkening_factor(2) == pytest.approx(0.25)
    assert darkening_factor(3) == pytest.approx(0.30)
    assert darkening_factor(7) == pytest.approx(0.30)


def test_single_pigment_is_darkened():
    out = mix_oklab([wc(0.5, 0.1, -0.1, 5.0)])
    assert out.L == pytest.approx(0.4)
    assert out.a == pytest.approx(0.1)
    assert out.b == pytest.approx(-0.1)


def test_zero_weight_pigment_is_ignored():
    a = mix_oklab([wc(0.6, 0.1, 0.05, 10.0)])
    b = mix_oklab([wc(0.6, 0.1, 0.05, 10.0), wc(0.2, -0.3, -0.3, 0.0)])
    assert a == b


def test_yellow_and_ultramarine():
    out = mix_oklab([WeightedColor(YELLOW, 10), WeightedColor(ULTRAMARINE, 10)])
    # mean L 0.65, two pigments → 25 % darker
    assert out.L == pytest.approx(0.65 * 0.75)
    assert out.a == pytest.approx(0.05)
    assert out.b == pytest.approx(-0.035)
    assert abs(out.a) < 0.1 and abs(out.b) < 0.05
    assert out.L < min(YELLOW.L, 0.65)


def test_weights_are_volumes():
    heavy_yellow = mix_oklab([WeightedColor(YELLOW, 30), WeightedColor(ULTRAMARINE, 10)])
    even = mix_oklab([WeightedColor(YELLOW, 10), WeightedColor(ULTRAMARINE, 10)])
    assert heavy_yellow.L > even.L
    assert heavy_yellow.b > even.b


def test_output_is_clamped():
    rng = np.random.default_rng(11)
    for _ in range(200):
        n = int(rng.integers(1, 6))
        colors = [
            wc(rng.uniform(-1, 3), rng.uniform(-2, 2), rng.uniform(-2, 2), rng.uniform(0, 50))
            for _ in range(n)
        ]
        out = mix_oklab(colors)
        assert 0.05 <= out.L <= 1.0
        assert -0.5 <= out.a <= 0.5
        assert -0.5 <= out.b <= 0.5


def test_lightness_never_hits_black():
    assert mix_oklab([wc(0.0, 0.0, 0.0, 1.0)]).L == pytest.approx(0.05)


def test_mixer_without_darkening_is_a_plain_average():
    mixer = SubtractiveMixer(base_darkening=0.0, extra_darkening=0.0)
    out = mixer.mix([wc(0.2, 0.1, 0.0, 1.0), wc(0.6, -0.1, 0.2, 3.0)])
    assert np.allclose(out.coords(), (0.5, -0.05, 0.15))


@pytest.mark.parametrize("weight", [-1.0, float("nan"), float("inf")])
def test_weight_validation(weight):
    with pytest.raises(InvalidInputError):
        WeightedColor(YELLOW, weight)
