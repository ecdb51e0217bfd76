import math

import pytest

from noisegraph.fractal import FractalFBm, FractalPingPong, FractalRidged, ping_pong
from noisegraph.generator import Generator


class Const(Generator):
    def __init__(self, value=0.0):
        self.value = value

    def gen(self, seed, *args):
        return self.value


class Recorder(Generator):
    def __init__(self):
        self.calls = []

    def gen(self, seed, *args):
        self.calls.append((seed, args))
        return 0.0


def test_default_bounding_matches_calculation():
    node = FractalFBm()
    default = node.fractal_bounding
    node.set_octave_count(3)
    assert node.fractal_bounding == pytest.approx(default)


@pytest.mark.parametrize("value", [0.7, -0.3, 0.0])
@pytest.mark.parametrize("octaves", [1, 3, 6])
def test_fbm_of_constant_is_constant(value, octaves):
    node = FractalFBm()
    node.set_source(Const(value))
    node.set_octave_count(octaves)
    assert node.gen_single_2d(1.0, 2.0, 5) == pytest.approx(value)


def test_ridged_of_zero_source():
    node = FractalRidged()
    node.set_source(Const(0.0))
    assert node.gen_single_3d(1.0, 2.0, 3.0, 0) == pytest.approx(1.0)


def test_octave_positions_and_seeds():
    rec = Recorder()
    node = FractalFBm()
    node.set_source(rec)
    node.set_lacunarity(3.0)
    node.gen(10, 1.0, 2.0)
    assert [c[0] for c in rec.calls] == [10, 11, 12]
    assert rec.calls[1][1] == pytest.approx((3.0, 6.0))
    assert rec.calls[2][1] == pytest.approx((9.0, 18.0))


def test_seed_wraps_at_int32_limit():
    rec = Recorder()
    node = FractalRidged()
    node.set_source(rec)
    node.set_octave_count(2)
    node.gen(2**31 - 1, 0.0, 0.0)
    assert [c[0] for c in rec.calls] == [2**31 - 1, -(2**31)]


def test_gain_generator_resets_constant():
    node = FractalFBm()
    node.set_gain(Const(0.2))
    assert node.gain.constant == 1.0
    assert node.fractal_bounding == pytest.approx(1.0 / 3.0)


def test_ping_pong_is_periodic_and_bounded():
    for t in (0.1, 0.25, 0.9, 1.3, 1.75, -0.6):
        assert ping_pong(t + 4.0) == pytest.approx(ping_pong(t))
        assert -1.0 <= ping_pong(t) <= 1.0
    assert ping_pong(0.25) == pytest.approx(0.25)
    assert math.isnan(ping_pong(math.inf))


def test_ping_pong_node_with_zero_strength():
    node = FractalPingPong()
    node.set_source(Const(0.4))
    assert node.gen_single_2d(0.5, 0.5, 1) == 0.0


def test_missing_source_raises():
    with pytest.raises(ValueError):
        FractalFBm().gen_single_2d(0.0, 0.0, 0)


def test_non_generator_source_rejected():
    with pytest.raises(TypeError):
        FractalFBm().set_source(1.0)


def test_metadata_members():
    meta = FractalPingPong.metadata()
    assert meta.groups == ["Fractal"]
    assert [m.name for m in meta.member_node_lookups] == ["Source"]
    assert [h.name for h in meta.member_hybrids] == ["Gain", "Weighted Strength", "Ping Pong Strength"]
    assert [v.name for v in meta.member_variables] == ["Octaves", "Lacunarity"]


def test_octave_variable_is_clamped():
    node = FractalFBm()
    octaves = next(v for v in FractalFBm.metadata().member_variables if v.name == "Octaves")
    assert octaves.apply(node, 40)
    assert node.octaves == 16
    assert octaves.apply(node, 0)
    assert node.octaves == 2