import math

import pytest

from noisegraph.camera import CameraController, Key

FRAME = 1.0 / 80.0
TOL = 1e-9


def test_no_keys_no_velocity():
    cam = CameraController()
    assert cam.velocity(0.5) == (0.0, 0.0, 0.0)


def test_forward_key_moves_along_negative_z():
    cam = CameraController()
    cam.handle_key(Key.W, True)
    assert tuple(cam.velocity(FRAME)) == pytest.approx((0.0, 0.0, -1.0), abs=TOL)


def test_shift_sprints():
    cam = CameraController()
    cam.handle_key(Key.UP, True)
    cam.handle_key(Key.LEFT_SHIFT, True)
    assert tuple(cam.velocity(FRAME)) == pytest.approx((0.0, 0.0, -4.0), abs=TOL)


def test_opposite_keys_cancel():
    cam = CameraController()
    cam.handle_key(Key.A, True)
    cam.handle_key(Key.D, True)
    cam.handle_key(Key.Q, True)
    cam.handle_key(Key.E, True)
    assert tuple(cam.velocity(FRAME)) == pytest.approx((0.0, 0.0, 0.0), abs=TOL)


def test_release_stops_movement():
    cam = CameraController()
    cam.handle_key("page_up", True)
    assert tuple(cam.velocity(FRAME)) == pytest.approx((0.0, 1.0, 0.0), abs=TOL)
    cam.handle_key("page_up", False)
    assert cam.velocity(FRAME) == (0.0, 0.0, 0.0)


def test_unknown_key_ignored():
    cam = CameraController()
    assert cam.handle_key("f12", True) is False
    assert cam.keys_down == set()


def test_velocity_scales_with_duration():
    cam = CameraController()
    cam.handle_key(Key.D, True)
    one = tuple(cam.velocity(FRAME))
    two = tuple(cam.velocity(2 * FRAME))
    assert one == pytest.approx((1.0, 0.0, 0.0), abs=TOL)
    assert two == pytest.approx(tuple(2 * v for v in one), abs=TOL)


def test_initial_forward():
    assert tuple(CameraController().forward()) == pytest.approx((0.0, 0.0, -1.0), abs=TOL)


def test_zero_mouse_move_does_nothing():
    cam = CameraController()
    assert cam.mouse_look(0, 0) is False
    assert cam.look_angle == (0.0, 0.0)


def test_pitch_is_clamped():
    cam = CameraController()
    cam.mouse_look(0, -10000)
    assert cam.pitch == 89.0
    cam.mouse_look(0, 20000)
    assert cam.pitch == -89.0


def test_yaw_wraps_below_full_turn():
    cam = CameraController()
    cam.mouse_look(10000, 0)
    assert abs(cam.yaw) < 360.0


def test_forward_is_unit_length_after_look():
    cam = CameraController()
    cam.mouse_look(123.0, -57.0)
    assert math.isclose(math.hypot(*cam.forward()), 1.0)


def test_walking_follows_view_direction():
    cam = CameraController()
    cam.mouse_look(-300.0, -100.0)
    cam.handle_key(Key.W, True)
    assert tuple(cam.velocity(FRAME)) == pytest.approx(tuple(cam.forward()), abs=TOL)


def test_strafe_is_perpendicular_to_forward():
    cam = CameraController()
    cam.mouse_look(200.0, 50.0)
    cam.handle_key(Key.D, True)
    v = cam.velocity(FRAME)
    f = cam.forward()
    assert math.isclose(sum(a * b for a, b in zip(v, f)), 0.0, abs_tol=1e-9)
    assert math.isclose(v[1], 0.0, abs_tol=1e-9)


@pytest.mark.parametrize("key", [Key.W, Key.S, Key.A, Key.D, Key.Q, Key.E])
def test_key_moves_one_unit_per_reference_frame(key):
    cam = CameraController()
    cam.mouse_look(77.0, 33.0)
    cam.handle_key(key, True)
    assert math.isclose(math.hypot(*cam.velocity(FRAME)), 1.0)