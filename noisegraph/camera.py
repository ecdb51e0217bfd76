"""Free-fly camera control: key state, movement velocity and mouse look."""

from __future__ import annotations

import enum
import math
from typing import Union

Vector3 = tuple[float, float, float]

MOVE_SPEED = 80.0
SPRINT_FACTOR = 4.0
MOUSE_SENSITIVITY = 0.22
PITCH_LIMIT = 89.0


class Key(enum.Enum):
    """Keys that steer the camera."""

    W = "w"
    A = "a"
    S = "s"
    D = "d"
    Q = "q"
    E = "e"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    LEFT_SHIFT = "left_shift"
    RIGHT_SHIFT = "right_shift"


def _as_key(key: Union[Key, str]) -> Key | None:
    if isinstance(key, Key):
        return key
    if isinstance(key, str):
        name = key.strip().lower().replace(" ", "_").replace("-", "_")
        try:
            return Key(name)
        except ValueError:
            return None
    return None


def _rotation(yaw_deg: float, pitch_deg: float) -> tuple[Vector3, Vector3, Vector3]:
    """Rows of the rotation about Y by yaw followed by rotation about X by pitch."""
    yaw = math.radians(yaw_deg)
    pitch = math.radians(pitch_deg)
    cy, sy = math.cos(yaw), math.sin(yaw)
    cp, sp = math.cos(pitch), math.sin(pitch)
    return (
        (cy, sy * sp, sy * cp),
        (0.0, cp, -sp),
        (-sy, cy * sp, cy * cp),
    )


def _apply(rows: tuple[Vector3, Vector3, Vector3], vector: Vector3) -> Vector3:
    return tuple(sum(r * v for r, v in zip(row, vector)) for row in rows)  # type: ignore[return-value]


class CameraController:
    """Tracks held movement keys and the look angle of a free-fly camera."""

    def __init__(self) -> None:
        self.keys_down: set[Key] = set()
        self.yaw = 0.0
        self.pitch = 0.0

    @property
    def look_angle(self) -> tuple[float, float]:
        return (self.yaw, self.pitch)

    def handle_key(self, key: Union[Key, str], pressed: bool) -> bool:
        """Record a key press or release; returns False for keys that do not steer."""
        tracked = _as_key(key)
        if tracked is None:
            return False
        if pressed:
            self.keys_down.add(tracked)
        else:
            self.keys_down.discard(tracked)
        return True

    def _held(self, *keys: Key) -> bool:
        return any(k in self.keys_down for k in keys)

    def _local_velocity(self) -> Vector3:
        x = y = z = 0.0
        if self._held(Key.W, Key.UP):
            z -= 1.0
        if self._held(Key.S, Key.DOWN):
            z += 1.0
        if self._held(Key.A, Key.LEFT):
            x -= 1.0
        if self._held(Key.D, Key.RIGHT):
            x += 1.0
        if self._held(Key.Q, Key.PAGE_DOWN):
            y -= 1.0
        if self._held(Key.E, Key.PAGE_UP):
            y += 1.0
        if self._held(Key.LEFT_SHIFT, Key.RIGHT_SHIFT):
            x, y, z = x * SPRINT_FACTOR, y * SPRINT_FACTOR, z * SPRINT_FACTOR
        return (x, y, z)

    def velocity(self, frame_duration: float) -> Vector3:
        """World-space displacement for one frame of the given duration in seconds."""
        scale = float(frame_duration) * MOVE_SPEED
        x, y, z = self._local_velocity()
        local = (x * scale, y * scale, z * scale)
        if local == (0.0, 0.0, 0.0):
            return (0.0, 0.0, 0.0)
        return _apply(_rotation(self.yaw, self.pitch), local)

    def mouse_look(self, dx: float, dy: float) -> bool:
        """Turn the camera by a mouse movement; returns False if nothing moved."""
        ax = float(dx) * MOUSE_SENSITIVITY
        ay = float(dy) * MOUSE_SENSITIVITY
        if ax == 0.0 and ay == 0.0:
            return False
        self.yaw = math.fmod(self.yaw - ax, 360.0)
        self.pitch = min(max(self.pitch - ay, -PITCH_LIMIT), PITCH_LIMIT)
        return True

    def forward(self) -> Vector3:
        """Unit vector the camera looks along."""
        x, y, z = _apply(_rotation(self.yaw, self.pitch), (0.0, 0.0, 1.0))
        return (-x, -y, -z)