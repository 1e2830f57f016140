"""
Simulation state representation
"""

from dataclasses import dataclass, field
from typing import Optional

import numpy as np
from scipy.spatial.transform import Rotation


@dataclass(frozen=True)
class InputFrame:
    """Driver intent for one tick"""

    throttle: float = 0.0  # -1 (reverse) .. 1 (forward)
    steering: float = 0.0  # -1 (left) .. 1 (right)
    brake: bool = False

    def clamped(self) -> "InputFrame":
        """Copy with throttle and steering clipped to [-1, 1]"""
        return InputFrame(
            throttle=float(np.clip(self.throttle, -1.0, 1.0)),
            steering=float(np.clip(self.steering, -1.0, 1.0)),
            brake=bool(self.brake),
        )


@dataclass
class VehicleState:
    """Continuous vehicle state, owned by VehicleDynamicsModel"""

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    orientation: Rotation = field(default_factory=Rotation.identity)
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))  # distance/tick
    angular_velocity: float = 0.0  # yaw rate (rad/tick)
    wheel_rotation_angle: float = 0.0  # rad, unbounded
    suspension_offset: float = 0.0
    last_collision_time: Optional[float] = None  # s, None until the first accepted hit

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))


@dataclass(frozen=True)
class DerivedState:
    """Per-tick snapshot handed to the audio and presentation layers"""

    position: np.ndarray
    orientation: np.ndarray  # quaternion (x, y, z, w)
    speed: float
    is_skidding: bool
    is_suspension_active: bool
    has_collision: bool
    wheel_rotation_angle: float
    slide_amount: float = 0.0
    suspension_offset: float = 0.0
    angular_velocity: float = 0.0

    @classmethod
    def at_rest(cls) -> "DerivedState":
        """Snapshot of a stationary vehicle at the origin"""
        return cls(
            position=np.zeros(3),
            orientation=np.array([0.0, 0.0, 0.0, 1.0]),
            speed=0.0,
            is_skidding=False,
            is_suspension_active=False,
            has_collision=False,
            wheel_rotation_angle=0.0,
        )
