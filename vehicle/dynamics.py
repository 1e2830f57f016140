"""
Vehicle dynamics integrator
"""

import logging
import time
from typing import Callable, Optional, Sequence

import numpy as np
from scipy.spatial.transform import Rotation

from vehicle.params import VehicleParams
from vehicle.state import DerivedState, InputFrame, VehicleState

logger = logging.getLogger(__name__)

FORWARD_AXIS = np.array([0.0, 0.0, 1.0])
RIGHT_AXIS = np.array([1.0, 0.0, 0.0])
UP_AXIS = np.array([0.0, 1.0, 0.0])

CollisionProbe = Callable[[VehicleState], bool]


def no_collision(state: VehicleState) -> bool:
    """Collision probe used until real collision geometry exists"""
    return False


class VehicleDynamicsModel:
    """Advances vehicle state one fixed tick at a time"""

    def __init__(
        self,
        params: VehicleParams,
        clock: Callable[[], float] = time.monotonic,
        collision_probe: CollisionProbe = no_collision,
    ) -> None:
        """
        Initialize dynamics model

        Args:
            params: Handling constants
            clock: Wall-clock source in seconds (drives the suspension bob
                and the collision refractory window)
            collision_probe: Returns True when the vehicle touches something
        """
        self.params = params
        self.clock = clock
        self.collision_probe = collision_probe
        self.state = VehicleState()

    def initialize(
        self,
        position: Sequence[float],
        orientation: Optional[Sequence[float]] = None,
    ) -> None:
        """
        Set the starting pose

        Args:
            position: (x, y, z)
            orientation: Quaternion (x, y, z, w); identity when omitted
        """
        self.state.position = np.asarray(position, dtype=float).copy()
        if orientation is None:
            self.state.orientation = Rotation.identity()
        else:
            self.state.orientation = Rotation.from_quat(np.asarray(orientation, dtype=float))

    def heading(self) -> tuple[np.ndarray, np.ndarray]:
        """World-space (forward, right) unit vectors for the current orientation"""
        rotation = self.state.orientation
        return rotation.apply(FORWARD_AXIS), rotation.apply(RIGHT_AXIS)

    def steering_increment(self, steering: float, speed: float) -> float:
        """Yaw rate added by one tick of steering at the given speed"""
        if steering == 0 or speed <= self.params.steer_epsilon:
            return 0.0
        return steering * self.params.turn_speed * (1.0 - (speed / self.params.max_speed) * 0.5)

    def step(self, input_frame: InputFrame) -> DerivedState:
        """
        Advance the vehicle by one tick

        Args:
            input_frame: Driver intent for this tick

        Returns:
            Snapshot of the new state
        """
        p = self.params
        s = self.state
        frame = input_frame.clamped()

        forward, _ = self.heading()

        speed = s.speed
        if speed > 0:
            normalized_velocity = s.velocity / speed
        else:
            normalized_velocity = np.zeros(3)

        if frame.throttle != 0:
            s.velocity = s.velocity + forward * (frame.throttle * p.acceleration)

        # 0 when moving along the heading, 1 when moving sideways
        slide_amount = 1.0 - abs(float(np.dot(forward, normalized_velocity)))

        if p.is_braking(frame.throttle, frame.brake):
            deceleration = p.braking_deceleration
        else:
            deceleration = p.deceleration
        s.velocity = s.velocity * (deceleration - slide_amount * (1.0 - p.grip))

        s.angular_velocity += self.steering_increment(frame.steering, speed)
        s.angular_velocity *= p.angular_damping

        yaw = Rotation.from_rotvec(UP_AXIS * -s.angular_velocity)
        # from_quat renormalizes
        s.orientation = Rotation.from_quat((yaw * s.orientation).as_quat())

        new_speed = s.speed
        if new_speed > p.max_speed:
            s.velocity = s.velocity * (p.max_speed / new_speed)

        s.position = s.position + s.velocity

        now = self.clock()
        s.suspension_offset = float(
            np.sin(now * p.suspension_frequency) * p.suspension_amplitude * speed
        )
        s.position[1] = p.ground_height + abs(s.suspension_offset) + p.ride_height

        has_collision = self._accept_collision(now)

        s.wheel_rotation_angle += speed * p.wheel_rotation_scale

        return DerivedState(
            position=s.position.copy(),
            orientation=s.orientation.as_quat(),
            speed=speed,
            is_skidding=slide_amount > p.skid_slide_threshold and speed > p.skid_speed_threshold,
            is_suspension_active=abs(s.suspension_offset) > p.suspension_active_threshold,
            has_collision=has_collision,
            wheel_rotation_angle=s.wheel_rotation_angle,
            slide_amount=slide_amount,
            suspension_offset=s.suspension_offset,
            angular_velocity=s.angular_velocity,
        )

    def _accept_collision(self, now: float) -> bool:
        """Apply the refractory window to the collision probe"""
        if not self.collision_probe(self.state):
            return False
        last = self.state.last_collision_time
        if last is not None and now - last <= self.params.collision_refractory:
            return False
        self.state.last_collision_time = now
        logger.debug("Collision accepted at t=%.3f", now)
        return True
