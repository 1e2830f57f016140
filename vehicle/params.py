"""
Vehicle handling and audio parameters
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict


class BrakePolicy(Enum):
    """Which input selects the braking deceleration constant"""

    BRAKE_INPUT = "brake_input"  # brake key held
    NEUTRAL_THROTTLE = "neutral_throttle"  # no throttle applied
    EITHER = "either"


@dataclass
class VehicleParams:
    """Handling constants for the vehicle dynamics model (units per tick)"""

    acceleration: float = 0.015  # distance/tick² at full throttle
    deceleration: float = 0.98  # velocity scale per tick while cruising
    braking_deceleration: float = 0.95  # velocity scale per tick while braking
    max_speed: float = 0.5  # distance/tick
    turn_speed: float = 0.05  # rad/tick added at full lock, standstill
    grip: float = 0.85  # 0 = ice, 1 = rails
    angular_damping: float = 0.95  # yaw rate scale per tick
    steer_epsilon: float = 0.001  # no steering authority below this speed
    brake_policy: BrakePolicy = BrakePolicy.BRAKE_INPUT
    # Cosmetic suspension bob
    suspension_frequency: float = 10.0  # rad/s of wall-clock time
    suspension_amplitude: float = 0.02  # offset per unit speed
    ground_height: float = 0.0
    ride_height: float = 1.0  # clearance added on top of the bob
    wheel_rotation_scale: float = 0.5  # wheel radians per unit distance
    collision_refractory: float = 0.5  # s between accepted collisions
    # Classification thresholds
    skid_slide_threshold: float = 0.5
    skid_speed_threshold: float = 0.1
    suspension_active_threshold: float = 0.01
    # Derived
    min_grip_factor: float = 0.0  # Will be calculated

    def __post_init__(self) -> None:
        """Validate constants and calculate derived parameters"""
        if self.max_speed <= 0:
            raise ValueError(f"max_speed must be positive, got {self.max_speed}")
        if not 0.0 <= self.grip <= 1.0:
            raise ValueError(f"grip must be within [0, 1], got {self.grip}")
        if not 0.0 < self.angular_damping <= 1.0:
            raise ValueError(f"angular_damping must be within (0, 1], got {self.angular_damping}")
        for name in ("deceleration", "braking_deceleration"):
            value = getattr(self, name)
            if not 0.0 < value <= 1.0:
                raise ValueError(f"{name} must be within (0, 1], got {value}")
        for name in (
            "acceleration",
            "turn_speed",
            "steer_epsilon",
            "suspension_amplitude",
            "collision_refractory",
            "skid_speed_threshold",
            "suspension_active_threshold",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")

        # Worst case velocity scale: fully sideways slide under the weaker constant
        self.min_grip_factor = min(self.deceleration, self.braking_deceleration) - (1.0 - self.grip)
        if self.min_grip_factor <= 0:
            raise ValueError(
                "deceleration - (1 - grip) must stay positive, "
                f"got {self.min_grip_factor:.3f}"
            )

    def is_braking(self, throttle: float, brake: bool) -> bool:
        """Whether the braking deceleration applies for this input"""
        if self.brake_policy is BrakePolicy.BRAKE_INPUT:
            return brake
        if self.brake_policy is BrakePolicy.NEUTRAL_THROTTLE:
            return throttle == 0
        return brake or throttle == 0

    @classmethod
    def from_preset(cls, name: str, **overrides: Any) -> "VehicleParams":
        """
        Build parameters from a named handling preset

        Args:
            name: One of HANDLING_PRESETS
            **overrides: Individual fields to replace on top of the preset

        Returns:
            VehicleParams for the preset
        """
        if name not in HANDLING_PRESETS:
            raise ValueError(
                f"Unknown handling preset '{name}', expected one of {sorted(HANDLING_PRESETS)}"
            )
        return replace(HANDLING_PRESETS[name], **overrides)


HANDLING_PRESETS: Dict[str, VehicleParams] = {
    "street": VehicleParams(),
    "drift": VehicleParams(grip=0.6, turn_speed=0.06, angular_damping=0.93),
    "grip": VehicleParams(
        acceleration=0.012,
        grip=0.95,
        turn_speed=0.035,
        brake_policy=BrakePolicy.EITHER,
    ),
    "arcade": VehicleParams(
        acceleration=0.02,
        max_speed=0.8,
        turn_speed=0.07,
        suspension_amplitude=0.03,
    ),
}


@dataclass
class AudioParams:
    """Per-channel playback thresholds and gain curves"""

    engine_speed_threshold: float = 0.01
    engine_idle: bool = False  # keep the engine loop running at standstill
    engine_base_gain: float = 0.3
    engine_gain_scale: float = 0.7
    tires_speed_threshold: float = 0.1
    tires_gain_scale: float = 0.5
    tires_max_gain: float = 1.0
    skid_speed_threshold: float = 0.1
    suspension_speed_threshold: float = 0.01

    def __post_init__(self) -> None:
        """Validate thresholds"""
        for name in (
            "engine_speed_threshold",
            "tires_speed_threshold",
            "skid_speed_threshold",
            "suspension_speed_threshold",
            "engine_base_gain",
            "engine_gain_scale",
            "tires_gain_scale",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        if self.tires_speed_threshold < self.engine_speed_threshold:
            raise ValueError("tires_speed_threshold must not be below engine_speed_threshold")
