"""
Keyboard state to driver input mapping
"""

from dataclasses import dataclass

import numpy as np

from vehicle.state import InputFrame

REVERSE_THROTTLE = -0.5  # reverse is deliberately weaker than forward
FRONT_WHEEL_MAX_YAW = np.pi / 4


@dataclass(frozen=True)
class KeyState:
    """Snapshot of the driving keys held during one frame"""

    arrow_up: bool = False
    arrow_down: bool = False
    arrow_left: bool = False
    arrow_right: bool = False
    space: bool = False

    def to_input_frame(self) -> InputFrame:
        """
        Map held keys to an InputFrame

        Up wins over down and left wins over right when both are held.
        """
        if self.arrow_up:
            throttle = 1.0
        elif self.arrow_down:
            throttle = REVERSE_THROTTLE
        else:
            throttle = 0.0

        if self.arrow_left:
            steering = -1.0
        elif self.arrow_right:
            steering = 1.0
        else:
            steering = 0.0

        return InputFrame(throttle=throttle, steering=steering, brake=self.space)


def front_wheel_yaw(steering: float) -> float:
    """Visual yaw of the front wheels (rad) for a steering input"""
    return float(np.clip(steering, -1.0, 1.0)) * FRONT_WHEEL_MAX_YAW
