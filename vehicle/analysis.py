"""
Drive analysis functions
"""

from typing import Any, Dict

import numpy as np

from vehicle.audio import LOOPED_CHANNELS
from vehicle.params import VehicleParams
from vehicle.simulator import DriveTrace


class DriveAnalyzer:
    """Summarizes a drive: handling, classification and audio churn"""

    def __init__(self, params: VehicleParams, thrash_threshold: int = 10) -> None:
        """
        Initialize drive analyzer

        Args:
            params: Handling constants the drive was run with
            thrash_threshold: Looped-channel restarts above which audio counts as thrashing
        """
        self.params = params
        self.thrash_threshold = thrash_threshold

    def analyze(self, trace: DriveTrace) -> Dict[str, Any]:
        """
        Analyze a drive trace

        Args:
            trace: Per-tick history from DrivingSimulator.run

        Returns:
            Dictionary with analysis results
        """
        n = len(trace)
        if n == 0:
            return self._empty()

        speed = trace.speed
        top_speed = float(np.max(speed))

        # First tick at 95% of max speed, -1 if never reached
        reached = np.where(speed >= 0.95 * self.params.max_speed)[0]
        ticks_to_top_speed = int(reached[0]) if len(reached) > 0 else -1

        # Horizontal distance only; y carries the suspension bob
        steps = np.diff(trace.position[:, [0, 2]], axis=0)
        distance = float(np.sum(np.linalg.norm(steps, axis=1))) if n > 1 else 0.0

        heading_change = float(trace.heading[-1] - trace.heading[0])
        peak_yaw_rate = float(np.max(np.abs(trace.angular_velocity)))

        skid_fraction = float(np.mean(trace.is_skidding))
        suspension_fraction = float(np.mean(trace.is_suspension_active))
        collisions = int(np.sum(trace.has_collision))

        # Churn: restarts of looped channels, which should follow slow state changes
        loop_starts = {channel.value: trace.audio_starts.get(channel.value, 0) for channel in LOOPED_CHANNELS}
        is_thrashing = any(count > self.thrash_threshold for count in loop_starts.values())

        return {
            "top_speed": top_speed,
            "ticks_to_top_speed": ticks_to_top_speed,
            "final_speed": float(speed[-1]),
            "distance": distance,
            "heading_change": heading_change,
            "peak_yaw_rate": peak_yaw_rate,
            "skid_fraction": skid_fraction,
            "suspension_fraction": suspension_fraction,
            "collisions": collisions,
            "audio_starts": dict(trace.audio_starts),
            "is_thrashing": is_thrashing,
        }

    def _empty(self) -> Dict[str, Any]:
        return {
            "top_speed": 0.0,
            "ticks_to_top_speed": -1,
            "final_speed": 0.0,
            "distance": 0.0,
            "heading_change": 0.0,
            "peak_yaw_rate": 0.0,
            "skid_fraction": 0.0,
            "suspension_fraction": 0.0,
            "collisions": 0,
            "audio_starts": {},
            "is_thrashing": False,
        }
