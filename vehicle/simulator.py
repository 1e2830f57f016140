"""
Main driving simulator class
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Optional, Sequence

import numpy as np
from scipy.spatial.transform import Rotation

from vehicle.audio import AudioOutput, AudioReactor, Channel, RecordingAudioOutput
from vehicle.dynamics import FORWARD_AXIS, CollisionProbe, VehicleDynamicsModel, no_collision
from vehicle.params import AudioParams, VehicleParams
from vehicle.state import DerivedState, InputFrame

logger = logging.getLogger(__name__)

START_POSITION = (0.0, 0.02, 0.0)


class FixedStepClock:
    """Simulated wall clock advanced once per tick"""

    def __init__(self, tick_rate: float = 60.0, start: float = 0.0) -> None:
        if tick_rate <= 0:
            raise ValueError(f"tick_rate must be positive, got {tick_rate}")
        self.dt = 1.0 / tick_rate
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self) -> None:
        self.now += self.dt


@dataclass
class DriveTrace:
    """Per-tick history of one drive"""

    time: np.ndarray  # s
    position: np.ndarray  # [N x 3]
    speed: np.ndarray
    angular_velocity: np.ndarray
    heading: np.ndarray  # unwrapped yaw (rad)
    slide_amount: np.ndarray
    is_skidding: np.ndarray
    is_suspension_active: np.ndarray
    has_collision: np.ndarray
    channel_activity: Dict[str, np.ndarray] = field(default_factory=dict)
    audio_starts: Dict[str, int] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.time)


def yaw_from_quaternion(quaternion: np.ndarray) -> float:
    """Heading angle about the up axis, 0 when facing +z"""
    forward = Rotation.from_quat(quaternion).apply(FORWARD_AXIS)
    return float(np.arctan2(forward[0], forward[2]))


class DrivingSimulator:
    """Runs the dynamics model and the audio reactor in tick order"""

    def __init__(
        self,
        params: VehicleParams,
        audio_params: Optional[AudioParams] = None,
        output: Optional[AudioOutput] = None,
        clock: Optional[Callable[[], float]] = None,
        tick_rate: float = 60.0,
        collision_probe: CollisionProbe = no_collision,
    ) -> None:
        """
        Initialize simulator

        Args:
            params: Handling constants
            audio_params: Audio thresholds and gain curves
            output: Playback collaborator; a RecordingAudioOutput with every
                channel ready is used when omitted
            clock: Wall-clock source; a FixedStepClock at tick_rate when omitted
            tick_rate: Ticks per second for the default clock
            collision_probe: Collision test handed to the dynamics model
        """
        self.params = params
        self.clock = clock if clock is not None else FixedStepClock(tick_rate)
        self.model = VehicleDynamicsModel(params, clock=self.clock, collision_probe=collision_probe)

        if output is None:
            self.output: AudioOutput = RecordingAudioOutput()
            self.reactor = AudioReactor(self.output, audio_params)
            self.reactor.mark_all_ready()
        else:
            self.output = output
            self.reactor = AudioReactor(output, audio_params)

        self.is_initialized = False
        self.last_state: Optional[DerivedState] = None

    def initialize(
        self,
        position: Sequence[float] = START_POSITION,
        orientation: Optional[Sequence[float]] = None,
    ) -> None:
        """Place the vehicle once its drivable body is available"""
        self.model.initialize(position, orientation)
        self.is_initialized = True

    def tick(self, input_frame: InputFrame) -> Optional[DerivedState]:
        """
        Run one simulation tick

        Args:
            input_frame: Driver intent for this tick

        Returns:
            The new derived state, or None while the vehicle is not initialized
        """
        if not self.is_initialized:
            logger.debug("Tick skipped, vehicle not initialized")
            return None

        state = self.model.step(input_frame)
        self.reactor.update(state)
        if isinstance(self.clock, FixedStepClock):
            self.clock.advance()
        self.last_state = state
        return state

    def run(self, frames: Iterable[InputFrame]) -> DriveTrace:
        """
        Drive a whole input sequence

        Args:
            frames: One InputFrame per tick

        Returns:
            DriveTrace with one row per tick
        """
        if not self.is_initialized:
            self.initialize()

        times = []
        states = []
        activity: Dict[str, list] = {channel.value: [] for channel in Channel}
        for frame in frames:
            times.append(self.clock())
            state = self.tick(frame)
            states.append(state)
            for channel in Channel:
                activity[channel.value].append(self.reactor.is_playing(channel))

        logger.info("Ran %d ticks", len(states))

        if states:
            headings = np.unwrap([yaw_from_quaternion(s.orientation) for s in states])
            positions = np.array([s.position for s in states])
        else:
            headings = np.zeros(0)
            positions = np.zeros((0, 3))

        return DriveTrace(
            time=np.array(times, dtype=float),
            position=positions,
            speed=np.array([s.speed for s in states], dtype=float),
            angular_velocity=np.array([s.angular_velocity for s in states], dtype=float),
            heading=np.asarray(headings, dtype=float),
            slide_amount=np.array([s.slide_amount for s in states], dtype=float),
            is_skidding=np.array([s.is_skidding for s in states], dtype=bool),
            is_suspension_active=np.array([s.is_suspension_active for s in states], dtype=bool),
            has_collision=np.array([s.has_collision for s in states], dtype=bool),
            channel_activity={k: np.array(v, dtype=bool) for k, v in activity.items()},
            audio_starts={channel.value: count for channel, count in self.reactor.start_counts.items()},
        )
