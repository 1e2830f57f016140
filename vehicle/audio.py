"""
Reactive audio layer driven by the derived vehicle state
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from vehicle.params import AudioParams
from vehicle.state import DerivedState

logger = logging.getLogger(__name__)


class Channel(Enum):
    """Independently controlled sound slots"""

    ENGINE = "engine"
    TIRES = "tires"
    SKIDDING = "skidding"
    SUSPENSION = "suspension"
    COLLISION = "collision"


LOOPED_CHANNELS = (Channel.ENGINE, Channel.TIRES, Channel.SKIDDING)
ONE_SHOT_CHANNELS = (Channel.SUSPENSION, Channel.COLLISION)


class AudioOutput(ABC):
    """Playback capability supplied by the sound-asset layer"""

    @abstractmethod
    def play_loop(self, channel: Channel) -> Any:
        """Start looping the channel's sound and return a playback handle"""

    @abstractmethod
    def play_one_shot(self, channel: Channel) -> None:
        """Restart the channel's sound once"""

    @abstractmethod
    def stop(self, handle: Any) -> None:
        """Stop a looping sound"""

    @abstractmethod
    def set_gain(self, handle: Any, value: float) -> None:
        """Set the gain of a looping sound"""


class RecordingAudioOutput(AudioOutput):
    """AudioOutput that plays nothing and records every call"""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Channel, Optional[float]]] = []
        self._next_handle = 0
        self._handles: Dict[int, Channel] = {}

    def play_loop(self, channel: Channel) -> int:
        self._next_handle += 1
        self._handles[self._next_handle] = channel
        self.calls.append(("play_loop", channel, None))
        return self._next_handle

    def play_one_shot(self, channel: Channel) -> None:
        self.calls.append(("play_one_shot", channel, None))

    def stop(self, handle: int) -> None:
        self.calls.append(("stop", self._handles.pop(handle), None))

    def set_gain(self, handle: int, value: float) -> None:
        self.calls.append(("set_gain", self._handles[handle], value))

    def count(self, operation: str, channel: Optional[Channel] = None) -> int:
        """Number of recorded calls of an operation, optionally for one channel"""
        return sum(
            1 for op, ch, _ in self.calls if op == operation and (channel is None or ch == channel)
        )

    def clear(self) -> None:
        self.calls.clear()


@dataclass
class AudioChannelState:
    """Playback state of one channel"""

    is_playing: bool = False
    gain: float = 0.0
    is_ready: bool = False  # asset loaded and decoded
    handle: Any = None


class AudioReactor:
    """Decides per tick which channels play, and how loud"""

    def __init__(self, output: AudioOutput, params: Optional[AudioParams] = None) -> None:
        """
        Initialize reactor

        Args:
            output: Playback collaborator
            params: Thresholds and gain curves
        """
        self.output = output
        self.params = params if params is not None else AudioParams()
        self.channels: Dict[Channel, AudioChannelState] = {
            channel: AudioChannelState() for channel in Channel
        }
        self.start_counts: Dict[Channel, int] = {channel: 0 for channel in Channel}

    def mark_ready(self, channel: Channel) -> None:
        """Flag a channel's asset as loaded"""
        self.channels[channel].is_ready = True
        logger.info("Audio channel %s ready", channel.value)

    def mark_all_ready(self) -> None:
        for channel in Channel:
            self.mark_ready(channel)

    def mark_unavailable(self, channel: Channel, reason: str = "") -> None:
        """Flag a channel whose asset failed to load; it stays silent for the session"""
        self.channels[channel].is_ready = False
        logger.warning("Audio channel %s unavailable %s", channel.value, reason)

    def is_playing(self, channel: Channel) -> bool:
        return self.channels[channel].is_playing

    def update(self, state: DerivedState) -> None:
        """
        Apply the channel policies for one tick

        Args:
            state: Snapshot from the dynamics step
        """
        p = self.params
        speed = state.speed

        engine_on = p.engine_idle or speed > p.engine_speed_threshold
        self._drive_loop(Channel.ENGINE, engine_on, p.engine_base_gain + speed * p.engine_gain_scale)

        tires_on = speed > p.tires_speed_threshold
        self._drive_loop(Channel.TIRES, tires_on, min(speed * p.tires_gain_scale, p.tires_max_gain))

        skid_on = state.is_skidding and speed > p.skid_speed_threshold
        self._drive_loop(Channel.SKIDDING, skid_on, 1.0)

        # One-shots retrigger on every qualifying tick
        self._drive_one_shot(
            Channel.SUSPENSION,
            state.is_suspension_active and speed > p.suspension_speed_threshold,
        )
        self._drive_one_shot(Channel.COLLISION, state.has_collision)

    def _drive_loop(self, channel: Channel, should_play: bool, gain: float) -> None:
        """Start or stop a looped channel on transitions and push its gain"""
        ch = self.channels[channel]
        if not ch.is_ready:
            # Asset withdrawn while looping
            if ch.is_playing:
                self.output.stop(ch.handle)
                ch.handle = None
                ch.is_playing = False
                logger.debug("Stopped %s, asset unavailable", channel.value)
            return

        ch.gain = gain
        if should_play and not ch.is_playing:
            ch.handle = self.output.play_loop(channel)
            ch.is_playing = True
            self.start_counts[channel] += 1
            logger.debug("Started %s", channel.value)
        elif not should_play and ch.is_playing:
            self.output.stop(ch.handle)
            ch.handle = None
            ch.is_playing = False
            logger.debug("Stopped %s", channel.value)

        if ch.is_playing:
            self.output.set_gain(ch.handle, gain)

    def _drive_one_shot(self, channel: Channel, should_fire: bool) -> None:
        """Restart a one-shot channel; is_playing reflects this tick only"""
        ch = self.channels[channel]
        if not ch.is_ready:
            ch.is_playing = False
            return
        ch.is_playing = should_fire
        if should_fire:
            self.output.play_one_shot(channel)
            self.start_counts[channel] += 1
