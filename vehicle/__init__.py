"""
Driving Demo Simulation Core

This package advances a drivable vehicle one tick at a time from driver input
and drives the engine, tire, skid, suspension and collision sound channels
from the resulting vehicle state.
"""

from vehicle.params import AudioParams, BrakePolicy, HANDLING_PRESETS, VehicleParams
from vehicle.state import DerivedState, InputFrame, VehicleState
from vehicle.dynamics import VehicleDynamicsModel, no_collision
from vehicle.audio import (
    AudioChannelState,
    AudioOutput,
    AudioReactor,
    Channel,
    RecordingAudioOutput,
)
from vehicle.controls import KeyState, front_wheel_yaw
from vehicle.simulator import DriveTrace, DrivingSimulator, FixedStepClock
from vehicle.scenarios import SCENARIOS, build_scenario
from vehicle.analysis import DriveAnalyzer
from vehicle.preset_analysis import run_preset_comparison

__all__ = [
    "AudioParams",
    "BrakePolicy",
    "HANDLING_PRESETS",
    "VehicleParams",
    "DerivedState",
    "InputFrame",
    "VehicleState",
    "VehicleDynamicsModel",
    "no_collision",
    "AudioChannelState",
    "AudioOutput",
    "AudioReactor",
    "Channel",
    "RecordingAudioOutput",
    "KeyState",
    "front_wheel_yaw",
    "DriveTrace",
    "DrivingSimulator",
    "FixedStepClock",
    "SCENARIOS",
    "build_scenario",
    "DriveAnalyzer",
    "run_preset_comparison",
]
