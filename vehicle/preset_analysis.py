"""
Preset comparison functions
"""

import logging
from typing import Any, Dict, List, Optional

from vehicle.analysis import DriveAnalyzer
from vehicle.params import AudioParams, VehicleParams
from vehicle.scenarios import build_scenario
from vehicle.simulator import DrivingSimulator

logger = logging.getLogger(__name__)


def run_preset_comparison(
    presets: List[str],
    scenario: str = "straight",
    ticks: int = 300,
    tick_rate: float = 60.0,
    audio_params: Optional[AudioParams] = None,
) -> Dict[str, Dict[str, Any]]:
    """
    Run one scenario for several handling presets

    Args:
        presets: Handling preset names
        scenario: Scenario name
        ticks: Number of ticks to simulate
        tick_rate: Ticks per second of simulated wall clock
        audio_params: Audio thresholds shared by every run

    Returns:
        Dictionary with results for each preset
    """
    frames = build_scenario(scenario, ticks)
    results: Dict[str, Dict[str, Any]] = {}

    for name in presets:
        params = VehicleParams.from_preset(name)
        simulator = DrivingSimulator(params, audio_params=audio_params, tick_rate=tick_rate)
        logger.info("Running scenario %s with preset %s", scenario, name)

        trace = simulator.run(frames)
        analysis = DriveAnalyzer(params).analyze(trace)

        results[name] = {
            "params": params,
            "trace": trace,
            "analysis": analysis,
            "simulator": simulator,
        }

    return results
