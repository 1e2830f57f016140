"""
Scripted input sequences
"""

from typing import Callable, Dict, List

from vehicle.state import InputFrame


def straight(ticks: int) -> List[InputFrame]:
    """Full throttle, wheel straight"""
    return [InputFrame(throttle=1.0) for _ in range(ticks)]


def brake_test(ticks: int) -> List[InputFrame]:
    """Full throttle for the first half, then brake"""
    half = ticks // 2
    return [InputFrame(throttle=1.0)] * half + [InputFrame(brake=True)] * (ticks - half)


def slalom(ticks: int, period: int = 60) -> List[InputFrame]:
    """Full throttle while alternating full lock every half period"""
    if period < 2:
        raise ValueError(f"period must be at least 2 ticks, got {period}")
    return [
        InputFrame(throttle=1.0, steering=-1.0 if (i // (period // 2)) % 2 == 0 else 1.0)
        for i in range(ticks)
    ]


def handbrake_turn(ticks: int) -> List[InputFrame]:
    """Build speed, then lift off and brake at full lock"""
    run_up = ticks // 2
    return [InputFrame(throttle=1.0)] * run_up + [
        InputFrame(steering=1.0, brake=True)
    ] * (ticks - run_up)


def reverse(ticks: int) -> List[InputFrame]:
    """Reverse throttle, wheel straight"""
    return [InputFrame(throttle=-0.5) for _ in range(ticks)]


SCENARIOS: Dict[str, Callable[[int], List[InputFrame]]] = {
    "straight": straight,
    "brake_test": brake_test,
    "slalom": slalom,
    "handbrake_turn": handbrake_turn,
    "reverse": reverse,
}


def build_scenario(name: str, ticks: int) -> List[InputFrame]:
    """
    Build a named input sequence

    Args:
        name: One of SCENARIOS
        ticks: Sequence length

    Returns:
        List of InputFrame, one per tick
    """
    if name not in SCENARIOS:
        raise ValueError(f"Unknown scenario '{name}', expected one of {sorted(SCENARIOS)}")
    if ticks < 0:
        raise ValueError(f"ticks must be non-negative, got {ticks}")
    return SCENARIOS[name](ticks)
