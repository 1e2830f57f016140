"""
Driving Demo Simulation

Runs a scripted drive for one or more handling presets and prints how each
preset handles and how busy the audio channels were.
"""

import argparse
import logging
from typing import List, Optional

from vehicle import HANDLING_PRESETS, SCENARIOS, run_preset_comparison


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Setup logging configuration

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured package logger
    """
    logger = logging.getLogger("vehicle")
    logger.setLevel(getattr(logging, level.upper()))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper()))
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(message)s", datefmt="%H:%M:%S")
    )
    logger.addHandler(console_handler)
    return logger


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compare handling presets on a scripted drive")
    parser.add_argument(
        "--presets",
        default=",".join(HANDLING_PRESETS),
        help="Comma-separated handling presets",
    )
    parser.add_argument("--scenario", default="straight", choices=sorted(SCENARIOS))
    parser.add_argument("--ticks", type=int, default=300, help="Number of ticks to simulate")
    parser.add_argument("--tick-rate", type=float, default=60.0, help="Ticks per second")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    setup_logging(args.log_level)

    presets = [p.strip() for p in args.presets.split(",") if p.strip()]
    results = run_preset_comparison(presets, scenario=args.scenario, ticks=args.ticks, tick_rate=args.tick_rate)

    print(f"Preset Comparison Results ({args.scenario}, {args.ticks} ticks):")
    print("-" * 80)
    for name, data in results.items():
        analysis = data["analysis"]
        print(f"\nPreset: {name}")
        print(f"  Top speed: {analysis['top_speed']:.3f} units/tick")
        print(f"  Ticks to top speed: {analysis['ticks_to_top_speed']}")
        print(f"  Distance: {analysis['distance']:.2f} units")
        print(f"  Heading change: {analysis['heading_change']:.2f} rad")
        print(f"  Peak yaw rate: {analysis['peak_yaw_rate']:.4f} rad/tick")
        print(f"  Skidding: {analysis['skid_fraction']*100:.1f}% of ticks")
        print(f"  Audio starts: {analysis['audio_starts']}")
        print(f"  Audio thrashing: {analysis['is_thrashing']}")


if __name__ == "__main__":
    main()
