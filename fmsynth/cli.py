"""
Command-line interface for running the synth headless.

Steps a SynthSession through a number of frames on a simulated clock and
prints the shader uniforms of each frame as JSON lines.
"""

import argparse
import json
import sys
from typing import List, Optional

import numpy as np

from fmsynth.core.config import get_settings
from fmsynth.core.exceptions import SynthError
from fmsynth.core.logging import get_logger
from fmsynth.runtime.session import SynthSession

logger = get_logger(__name__)


class FrameClock:
    """Simulated clock that only moves when a frame is finished."""

    def __init__(self, fps: int):
        self.step = 1.0 / fps
        self.current = 0.0

    def __call__(self) -> float:
        return self.current

    def advance(self) -> None:
        self.current += self.step


def _to_json(uniforms: dict) -> dict:
    return {
        name: value.tolist() if isinstance(value, np.ndarray) else value
        for name, value in uniforms.items()
    }


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    settings = get_settings()

    parser = argparse.ArgumentParser(
        prog="fmsynth",
        description="Run the FM visual synth headless and print shader uniforms",
    )

    parser.add_argument(
        "-p", "--preset",
        default=settings.default_preset,
        help=f"Preset to apply (default: {settings.default_preset})",
    )

    parser.add_argument(
        "-n", "--frames",
        type=int,
        default=10,
        help="Number of frames to render (default: 10)",
    )

    parser.add_argument(
        "-f", "--fps",
        type=int,
        default=settings.frame_rate,
        help=f"Simulated frames per second (default: {settings.frame_rate})",
    )

    parser.add_argument(
        "--engine",
        choices=["pure", "smoothed"],
        default=settings.lfo_engine_mode,
        help="LFO engine variant (default: %(default)s)",
    )

    parser.add_argument(
        "--list-presets",
        action="store_true",
        help="Print available presets and exit",
    )

    args = parser.parse_args(argv)

    if args.fps <= 0:
        parser.error("--fps must be positive")

    config = settings.model_copy(update={"lfo_engine_mode": args.engine})
    clock = FrameClock(args.fps)
    try:
        session = SynthSession(config=config, time_source=clock)
    except SynthError as e:
        logger.error("session_start_failed", code=e.code, error=e.message)
        return 1

    if args.list_presets:
        for name in session.presets.list():
            print(name)
        return 0

    if not session.set_preset(args.preset):
        print(f"Unknown preset '{args.preset}'. "
              f"Available: {', '.join(session.presets.list())}", file=sys.stderr)
        return 2

    for _ in range(args.frames):
        uniforms = session.tick()
        print(json.dumps(_to_json(uniforms)))
        clock.advance()

    logger.info("headless_run_complete", frames=session.frame_count, preset=args.preset)
    return 0
