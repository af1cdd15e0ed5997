"""
Smoothed LFO engine.

Alternative to the stateless LFOEngine: phase is accumulated per tick and
amplitude/center glide toward the active config with exponential decay, so
switching presets mid-animation produces a continuous transition instead of
a jump.

Tunables:
- smoothing_time_constant: decay time constant tau in seconds; each tick
  moves amplitude/center by 1 - exp(-dt / tau) of the remaining distance.
  Zero or negative snaps immediately.
- max_frame_delta: ticks are only integrated when 0 < dt < max_frame_delta.
  Larger steps (pause/resume, frame hitches) and non-positive steps (first
  frame, clock reset) re-anchor the clock without advancing the state.
"""

from dataclasses import dataclass, replace
from typing import Dict, Optional

import numpy as np

from fmsynth.automation.lfo_engine import LFOEngine
from fmsynth.automation.oscillation import TWO_PI, LFOMap, MapLike
from fmsynth.core.config import settings
from fmsynth.core.logging import get_logger
from fmsynth.parameters.store import ParameterStore

logger = get_logger(__name__)


@dataclass
class OscillatorVoice:
    """Running state of one automated parameter."""
    phase: float  # radians, wrapped to [0, 2*pi)
    amplitude: float
    center: float

    def value(self) -> float:
        return float(self.center + self.amplitude * np.sin(self.phase))


class SmoothedLFOEngine(LFOEngine):
    """
    LFO engine with a phase accumulator and exponential smoothing.

    Shares the LFOEngine interface; only update() and map switching differ.
    Unlike LFOEngine, update() is not idempotent across different times in
    sequence, but repeating the same time is still a no-op step (dt = 0).
    """

    def __init__(
        self,
        parameter_store: ParameterStore,
        smoothing_time_constant: Optional[float] = None,
        max_frame_delta: Optional[float] = None
    ):
        """
        Initialize smoothed LFO engine.

        Args:
            parameter_store: Store that receives automated values
            smoothing_time_constant: Decay tau in seconds (defaults to settings)
            max_frame_delta: Upper bound of integrated dt (defaults to settings)
        """
        super().__init__(parameter_store)
        self.smoothing_time_constant = (
            settings.lfo_smoothing_time_constant
            if smoothing_time_constant is None
            else smoothing_time_constant
        )
        self.max_frame_delta = (
            settings.lfo_max_frame_delta
            if max_frame_delta is None
            else max_frame_delta
        )
        self._voices: Dict[str, OscillatorVoice] = {}
        self._last_time: Optional[float] = None

    @property
    def voices(self) -> Dict[str, OscillatorVoice]:
        """Copy of per-parameter oscillator state."""
        return {name: replace(voice) for name, voice in self._voices.items()}

    def set_map(self, lfo_map: Optional[MapLike]) -> None:
        """
        Install an LFO map.

        Parameters present in both the old and new map keep their phase,
        amplitude and center and glide to the new config. New parameters
        start at their config phase with zero amplitude, centered on the
        store's current value.
        """
        if lfo_map is None:
            self.clear()
            return

        lfo_map = LFOMap.coerce(lfo_map)
        super().set_map(lfo_map)

        voices: Dict[str, OscillatorVoice] = {}
        for name, config in lfo_map.entries:
            voice = self._voices.get(name)
            if voice is None:
                current = None
                if self._parameter_store.has(name):
                    current = self._parameter_store.get(name)
                voice = OscillatorVoice(
                    phase=config.phase % TWO_PI,
                    amplitude=0.0,
                    center=config.center if current is None else float(current),
                )
            voices[name] = voice
        self._voices = voices

    def update(self, time_seconds: float) -> None:
        """
        Advance every voice by the time since the previous update.

        Args:
            time_seconds: Animation time in seconds
        """
        dt = 0.0
        if self._last_time is not None:
            dt = time_seconds - self._last_time
        self._last_time = time_seconds

        if self._active_map is None:
            return

        if not 0.0 < dt < self.max_frame_delta:
            if dt != 0.0:
                logger.debug("lfo_frame_delta_skipped", dt=dt)
            dt = 0.0

        if self.smoothing_time_constant <= 0:
            alpha = 1.0
        else:
            alpha = 1.0 - float(np.exp(-dt / self.smoothing_time_constant))

        for name, config in self._active_map.entries:
            voice = self._voices[name]
            voice.phase = (voice.phase + TWO_PI * config.frequency * dt) % TWO_PI
            voice.amplitude += (config.amplitude - voice.amplitude) * alpha
            voice.center += (config.center - voice.center) * alpha
            self._parameter_store.set(name, voice.value())

    def clear(self) -> None:
        """Return to manual mode and drop all oscillator state."""
        super().clear()
        self._voices = {}
