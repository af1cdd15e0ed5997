"""
Parameter automation.

Includes:
- Oscillation configs and ordered LFO maps
- Stateless LFO engine (default)
- Smoothed LFO engine with phase accumulation
- Preset catalog and manager
"""

from fmsynth.automation.oscillation import LFOMap, OscillationConfig
from fmsynth.automation.lfo_engine import LFOEngine
from fmsynth.automation.smoothed_engine import OscillatorVoice, SmoothedLFOEngine
from fmsynth.automation.presets import (
    MANUAL_PRESET,
    PRESETS,
    PresetManager,
    load_preset_file,
)

__all__ = [
    'LFOMap',
    'OscillationConfig',
    'LFOEngine',
    'OscillatorVoice',
    'SmoothedLFOEngine',
    'MANUAL_PRESET',
    'PRESETS',
    'PresetManager',
    'load_preset_file',
]
