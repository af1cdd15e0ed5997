"""
FM visual synthesizer core.

Parameter store, LFO automation and presets driving a shader-rendered
animation.
"""

from fmsynth.parameters import PARAMETER_DEFINITIONS, ParameterDefinition, ParameterStore
from fmsynth.automation import (
    LFOEngine,
    LFOMap,
    OscillationConfig,
    PresetManager,
    SmoothedLFOEngine,
)

__version__ = "0.1.0"

__all__ = [
    'PARAMETER_DEFINITIONS',
    'ParameterDefinition',
    'ParameterStore',
    'LFOEngine',
    'LFOMap',
    'OscillationConfig',
    'PresetManager',
    'SmoothedLFOEngine',
]
