"""
Synthesizer parameters.

Static definitions plus the validated store that owns current values.
"""

from fmsynth.parameters.definitions import (
    PARAMETER_DEFINITIONS,
    STARTUP_VALUES,
    ParameterDefinition,
    build_definitions,
)
from fmsynth.parameters.store import ParameterStore

__all__ = [
    'PARAMETER_DEFINITIONS',
    'STARTUP_VALUES',
    'ParameterDefinition',
    'build_definitions',
    'ParameterStore',
]
