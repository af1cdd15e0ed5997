"""
Static parameter definitions.

The definitions table is the contract UI builders rely on to size and label
controls, and the only source of valid parameter names for the store.
"""

import math
from dataclasses import dataclass
from typing import Dict, Iterable, Union

from fmsynth.core.exceptions import ParameterDefinitionError

Number = Union[int, float]


@dataclass(frozen=True)
class ParameterDefinition:
    """Valid domain of a single synthesizer parameter."""
    name: str
    min: float
    max: float
    default: Number
    is_integer: bool = False

    def __post_init__(self):
        for field_name in ("min", "max", "default"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ParameterDefinitionError(
                    f"{self.name}: {field_name} must be a number, got {value!r}"
                )
            if not math.isfinite(value):
                raise ParameterDefinitionError(
                    f"{self.name}: {field_name} must be finite"
                )
        if self.min > self.max:
            raise ParameterDefinitionError(
                f"{self.name}: min {self.min} is greater than max {self.max}"
            )
        if not self.min <= self.default <= self.max:
            raise ParameterDefinitionError(
                f"{self.name}: default {self.default} outside [{self.min}, {self.max}]"
            )
        if self.is_integer and self.default != int(self.default):
            raise ParameterDefinitionError(
                f"{self.name}: integer parameter has fractional default"
            )

    def clamp(self, value: Number) -> Number:
        """
        Bring a value into this parameter's domain.

        Integer parameters round half up after clamping, matching the
        rounding the browser UI has always used.

        Args:
            value: Requested value

        Returns:
            Valid value (int for integer parameters, float otherwise)
        """
        clamped = min(max(value, self.min), self.max)
        if self.is_integer:
            return int(math.floor(clamped + 0.5))
        return float(clamped)

    def contains(self, value: Number) -> bool:
        """Check whether a value is already valid for this parameter."""
        if not self.min <= value <= self.max:
            return False
        return not self.is_integer or value == int(value)


def build_definitions(
    definitions: Iterable[ParameterDefinition]
) -> Dict[str, ParameterDefinition]:
    """
    Index definitions by name, preserving order.

    Args:
        definitions: Parameter definitions

    Returns:
        Ordered name -> definition mapping

    Raises:
        ParameterDefinitionError: On duplicate names
    """
    table: Dict[str, ParameterDefinition] = {}
    for definition in definitions:
        if definition.name in table:
            raise ParameterDefinitionError(
                f"Duplicate parameter definition '{definition.name}'"
            )
        table[definition.name] = definition
    return table


PARAMETER_DEFINITIONS: Dict[str, ParameterDefinition] = build_definitions([
    # Stripes - base wave
    ParameterDefinition('carrierFreqX', 0.1, 10, 2.0),
    ParameterDefinition('carrierFreqY', 0.1, 10, 2.0),

    # Warp box - space modulator
    ParameterDefinition('modulatorFreq', 0.1, 10, 1.0),
    ParameterDefinition('modulationIndex', 0, 5, 2.0),
    ParameterDefinition('amplitudeModulationIndex', 0, 5, 1.0),
    ParameterDefinition('modulationCenterX', -1, 1, 0.0),
    ParameterDefinition('modulationCenterY', -1, 1, 0.0),

    # Dance - time modulator
    ParameterDefinition('speedLevel', 1, 5, 1, is_integer=True),
    ParameterDefinition('intensityLevel', 1, 5, 3, is_integer=True),
    ParameterDefinition('lfoFrequency', 0, 10, 0.1),
    ParameterDefinition('lfoAmplitude', 0, 10, 0.5),
])

# Values the browser UI seeds the store with on startup. They differ from the
# definition defaults, which are what reset() restores.
STARTUP_VALUES: Dict[str, Number] = {
    'carrierFreqX': 0.5,
    'carrierFreqY': 0.5,
    'modulatorFreq': 0.5,
    'modulationIndex': 1.0,
    'amplitudeModulationIndex': 1.0,
    'modulationCenterX': 0.0,
    'modulationCenterY': 0.0,
    'lfoFrequency': 0.1,
    'lfoAmplitude': 0.5,
    'speedLevel': 1,
    'intensityLevel': 3,
}
