"""
Custom exceptions for the FM visual synthesizer.

Runtime access through the store, engine and preset manager never raises;
these are raised while building definitions, oscillation configs and
preset catalogs.
"""


class SynthError(Exception):
    """Base exception for all synthesizer errors."""

    def __init__(self, message: str, code: str = "SYNTH_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class ParameterDefinitionError(SynthError):
    """Invalid parameter definition (bounds, default)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="PARAMETER_DEFINITION_ERROR")


class OscillationConfigError(SynthError):
    """Invalid oscillation config or LFO map."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="OSCILLATION_CONFIG_ERROR")


class PresetError(SynthError):
    """Preset catalog construction errors."""

    def __init__(self, message: str, code: str = "PRESET_ERROR") -> None:
        super().__init__(message, code=code)


class PresetNotFoundError(PresetError):
    """Requested preset is not in the catalog."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Preset '{name}' not found", code="PRESET_NOT_FOUND")


class PresetFileError(PresetError):
    """Preset file could not be read or failed validation."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="PRESET_FILE_ERROR")
