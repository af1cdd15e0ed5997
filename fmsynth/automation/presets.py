"""
Preset catalog and manager.

A preset is a named LFO map, or None for manual control. Applying a preset
replaces the engine's active map wholesale.
"""

import json
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

import numpy as np
from pydantic import BaseModel, Field, ValidationError

from fmsynth.automation.lfo_engine import LFOEngine
from fmsynth.automation.oscillation import LFOMap, MapLike, OscillationConfig
from fmsynth.core.exceptions import (
    OscillationConfigError,
    PresetError,
    PresetFileError,
    PresetNotFoundError,
)
from fmsynth.core.logging import get_logger

logger = get_logger(__name__)

MANUAL_PRESET = 'manual'

PRESETS: Dict[str, Optional[LFOMap]] = {
    # No automation
    MANUAL_PRESET: None,

    'gentleWaves': LFOMap([
        ('carrierFreqX', OscillationConfig(frequency=0.2, amplitude=0.3, center=0.5, phase=0.0)),
        ('carrierFreqY', OscillationConfig(frequency=0.15, amplitude=0.2, center=0.5, phase=np.pi / 2)),
        ('modulatorFreq', OscillationConfig(frequency=0.1, amplitude=0.2, center=0.5, phase=np.pi)),
    ]),

    'wildRipples': LFOMap([
        ('carrierFreqX', OscillationConfig(frequency=0.8, amplitude=0.6, center=0.7, phase=0.0)),
        ('carrierFreqY', OscillationConfig(frequency=0.6, amplitude=0.5, center=0.7, phase=np.pi / 3)),
        ('modulatorFreq', OscillationConfig(frequency=0.4, amplitude=0.4, center=0.6, phase=np.pi / 2)),
        ('modulationIndex', OscillationConfig(frequency=0.3, amplitude=1.5, center=2.0, phase=np.pi)),
    ]),

    # Eye wanders while the warp breathes
    'pulsatingEye': LFOMap([
        ('modulationIndex', OscillationConfig(frequency=0.2, amplitude=1.5, center=2.0, phase=0.0)),
        ('amplitudeModulationIndex', OscillationConfig(frequency=0.15, amplitude=1.0, center=1.5, phase=np.pi / 2)),
        ('modulationCenterX', OscillationConfig(frequency=0.1, amplitude=0.5, center=0.0, phase=0.0)),
        ('modulationCenterY', OscillationConfig(frequency=0.1, amplitude=0.5, center=0.0, phase=np.pi / 2)),
    ]),
}


class PresetManager:
    """
    Named, swappable bundles of LFO automation.

    The catalog is fixed at construction; only the current preset name
    changes, and only through apply().
    """

    def __init__(
        self,
        lfo_engine: LFOEngine,
        presets: Mapping[str, Optional[MapLike]] = PRESETS,
        initial: str = MANUAL_PRESET
    ):
        """
        Initialize preset manager.

        Args:
            lfo_engine: Engine whose map is swapped by apply()
            presets: Preset name -> LFO map (None for manual)
            initial: Name reported by get_current() before any apply()

        Raises:
            PresetError: If a preset automates an unknown parameter or the
                initial preset is not in the catalog
        """
        self._lfo_engine = lfo_engine
        self._presets: Dict[str, Optional[LFOMap]] = {}

        store = lfo_engine.parameter_store
        for name, lfo_map in presets.items():
            if lfo_map is not None:
                try:
                    lfo_map = LFOMap.coerce(lfo_map)
                except OscillationConfigError as e:
                    raise PresetError(f"Preset '{name}': {e.message}") from e
                unknown = [param for param in lfo_map if not store.has(param)]
                if unknown:
                    raise PresetError(
                        f"Preset '{name}' automates unknown parameters: {unknown}"
                    )
            self._presets[name] = lfo_map

        if initial not in self._presets:
            raise PresetError(f"Initial preset '{initial}' is not in the catalog")
        self._current_preset = initial

        logger.info("preset_manager_initialized", presets=list(self._presets))

    def apply(self, preset_name: str) -> bool:
        """
        Apply a preset by name.

        Args:
            preset_name: Name of the preset to apply

        Returns:
            True if the preset exists and was applied
        """
        if preset_name not in self._presets:
            logger.warning("unknown_preset", preset=preset_name)
            return False

        lfo_map = self._presets[preset_name]
        if lfo_map is None:
            self._lfo_engine.clear()
        else:
            self._lfo_engine.set_map(lfo_map)

        self._current_preset = preset_name
        logger.info("preset_applied", preset=preset_name)
        return True

    def get_current(self) -> str:
        """Get the currently active preset name."""
        return self._current_preset

    def list(self) -> List[str]:
        """Get all preset names in catalog order."""
        return list(self._presets)

    def has(self, preset_name: str) -> bool:
        """Check if a preset exists."""
        return preset_name in self._presets

    def get(self, preset_name: str) -> Optional[LFOMap]:
        """
        Get a preset's LFO map.

        Raises:
            PresetNotFoundError: If the preset does not exist
        """
        if preset_name not in self._presets:
            raise PresetNotFoundError(preset_name)
        return self._presets[preset_name]


# Preset file schema
class OscillationModel(BaseModel):
    """Oscillation config as stored in a preset file."""
    frequency: float = Field(..., ge=0, description="Frequency in Hz")
    amplitude: float = Field(..., description="Peak deviation from center")
    center: float = Field(..., description="Resting value")
    phase: float = Field(0.0, description="Phase offset in radians")


class PresetFileModel(BaseModel):
    """Preset file: preset name -> parameter -> oscillation (null = manual)."""
    presets: Dict[str, Optional[Dict[str, OscillationModel]]]


def load_preset_file(path: Union[str, Path]) -> Dict[str, Optional[LFOMap]]:
    """
    Load extra presets from a JSON file.

    Example file:
        {"presets": {"slowDrift": {"carrierFreqX":
            {"frequency": 0.05, "amplitude": 0.5, "center": 1.0}}}}

    Args:
        path: Path to the JSON file

    Returns:
        Ordered preset name -> LFO map, ready to merge into a catalog

    Raises:
        PresetFileError: If the file is missing, not JSON, or invalid
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise PresetFileError(f"Could not read preset file {path}: {e}") from e

    try:
        parsed = PresetFileModel.model_validate(raw)
    except ValidationError as e:
        raise PresetFileError(f"Invalid preset file {path}: {e}") from e

    presets: Dict[str, Optional[LFOMap]] = {}
    for name, entries in parsed.presets.items():
        if entries is None:
            presets[name] = None
            continue
        try:
            presets[name] = LFOMap(
                (param, OscillationConfig(**model.model_dump()))
                for param, model in entries.items()
            )
        except OscillationConfigError as e:
            raise PresetFileError(f"Invalid preset '{name}' in {path}: {e.message}") from e

    logger.info("preset_file_loaded", path=str(path), presets=list(presets))
    return presets
