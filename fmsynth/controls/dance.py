"""
Dance controls.

Discrete speed and intensity levels (1-5) that drive the shader's time
modulator. Levels live in the store as integer parameters; the continuous
lfoFrequency / lfoAmplitude values are derived from them through fixed
lookup tables.
"""

from typing import Tuple

from fmsynth.core.logging import get_logger
from fmsynth.parameters.store import ParameterStore

logger = get_logger(__name__)

# Indexed by level; index 0 is unused since levels start at 1
SPEED_MAP: Tuple[float, ...] = (0.0, 0.05, 0.2, 0.5, 1.0, 2.0)
INTENSITY_MAP: Tuple[float, ...] = (0.0, 0.25, 0.5, 1.0, 1.5, 2.0)

MIN_LEVEL = 1
MAX_LEVEL = 5


class DanceController:
    """Steps speed/intensity levels and keeps the derived LFO values in sync."""

    def __init__(self, parameter_store: ParameterStore):
        self._parameter_store = parameter_store

    @property
    def speed_level(self) -> int:
        return self._parameter_store.get('speedLevel')

    @property
    def intensity_level(self) -> int:
        return self._parameter_store.get('intensityLevel')

    def change_speed(self, delta: int) -> int:
        """
        Step the speed level.

        Args:
            delta: Level change, e.g. +1 or -1

        Returns:
            New speed level
        """
        self._parameter_store.set('speedLevel', self._step(self.speed_level, delta))
        self.sync()
        return self.speed_level

    def change_intensity(self, delta: int) -> int:
        """
        Step the intensity level.

        Args:
            delta: Level change, e.g. +1 or -1

        Returns:
            New intensity level
        """
        self._parameter_store.set('intensityLevel', self._step(self.intensity_level, delta))
        self.sync()
        return self.intensity_level

    def sync(self) -> None:
        """Derive lfoFrequency and lfoAmplitude from the current levels."""
        speed_level = self.speed_level
        intensity_level = self.intensity_level
        self._parameter_store.set('lfoFrequency', SPEED_MAP[speed_level])
        self._parameter_store.set('lfoAmplitude', INTENSITY_MAP[intensity_level])
        logger.debug(
            "dance_params_synced",
            speed_level=speed_level,
            intensity_level=intensity_level
        )

    def can_increase_speed(self) -> bool:
        return self.speed_level < MAX_LEVEL

    def can_decrease_speed(self) -> bool:
        return self.speed_level > MIN_LEVEL

    def can_increase_intensity(self) -> bool:
        return self.intensity_level < MAX_LEVEL

    def can_decrease_intensity(self) -> bool:
        return self.intensity_level > MIN_LEVEL

    @staticmethod
    def _step(level: int, delta: int) -> int:
        return max(MIN_LEVEL, min(MAX_LEVEL, level + delta))
