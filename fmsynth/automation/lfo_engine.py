"""
LFO engine.

Translates elapsed time into parameter writes for every parameter under
automation. The engine holds no clock; the host passes the animation time
on each frame.
"""

from typing import Optional, Tuple

from fmsynth.automation.oscillation import LFOMap, MapLike
from fmsynth.core.logging import get_logger
from fmsynth.parameters.store import ParameterStore

logger = get_logger(__name__)


class LFOEngine:
    """
    Stateless sinusoidal automation over a ParameterStore.

    Two modes:
    - manual: no active map, update() does nothing
    - automated: update(t) writes center + amplitude * sin(2*pi*f*t + phase)
      for every entry of the active map

    Values are a pure function of (map, time), so update() may be called at
    an irregular frame rate without drift, and calling it twice with the
    same time yields the same values.
    """

    def __init__(self, parameter_store: ParameterStore):
        """
        Initialize LFO engine in manual mode.

        Args:
            parameter_store: Store that receives automated values
        """
        self._parameter_store = parameter_store
        self._active_map: Optional[LFOMap] = None

    @property
    def parameter_store(self) -> ParameterStore:
        return self._parameter_store

    def set_map(self, lfo_map: Optional[MapLike]) -> None:
        """
        Install an LFO map, replacing any previous one in full.

        No parameter is written until the next update().

        Args:
            lfo_map: Map of parameter name -> oscillation config, or None
                for manual mode
        """
        if lfo_map is None:
            self.clear()
            return

        lfo_map = LFOMap.coerce(lfo_map)
        unknown = [name for name in lfo_map if not self._parameter_store.has(name)]
        if unknown:
            logger.warning("lfo_map_unknown_parameters", parameters=unknown)

        self._active_map = lfo_map
        logger.debug("lfo_map_installed", parameters=list(lfo_map))

    def get_map(self) -> Optional[LFOMap]:
        """Get the active LFO map, or None in manual mode."""
        return self._active_map

    def is_active(self) -> bool:
        """Check if automation is running."""
        return self._active_map is not None

    def is_parameter_controlled(self, name: str) -> bool:
        """
        Check if a specific parameter is being driven by the LFO.

        Args:
            name: Parameter name

        Returns:
            True if automated and the parameter is in the active map
        """
        return self._active_map is not None and name in self._active_map

    def controlled_parameters(self) -> Tuple[str, ...]:
        """Names under automation, in map order."""
        if self._active_map is None:
            return ()
        return tuple(self._active_map)

    def update(self, time_seconds: float) -> None:
        """
        Update all LFO-controlled parameters for the given time.

        Args:
            time_seconds: Animation time in seconds
        """
        if self._active_map is None:
            return

        for name, config in self._active_map.entries:
            self._parameter_store.set(name, config.value_at(time_seconds))

    def clear(self) -> None:
        """
        Return to manual mode.

        Parameters keep the last automated values.
        """
        if self._active_map is not None:
            logger.debug("lfo_map_cleared")
        self._active_map = None
