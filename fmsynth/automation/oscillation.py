"""
Oscillation configs and LFO maps.

An OscillationConfig describes one sinusoid; an LFOMap assigns configs to
parameter names in an explicit, stable order.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple, Union

import numpy as np

from fmsynth.core.exceptions import OscillationConfigError

TWO_PI = 2.0 * np.pi


@dataclass(frozen=True)
class OscillationConfig:
    """
    Sinusoidal automation of a single parameter.

    value(t) = center + amplitude * sin(2*pi*frequency*t + phase)
    """
    frequency: float  # Hz
    amplitude: float
    center: float
    phase: float = 0.0  # radians

    def __post_init__(self):
        for field_name in ("frequency", "amplitude", "center", "phase"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise OscillationConfigError(
                    f"{field_name} must be a number, got {value!r}"
                )
            if not math.isfinite(value):
                raise OscillationConfigError(f"{field_name} must be finite")

    @classmethod
    def from_dict(cls, data: Mapping) -> 'OscillationConfig':
        """
        Build a config from a {frequency, amplitude, center, phase} dict.

        Args:
            data: Config fields; phase is optional

        Returns:
            OscillationConfig
        """
        try:
            return cls(
                frequency=data['frequency'],
                amplitude=data['amplitude'],
                center=data['center'],
                phase=data.get('phase', 0.0),
            )
        except KeyError as e:
            raise OscillationConfigError(f"Missing oscillation field {e}") from e

    def value_at(self, time_seconds: float) -> float:
        """
        Evaluate the oscillation at an absolute time.

        Args:
            time_seconds: Elapsed time in seconds

        Returns:
            Oscillator output
        """
        return float(
            self.center
            + self.amplitude * np.sin(TWO_PI * self.frequency * time_seconds + self.phase)
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            'frequency': self.frequency,
            'amplitude': self.amplitude,
            'center': self.center,
            'phase': self.phase,
        }


ConfigLike = Union[OscillationConfig, Mapping]
MapLike = Union['LFOMap', Mapping, Iterable[Tuple[str, ConfigLike]]]


def _to_config(name: str, config: Any) -> OscillationConfig:
    if isinstance(config, OscillationConfig):
        return config
    if isinstance(config, Mapping):
        return OscillationConfig.from_dict(config)
    raise OscillationConfigError(
        f"Oscillation config for '{name}' must be an OscillationConfig or dict"
    )


class LFOMap(Mapping):
    """
    Immutable, ordered mapping of parameter name to OscillationConfig.

    Iteration follows construction order, which is the order the engine
    writes parameters in.
    """

    __slots__ = ('_entries', '_index')

    def __init__(self, entries: Optional[MapLike] = None):
        """
        Build an LFO map.

        Args:
            entries: Mapping of name -> config, or iterable of (name, config)
                pairs. Configs may be OscillationConfig instances or dicts.

        Raises:
            OscillationConfigError: On duplicate names or invalid configs
        """
        if entries is None:
            pairs: Iterable = ()
        elif isinstance(entries, Mapping):
            pairs = entries.items()
        else:
            pairs = entries

        built = []
        index: Dict[str, OscillationConfig] = {}
        for name, config in pairs:
            if not isinstance(name, str):
                raise OscillationConfigError(f"Parameter name must be str, got {name!r}")
            if name in index:
                raise OscillationConfigError(f"Duplicate LFO entry for '{name}'")
            config = _to_config(name, config)
            built.append((name, config))
            index[name] = config

        self._entries: Tuple[Tuple[str, OscillationConfig], ...] = tuple(built)
        self._index = index

    @classmethod
    def coerce(cls, entries: MapLike) -> 'LFOMap':
        """Return entries unchanged if already an LFOMap, else build one."""
        if isinstance(entries, cls):
            return entries
        return cls(entries)

    def __getitem__(self, name: str) -> OscillationConfig:
        return self._index[name]

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LFOMap):
            return self._entries == other._entries
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"LFOMap({list(self._index)!r})"

    @property
    def entries(self) -> Tuple[Tuple[str, OscillationConfig], ...]:
        """(name, config) pairs in order."""
        return self._entries

    def values_at(self, time_seconds: float) -> Dict[str, float]:
        """Evaluate every oscillator at a time, in map order."""
        return {
            name: config.value_at(time_seconds)
            for name, config in self._entries
        }

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {name: config.to_dict() for name, config in self._entries}
