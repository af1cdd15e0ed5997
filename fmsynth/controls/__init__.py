"""
Discrete controls layered on top of the parameter store.
"""

from fmsynth.controls.dance import (
    INTENSITY_MAP,
    SPEED_MAP,
    DanceController,
)

__all__ = [
    'INTENSITY_MAP',
    'SPEED_MAP',
    'DanceController',
]
