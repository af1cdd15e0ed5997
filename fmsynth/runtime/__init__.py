"""
Frame loop runtime: animation clock and session wiring.
"""

from fmsynth.runtime.clock import AnimationClock
from fmsynth.runtime.session import SynthSession

__all__ = ['AnimationClock', 'SynthSession']
