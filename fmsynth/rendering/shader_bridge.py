"""
Shader bridge.

Maps parameter store values to fragment shader uniforms. Read-only with
respect to the store.
"""

from typing import Any, Dict, Protocol

import numpy as np

from fmsynth.parameters.store import ParameterStore

# Parameters forwarded as scalar uniforms named u_<parameter>
SCALAR_UNIFORMS = (
    'carrierFreqX',
    'carrierFreqY',
    'modulatorFreq',
    'modulationIndex',
    'amplitudeModulationIndex',
    'lfoFrequency',
    'lfoAmplitude',
)

# Modulation center is stored in -1..1; the shader works in -2..2
MODULATION_CENTER_SCALE = 2.0


class UniformTarget(Protocol):
    """Anything with a set_uniform(name, value) method, e.g. a shader program."""

    def set_uniform(self, name: str, value: Any) -> None:
        ...


class ShaderBridge:
    """Translates a parameter snapshot into shader uniforms for one frame."""

    def __init__(self, parameter_store: ParameterStore):
        self._parameter_store = parameter_store

    def build_uniforms(
        self,
        width: int,
        height: int,
        time_millis: float
    ) -> Dict[str, Any]:
        """
        Build the uniform set for the current frame.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
            time_millis: Animation time in milliseconds

        Returns:
            Uniform name -> value (floats, or float32 arrays for vec2)
        """
        params = self._parameter_store.get_all()

        uniforms: Dict[str, Any] = {
            'u_resolution': np.array([width, height], dtype=np.float32),
        }
        for name in SCALAR_UNIFORMS:
            uniforms[f'u_{name}'] = float(params[name])

        uniforms['u_modulationCenter'] = np.array(
            [
                MODULATION_CENTER_SCALE * params['modulationCenterX'],
                MODULATION_CENTER_SCALE * params['modulationCenterY'],
            ],
            dtype=np.float32
        )
        uniforms['u_time'] = time_millis / 1000.0
        return uniforms

    def apply(
        self,
        shader: UniformTarget,
        width: int,
        height: int,
        time_millis: float
    ) -> Dict[str, Any]:
        """
        Push all uniforms for the current frame into a shader.

        Returns:
            The uniforms that were set
        """
        uniforms = self.build_uniforms(width, height, time_millis)
        for name, value in uniforms.items():
            shader.set_uniform(name, value)
        return uniforms
