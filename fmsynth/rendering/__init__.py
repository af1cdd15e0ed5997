"""
Rendering glue.

The synth core only produces uniform values; the host owns the GPU.
"""

from fmsynth.rendering.shader_bridge import ShaderBridge, UniformTarget

__all__ = ['ShaderBridge', 'UniformTarget']
