"""
Synth session.

Wires the store, LFO engine, presets, dance controls, shader bridge and
animation clock together and runs one frame at a time for a host draw loop.
"""

import time
from typing import Any, Callable, Dict, Optional

from fmsynth.automation.lfo_engine import LFOEngine
from fmsynth.automation.presets import PRESETS, PresetManager, load_preset_file
from fmsynth.automation.smoothed_engine import SmoothedLFOEngine
from fmsynth.controls.dance import DanceController
from fmsynth.core.config import Settings, settings as default_settings
from fmsynth.core.logging import get_logger
from fmsynth.parameters.definitions import STARTUP_VALUES
from fmsynth.parameters.store import ParameterStore
from fmsynth.rendering.shader_bridge import ShaderBridge, UniformTarget
from fmsynth.runtime.clock import AnimationClock

logger = get_logger(__name__)


class SynthSession:
    """
    One running synthesizer.

    Per frame: read the animation clock, advance LFO automation, then
    build shader uniforms from the store. UI code talks to the components
    directly (store, presets, dance).
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        time_source: Callable[[], float] = time.monotonic
    ):
        """
        Initialize synth session.

        Args:
            config: Settings (defaults to the global settings)
            time_source: Monotonic clock in seconds, injectable for tests
        """
        self.config = config or default_settings

        self.store = ParameterStore(
            initial_values=STARTUP_VALUES,
            max_notification_depth=self.config.max_notification_depth
        )

        if self.config.lfo_engine_mode == "smoothed":
            self.lfo_engine: LFOEngine = SmoothedLFOEngine(
                self.store,
                smoothing_time_constant=self.config.lfo_smoothing_time_constant,
                max_frame_delta=self.config.lfo_max_frame_delta
            )
        else:
            self.lfo_engine = LFOEngine(self.store)

        catalog = dict(PRESETS)
        if self.config.preset_file:
            catalog.update(load_preset_file(self.config.preset_file))
        self.presets = PresetManager(self.lfo_engine, presets=catalog)

        self.dance = DanceController(self.store)
        self.shader_bridge = ShaderBridge(self.store)
        self.clock = AnimationClock(time_source)
        self.frame_count = 0

        self.dance.sync()
        if not self.presets.apply(self.config.default_preset):
            logger.warning("default_preset_unavailable", preset=self.config.default_preset)

        logger.info(
            "synth_session_initialized",
            engine=self.config.lfo_engine_mode,
            preset=self.presets.get_current()
        )

    def tick(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
        shader: Optional[UniformTarget] = None
    ) -> Dict[str, Any]:
        """
        Run one frame.

        Args:
            width: Canvas width (defaults to settings)
            height: Canvas height (defaults to settings)
            shader: Optional shader that receives the uniforms

        Returns:
            Uniforms for this frame
        """
        width = self.config.canvas_width if width is None else width
        height = self.config.canvas_height if height is None else height

        anim_time = self.clock.now()
        self.lfo_engine.update(anim_time)

        time_millis = anim_time * 1000.0
        if shader is not None:
            uniforms = self.shader_bridge.apply(shader, width, height, time_millis)
        else:
            uniforms = self.shader_bridge.build_uniforms(width, height, time_millis)

        self.frame_count += 1
        return uniforms

    def toggle_pause(self) -> bool:
        """
        Freeze or resume the animation.

        Level changes made while frozen are re-derived on resume.

        Returns:
            True if now paused
        """
        paused = self.clock.toggle()
        if not paused:
            self.dance.sync()
        logger.info("animation_paused" if paused else "animation_resumed")
        return paused

    def set_preset(self, preset_name: str) -> bool:
        """Apply a preset; see PresetManager.apply."""
        return self.presets.apply(preset_name)
