"""Six-phase choreography over a matched scene.

Each phase is applied instantly (opacity, glyph and motion changes on the
letter records) and then waited out for its configured duration. A second
task publishes advisory progress while the run is active.
"""

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable

from anagrama.config import EngineConfig, TimingConfig
from anagrama.models import Motion, Phase, Scene

logger = logging.getLogger(__name__)

PHASE_ORDER: list[Phase] = list(Phase)

Sleep = Callable[[float], Awaitable[None]]


def phase_durations(timing: TimingConfig) -> dict[Phase, float]:
    return dict(zip(PHASE_ORDER, timing.durations()))


def phase_end_offsets(timing: TimingConfig) -> dict[Phase, float]:
    """Cumulative time at which each phase ends."""
    offsets: dict[Phase, float] = {}
    elapsed = 0.0
    for phase, duration in phase_durations(timing).items():
        elapsed += duration
        offsets[phase] = elapsed
    return offsets


def arc_height(distance: float, config: EngineConfig) -> float:
    return min(distance * config.arc_ratio, config.arc_cap)


class PhaseChoreographer:
    """Drives one scene through all six phases."""

    def __init__(
        self,
        scene: Scene,
        timing: TimingConfig,
        engine: EngineConfig | None = None,
        sleep: Sleep = asyncio.sleep,
        on_phase: Callable[[Phase], None] | None = None,
        on_progress: Callable[[float], None] | None = None,
    ) -> None:
        self.scene = scene
        self.timing = timing
        self.engine = engine or EngineConfig()
        self._sleep = sleep
        self._on_phase = on_phase
        self._on_progress = on_progress
        self._durations = phase_durations(timing)
        self._end_offsets = phase_end_offsets(timing)
        self.phase: Phase | None = None
        self.progress: float = 0.0

    # --- Phase effects ---

    def apply_phase(self, phase: Phase) -> None:
        """Apply the instantaneous effects that open `phase`."""
        if phase is Phase.NORMALIZE:
            for letter in self.scene.source:
                if letter.is_uppercase:
                    letter.raw_opacity = 0.0
                    letter.normalized_opacity = 1.0
                elif letter.is_punctuation:
                    letter.raw_opacity = 0.0

        elif phase is Phase.MOVE:
            for pair in self.scene.pairs:
                letter = pair.source
                start_x, start_y = letter.current_position
                letter.motion = Motion(
                    start_x=start_x,
                    start_y=start_y,
                    end_x=pair.target.x,
                    end_y=pair.target.y,
                    arc_height=arc_height(pair.distance, self.engine),
                )
                letter.current_x, letter.current_y = pair.target.x, pair.target.y

        elif phase is Phase.TRANSITION:
            for pair in self.scene.pairs:
                if pair.target.is_punctuation:
                    continue
                pair.source.displayed_normalized = pair.target.normalized_char
                if pair.target.is_uppercase:
                    pair.source.displayed_raw = pair.target.raw_char

        elif phase is Phase.DENORMALIZE:
            for letter in self.scene.target:
                if letter.is_punctuation:
                    letter.normalized_opacity = 0.0
                    letter.raw_opacity = 1.0
            for pair in self.scene.pairs:
                if pair.target.is_uppercase:
                    pair.source.normalized_opacity = 0.0
                    pair.source.raw_opacity = 1.0

    # --- Progress ---

    def publish_progress(self, percent: float) -> None:
        percent = min(100.0, max(0.0, percent))
        if percent <= self.progress:
            return
        self.progress = percent
        if self._on_progress:
            self._on_progress(percent)

    async def _tick_progress(self) -> None:
        total = self.timing.total
        tick = self.engine.progress_tick
        elapsed = 0.0
        while True:
            await self._sleep(tick)
            elapsed += tick
            # Never run ahead of the phase that is actually playing
            cap = self._end_offsets[self.phase] if self.phase is not None else 0.0
            self.publish_progress(min(elapsed, cap) / total * 100)

    # --- Scheduler ---

    async def run(self) -> None:
        """Play every phase in order; returns once display_final has elapsed."""
        ticker: asyncio.Task | None = None
        if self.timing.total > 0:
            ticker = asyncio.create_task(self._tick_progress())

        try:
            for phase in PHASE_ORDER:
                self.phase = phase
                self.apply_phase(phase)
                logger.debug("Phase %s (%.2fs)", phase.value, self._durations[phase])
                if self._on_phase:
                    self._on_phase(phase)
                if phase is Phase.DISPLAY_FINAL:
                    self.publish_progress(100.0)
                await self._sleep(self._durations[phase])
        finally:
            if ticker is not None:
                ticker.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await ticker
