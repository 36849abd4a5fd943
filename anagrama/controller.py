"""Cycle controller: owns the corpus rotation and the single active run."""

import asyncio
import contextlib
import logging
from collections.abc import Callable

from anagrama.config import Config
from anagrama.engine.choreographer import PhaseChoreographer, Sleep
from anagrama.engine.matcher import match_letters
from anagrama.engine.tokenizer import tokenize
from anagrama.engine.typography import plan_typography
from anagrama.messages import subtitle_for
from anagrama.models import (
    AnimationStatus,
    Corpus,
    EngineSnapshot,
    LetterRole,
    Phase,
    Scene,
    TypographyPlan,
)

logger = logging.getLogger(__name__)

Listener = Callable[[EngineSnapshot], None]


def next_index(index: int, count: int) -> int:
    """Rotation rule: alternate for two texts, round robin for more."""
    if count <= 1:
        return 0
    if count == 2:
        return 1 if index == 0 else 0
    return (index + 1) % count


class AnagramEngine:
    """State machine tying typography, tokenizer, matcher and choreographer.

    Status moves idle -> transforming -> waiting -> idle. Only an idle, ready
    engine accepts a start request; everything else is a silent no-op.
    Container and corpus changes while a run is in flight are recorded and
    picked up by the next tokenization.
    """

    def __init__(
        self,
        corpus: Corpus | None = None,
        config: Config | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.config = config or Config()
        self._sleep = sleep
        self.corpus = corpus
        self.width = 0.0
        self.height = 0.0
        self.plan: TypographyPlan | None = None
        self.index = 0
        self.status = AnimationStatus.IDLE
        self.phase: Phase | None = None
        self.progress = 0.0
        self.scene: Scene | None = None
        self.cycles_completed = 0
        self._run_task: asyncio.Task | None = None
        self._closed = False
        self._listeners: list[Listener] = []

    # --- Read-only state ---

    @property
    def text_count(self) -> int:
        return len(self.corpus.texts) if self.corpus else 0

    @property
    def target_index(self) -> int:
        return next_index(self.index, self.text_count)

    @property
    def is_ready(self) -> bool:
        return self.plan is not None and self.scene is not None and self.text_count > 0

    @property
    def is_running(self) -> bool:
        return self.status is not AnimationStatus.IDLE

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            status=self.status,
            phase=self.phase,
            progress_percent=self.progress,
            is_ready=self.is_ready,
            is_running=self.is_running,
            index=self.index,
            target_index=self.target_index,
            title=self.corpus.title if self.corpus else "",
            subtitle=subtitle_for(self.corpus, self.index) if self.corpus else None,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a snapshot listener; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snap)
            except Exception:
                logger.exception("Snapshot listener failed")

    # --- Inputs from collaborators ---

    def load_corpus(self, corpus: Corpus) -> None:
        self.corpus = corpus
        if self.index >= len(corpus.texts):
            self.index = 0
        self._replan()

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        self._replan()

    def _replan(self) -> None:
        if self.corpus is None:
            self.plan = None
        else:
            self.plan = plan_typography(
                self.corpus.texts, self.width, self.height, self.config.typography,
            )
        if self.status is AnimationStatus.IDLE:
            self.prepare()
        else:
            logger.debug("Layout changed mid-run; applying it to the next cycle")

    def prepare(self) -> None:
        """Lay out the current source text for idle display."""
        if self.plan is None or self.text_count == 0:
            self.scene = None
        else:
            self.scene = Scene(
                source_index=self.index,
                target_index=self.index,
                plan=self.plan,
                source=tokenize(self.corpus.texts[self.index], LetterRole.SOURCE, self.plan),
            )
        self._notify()

    # --- Runs ---

    def can_start(self) -> bool:
        return not self._closed and self.status is AnimationStatus.IDLE and self.is_ready

    def _begin(self) -> bool:
        if not self.can_start():
            logger.debug(
                "Start ignored (status=%s, ready=%s)", self.status.value, self.is_ready,
            )
            return False
        self.status = AnimationStatus.TRANSFORMING
        self.phase = None
        self.progress = 0.0
        self._notify()
        return True

    def request_start(self) -> asyncio.Task | None:
        """Fire-and-forget start for UI triggers. Returns the run task, if any."""
        if not self._begin():
            return None
        self._run_task = asyncio.create_task(self._run())
        return self._run_task

    async def start(self) -> bool:
        """Run one full cycle. Returns False if the request was ignored or failed."""
        if not self._begin():
            return False
        self._run_task = asyncio.current_task()
        return await self._run()

    def _build_scene(self) -> Scene:
        if self.plan is None or self.corpus is None:
            raise RuntimeError("engine is not ready")
        source_index, target_index = self.index, self.target_index
        source = tokenize(self.corpus.texts[source_index], LetterRole.SOURCE, self.plan)
        target = tokenize(self.corpus.texts[target_index], LetterRole.TARGET, self.plan)
        pairs = match_letters(source, target)
        logger.info(
            "Transforming text %d -> %d: %d of %d letters paired",
            source_index, target_index, len(pairs), len(source),
        )
        return Scene(
            source_index=source_index,
            target_index=target_index,
            plan=self.plan,
            source=source,
            target=target,
            pairs=pairs,
        )

    def _on_phase(self, phase: Phase) -> None:
        self.phase = phase
        self._notify()

    def _on_progress(self, percent: float) -> None:
        self.progress = percent
        self._notify()

    async def _run(self) -> bool:
        try:
            self.scene = self._build_scene()
            choreographer = PhaseChoreographer(
                self.scene,
                self.config.timing,
                self.config.engine,
                sleep=self._sleep,
                on_phase=self._on_phase,
                on_progress=self._on_progress,
            )
            await choreographer.run()

            self.status = AnimationStatus.WAITING
            self._notify()
            await self._sleep(self.config.engine.settle_delay)
        except asyncio.CancelledError:
            self._reset()
            raise
        except Exception:
            logger.exception("Animation run failed")
            self._reset()
            return False
        finally:
            self._run_task = None

        # Rotate from the text that was displayed
        played = self.scene.target_index
        self.index = played if played < self.text_count else 0
        self.cycles_completed += 1
        self._reset()
        logger.info("Cycle %d complete; next source is text %d", self.cycles_completed, self.index)
        return True

    def _reset(self) -> None:
        self.status = AnimationStatus.IDLE
        self.phase = None
        self.progress = 0.0
        if self._closed:
            return
        self.prepare()

    async def close(self) -> None:
        """Tear down: abandon any in-flight run without further mutation."""
        self._closed = True
        self._listeners.clear()
        task = self._run_task
        if task is None or task.done() or task is asyncio.current_task():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
