"""Shared test fixtures for anagrama tests."""

import asyncio

import pytest

from anagrama.config import Config, EngineConfig, TimingConfig
from anagrama.engine.typography import plan_typography
from anagrama.models import Corpus, Language


class RecordingSleep:
    """Stand-in for asyncio.sleep: records durations and only yields once."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        await asyncio.sleep(0)


@pytest.fixture()
def sleep():
    return RecordingSleep()


@pytest.fixture()
def config():
    """Default timings with a tick that never collides with a phase duration."""
    return Config(engine=EngineConfig(progress_tick=0.05, settle_delay=0.25))


@pytest.fixture()
def fast_config():
    """Real-time config short enough to run with asyncio.sleep."""
    return Config(
        timing=TimingConfig(
            display_initial=0.01, normalize=0.01, move=0.02,
            transition=0.01, denormalize=0.01, display_final=0.01,
        ),
        engine=EngineConfig(progress_tick=0.005, settle_delay=0.005),
    )


@pytest.fixture()
def roma_corpus():
    return Corpus(title="Roma", language=Language.ES, subtitles=["Uno", "Dos"], texts=["ROMA", "AMOR"])


@pytest.fixture()
def three_corpus():
    return Corpus(
        title="Tres",
        language=Language.EN,
        subtitles=["One", "Two", "Three"],
        texts=["ROMA", "AMOR", "MORA"],
    )


@pytest.fixture()
def plan(roma_corpus):
    return plan_typography(roma_corpus.texts, 1000, 600)
