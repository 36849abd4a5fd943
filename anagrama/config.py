"""Configuration loading for the anagram transformer."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


class TimingConfig(BaseModel):
    """Phase durations in seconds, in playback order."""

    display_initial: float = Field(default=2.5, ge=0)
    normalize: float = Field(default=0.5, ge=0)
    move: float = Field(default=8.0, ge=0)
    transition: float = Field(default=0.5, ge=0)
    denormalize: float = Field(default=1.5, ge=0)
    display_final: float = Field(default=2.0, ge=0)

    def durations(self) -> list[float]:
        return [
            self.display_initial,
            self.normalize,
            self.move,
            self.transition,
            self.denormalize,
            self.display_final,
        ]

    @property
    def total(self) -> float:
        """Total cycle duration, used as the progress denominator."""
        return sum(self.durations())


class TypographyConfig(BaseModel):
    mobile_breakpoint: float = 768
    padding_mobile: float = 16
    padding_desktop: float = 32
    char_aspect_mobile: float = 0.55
    char_aspect_desktop: float = 0.6
    line_spacing_mobile: float = 1.3
    line_spacing_desktop: float = 1.2
    min_font_mobile: float = 8
    max_font_mobile: float = 24
    min_font_desktop: float = 12
    max_font_desktop: float = 48


class EngineConfig(BaseModel):
    progress_tick: float = Field(default=0.1, gt=0)
    settle_delay: float = Field(default=0.1, ge=0)
    arc_ratio: float = 0.1  # arc height as a fraction of travel distance
    arc_cap: float = 30.0


class ContentConfig(BaseModel):
    texts_dir: str = "texts"
    default_text_set: str = "sonetos-palindromicos"

    @property
    def resolved_texts_dir(self) -> Path:
        p = Path(self.texts_dir).expanduser()
        if p.is_absolute():
            return p
        return _project_root() / p


class RenderConfig(BaseModel):
    width: int = 1200
    height: int = 800
    fps: int = 12
    fade_duration: float = 0.5
    font_path: str | None = None
    background: tuple[int, int, int] = (255, 255, 255)
    ink: tuple[int, int, int] = (51, 51, 51)
    progress_color: tuple[int, int, int] = (0, 122, 204)


class Config(BaseModel):
    timing: TimingConfig = Field(default_factory=TimingConfig)
    typography: TypographyConfig = Field(default_factory=TypographyConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    content: ContentConfig = Field(default_factory=ContentConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)


def _project_root() -> Path:
    """Return the anagrama project root directory."""
    return Path(__file__).parent.parent


def load_config(config_path: Path | None = None) -> Config:
    """Load config from YAML file. Falls back to defaults if file missing."""
    if config_path is None:
        config_path = _project_root() / "config.yaml"

    if config_path.exists():
        raw: dict[str, Any] = yaml.safe_load(config_path.read_text()) or {}
        return Config(**raw)

    return Config()
