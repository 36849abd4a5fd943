"""Pydantic models and scene records for the anagram transformer."""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, Field


class Language(str, Enum):
    ES = "es"
    EN = "en"


class Phase(str, Enum):
    """The six stages of one transformation cycle, in playback order."""

    DISPLAY_INITIAL = "display_initial"
    NORMALIZE = "normalize"
    MOVE = "move"
    TRANSITION = "transition"
    DENORMALIZE = "denormalize"
    DISPLAY_FINAL = "display_final"


class AnimationStatus(str, Enum):
    IDLE = "idle"
    TRANSFORMING = "transforming"
    WAITING = "waiting"


class LetterRole(str, Enum):
    SOURCE = "source"
    TARGET = "target"


# --- Content and layout models ---


class Corpus(BaseModel):
    """A text set: the anagram texts plus their display metadata."""

    title: str
    language: Language = Language.ES
    subtitles: list[str] = Field(default_factory=list)
    texts: list[str] = Field(min_length=1)

    def subtitle(self, index: int) -> str | None:
        if 0 <= index < len(self.subtitles):
            return self.subtitles[index]
        return None


class TypographyPlan(BaseModel):
    """Shared metrics that place every text of a corpus at the same scale."""

    font_size: float
    line_height: float
    char_width: float
    origin_x: float
    origin_y: float
    max_lines: int
    max_line_length: int
    container_width: float
    container_height: float
    is_mobile: bool


class EngineSnapshot(BaseModel):
    """Read-only view of the controller, published to presentation layers."""

    status: AnimationStatus
    phase: Phase | None = None
    progress_percent: float = 0.0
    is_ready: bool = False
    is_running: bool = False
    index: int = 0
    target_index: int = 0
    title: str = ""
    subtitle: str | None = None


# --- Scene records (mutated by the choreographer, read by renderers) ---


@dataclass
class Motion:
    """A parabolic hop from a start point to an end point."""

    start_x: float
    start_y: float
    end_x: float
    end_y: float
    arc_height: float

    def point(self, fraction: float) -> tuple[float, float]:
        if fraction <= 0:
            return self.start_x, self.start_y
        if fraction >= 1:
            return self.end_x, self.end_y
        t = fraction
        x = self.start_x + (self.end_x - self.start_x) * t
        # Parabola peaking at arc_height above the chord at t=0.5
        lift = 4 * self.arc_height * t * (1 - t)
        y = self.start_y + (self.end_y - self.start_y) * t - lift
        return x, y


@dataclass(eq=False)
class LetterRecord:
    """One positioned character with its two visual layers.

    The raw layer shows the character as written, the normalized layer shows
    its lowercase unaccented form. Identity (not value) equality, so two
    identical characters at different positions stay distinct.
    """

    index: int
    raw_char: str
    normalized_char: str
    is_uppercase: bool
    is_punctuation: bool
    line_index: int
    column_index: int
    x: float
    y: float
    role: LetterRole = LetterRole.SOURCE

    raw_opacity: float = 1.0
    normalized_opacity: float = 0.0
    displayed_raw: str = ""
    displayed_normalized: str = ""
    visible: bool = True
    interactive: bool = True
    current_x: float = 0.0
    current_y: float = 0.0
    motion: Motion | None = None

    @property
    def position(self) -> tuple[float, float]:
        return self.x, self.y

    @property
    def current_position(self) -> tuple[float, float]:
        return self.current_x, self.current_y

    def position_at(self, fraction: float) -> tuple[float, float]:
        """Where the letter is drawn `fraction` of the way through its move."""
        if self.motion is None:
            return self.current_position
        return self.motion.point(fraction)

    @property
    def visible_glyph(self) -> str:
        """The glyph a viewer currently sees, or "" when fully transparent."""
        if not self.visible:
            return ""
        if self.raw_opacity <= 0 and self.normalized_opacity <= 0:
            return ""
        if self.raw_opacity >= self.normalized_opacity:
            return self.displayed_raw
        return self.displayed_normalized


@dataclass(frozen=True)
class CorrespondencePair:
    source: LetterRecord
    target: LetterRecord
    distance: float


@dataclass
class Scene:
    """Everything on the drawing surface for one source→target transformation."""

    source_index: int
    target_index: int
    plan: TypographyPlan
    source: list[LetterRecord] = field(default_factory=list)
    target: list[LetterRecord] = field(default_factory=list)
    pairs: list[CorrespondencePair] = field(default_factory=list)

    @property
    def letters(self) -> list[LetterRecord]:
        return self.source + self.target
