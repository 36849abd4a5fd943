"""Offline presentation layer: draw scenes with PIL and export cycles as GIFs.

The renderer only reads letter records. A cycle is filmed by stepping the
choreographer's phase effects directly (no waiting) and sampling frames at
the configured rate; opacity changes fade in over `fade_duration` and the
move phase is sampled along each letter's arc.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from anagrama.config import Config, RenderConfig
from anagrama.controller import next_index
from anagrama.engine.choreographer import PhaseChoreographer, phase_durations
from anagrama.engine.matcher import match_letters
from anagrama.engine.tokenizer import tokenize
from anagrama.engine.typography import plan_typography
from anagrama.models import Corpus, LetterRole, Phase, Scene

logger = logging.getLogger(__name__)

PROGRESS_BAR_HEIGHT = 4

Opacities = dict[int, tuple[float, float]]


@dataclass
class RenderResult:
    output_path: Path
    frame_count: int
    source_index: int
    target_index: int
    pairs: int
    unmatched: int


def load_font(size: float, font_path: str | None = None) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Monospace font at `size` px; PIL's bundled font if none is installed."""
    px = max(1, round(size))
    candidates = [font_path] if font_path else []
    candidates += ["DejaVuSansMono.ttf", "Courier New.ttf", "cour.ttf"]
    for candidate in candidates:
        try:
            return ImageFont.truetype(candidate, px)
        except OSError:
            continue
    return ImageFont.load_default(size=px)


def build_scene(corpus: Corpus, index: int, width: float, height: float, config: Config) -> Scene | None:
    """Tokenize and match text `index` against the next text in rotation."""
    plan = plan_typography(corpus.texts, width, height, config.typography)
    if plan is None:
        return None
    target_index = next_index(index, len(corpus.texts))
    source = tokenize(corpus.texts[index], LetterRole.SOURCE, plan)
    target = tokenize(corpus.texts[target_index], LetterRole.TARGET, plan)
    return Scene(
        source_index=index,
        target_index=target_index,
        plan=plan,
        source=source,
        target=target,
        pairs=match_letters(source, target),
    )


def _capture(scene: Scene) -> Opacities:
    return {id(l): (l.raw_opacity, l.normalized_opacity) for l in scene.letters}


def _blend(before: tuple[float, float], after: tuple[float, float], fade: float) -> tuple[float, float]:
    return (
        before[0] + (after[0] - before[0]) * fade,
        before[1] + (after[1] - before[1]) * fade,
    )


def _fill(color: tuple[int, int, int], opacity: float) -> tuple[int, int, int, int]:
    return (*color, round(255 * min(1.0, max(0.0, opacity))))


def render_frame(
    scene: Scene,
    config: RenderConfig,
    move_fraction: float | None = None,
    fade: float = 1.0,
    previous: Opacities | None = None,
    progress: float | None = None,
    font: ImageFont.ImageFont | None = None,
) -> Image.Image:
    """Draw every visible letter layer of `scene` onto a fresh canvas."""
    width = round(scene.plan.container_width)
    height = round(scene.plan.container_height)
    image = Image.new("RGB", (width, height), config.background)
    draw = ImageDraw.Draw(image, "RGBA")
    if font is None:
        font = load_font(scene.plan.font_size, config.font_path)

    for letter in scene.letters:
        if not letter.visible:
            continue
        raw, normalized = letter.raw_opacity, letter.normalized_opacity
        if previous is not None and id(letter) in previous:
            raw, normalized = _blend(previous[id(letter)], (raw, normalized), fade)

        if move_fraction is None:
            x, y = letter.current_position
        else:
            x, y = letter.position_at(move_fraction)

        if raw > 0 and letter.displayed_raw:
            draw.text((x, y), letter.displayed_raw, font=font, fill=_fill(config.ink, raw))
        if normalized > 0 and letter.displayed_normalized:
            draw.text((x, y), letter.displayed_normalized, font=font, fill=_fill(config.ink, normalized))

    if progress is not None:
        bar_w = round(width * min(100.0, max(0.0, progress)) / 100)
        draw.rectangle(
            [(0, height - PROGRESS_BAR_HEIGHT), (width, height)], fill=(229, 229, 229, 255),
        )
        if bar_w > 0:
            draw.rectangle(
                [(0, height - PROGRESS_BAR_HEIGHT), (bar_w, height)],
                fill=_fill(config.progress_color, 1.0),
            )

    return image


def film_cycle(scene: Scene, config: Config) -> list[Image.Image]:
    """Step `scene` through all six phases, returning sampled frames."""
    render = config.render
    timing = config.timing
    choreographer = PhaseChoreographer(scene, timing, config.engine)
    font = load_font(scene.plan.font_size, render.font_path)
    total = timing.total

    frames: list[Image.Image] = []
    elapsed = 0.0
    for phase, duration in phase_durations(timing).items():
        previous = _capture(scene)
        choreographer.apply_phase(phase)
        count = round(duration * render.fps)
        for i in range(count):
            t = i / render.fps
            fade = min(1.0, t / render.fade_duration) if render.fade_duration > 0 else 1.0
            move_fraction = i / count if phase is Phase.MOVE else None
            progress = (elapsed + t) / total * 100 if total > 0 else 100.0
            frames.append(render_frame(
                scene, render,
                move_fraction=move_fraction,
                fade=fade,
                previous=previous,
                progress=progress,
                font=font,
            ))
        elapsed += duration

    return frames


def save_gif(frames: list[Image.Image], output_path: Path, fps: int) -> Path:
    if not frames:
        raise ValueError("no frames to save")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    frames[0].save(
        output_path,
        save_all=True,
        append_images=frames[1:],
        duration=round(1000 / fps),
        loop=0,
    )
    return output_path


def render_cycle(
    corpus: Corpus,
    index: int,
    output_path: Path,
    config: Config | None = None,
) -> RenderResult:
    """Render one transformation of text `index` into the next as a GIF."""
    if config is None:
        config = Config()
    render = config.render

    scene = build_scene(corpus, index, render.width, render.height, config)
    if scene is None:
        raise ValueError(f"cannot lay out corpus in {render.width}x{render.height}")

    matched = {id(p.source) for p in scene.pairs}
    unmatched = sum(1 for l in scene.source if not l.is_punctuation and id(l) not in matched)

    frames = film_cycle(scene, config)
    save_gif(frames, output_path, render.fps)
    logger.info("Wrote %d frames to %s", len(frames), output_path)

    return RenderResult(
        output_path=output_path,
        frame_count=len(frames),
        source_index=scene.source_index,
        target_index=scene.target_index,
        pairs=len(scene.pairs),
        unmatched=unmatched,
    )
