"""Typography planner: one font scale and origin shared by every text."""

import logging
from collections.abc import Sequence

from anagrama.config import TypographyConfig
from anagrama.models import TypographyPlan

logger = logging.getLogger(__name__)


def measure_corpus(texts: Sequence[str]) -> tuple[int, int]:
    """Return (longest line length, most lines) across all texts."""
    max_line_length = 0
    max_lines = 0
    for text in texts:
        lines = text.split("\n")
        max_lines = max(max_lines, len(lines))
        for line in lines:
            max_line_length = max(max_line_length, len(line))
    return max_line_length, max_lines


def plan_typography(
    texts: Sequence[str],
    width: float,
    height: float,
    config: TypographyConfig | None = None,
) -> TypographyPlan | None:
    """Derive the shared typography for a corpus inside a container.

    Font size is the smaller of a width-bound and a height-bound candidate,
    clamped to the mode's range. The text block is centered, but its origin
    never moves inside the padding.

    Returns None when the container is unmeasured or there is nothing to lay
    out.
    """
    if config is None:
        config = TypographyConfig()

    if width <= 0 or height <= 0 or not texts:
        return None

    max_line_length, max_lines = measure_corpus(texts)
    if max_line_length == 0:
        return None

    is_mobile = width < config.mobile_breakpoint
    if is_mobile:
        padding = config.padding_mobile
        aspect = config.char_aspect_mobile
        spacing = config.line_spacing_mobile
        min_font, max_font = config.min_font_mobile, config.max_font_mobile
    else:
        padding = config.padding_desktop
        aspect = config.char_aspect_desktop
        spacing = config.line_spacing_desktop
        min_font, max_font = config.min_font_desktop, config.max_font_desktop

    available_width = width - padding * 2
    available_height = height - padding * 2

    width_based = available_width / (max_line_length * aspect)
    height_based = available_height / (max_lines * spacing)
    font_size = max(min_font, min(width_based, height_based, max_font))

    line_height = font_size * spacing
    char_width = font_size * aspect

    block_width = max_line_length * char_width
    block_height = max_lines * line_height
    start_x = (width - block_width) / 2
    start_y = (height - block_height) / 2

    plan = TypographyPlan(
        font_size=font_size,
        line_height=line_height,
        char_width=char_width,
        origin_x=max(padding, start_x),
        origin_y=max(padding, start_y),
        max_lines=max_lines,
        max_line_length=max_line_length,
        container_width=width,
        container_height=height,
        is_mobile=is_mobile,
    )
    logger.debug(
        "Typography for %sx%s: font %.1fpx, %d lines x %d chars",
        width, height, font_size, max_lines, max_line_length,
    )
    return plan
