"""Pair each source letter with the nearest unclaimed twin in the target."""

import logging
import math
from collections import Counter
from collections.abc import Sequence

from anagrama.models import CorrespondencePair, LetterRecord

logger = logging.getLogger(__name__)


class BalanceReport:
    """Letter-inventory difference between two texts."""

    def __init__(self, missing_in_target: Counter, missing_in_source: Counter) -> None:
        # letters the source has more of than the target, and vice versa
        self.missing_in_target = missing_in_target
        self.missing_in_source = missing_in_source

    @property
    def balanced(self) -> bool:
        return not self.missing_in_target and not self.missing_in_source

    def __repr__(self) -> str:
        if self.balanced:
            return "BalanceReport(balanced)"
        return (
            f"BalanceReport(unmatched source: {_format_counter(self.missing_in_target)}; "
            f"unclaimed target: {_format_counter(self.missing_in_source)})"
        )


def _format_counter(counter: Counter) -> str:
    if not counter:
        return "-"
    return " ".join(f"{ch}x{n}" for ch, n in sorted(counter.items()))


def letter_distance(a: LetterRecord, b: LetterRecord) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def match_letters(
    source: Sequence[LetterRecord],
    target: Sequence[LetterRecord],
) -> list[CorrespondencePair]:
    """Greedy nearest-neighbour correspondence from source to target.

    Source letters are visited in reading order; each claims the closest
    remaining target letter with the same normalized character (first in
    pool order on ties). Punctuation never matches. A source letter with no
    twin left is skipped and stays where it is.
    """
    pool = list(target)
    pairs: list[CorrespondencePair] = []
    skipped = 0

    for letter in source:
        if letter.is_punctuation:
            continue

        best_index = -1
        best_distance = math.inf
        for i, candidate in enumerate(pool):
            if candidate.is_punctuation or candidate.normalized_char != letter.normalized_char:
                continue
            distance = letter_distance(letter, candidate)
            if distance < best_distance:
                best_distance = distance
                best_index = i

        if best_index < 0:
            skipped += 1
            logger.debug(
                "No target twin left for %r at line %d col %d",
                letter.raw_char, letter.line_index, letter.column_index,
            )
            continue

        pairs.append(CorrespondencePair(
            source=letter,
            target=pool.pop(best_index),
            distance=best_distance,
        ))

    if skipped:
        logger.info("%d source letters have no counterpart and will stay in place", skipped)
    return pairs


def letter_inventory(letters: Sequence[LetterRecord]) -> Counter:
    return Counter(l.normalized_char for l in letters if not l.is_punctuation)


def check_balance(
    source: Sequence[LetterRecord],
    target: Sequence[LetterRecord],
) -> BalanceReport:
    """Compare letter inventories; a balanced pair matches every letter."""
    src = letter_inventory(source)
    tgt = letter_inventory(target)
    return BalanceReport(missing_in_target=src - tgt, missing_in_source=tgt - src)
