"""Split a text into positioned letter records."""

import re

from anagrama.models import LetterRecord, LetterRole, TypographyPlan

ACCENTED_MAP = {
    "Á": "a", "É": "e", "Í": "i", "Ó": "o", "Ú": "u", "Ü": "u",
    "á": "a", "é": "e", "í": "i", "ó": "o", "ú": "u", "ü": "u",
}

# Accented lowercase vowels are included on purpose: they swap to their
# plain form during normalization just like capitals do.
_UPPERCASE_RE = re.compile(r"[A-ZÁÉÍÓÚÜáéíóúü]")
_WORD_RE = re.compile(r"[A-Za-z0-9_ÁÉÍÓÚÜáéíóúü]")


def normalize_char(char: str) -> str:
    if is_punctuation(char):
        return char
    return ACCENTED_MAP.get(char) or char.lower()


def is_uppercase(char: str) -> bool:
    return _UPPERCASE_RE.fullmatch(char) is not None


def is_punctuation(char: str) -> bool:
    return _WORD_RE.fullmatch(char) is None and not char.isspace()


def tokenize(
    text: str,
    role: LetterRole,
    plan: TypographyPlan,
) -> list[LetterRecord]:
    """Build one LetterRecord per non-whitespace character, in reading order.

    Source letters start with the raw layer showing. Target letters are laid
    out transparently at their final positions: letters are hidden
    placeholders, punctuation stays in the scene to be revealed later.
    """
    letters: list[LetterRecord] = []

    for line_index, line in enumerate(text.split("\n")):
        for column_index, char in enumerate(line):
            if char.isspace():
                continue

            normalized = normalize_char(char)
            punctuation = is_punctuation(char)
            x = plan.origin_x + column_index * plan.char_width
            y = plan.origin_y + line_index * plan.line_height

            letter = LetterRecord(
                index=len(letters),
                raw_char=char,
                normalized_char=normalized,
                is_uppercase=is_uppercase(char),
                is_punctuation=punctuation,
                line_index=line_index,
                column_index=column_index,
                x=x,
                y=y,
                role=role,
                displayed_raw=char,
                displayed_normalized="" if punctuation else normalized,
                current_x=x,
                current_y=y,
            )

            if role is LetterRole.SOURCE:
                letter.raw_opacity = 1.0
                letter.normalized_opacity = 0.0
            else:
                letter.raw_opacity = 0.0
                letter.normalized_opacity = 0.0
                letter.visible = punctuation
                letter.interactive = False

            letters.append(letter)

    return letters
