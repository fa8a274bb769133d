"""Hangul helpers used for Korean-aware matching.

Syllable blocks are decomposed arithmetically from the Unicode layout:
``code = 0xAC00 + (initial * 21 + medial) * 28 + final``. Decomposed jamo
are emitted as compatibility jamo (U+3130 block) so that a chosung query
typed on a Korean keyboard compares equal to the extracted initials.
"""

from __future__ import annotations

import logging

LOGGER = logging.getLogger(__name__)

SYLLABLE_BASE = 0xAC00
SYLLABLE_LAST = 0xD7A3
MEDIAL_COUNT = 21
FINAL_COUNT = 28
BLOCK_SIZE = MEDIAL_COUNT * FINAL_COUNT

# Hangul Syllables, Jamo, Compatibility Jamo, Jamo Extended-A, Jamo Extended-B
KOREAN_RANGES = (
    (0xAC00, 0xD7AF),
    (0x1100, 0x11FF),
    (0x3130, 0x318F),
    (0xA960, 0xA97F),
    (0xD7B0, 0xD7FF),
)

CHOSEONG = "ㄱㄲㄴㄷㄸㄹㅁㅂㅃㅅㅆㅇㅈㅉㅊㅋㅌㅍㅎ"
JUNGSEONG = "ㅏㅐㅑㅒㅓㅔㅕㅖㅗㅘㅙㅚㅛㅜㅝㅞㅟㅠㅡㅢㅣ"
JONGSEONG = (
    "", "ㄱ", "ㄲ", "ㄳ", "ㄴ", "ㄵ", "ㄶ", "ㄷ", "ㄹ", "ㄺ", "ㄻ", "ㄼ", "ㄽ", "ㄾ",
    "ㄿ", "ㅀ", "ㅁ", "ㅂ", "ㅄ", "ㅅ", "ㅆ", "ㅇ", "ㅈ", "ㅊ", "ㅋ", "ㅌ", "ㅍ", "ㅎ",
)

# Compound letters split into the basic letters they are typed with.
COMPOUND_JAMO = {
    "ㅘ": "ㅗㅏ",
    "ㅙ": "ㅗㅐ",
    "ㅚ": "ㅗㅣ",
    "ㅝ": "ㅜㅓ",
    "ㅞ": "ㅜㅔ",
    "ㅟ": "ㅜㅣ",
    "ㅢ": "ㅡㅣ",
    "ㄳ": "ㄱㅅ",
    "ㄵ": "ㄴㅈ",
    "ㄶ": "ㄴㅎ",
    "ㄺ": "ㄹㄱ",
    "ㄻ": "ㄹㅁ",
    "ㄼ": "ㄹㅂ",
    "ㄽ": "ㄹㅅ",
    "ㄾ": "ㄹㅌ",
    "ㄿ": "ㄹㅍ",
    "ㅀ": "ㄹㅎ",
    "ㅄ": "ㅂㅅ",
}

CONJOINING_INITIAL_FIRST = 0x1100
CONJOINING_INITIAL_LAST = 0x1112


class HangulError(ValueError):
    """Raised when text cannot be decomposed into jamo."""


def _ensure_well_formed(text: str) -> None:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise HangulError(f"Malformed text at position {exc.start}") from exc


def _is_syllable(code: int) -> bool:
    return SYLLABLE_BASE <= code <= SYLLABLE_LAST


def is_korean(char: str) -> bool:
    """Return True when ``char`` lies in one of the Hangul blocks."""
    if not char:
        return False
    code = ord(char[0])
    return any(low <= code <= high for low, high in KOREAN_RANGES)


def contains_korean(text: str) -> bool:
    return any(is_korean(char) for char in text)


def is_chosung_only(text: str) -> bool:
    """True for a non-empty string made only of consonant letters (ㄱ-ㅎ)."""
    return bool(text) and all("ㄱ" <= char <= "ㅎ" for char in text)


def get_choseong(text: str) -> str:
    """Extract the initial consonant of every syllable in ``text``.

    Consonant letters and whitespace are kept; anything else is dropped,
    so ``"프로젝트 A"`` becomes ``"ㅍㄹㅈㅌ "``.
    """
    _ensure_well_formed(text)
    initials = []
    for char in text:
        code = ord(char)
        if _is_syllable(code):
            initials.append(CHOSEONG[(code - SYLLABLE_BASE) // BLOCK_SIZE])
        elif CONJOINING_INITIAL_FIRST <= code <= CONJOINING_INITIAL_LAST:
            initials.append(CHOSEONG[code - CONJOINING_INITIAL_FIRST])
        elif "ㄱ" <= char <= "ㅎ" or char.isspace():
            initials.append(char)
    return "".join(initials)


def disassemble(text: str) -> str:
    """Break every syllable into its basic jamo letters.

    >>> disassemble("값")
    'ㄱㅏㅂㅅ'
    >>> disassemble("와 ok")
    'ㅇㅗㅏ ok'
    """
    _ensure_well_formed(text)
    letters = []
    for char in text:
        code = ord(char)
        if _is_syllable(code):
            offset = code - SYLLABLE_BASE
            initial, rest = divmod(offset, BLOCK_SIZE)
            medial, final = divmod(rest, FINAL_COUNT)
            letters.append(CHOSEONG[initial])
            letters.append(COMPOUND_JAMO.get(JUNGSEONG[medial], JUNGSEONG[medial]))
            jong = JONGSEONG[final]
            letters.append(COMPOUND_JAMO.get(jong, jong))
        else:
            letters.append(COMPOUND_JAMO.get(char, char))
    return "".join(letters)


def chosung_includes(text: str, chosung_query: str) -> bool:
    """``chosung_includes("프로젝트", "ㅍㄹㅈ")`` is True."""
    return chosung_query in get_choseong(text)


def korean_match(text: str, query: str) -> bool:
    """Korean-aware containment test; never raises.

    Tries a case-insensitive substring match, then a chosung match for
    consonant-only queries, then a jamo-level match for Korean queries.
    """
    if query.lower() in text.lower():
        return True

    if is_chosung_only(query):
        try:
            return chosung_includes(text, query)
        except HangulError as exc:
            LOGGER.debug("Chosung match skipped: %s", exc)
            return False

    if contains_korean(query):
        try:
            return disassemble(query).lower() in disassemble(text).lower()
        except HangulError as exc:
            LOGGER.debug("Jamo match skipped: %s", exc)
            return False

    return False
