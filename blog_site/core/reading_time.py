"""
Reading-time estimation.

Words are runs of non-whitespace characters. Each CJK character counts as
a word on its own, and punctuation directly after a CJK character is not
counted again.
"""

from __future__ import annotations

import math
import re

from .types import ReadingTime


_CJK_RE = re.compile(
    r"["
    r"\u3040-\u309f"  # hiragana
    r"\u30a0-\u30ff"  # katakana
    r"\u3400-\u4dbf"  # CJK extension A
    r"\u4e00-\u9fff"  # CJK unified ideographs
    r"\uf900-\ufaff"  # CJK compatibility ideographs
    r"\uac00-\ud7af"  # hangul syllables
    r"]"
)
_PUNCTUATION_RE = re.compile(
    r"["
    r"!-/:-@\[-`{-~"
    r"\u3000-\u303f"  # CJK symbols and punctuation
    r"\uff00-\uffef"  # halfwidth and fullwidth forms
    r"]"
)
_WHITESPACE = {" ", "\n", "\r", "\t"}


def _is_cjk(ch: str) -> bool:
    return bool(_CJK_RE.match(ch))


def _is_punctuation(ch: str) -> bool:
    return bool(_PUNCTUATION_RE.match(ch))


def count_words(text: str) -> int:
    words = 0
    start = 0
    end = len(text) - 1
    while start <= end and text[start] in _WHITESPACE:
        start += 1
    while end >= start and text[end] in _WHITESPACE:
        end -= 1

    padded = text + "\n"
    i = start
    while i <= end:
        ch = padded[i]
        nxt = padded[i + 1]
        if _is_cjk(ch) or (
            ch not in _WHITESPACE and (nxt in _WHITESPACE or _is_cjk(nxt))
        ):
            words += 1
        if _is_cjk(ch):
            while i <= end and (
                _is_punctuation(padded[i + 1]) or padded[i + 1] in _WHITESPACE
            ):
                i += 1
        i += 1
    return words


def reading_time(text: str, words_per_minute: int = 200) -> ReadingTime:
    """Estimate how long ``text`` takes to read.

    Args:
        text: Plain or Markdown text
        words_per_minute: Reading speed

    Returns:
        ReadingTime with the rounded-up minute estimate as display text
    """
    if words_per_minute <= 0:
        raise ValueError("words_per_minute must be positive")
    words = count_words(text)
    minutes = words / words_per_minute
    time_ms = round(minutes * 60 * 1000)
    displayed = math.ceil(round(minutes, 2))
    return ReadingTime(
        text=f"{displayed} min read",
        minutes=minutes,
        time=time_ms,
        words=words,
    )
