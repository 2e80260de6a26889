"""Helpers for testing code built on top of kmpstream."""
import string
from typing import List, Sequence, Tuple

import hypothesis.strategies as st


def naive_match_all(text: Sequence, pattern: Sequence) -> List[int]:
    """Reference implementation comparing the pattern at every text position."""
    m = len(pattern)
    return [
        p for p in range(len(text) - m + 1) if list(text[p : p + m]) == list(pattern)
    ]


@st.composite
def text_pattern_st(draw, max_len: int = 50) -> Tuple[str, str]:
    """
    Draw a text and a non-empty pattern over a small or a larger alphabet.

    Small alphabets make overlapping and repeated occurrences likely, which is
    where failure table mistakes show up.
    """
    charset = draw(st.sampled_from(("ab", "abc", string.ascii_letters)))
    fixed_pattern_st = st.sampled_from(["a", "aa", "aab", "aabaa", "abab"])
    generated_pattern_st = st.text(alphabet=charset, min_size=1, max_size=max_len)
    pattern = draw(st.one_of(fixed_pattern_st, generated_pattern_st))

    text = draw(st.text(alphabet=charset, max_size=max_len))
    # Plant a few occurrences so that not every example is a miss.
    for _ in range(draw(st.integers(min_value=0, max_value=3))):
        pos = draw(st.integers(min_value=0, max_value=len(text)))
        text = text[:pos] + pattern + text[pos:]
    return text, pattern


@st.composite
def split_st(draw, text: Sequence) -> List[Sequence]:
    """Split ``text`` into consecutive, possibly empty, chunks."""
    cuts = sorted(
        draw(st.lists(st.integers(min_value=0, max_value=len(text)), max_size=10))
    )
    bounds = [0] + cuts + [len(text)]
    return [text[a:b] for a, b in zip(bounds, bounds[1:])]
