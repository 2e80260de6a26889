"""Batch Knuth Morris Pratt search over a fully available text."""
from typing import Any

import numpy as np

from kmpstream._compat import njit
from kmpstream._symbols import as_pair
from kmpstream.algorithms.failure import (
    advance_cursor,
    check_pattern,
    compute_kmp_failure_function,
)


@njit
def _match_all_numba(text: np.ndarray, pat: np.ndarray) -> np.ndarray:
    failure_function = compute_kmp_failure_function(pat)
    m = len(pat)

    # At most one occurrence can start at each of the first n - m + 1 symbols.
    output = np.empty(max(len(text) - m + 1, 0), dtype=np.int64)
    matches = 0

    cursor = -1
    for j in range(len(text)):
        # Manually inlined advance_cursor for performance
        while cursor > -1 and pat[cursor + 1] != text[j]:
            cursor = failure_function[cursor]
        if pat[cursor + 1] == text[j]:
            cursor += 1

        if cursor == m - 1:
            output[matches] = j - m + 1
            matches += 1
            # Falling back instead of resetting keeps overlapping occurrences.
            cursor = failure_function[cursor]

    return output[:matches]


@njit
def _count_numba(text: np.ndarray, pat: np.ndarray, stop_at_first: bool) -> int:
    failure_function = compute_kmp_failure_function(pat)
    m = len(pat)
    matches = 0

    cursor = -1
    for j in range(len(text)):
        cursor = advance_cursor(cursor, text[j], pat, failure_function)
        if cursor == m - 1:
            matches += 1
            if stop_at_first:
                break
            cursor = failure_function[cursor]

    return matches


def match_all(text: Any, pattern: Any) -> np.ndarray:
    """
    Find all occurrences of ``pattern`` in ``text``.

    Occurrences may overlap, e.g. ``"aa"`` is found at ``[0, 1]`` in ``"aaa"``.

    Parameters
    ----------
    text : bytes, str or sequence of int
        The text to search, may be empty.
    pattern : bytes, str or sequence of int
        The non-empty pattern, using the same alphabet as ``text``.

    Returns
    -------
    np.ndarray
        Strictly increasing int64 array with the start offset of every
        occurrence. Empty if the pattern is longer than the text.

    Raises
    ------
    ValueError
        If the pattern is empty.
    TypeError
        If text and pattern use different symbol alphabets.
    """
    text_arr, pat_arr = as_pair(text, pattern)
    check_pattern(pat_arr)
    return _match_all_numba(text_arr, pat_arr)


def count_matches(text: Any, pattern: Any) -> int:
    """Count the (possibly overlapping) occurrences of ``pattern`` in ``text``."""
    text_arr, pat_arr = as_pair(text, pattern)
    check_pattern(pat_arr)
    return int(_count_numba(text_arr, pat_arr, False))


def contains(text: Any, pattern: Any) -> bool:
    """Check whether ``pattern`` occurs in ``text``, stopping at the first hit."""
    text_arr, pat_arr = as_pair(text, pattern)
    check_pattern(pat_arr)
    return _count_numba(text_arr, pat_arr, True) > 0
