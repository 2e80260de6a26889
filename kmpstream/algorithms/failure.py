"""The Knuth Morris Pratt failure function and the shared cursor step."""
from typing import Any

import numpy as np

from kmpstream._compat import njit
from kmpstream._symbols import as_symbols


@njit
def compute_kmp_failure_function(pat: np.ndarray) -> np.ndarray:
    """Compute the Knuth Moris Pratt failure function.

    Parameters
    ----------
    pat : np.ndarray
        The symbols of the pattern, must not be empty.

    Returns
    -------
    Numpy array f of len(pat) integers.
        f[0] = -1. For k > 0, f[k] is the index of the last symbol of the
        longest proper prefix of pat[:k + 1] that is also a suffix of it, or
        -1 if there is none. Since only proper prefixes are considered we
        have -1 <= f[k] < k.
    """
    length = len(pat)
    f = np.empty(length, dtype=np.int32)

    f[0] = -1
    i = -1
    for j in range(1, length):
        while i > -1 and pat[i + 1] != pat[j]:
            i = f[i]
        if pat[i + 1] == pat[j]:
            i += 1
        f[j] = i

    return f


@njit(inline="always")
def advance_cursor(
    cursor: int, symbol: int, pat: np.ndarray, failure_function: np.ndarray
) -> int:
    """Append a symbol to a Knuth Moris Pratt matching.

    Parameters
    ----------
    cursor: int
        Index of the last symbol of the longest prefix of `pat` that is a
        suffix of the text seen so far, -1 if no prefix matches. Must satisfy
        `-1 <= cursor < len(pat) - 1`.
    symbol: int
        The next symbol of the text.
    pat: np.ndarray
        The pattern that is searched in the text.
    failure_function: np.ndarray
        The failure function of `pat`, as computed by
        `compute_kmp_failure_function(pat)`.

    Returns
    -------
    int
        The cursor after appending `symbol`. A value of `len(pat) - 1` means
        that a complete occurrence of `pat` ends at `symbol`; callers have to
        fall back to `failure_function[len(pat) - 1]` before the next step.
    """
    while cursor > -1 and pat[cursor + 1] != symbol:
        cursor = failure_function[cursor]
    if pat[cursor + 1] == symbol:
        cursor += 1
    return cursor


def check_pattern(pat: np.ndarray) -> None:
    if len(pat) == 0:
        raise ValueError("pattern must contain at least one symbol")


def build_failure(pattern: Any) -> np.ndarray:
    """
    Build the failure table of ``pattern``.

    Parameters
    ----------
    pattern : bytes, str or sequence of int
        A non-empty pattern.

    Returns
    -------
    np.ndarray
        int32 array of ``len(pattern)`` entries using the -1-offset
        convention, see :func:`compute_kmp_failure_function`.

    Raises
    ------
    ValueError
        If the pattern is empty.

    Examples
    --------
    >>> build_failure("aabaa").tolist()
    [-1, 0, -1, 0, 1]
    """
    pat, _ = as_symbols(pattern)
    check_pattern(pat)
    return compute_kmp_failure_function(pat)
