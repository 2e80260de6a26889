"""Resumable Knuth Morris Pratt matching over a stream of symbols."""
import warnings
from typing import Any, Optional

import numpy as np

from kmpstream._compat import njit
from kmpstream._symbols import as_symbol, as_symbols
from kmpstream.algorithms.failure import (
    advance_cursor,
    check_pattern,
    compute_kmp_failure_function,
)

# Length and cursor as native integers plus references to the two owned arrays.
_BOOKKEEPING_BYTES = 2 * np.dtype(np.int64).itemsize + 2 * np.dtype(np.intp).itemsize


@njit
def _feed_numba(
    cursor: int,
    chunk: np.ndarray,
    start: int,
    pat: np.ndarray,
    failure_function: np.ndarray,
):
    m = len(pat)
    output = np.empty(len(chunk), dtype=np.int64)
    matches = 0

    for j in range(len(chunk)):
        cursor = advance_cursor(cursor, chunk[j], pat, failure_function)
        if cursor == m - 1:
            output[matches] = start + j - m + 1
            matches += 1
            cursor = failure_function[cursor]

    return output[:matches], cursor


class StreamMatcher:
    """
    Incremental Knuth Morris Pratt matcher for a single stream of symbols.

    The matcher owns a private copy of the pattern and its failure table, so
    the caller's buffer may be modified or freed after construction. It does
    not count the symbols it has seen: every call to :meth:`step` or
    :meth:`feed` is told the stream index of its (first) symbol.

    A matcher must not be advanced by more than one thread at a time. Distinct
    matchers share no state.

    Parameters
    ----------
    pattern : bytes, str or sequence of int
        The non-empty pattern to search for.

    Examples
    --------
    >>> matcher = StreamMatcher("aa")
    >>> [matcher.step(c, j) for j, c in enumerate("aaa")]
    [None, 0, 1]
    """

    def __init__(self, pattern: Any):
        pat, kind = as_symbols(pattern, copy=True)
        check_pattern(pat)
        failure = compute_kmp_failure_function(pat)

        self._kind = kind
        self._length = len(pat)
        self._pattern: Optional[np.ndarray] = pat
        self._failure: Optional[np.ndarray] = failure
        self._cursor = -1

    def __len__(self) -> int:
        return self._length

    def __repr__(self) -> str:
        if self.released:
            return f"<StreamMatcher (released) length={self._length}>"
        return (
            f"<StreamMatcher {self._kind} length={self._length} "
            f"cursor={self._cursor}>"
        )

    def __enter__(self) -> "StreamMatcher":
        self._check_alive()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        if not self.released:
            self.release()

    def _check_alive(self) -> None:
        if self._pattern is None:
            raise ValueError("StreamMatcher has already been released")

    @property
    def released(self) -> bool:
        return self._pattern is None

    @property
    def cursor(self) -> int:
        """Index of the last matched pattern symbol, -1 if nothing matched."""
        return self._cursor

    @property
    def matched_length(self) -> int:
        """Length of the pattern prefix matching the end of the stream so far."""
        return self._cursor + 1

    @property
    def pattern(self) -> np.ndarray:
        """Read-only view of the owned pattern copy."""
        self._check_alive()
        view = self._pattern.view()
        view.flags.writeable = False
        return view

    @property
    def failure(self) -> np.ndarray:
        """Read-only view of the failure table."""
        self._check_alive()
        view = self._failure.view()
        view.flags.writeable = False
        return view

    def step(self, symbol: Any, index: int) -> Optional[int]:
        """
        Consume the next symbol of the stream.

        Parameters
        ----------
        symbol :
            The symbol at stream position ``index``; a single character for
            ``str`` patterns, an int or a single byte for ``bytes`` patterns
            and an int for token patterns.
        index : int
            Position of ``symbol`` in the logical text stream.

        Returns
        -------
        int or None
            Start position ``index - len(pattern) + 1`` of the occurrence that
            ends with ``symbol``, otherwise None.
        """
        self._check_alive()
        code = as_symbol(symbol, self._kind)
        cursor = advance_cursor(self._cursor, code, self._pattern, self._failure)
        if cursor == self._length - 1:
            self._cursor = int(self._failure[cursor])
            return index - self._length + 1
        self._cursor = int(cursor)
        return None

    def feed(self, chunk: Any, start: int = 0) -> np.ndarray:
        """
        Consume a chunk of symbols at once.

        Equivalent to calling :meth:`step` for every symbol of ``chunk`` with
        the indices ``start, start + 1, ...`` and collecting the results.

        Parameters
        ----------
        chunk : bytes, str or sequence of int
            Consecutive symbols of the stream, same alphabet as the pattern.
        start : int
            Stream position of the first symbol of ``chunk``.

        Returns
        -------
        np.ndarray
            int64 array of the start positions of all occurrences completed
            inside this chunk, in increasing order.
        """
        self._check_alive()
        arr, kind = as_symbols(chunk)
        if len(arr) == 0:
            return np.empty(0, dtype=np.int64)
        if kind != self._kind:
            raise TypeError(
                f"chunk uses the {kind} alphabet but pattern uses {self._kind}"
            )
        positions, cursor = _feed_numba(
            self._cursor, arr, start, self._pattern, self._failure
        )
        self._cursor = int(cursor)
        return positions

    def reset(self) -> None:
        """Forget any partial match, e.g. to start on a new stream."""
        self._check_alive()
        self._cursor = -1

    def footprint(self) -> int:
        """
        Approximate number of bytes held by this matcher.

        Counts the pattern copy, the failure table and the fixed bookkeeping.
        Intended for capacity planning only, the exact figure is not stable
        across platforms.
        """
        self._check_alive()
        return self._pattern.nbytes + self._failure.nbytes + _BOOKKEEPING_BYTES

    def release(self) -> None:
        """Drop the pattern copy and failure table; the matcher becomes unusable."""
        if self._pattern is None:
            warnings.warn("StreamMatcher has already been released", RuntimeWarning)
            return
        self._pattern = None
        self._failure = None
        self._cursor = -1


def build_stream(pattern: Any) -> StreamMatcher:
    """Create a :class:`StreamMatcher` for ``pattern``."""
    return StreamMatcher(pattern)
