"""Conversion of the supported symbol alphabets into numpy arrays."""
from typing import Any, Tuple

import numpy as np

BYTES = "bytes"
STR = "str"
INT = "int"


_INT64_MAX = np.iinfo(np.int64).max


def _as_tokens(arr: np.ndarray) -> np.ndarray:
    # uint64 ids do not compare exactly against signed ones inside the kernels.
    if arr.dtype != np.uint64:
        return arr
    if arr.size > 0 and arr.max() > _INT64_MAX:
        raise TypeError("token ids must fit into a signed 64 bit integer")
    return arr.astype(np.int64)


def as_symbols(seq: Any, copy: bool = False) -> Tuple[np.ndarray, str]:
    """
    Convert a sequence of symbols into a one-dimensional numpy array.

    Parameters
    ----------
    seq : bytes, bytearray, memoryview, str, np.ndarray or sequence of int
        The symbols. ``bytes``-like objects and ``uint8`` arrays use the byte
        alphabet, ``str`` uses code points and everything else is treated as a
        sequence of integer token ids.
    copy : bool
        Always return a freshly allocated, writable array that does not share
        memory with ``seq``.

    Returns
    -------
    Tuple of the symbol array and the name of its alphabet.
    """
    if isinstance(seq, str):
        # Lone surrogates are valid code points of a Python str.
        arr = np.frombuffer(seq.encode("utf-32-le", "surrogatepass"), np.uint32)
        kind = STR
    elif isinstance(seq, (bytes, bytearray, memoryview)):
        arr = np.frombuffer(seq, dtype=np.uint8)
        kind = BYTES
    elif isinstance(seq, np.ndarray):
        if seq.ndim != 1:
            raise ValueError("symbol arrays must be one-dimensional")
        if seq.dtype == np.uint8:
            arr = seq
            kind = BYTES
        elif np.issubdtype(seq.dtype, np.integer):
            arr = _as_tokens(seq)
            kind = INT
        else:
            raise TypeError(f"Cannot use arrays of dtype {seq.dtype} as symbols")
    else:
        try:
            arr = np.asarray(seq)
        except (TypeError, ValueError) as err:
            raise TypeError(f"Cannot use {type(seq)} as a symbol sequence") from err
        if arr.size == 0:
            arr = np.empty(0, dtype=np.int64)
        elif arr.ndim != 1 or not np.issubdtype(arr.dtype, np.integer):
            raise TypeError(f"Cannot use {type(seq)} as a symbol sequence")
        arr = _as_tokens(arr).astype(np.int64, copy=False)
        kind = INT

    if copy:
        arr = np.array(arr, copy=True)
    return arr, kind


def symbol_count(seq: Any) -> int:
    """Number of symbols in ``seq``, bytes-like objects count their bytes."""
    if isinstance(seq, (bytes, bytearray, memoryview)):
        return memoryview(seq).nbytes
    return len(seq)


def as_pair(text: Any, pattern: Any) -> Tuple[np.ndarray, np.ndarray]:
    """Convert text and pattern, checking that both use the same alphabet."""
    text_arr, text_kind = as_symbols(text)
    pat_arr, pat_kind = as_symbols(pattern)
    if text_kind != pat_kind and text_arr.size > 0:
        raise TypeError(
            f"text uses the {text_kind} alphabet but pattern uses {pat_kind}"
        )
    return text_arr, pat_arr


def as_symbol(symbol: Any, kind: str) -> int:
    """Convert a single symbol of the given alphabet into its integer code."""
    if kind == STR:
        if not isinstance(symbol, str) or len(symbol) != 1:
            raise TypeError("symbols of a str pattern must be single characters")
        return ord(symbol)
    if kind == BYTES:
        if isinstance(symbol, (bytes, bytearray)):
            if len(symbol) != 1:
                raise TypeError("symbols of a bytes pattern must be single bytes")
            return symbol[0]
        if isinstance(symbol, (int, np.integer)) and not isinstance(symbol, bool):
            return int(symbol)
        raise TypeError("symbols of a bytes pattern must be ints or single bytes")
    if isinstance(symbol, (int, np.integer)) and not isinstance(symbol, bool):
        return int(symbol)
    raise TypeError("symbols of a token pattern must be ints")
