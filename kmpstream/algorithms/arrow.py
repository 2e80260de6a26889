"""Knuth Morris Pratt search on every row of Arrow string and binary arrays."""
from typing import Optional, Tuple, Union

import numpy as np
import pyarrow as pa

from kmpstream._compat import njit
from kmpstream.algorithms.failure import (
    advance_cursor,
    check_pattern,
    compute_kmp_failure_function,
)
from kmpstream.algorithms.utils.chunking import apply_per_chunk

EMPTY_BUFFER_VIEW = np.array([], dtype=np.uint8)


def _buffer_to_view(buf: Optional[pa.Buffer]) -> np.ndarray:
    """Extract the pyarrow.Buffer as np.ndarray[np.uint8]."""
    if buf is None:
        return EMPTY_BUFFER_VIEW
    else:
        return np.asanyarray(buf).view(np.uint8)


def _extract_string_buffers(arr: pa.Array) -> Tuple[np.ndarray, np.ndarray]:
    start = arr.offset
    end = arr.offset + len(arr)

    if pa.types.is_large_string(arr.type) or pa.types.is_large_binary(arr.type):
        offset_type = np.int64
    else:
        offset_type = np.int32

    offsets = _buffer_to_view(arr.buffers()[1]).view(offset_type)[start : end + 1]
    data = _buffer_to_view(arr.buffers()[2])

    return offsets, data


@njit(inline="always")
def _bit_is_set(bitmap: np.ndarray, bit: int) -> bool:
    return (bitmap[bit >> 3] >> (bit & 7)) & 1 == 1


@njit
def _scan_row(
    data: np.ndarray,
    begin: int,
    end: int,
    pat: np.ndarray,
    failure_function: np.ndarray,
    positions: np.ndarray,
    out_idx: int,
) -> int:
    """Count the occurrences in data[begin:end].

    Offsets relative to `begin` are written to `positions[out_idx:]` unless
    `positions` is empty.
    """
    m = len(pat)
    write = positions.size > 0
    found = 0
    cursor = -1
    for str_idx in range(begin, end):
        cursor = advance_cursor(cursor, data[str_idx], pat, failure_function)
        if cursor == m - 1:
            if write:
                positions[out_idx + found] = str_idx - begin - m + 1
            found += 1
            cursor = failure_function[cursor]
    return found


@njit
def _match_all_rows_numba(
    length: int,
    valid_bits: np.ndarray,
    valid_offset: int,
    offsets: np.ndarray,
    data: np.ndarray,
    pat: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    failure_function = compute_kmp_failure_function(pat)
    no_positions = np.empty(0, dtype=np.int64)

    has_nulls = valid_bits.size > 0

    # Bit-packed validity of the output, null rows stay null.
    output_valid = np.zeros((length + 7) // 8, np.uint8)

    # First pass: number of matches per row to size the list offsets.
    list_offsets = np.empty(length + 1, dtype=np.int32)
    list_offsets[0] = 0
    for row_idx in range(length):
        list_offsets[row_idx + 1] = list_offsets[row_idx]
        if has_nulls and not _bit_is_set(valid_bits, row_idx + valid_offset):
            continue
        output_valid[row_idx >> 3] |= np.uint8(1 << (row_idx & 7))
        list_offsets[row_idx + 1] += _scan_row(
            data,
            offsets[row_idx],
            offsets[row_idx + 1],
            pat,
            failure_function,
            no_positions,
            0,
        )

    # Second pass: write the positions relative to the start of each row.
    positions = np.empty(list_offsets[length], dtype=np.int64)
    for row_idx in range(length):
        if list_offsets[row_idx + 1] > list_offsets[row_idx]:
            _scan_row(
                data,
                offsets[row_idx],
                offsets[row_idx + 1],
                pat,
                failure_function,
                positions,
                list_offsets[row_idx],
            )

    return list_offsets, positions, output_valid


@apply_per_chunk
def _match_all_array(data: pa.Array, pat: bytes) -> pa.Array:
    offsets_buffer, data_buffer = _extract_string_buffers(data)

    if data.null_count == 0:
        valid_buffer = np.empty(0, dtype=np.uint8)
    else:
        valid_buffer = _buffer_to_view(data.buffers()[0])

    list_offsets, positions, output_valid = _match_all_rows_numba(
        len(data),
        valid_buffer,
        data.offset,
        offsets_buffer,
        data_buffer,
        np.frombuffer(pat, dtype=np.uint8),
    )

    values = pa.array(positions, type=pa.int64())
    buffers = [
        pa.py_buffer(output_valid) if data.null_count > 0 else None,
        pa.py_buffer(list_offsets),
    ]
    return pa.Array.from_buffers(
        pa.list_(pa.int64()), len(data), buffers, data.null_count, children=[values]
    )


def match_all_array(
    arr: Union[pa.Array, pa.ChunkedArray], pattern: Union[str, bytes]
) -> Union[pa.Array, pa.ChunkedArray]:
    """
    Find all occurrences of ``pattern`` in every row of a string or binary array.

    This implementation does byte-by-byte comparison of the UTF-8
    representation and is independent of any locales.

    Parameters
    ----------
    arr : pa.Array or pa.ChunkedArray
        Array of type string, binary, large_string or large_binary.
    pattern : str or bytes
        The non-empty pattern; ``str`` patterns are UTF-8 encoded.

    Returns
    -------
    pa.Array or pa.ChunkedArray
        ``list<int64>`` array holding the byte offsets of the occurrences in
        each row. Null rows are null in the result.
    """
    typ = arr.type
    if not (
        pa.types.is_string(typ)
        or pa.types.is_binary(typ)
        or pa.types.is_large_string(typ)
        or pa.types.is_large_binary(typ)
    ):
        raise TypeError(f"Cannot search rows of an array of type {typ}")
    if isinstance(pattern, str):
        pattern = pattern.encode("utf-8")
    elif not isinstance(pattern, (bytes, bytearray)):
        raise TypeError(f"Cannot search rows for a pattern of type {type(pattern)}")
    check_pattern(pattern)
    return _match_all_array(arr, bytes(pattern))
