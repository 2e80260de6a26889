"""Utility functions to deal with chunked arrays."""

from functools import wraps
from typing import Union

import pyarrow as pa


def apply_per_chunk(func):
    """Apply a function to each chunk if the input is chunked."""

    @wraps(func)
    def wrapper(arr: Union[pa.Array, pa.ChunkedArray], *args, **kwargs):
        if isinstance(arr, pa.ChunkedArray):
            return pa.chunked_array(
                [func(chunk, *args, **kwargs) for chunk in arr.chunks],
                type=pa.list_(pa.int64()),
            )
        else:
            return func(arr, *args, **kwargs)

    return wrapper
