import numpy as np
import pytest


def _as_str(s):
    return s


def _as_bytes(s):
    return s.encode("ascii")


def _as_tokens(s):
    return [ord(c) for c in s]


def _as_ndarray(s):
    return np.array([ord(c) for c in s], dtype=np.int32)


_encoders = {
    "str": _as_str,
    "bytes": _as_bytes,
    "tokens": _as_tokens,
    "ndarray": _as_ndarray,
}


@pytest.fixture(params=sorted(_encoders), scope="session")
def alphabet(request):
    """Name of the symbol alphabet a test runs with."""
    return request.param


@pytest.fixture(scope="session")
def encode(alphabet):
    """Convert an ASCII test string into the symbols of the current alphabet."""
    return _encoders[alphabet]
