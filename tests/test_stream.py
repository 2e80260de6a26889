import hypothesis.strategies as st
import numpy as np
import numpy.testing as npt
import pytest
from hypothesis import example, given, settings

from kmpstream import StreamMatcher, build_failure, build_stream, match_all
from kmpstream.stream import _BOOKKEEPING_BYTES
from kmpstream.testing import split_st, text_pattern_st


def step_through(matcher, text, start=0):
    results = []
    for j, symbol in enumerate(text, start):
        position = matcher.step(symbol, j)
        if position is not None:
            results.append(position)
    return results


def test_step_reports_start_positions():
    matcher = StreamMatcher("aa")
    assert [matcher.step(c, j) for j, c in enumerate("aaaa")] == [None, 0, 1, 2]


def test_step_fixed_cases(encode):
    matcher = build_stream(encode("a"))
    assert step_through(matcher, encode("banana")) == [1, 3, 5]

    matcher = build_stream(encode("xyz"))
    assert step_through(matcher, encode("abcabc")) == []

    matcher = build_stream(encode("abcabc"))
    assert step_through(matcher, encode("abcabc")) == [0]


@settings(deadline=None)
@given(data_tuple=text_pattern_st())
@example(data_tuple=("aaaa", "aa"))
@example(data_tuple=("a", "aa"))
def test_stream_equals_batch(data_tuple):
    text, pattern = data_tuple
    matcher = StreamMatcher(pattern)
    assert step_through(matcher, text) == match_all(text, pattern).tolist()


@settings(deadline=None)
@given(data_tuple=text_pattern_st())
def test_stream_equals_batch_bytes(data_tuple):
    text, pattern = (s.encode("ascii") for s in data_tuple)
    matcher = StreamMatcher(pattern)
    # Iterating bytes yields ints
    assert step_through(matcher, text) == match_all(text, pattern).tolist()


@settings(deadline=None)
@given(data_tuple=text_pattern_st(), data=st.data())
def test_feed_equals_batch(data_tuple, data):
    text, pattern = data_tuple
    chunks = data.draw(split_st(text))

    matcher = StreamMatcher(pattern)
    results = []
    offset = 0
    for chunk in chunks:
        results.extend(matcher.feed(chunk, offset).tolist())
        offset += len(chunk)

    assert results == match_all(text, pattern).tolist()


def test_step_and_feed_can_be_mixed():
    matcher = StreamMatcher(b"abab")
    assert matcher.feed(b"aba", 0).tolist() == []
    assert matcher.step(b"b", 3) == 0
    assert matcher.feed(b"ab", 4).tolist() == [2]
    assert matcher.feed(b"", 6).dtype == np.int64


def test_caller_positions_are_used_as_given():
    matcher = StreamMatcher("ab")
    assert matcher.step("a", 100) is None
    assert matcher.step("b", 101) == 100
    assert matcher.feed("ab", 1000).tolist() == [1000]


def test_text_shorter_than_pattern_never_matches(encode):
    matcher = StreamMatcher(encode("abcd"))
    assert step_through(matcher, encode("abc")) == []
    assert matcher.matched_length == 3


def test_cursor_and_reset():
    matcher = StreamMatcher("aab")
    assert matcher.cursor == -1
    matcher.step("a", 0)
    matcher.step("a", 1)
    assert matcher.cursor == 1
    assert matcher.matched_length == 2

    matcher.reset()
    assert matcher.cursor == -1
    assert matcher.step("b", 2) is None


def test_pattern_is_copied():
    buf = bytearray(b"ab")
    matcher = StreamMatcher(buf)
    buf[0:2] = b"xy"
    assert step_through(matcher, b"xyab") == [2]

    arr = np.array([1, 2], dtype=np.int64)
    matcher = StreamMatcher(arr)
    arr[:] = 0
    npt.assert_array_equal(matcher.pattern, [1, 2])


def test_exposed_arrays_are_read_only():
    matcher = StreamMatcher("abab")
    npt.assert_array_equal(matcher.failure, build_failure("abab"))
    with pytest.raises(ValueError):
        matcher.failure[0] = 3
    with pytest.raises(ValueError):
        matcher.pattern[0] = 3
    assert len(matcher) == 4


@pytest.mark.parametrize(
    "pattern, symbol_size", [(b"abc", 1), ("abc", 4), ([1, 2, 3], 8)]
)
def test_footprint(pattern, symbol_size):
    matcher = StreamMatcher(pattern)
    expected = 3 * symbol_size + 3 * np.dtype(np.int32).itemsize + _BOOKKEEPING_BYTES
    assert matcher.footprint() == expected
    assert StreamMatcher(pattern * 2).footprint() > matcher.footprint()


def test_release():
    matcher = StreamMatcher("ab")
    matcher.release()
    assert matcher.released

    with pytest.raises(ValueError):
        matcher.step("a", 0)
    with pytest.raises(ValueError):
        matcher.feed("ab", 0)
    with pytest.raises(ValueError):
        matcher.footprint()
    with pytest.raises(ValueError):
        matcher.reset()
    with pytest.raises(ValueError):
        matcher.pattern
    with pytest.warns(RuntimeWarning):
        matcher.release()
    assert "released" in repr(matcher)


def test_context_manager():
    with StreamMatcher("ab") as matcher:
        assert matcher.step("a", 0) is None
        assert matcher.step("b", 1) == 0
    assert matcher.released

    with pytest.raises(ValueError):
        with matcher:
            pass


def test_empty_pattern_is_rejected(encode):
    with pytest.raises(ValueError):
        StreamMatcher(encode(""))


@pytest.mark.parametrize(
    "pattern, symbol",
    [("ab", "ab"), ("ab", 97), (b"ab", "a"), (b"ab", b"ab"), ([1, 2], "a")],
)
def test_wrong_symbol_type(pattern, symbol):
    matcher = StreamMatcher(pattern)
    with pytest.raises(TypeError):
        matcher.step(symbol, 0)


def test_wrong_chunk_alphabet():
    matcher = StreamMatcher("ab")
    with pytest.raises(TypeError):
        matcher.feed(b"ab", 0)


def test_matchers_are_independent():
    first = StreamMatcher("ab")
    second = StreamMatcher("ab")
    first.step("a", 0)
    assert second.step("b", 0) is None
    assert first.step("b", 1) == 0
