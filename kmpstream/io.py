import logging
import os
from typing import IO, Any, Iterable, Iterator, Union

from kmpstream._symbols import symbol_count
from kmpstream.stream import StreamMatcher

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1 << 16


def _iter_matches(chunks: Iterable[Any], matcher: StreamMatcher) -> Iterator[int]:
    with matcher:
        offset = 0
        for chunk in chunks:
            for position in matcher.feed(chunk, offset):
                yield int(position)
            offset += symbol_count(chunk)


def iter_matches(chunks: Iterable[Any], pattern: Any) -> Iterator[int]:
    """
    Search an iterable of consecutive chunks, e.g. from a live source.

    Parameters
    ----------
    chunks : iterable of bytes, str or sequences of int
        Consecutive pieces of the text; they may have any length, including
        zero, and occurrences may span several of them. Bytes-like chunks
        advance the stream position by their size in bytes.
    pattern : bytes, str or sequence of int
        The non-empty pattern, same alphabet as the chunks.

    Returns
    -------
    Iterator[int]
        Start position of every occurrence, relative to the beginning of the
        first chunk, as soon as the chunk completing it has been consumed.

    Raises
    ------
    ValueError
        If the pattern is empty; raised by the call itself, not on iteration.
    """
    return _iter_matches(chunks, StreamMatcher(pattern))


def _read_chunks(fileobj: IO[bytes], chunk_size: int) -> Iterator[bytes]:
    while True:
        chunk = fileobj.read(chunk_size)
        if not chunk:
            return
        yield chunk


def _search_file(
    source: Union[str, os.PathLike, IO[bytes]], matcher: StreamMatcher, chunk_size: int
) -> Iterator[int]:
    if isinstance(source, (str, os.PathLike)):
        logger.debug("Searching %s in chunks of %d bytes", source, chunk_size)
        with open(source, "rb") as fileobj:
            yield from _iter_matches(_read_chunks(fileobj, chunk_size), matcher)
    else:
        logger.debug("Searching file object in chunks of %d bytes", chunk_size)
        yield from _iter_matches(_read_chunks(source, chunk_size), matcher)


def search_file(
    source: Union[str, os.PathLike, IO[bytes]],
    pattern: Any,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Iterator[int]:
    """
    Search a file for ``pattern`` without loading it into memory.

    Parameters
    ----------
    source : str, os.PathLike or binary file object
        Path of the file or an object opened for reading in binary mode. File
        objects are read from their current position and are not closed.
    pattern : bytes or str
        The non-empty pattern; ``str`` patterns are UTF-8 encoded.
    chunk_size : int
        Number of bytes read at once.

    Returns
    -------
    Iterator[int]
        Byte offset of every occurrence, relative to where reading started.
        The file is opened lazily, on the first step of the iterator.

    Raises
    ------
    ValueError
        If the pattern is empty or ``chunk_size`` is not positive.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if isinstance(pattern, str):
        pattern = pattern.encode("utf-8")
    return _search_file(source, StreamMatcher(pattern), chunk_size)
