from importlib.metadata import PackageNotFoundError, version

from .algorithms.arrow import match_all_array
from .algorithms.batch import contains, count_matches, match_all
from .algorithms.failure import build_failure
from .io import iter_matches, search_file
from .stream import StreamMatcher, build_stream

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    __version__ = "unknown"

__all__ = [
    "StreamMatcher",
    "build_failure",
    "build_stream",
    "contains",
    "count_matches",
    "iter_matches",
    "match_all",
    "match_all_array",
    "search_file",
    "__version__",
]
