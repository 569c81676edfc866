"""Engine components orchestrating fetch → parse → aggregate → render."""

from .aggregator import ResultAggregator, RunResult
from .dedup import UrlDeduplicator
from .fetcher import FetchError, FetchResponse, Fetcher, build_query_url
from .parser import ArchiveRecord, RecordParser, parse_line
from .pipeline import FetchPipeline
from .rate_limiter import RateLimiter, RateLimiterStopped
from .subdomains import collect_subdomains, extract_subdomain
from .thread_pool import GatedThreadPool

__all__ = [
    "ArchiveRecord",
    "FetchError",
    "FetchPipeline",
    "FetchResponse",
    "Fetcher",
    "GatedThreadPool",
    "RateLimiter",
    "RateLimiterStopped",
    "RecordParser",
    "ResultAggregator",
    "RunResult",
    "UrlDeduplicator",
    "build_query_url",
    "collect_subdomains",
    "extract_subdomain",
    "parse_line",
]
