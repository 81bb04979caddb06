"""Adapters - I/O implementations of ports."""

from .errors import FetchError, TransportError, ServerError, MalformedResponseError
from .hiring_api import HiringApiSource, parse_records
from .json_file import JsonFileSource

__all__ = [
    "FetchError",
    "TransportError",
    "ServerError",
    "MalformedResponseError",
    "HiringApiSource",
    "JsonFileSource",
    "parse_records",
]
