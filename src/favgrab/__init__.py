"""
favgrab - Favicon and page metadata lookup through a CORS relay.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config
from .exceptions import FavgrabError, FetchFailed, InvalidURL
from .normalizer import normalize
from .pipeline import LookupPipeline, LookupSession

__all__ = [
    "__version__",
    "Config",
    "FavgrabError",
    "FetchFailed",
    "InvalidURL",
    "LookupPipeline",
    "LookupSession",
    "normalize",
]
