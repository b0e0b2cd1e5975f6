"""Input-handling strategies: identity, web and repository."""

from .base import Strategy, fetch_ok
from .identity import IdentityStrategy
from .repository import RepositoryStrategy, parse_repository, rewrite_host
from .web import WebStrategy

__all__ = [
    "Strategy",
    "fetch_ok",
    "IdentityStrategy",
    "RepositoryStrategy",
    "WebStrategy",
    "parse_repository",
    "rewrite_host",
]
