"""GitHub infrastructure for Sprint Tracker.

Provides the gh-backed issue tracker client.
"""

from sprint_tracker.infrastructure.github.client import GhClient, parse_remote_url

__all__ = [
    "GhClient",
    "parse_remote_url",
]
