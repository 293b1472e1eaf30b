"""Generate and parse UUIDs of every RFC 9562 version."""

__version__ = "1.16.0"

__all__ = [
    "context",
    "hashing",
    "non_nil",
    "parser",
    "rng",
    "timed",
    "timestamp",
    "versions",
]