"""Concurrency-safe state for an interactive line editor."""

__all__ = [
    "runtime",
    "state",
]

__version__ = "0.1.0"
