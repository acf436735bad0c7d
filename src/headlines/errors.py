"""
Exceptions raised by the chain.

Recoverable conditions derive from ChainError. ChainCorruptedError is kept
outside that hierarchy: it means the build passes disagreed with each other,
and callers that handle ChainError must never swallow it.
"""
from __future__ import annotations


class ChainError(Exception):
    """Base class for recoverable chain errors."""


class EmptyChainError(ChainError):
    """The chain has no starting state to generate from."""


class MalformedChainError(ChainError):
    """A starting prefix holds fewer tokens than the chain's prefix length."""


class ChainCorruptedError(RuntimeError):
    """A token or prefix registered in an earlier pass is missing from its index."""
