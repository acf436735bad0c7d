"""
Headlines Phrase Generator

This package builds a word-level Markov chain from a corpus of line-delimited
phrases (headlines, titles, one-liners) and generates new phrases from it by
frequency-weighted random walks.

The package is organised leaf-first:
- index: sorted, interned token registry (TokenIndex)
- tokenizer: line-by-line, single-space stream tokenizer
- chain: the three-pass build pipeline and phrase generation (Chain)
- loader / engine: corpus opening and orchestration used by the front ends

Example Usage:
    from headlines import Engine

    eng = Engine()
    eng.build("corpus.txt", prefix_length=2)
    for phrase in eng.generate(20, count=3):
        print(phrase.text)
"""

# src/headlines/__init__.py
from .chain import Chain
from .engine import Engine
from .errors import ChainError, EmptyChainError, MalformedChainError, ChainCorruptedError
from .index import TokenIndex
from .models import ChainStats, GeneratedPhrase

__version__ = "1.0.0"
__all__ = [
    "Chain",
    "Engine",
    "TokenIndex",
    "ChainStats",
    "GeneratedPhrase",
    "ChainError",
    "EmptyChainError",
    "MalformedChainError",
    "ChainCorruptedError",
]
