# headlines/engine.py
from __future__ import annotations

import logging
import random
import sys
from typing import BinaryIO, List, Optional

from . import config as CFG
from .chain import Chain
from .loader import open_corpus
from .models import ChainStats, GeneratedPhrase
from .tokenizer import split_tokens

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - corpus loading (loader.open_corpus: file, directory or stdin),
      - the Markov chain (chain.Chain),
      - per-engine randomness (an explicit seed or the process-wide source).

    Public API (used by CLI/Flask/GUI):
      * build(source | stream, ...): open corpus -> build chain
      * generate(max_length, count): return generated phrases
      * stats():                     ChainStats of the built chain
      * shutdown():                  drop the chain
    """

    # ------------- lifecycle -------------

    def __init__(self) -> None:
        self.chain: Optional[Chain] = None

    @property
    def ready(self) -> bool:
        return self.chain is not None

    # /* ~~~ Build a chain from a corpus path or an already-open byte stream ~~~ */
    def build(
        self,
        source: Optional[str] = None,            # file, directory, or "-" for stdin
        *,
        stream: Optional[BinaryIO] = None,
        prefix_length: Optional[int] = None,     # defaults to config.PREFIX_LENGTH
        seed: Optional[int] = None,              # fixed seed -> reproducible phrases
        verbose: bool = False,
    ) -> ChainStats:
        if verbose:
            logging.basicConfig(level=logging.INFO)
            CFG.VERBOSE = True

        if (source is None) == (stream is None):
            raise ValueError("build(): pass exactly one of source or stream")

        rng = random.Random(seed) if seed is not None else None
        chain = Chain(prefix_length if prefix_length is not None else CFG.PREFIX_LENGTH, rng=rng)

        if stream is not None:
            log.info("Building chain from stream (prefix_length=%d)", chain.prefix_length)
            stats = chain.build(stream)
        else:
            log.info("Building chain from %s (prefix_length=%d)", source, chain.prefix_length)
            f = open_corpus(source)
            try:
                stats = chain.build(f)
            finally:
                if f is not sys.stdin.buffer:
                    f.close()

        # Commit engine state only after a successful build
        self.chain = chain
        log.info("Engine build() complete: %s", stats)
        return stats

    # ------------- query -------------

    # /* ~~~ Generate `count` phrases of at most `max_length` tokens ~~~ */
    def generate(
        self,
        max_length: Optional[int] = None,
        *,
        count: Optional[int] = None,
        fatal: bool = False,                     # True -> Chain.must_generate (exit on failure)
    ) -> List[GeneratedPhrase]:
        if not self.chain:
            raise RuntimeError("Engine not initialized. Call build() first.")
        max_length = CFG.MAX_LENGTH if max_length is None else int(max_length)
        count = CFG.COUNT if count is None else int(count)
        if not 1 <= count <= CFG.MAX_COUNT:
            raise ValueError(f"count must be between 1 and {CFG.MAX_COUNT}, got {count}")

        gen = self.chain.must_generate if fatal else self.chain.generate
        out: List[GeneratedPhrase] = []
        for _ in range(count):
            text = gen(max_length)
            out.append(GeneratedPhrase(text=text, length=len(split_tokens(text))))
        return out

    def stats(self) -> ChainStats:
        if not self.chain:
            raise RuntimeError("Engine not initialized. Call build() first.")
        return self.chain.stats()

    # ------------- teardown -------------

    def shutdown(self) -> None:
        self.chain = None
        log.info("Engine shutdown complete")
