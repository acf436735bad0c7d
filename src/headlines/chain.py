"""
Prefix -> suffix Markov chain over a line-delimited corpus.

The chain never stores token strings in its transitions. Every token is
interned into a sorted TokenIndex first, and the transition table maps a
joined prefix to an array of positions in that index. A suffix position is
appended once per observation, so drawing uniformly from the array picks
suffixes in proportion to how often they followed the prefix. Starting
prefixes are handled the same way through a second index.

Building takes three passes over the same bytes:
  1. every token        -> tokens index (then frozen)
  2. every line start   -> starting-prefix index (then frozen)
  3. every window       -> transitions + starting frequencies
Pass 1 reads the caller's stream through a tee that fills two in-memory
buffers, which passes 2 and 3 replay.
"""
from __future__ import annotations

import io
import logging
import random
import time
from array import array
from typing import BinaryIO, Dict, List, Optional

from . import config as CFG
from .errors import ChainCorruptedError, EmptyChainError, MalformedChainError, ChainError
from .index import TokenIndex
from .models import ChainStats
from .tokenizer import TeeReader, join_tokens, process_stream, split_tokens

log = logging.getLogger(__name__)

# Process-wide default source of randomness, seeded once at import.
_RNG = random.Random(CFG.SEED if CFG.SEED is not None else time.time_ns())


class Chain:
    def __init__(self, prefix_length: int, rng: Optional[random.Random] = None) -> None:
        if prefix_length < 1:
            raise ValueError(f"prefix_length must be >= 1, got {prefix_length}")
        self._prefix_length = int(prefix_length)
        self.rng = rng if rng is not None else _RNG

        self.tokens = TokenIndex()
        self.starting_prefixes = TokenIndex()
        self.transitions: Dict[str, array] = {}      # prefix -> array('i') of token positions
        self.starting_frequencies = array("i")      # positions into starting_prefixes
        self._lines = 0
        self._built = False

    @property
    def prefix_length(self) -> int:
        return self._prefix_length

    @property
    def built(self) -> bool:
        return self._built

    # ---- Build (offline) ----
    def build(self, stream: BinaryIO) -> ChainStats:
        if self._built:
            raise RuntimeError("Chain is already built; create a new Chain to rebuild")
        self._built = True

        b1, b2 = io.BytesIO(), io.BytesIO()
        self._build_token_index(TeeReader(stream, b1, b2))
        b1.seek(0)
        self._build_prefix_index(b1)
        b2.seek(0)
        self._build_chain(b2)

        stats = self.stats()
        log.info(
            "chain built: prefix_length=%d tokens=%d starting_prefixes=%d states=%d transitions=%d",
            stats.prefix_length, stats.tokens, stats.starting_prefixes, stats.states, stats.transitions,
        )
        return stats

    def _build_token_index(self, stream: BinaryIO) -> None:
        def process_tokens(tokens: List[str]) -> None:
            for token in tokens:
                self.tokens.add(token)
        process_stream(stream, process_tokens)
        self.tokens.freeze()
        log.debug("token index built: %d tokens", len(self.tokens))

    def _build_prefix_index(self, stream: BinaryIO) -> None:
        n = self._prefix_length
        def process_starting_prefix(tokens: List[str]) -> None:
            if len(tokens) >= n:
                self.starting_prefixes.add(join_tokens(tokens[:n]))
        process_stream(stream, process_starting_prefix)
        self.starting_prefixes.freeze()
        log.debug("starting prefix index built: %d prefixes", len(self.starting_prefixes))

    def _build_chain(self, stream: BinaryIO) -> None:
        n = self._prefix_length
        def process_phrase(tokens: List[str]) -> None:
            for i in range(len(tokens) - n):
                prefix = join_tokens(tokens[i:i + n])
                suffix = tokens[i + n]

                suffix_pos = self.tokens.find(suffix)
                if suffix_pos == -1:
                    raise ChainCorruptedError(f"token {suffix!r} missing from token index")
                self.transitions.setdefault(prefix, array("i")).append(suffix_pos)

                # start of a line
                if i == 0:
                    prefix_pos = self.starting_prefixes.find(prefix)
                    if prefix_pos == -1:
                        raise ChainCorruptedError(f"starting prefix {prefix!r} missing from prefix index")
                    self.starting_frequencies.append(prefix_pos)
        self._lines = process_stream(stream, process_phrase)

    # ---- Generate ----
    def generate(self, max_length: int) -> str:
        """
        Random walk from a starting prefix until max_length tokens are
        produced or the current prefix has no recorded suffix.
        """
        if max_length < self._prefix_length:
            raise ValueError(
                f"max_length ({max_length}) must be at least the prefix length ({self._prefix_length})"
            )
        if not self.starting_frequencies:
            raise EmptyChainError(
                f"no line in the corpus has more than {self._prefix_length} tokens; nothing to start from"
            )

        # Duplicated entries make this draw frequency-weighted.
        i = self.rng.randrange(len(self.starting_frequencies))
        prefix = self.starting_prefixes.get(self.starting_frequencies[i])
        sentence = split_tokens(prefix)
        if len(sentence) < self._prefix_length:
            raise MalformedChainError(
                f"starting prefix {prefix!r} has fewer than {self._prefix_length} tokens"
            )

        n = self._prefix_length
        while len(sentence) < max_length:
            suffixes = self.transitions.get(join_tokens(sentence[-n:]))
            if not suffixes:
                break
            j = self.rng.randrange(len(suffixes))
            sentence.append(self.tokens.get(suffixes[j]))
        return join_tokens(sentence)

    def must_generate(self, max_length: int) -> str:
        """generate(), but a ChainError terminates the process."""
        try:
            return self.generate(max_length)
        except ChainError as exc:
            log.critical("phrase generation failed: %s", exc)
            raise SystemExit(f"error: {exc}") from exc

    # ---- Getters ----
    def stats(self) -> ChainStats:
        return ChainStats(
            prefix_length=self._prefix_length,
            tokens=len(self.tokens),
            starting_prefixes=len(self.starting_prefixes),
            states=len(self.transitions),
            transitions=sum(len(v) for v in self.transitions.values()),
            lines=self._lines,
        )
