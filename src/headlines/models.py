from __future__ import annotations
from dataclasses import dataclass

@dataclass(frozen=True)
class ChainStats:
    prefix_length: int
    tokens: int               # distinct corpus tokens
    starting_prefixes: int    # distinct starting prefixes
    states: int               # distinct prefixes with at least one suffix
    transitions: int          # observed prefix -> suffix pairs
    lines: int                # lines read in the last build pass

@dataclass(frozen=True)
class GeneratedPhrase:
    text: str
    length: int               # number of tokens in text
