from __future__ import annotations
import bisect
from typing import Iterator, List


class TokenIndex:
    """
    Sorted, duplicate-free set of strings addressed by position.
    Build-time: add() inserts in sorted place, shifting everything after it.
    Frozen form: positions are stable and safe to store elsewhere (the chain
    keeps them in arrays instead of repeating the strings).
    """
    def __init__(self) -> None:
        self._tokens: List[str] = []
        self._frozen: bool = False

    # -------- Build-time API --------
    def add(self, token: str) -> None:
        if self._frozen:
            raise RuntimeError("TokenIndex is frozen; cannot add")
        i = bisect.bisect_left(self._tokens, token)
        if i == len(self._tokens) or self._tokens[i] != token:
            self._tokens.insert(i, token)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -------- Query API --------
    def get(self, position: int) -> str:
        if not 0 <= position < len(self._tokens):
            raise IndexError(f"position {position} out of range for index of {len(self._tokens)} tokens")
        return self._tokens[position]

    def find(self, token: str) -> int:
        """Position of token in O(log n), or -1 when absent."""
        i = bisect.bisect_left(self._tokens, token)
        if i == len(self._tokens) or self._tokens[i] != token:
            return -1
        return i

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)

    def __contains__(self, token: object) -> bool:
        return isinstance(token, str) and self.find(token) != -1

    def __str__(self) -> str:
        return "".join(f"{t}\n" for t in self._tokens)
