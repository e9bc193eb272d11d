"""Small string helpers for nucleotide sequences."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Optional

_BASES = "TACGtacgn"
_COMPLEMENTS = "ATGCatgcn"
_COMPLEMENT_OF = dict(zip(_BASES, _COMPLEMENTS))


def compbase(c: str) -> str:
    """Return the complementary base of a single nucleotide letter."""
    try:
        return _COMPLEMENT_OF[c]
    except (KeyError, TypeError):
        raise ValueError(f"Character {c!r} does not code for a nucleic acid.") from None


def longest_consecutive(x: Iterable[Optional[str]], letter: str) -> list[Optional[int]]:
    """Length of the longest run of ``letter`` in each string (``None`` stays ``None``)."""
    if not isinstance(letter, str) or len(letter) != 1:
        raise ValueError("'letter' must contain exactly one character")
    result: list[Optional[int]] = []
    for seq in x:
        if seq is None:
            result.append(None)
            continue
        best = current = 0
        for c in seq:
            current = current + 1 if c == letter else 0
            best = max(best, current)
        result.append(best)
    return result


def lcprefix(s1: Sequence, s2: Sequence) -> int:
    """Length of the longest common prefix of two sequences."""
    n = 0
    for a, b in zip(s1, s2):
        if a != b:
            break
        n += 1
    return n


def lcsuffix(s1: Sequence, s2: Sequence) -> int:
    """Length of the longest common suffix of two sequences."""
    n = 0
    for a, b in zip(reversed(s1), reversed(s2)):
        if a != b:
            break
        n += 1
    return n