"""Matching of short array probes, allowing the flipped middle-base variant."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from .strutils import compbase

# 0-based position within a probe where the base differs between the
# "match" (PM) and "mismatch" (MM) probes.
MISMATCH_POSITION = 12

NO_MATCH = 0
PERFECT_MATCH = 1
MISMATCH_MATCH = 2


@dataclass(frozen=True)
class ProbeMatch:
    """Outcome of searching a probe in a sequence (positions are 1-based)."""

    pos1: int = 0
    pos2: int = 0
    length: int = 0
    kind: int = NO_MATCH


def strstr_with_pmormm(x: str, y: str) -> ProbeMatch:
    """Find ``y`` in ``x``, or failing that ``y`` with its 13th base complemented."""
    idx = x.find(y)
    if idx >= 0:
        return ProbeMatch(idx + 1, 1, len(y), PERFECT_MATCH)
    if len(y) < MISMATCH_POSITION:
        raise ValueError(
            f"Sequence y is too short: must at least have length {MISMATCH_POSITION}."
        )
    if len(y) > MISMATCH_POSITION:
        flipped = (
            y[:MISMATCH_POSITION]
            + compbase(y[MISMATCH_POSITION])
            + y[MISMATCH_POSITION + 1:]
        )
    else:
        flipped = y
    idx = x.find(flipped)
    if idx >= 0:
        return ProbeMatch(idx + 1, 1, len(y), MISMATCH_MATCH)
    return ProbeMatch()


def matchprobes(
    query: Sequence[Optional[str]], records: Sequence[Optional[str]], probepos: bool = False
) -> dict[str, list[list[int]]]:
    """Match every record against every query sequence.

    ``result["match"][k]`` lists the 1-based indices of the records found
    in ``query[k]``, negated for mismatch-probe matches.  When ``probepos``
    is true, ``result["pos"][k]`` holds the matching 1-based positions.
    """
    if isinstance(query, str) or not all(q is None or isinstance(q, str) for q in query):
        raise TypeError("Argument query must be a string")
    if not isinstance(probepos, bool):
        raise TypeError("Argument probepos must be logical.")
    matches: list[list[int]] = []
    positions: list[list[int]] = []
    for queryseq in query:
        recs: list[int] = []
        pos: list[int] = []
        if queryseq is not None:
            for i, recseq in enumerate(records, start=1):
                if recseq is None:
                    continue
                m = strstr_with_pmormm(queryseq, recseq)
                if m.kind == NO_MATCH:
                    continue
                recs.append(-i if m.kind == MISMATCH_MATCH else i)
                pos.append(m.pos1)
        matches.append(recs)
        positions.append(pos)
    result = {"match": matches}
    if probepos:
        result["pos"] = positions
    return result