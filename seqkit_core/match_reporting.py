"""Buffers that collect pattern/subject matches and report them in several forms."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union


class MatchMode(Enum):
    """How reported matches are stored and returned."""

    NULL = "MATCHES_AS_NULL"
    WHICH = "MATCHES_AS_WHICH"
    COUNTS = "MATCHES_AS_COUNTS"
    STARTS = "MATCHES_AS_STARTS"
    ENDS = "MATCHES_AS_ENDS"
    RANGES = "MATCHES_AS_RANGES"
    NORMALRANGES = "MATCHES_AS_NORMALRANGES"
    COVERAGE = "MATCHES_AS_COVERAGE"


_BUFFERABLE = {
    MatchMode.NULL,
    MatchMode.WHICH,
    MatchMode.COUNTS,
    MatchMode.STARTS,
    MatchMode.ENDS,
    MatchMode.RANGES,
}


def parse_match_mode(ms_mode: Union[str, MatchMode]) -> MatchMode:
    """Return the match mode named by ``ms_mode`` (e.g. ``"MATCHES_AS_COUNTS"``)."""
    if isinstance(ms_mode, MatchMode):
        return ms_mode
    try:
        return MatchMode(ms_mode)
    except ValueError:
        raise ValueError(f'"{ms_mode}": unknown match storing mode') from None


class MatchBuf:
    """Per-pair match counts, and match starts and widths where the mode needs them."""

    def __init__(self, mode: Union[str, MatchMode], n_pairs: int):
        mode = parse_match_mode(mode)
        if mode not in _BUFFERABLE:
            raise ValueError(f"{mode.value}: unsupported match storing mode")
        self.mode = mode
        self.pair_ids: list[int] = []
        self.match_counts: list[int] = [0] * n_pairs
        count_only = mode in (MatchMode.WHICH, MatchMode.COUNTS)
        self.match_starts: Optional[list[list[int]]] = (
            None if count_only else [[] for _ in range(n_pairs)]
        )
        self.match_widths: Optional[list[list[int]]] = (
            None if count_only else [[] for _ in range(n_pairs)]
        )

    def report(self, pair_id: int, start: int, width: int) -> None:
        """Record one match of pair ``pair_id``."""
        if self.match_counts[pair_id] == 0:
            self.pair_ids.append(pair_id)
        self.match_counts[pair_id] += 1
        if self.match_starts is not None:
            self.match_starts[pair_id].append(start)
        if self.match_widths is not None:
            self.match_widths[pair_id].append(width)

    def flush(self) -> None:
        """Drop every recorded match."""
        for pair_id in self.pair_ids:
            self.match_counts[pair_id] = 0
            if self.match_starts is not None:
                self.match_starts[pair_id].clear()
            if self.match_widths is not None:
                self.match_widths[pair_id].clear()
        self.pair_ids.clear()

    def append_and_flush(self, other: "MatchBuf", view_offset: int) -> None:
        """Move the matches of ``other`` into this buffer, shifting starts by ``view_offset``."""
        if self.mode is MatchMode.NULL or other.mode is MatchMode.NULL:
            return
        if len(self.match_counts) != len(other.match_counts) or self.mode is not other.mode:
            raise ValueError("buffers are incompatible")
        for pair_id in other.pair_ids:
            if self.match_counts[pair_id] == 0:
                self.pair_ids.append(pair_id)
            self.match_counts[pair_id] += other.match_counts[pair_id]
            if self.match_starts is not None:
                self.match_starts[pair_id].extend(
                    start + view_offset for start in other.match_starts[pair_id]
                )
            if self.match_widths is not None:
                self.match_widths[pair_id].extend(other.match_widths[pair_id])
        other.flush()

    def which(self) -> list[int]:
        """Sorted 1-based ids of the pairs that have at least one match."""
        return [pair_id + 1 for pair_id in sorted(self.pair_ids)]

    def counts(self) -> list[int]:
        """Number of matches of every pair."""
        return list(self.match_counts)

    def starts(self) -> list[list[int]]:
        """Match starts of every pair."""
        if self.match_starts is None:
            raise RuntimeError("match starts are not stored in this mode")
        return [list(s) for s in self.match_starts]

    def widths(self) -> list[list[int]]:
        """Match widths of every pair."""
        if self.match_widths is None:
            raise RuntimeError("match widths are not stored in this mode")
        return [list(w) for w in self.match_widths]

    def ends(self) -> list[list[int]]:
        """Match ends (start + width - 1) of every pair."""
        if self.match_starts is None or self.match_widths is None:
            raise RuntimeError("match ends cannot be computed in this mode")
        return [
            [start + width - 1 for start, width in zip(starts, widths)]
            for starts, widths in zip(self.match_starts, self.match_widths)
        ]

    def as_ranges(self) -> tuple[list[list[int]], list[list[int]]]:
        """Starts and widths of every pair, as a pair of lists."""
        return self.starts(), self.widths()

    def as_result(self):
        """The recorded matches in the form chosen by the mode."""
        if self.mode is MatchMode.NULL:
            return None
        if self.mode is MatchMode.WHICH:
            return self.which()
        if self.mode is MatchMode.COUNTS:
            return self.counts()
        if self.mode is MatchMode.STARTS:
            return self.starts()
        if self.mode is MatchMode.ENDS:
            return self.ends()
        if self.mode is MatchMode.RANGES:
            return self.as_ranges()
        raise ValueError(f"unknown match storing mode {self.mode.value}")


class MatchReporter:
    """A match buffer with an active pair and a shift applied to reported starts."""

    def __init__(self, ms_mode: Union[str, MatchMode], n_pairs: int):
        self.buffer = MatchBuf(parse_match_mode(ms_mode), n_pairs)
        self.active_pair = 0
        self.shift = 0

    def set_active_pair(self, pair_id: int) -> None:
        """Make ``pair_id`` the pair that subsequent reports go to."""
        self.active_pair = pair_id

    def set_shift(self, shift: int) -> None:
        """Set the offset added to every reported start."""
        self.shift = shift

    def report(self, start: int, width: int) -> None:
        """Record a match of the active pair."""
        self.buffer.report(self.active_pair, start + self.shift, width)

    def drop(self) -> None:
        """Drop the reported matches of all pairs."""
        self.buffer.flush()

    def count(self) -> int:
        """Number of matches of the active pair."""
        return self.buffer.match_counts[self.active_pair]

    def result(self):
        """The matches of the active pair in the form chosen by the mode."""
        mode = self.buffer.mode
        if mode is MatchMode.NULL:
            return None
        if mode in (MatchMode.COUNTS, MatchMode.WHICH):
            return self.count()
        if mode is MatchMode.RANGES:
            return (
                list(self.buffer.match_starts[self.active_pair]),
                list(self.buffer.match_widths[self.active_pair]),
            )
        raise ValueError(f"invalid match storing mode {mode.value}")