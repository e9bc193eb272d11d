"""Editing sequences: replacing ranges, replacing single letters, concatenating.

Ranges are given as ``(start, width)`` pairs with 1-based starts.
Sequences are ``str`` or ``bytes``; results keep the type of the input.
"""

from __future__ import annotations

import warnings
from collections.abc import Sequence
from enum import Enum
from typing import Optional, Union

from .encoding import table_from_lkup

Seq = Union[str, bytes]
Range = tuple[int, int]

INT_MAX = 2**31 - 1


class NotExtendingAction(Enum):
    """What to do when a new letter does not extend the letter it replaces."""

    REPLACE = "replace"
    SKIP = "skip"
    MERGE = "merge"
    ERROR = "error"


class _ShapeError(Exception):
    pass


class _OffLimitsError(Exception):
    pass


class _TooLongError(Exception):
    pass


class _OverlapError(Exception):
    pass


def _coerce(value, like: Seq) -> Seq:
    if isinstance(like, str):
        if isinstance(value, (bytes, bytearray)):
            return bytes(value).decode("latin-1")
        return str(value)
    if isinstance(value, str):
        return value.encode("latin-1")
    return bytes(value)


def _plan(x_len: int, at: Sequence[Range], values: list) -> list[Range]:
    ranges = [(int(start), int(width)) for start, width in at]
    if len(values) != len(ranges):
        raise _ShapeError
    delta = 0
    for (start, width), v in zip(ranges, values):
        if width < 0 or start < 1 or start + width - 1 > x_len:
            raise _OffLimitsError
        delta += len(v) - width
    new_len = x_len + delta
    if new_len > INT_MAX:
        raise _TooLongError
    if new_len < 0:
        raise _OverlapError
    return ranges


def _apply(x: Seq, ranges: list[Range], values: list) -> Seq:
    order = sorted(range(len(ranges)), key=lambda i: ranges[i])
    pieces = []
    x_offset = 0
    for i in order:
        start, width = ranges[i]
        if start - x_offset - 1 < 0:
            raise _OverlapError
        pieces.append(x[x_offset:start - 1])
        pieces.append(values[i])
        x_offset = start - 1 + width
    pieces.append(x[x_offset:])
    return x[:0].join(pieces)


def replace_at(x: Seq, at: Sequence[Range], value: Sequence[Seq]) -> Seq:
    """Replace the ranges ``at`` of ``x`` with the parallel sequences of ``value``.

    Zero-width ranges insert; the ranges must not overlap.
    """
    values = [_coerce(v, x) for v in value]
    try:
        ranges = _plan(len(x), at, values)
        return _apply(x, ranges, values)
    except _ShapeError:
        raise ValueError("'at' and 'value' must have the same length") from None
    except _OffLimitsError:
        raise ValueError(
            "some ranges in 'at' are off-limits with respect to sequence 'x'"
        ) from None
    except _TooLongError:
        raise ValueError(
            "replacements in 'x' will produce a sequence that is too long"
        ) from None
    except _OverlapError:
        raise ValueError("'at' must contain disjoint ranges") from None


def replace_at_set(
    x: Sequence[Seq], at: Sequence[Sequence[Range]], value: Sequence[Sequence[Seq]]
) -> list[Seq]:
    """Apply :func:`replace_at` to each sequence of ``x`` with its own ranges and values."""
    seqs = list(x)
    ats = list(at)
    vals = list(value)
    if len(ats) != len(seqs) or len(vals) != len(seqs):
        raise ValueError("'x', 'at' and 'value' must have the same length")
    plans = []
    for i, (seq, ranges, group) in enumerate(zip(seqs, ats, vals), start=1):
        group = [_coerce(v, seq) for v in group]
        try:
            plans.append((_plan(len(seq), ranges, group), group))
        except _ShapeError:
            raise ValueError(
                f"'at[[{i}]]' and 'value[[{i}]]' don't have the same length. "
                "'at' and 'value' must have the same shape"
            ) from None
        except _OffLimitsError:
            raise ValueError(
                f"some ranges in 'at[[{i}]]' are off-limits "
                f"with respect to sequence 'x[[{i}]]'"
            ) from None
        except _TooLongError:
            raise ValueError(
                f"replacements in 'x[[{i}]]' will produce a sequence that is too long"
            ) from None
        except _OverlapError:
            raise ValueError(f"'at[[{i}]]' must contain disjoint ranges") from None
    result = []
    for i, (seq, (ranges, group)) in enumerate(zip(seqs, plans), start=1):
        try:
            result.append(_apply(seq, ranges, group))
        except _OverlapError:
            raise ValueError(f"'at[[{i}]]' must contain disjoint ranges") from None
    return result


def _parse_action(value: Union[str, NotExtendingAction]) -> NotExtendingAction:
    if isinstance(value, NotExtendingAction):
        return value
    try:
        return NotExtendingAction(value)
    except ValueError:
        raise ValueError(f"invalid 'if_not_extending' value {value}") from None


def _replace_letters(
    dest: bytearray,
    at: Sequence[Optional[int]],
    letter: Sequence[Optional[Seq]],
    table: Optional[list],
    action: NotExtendingAction,
) -> int:
    """Write the letters into ``dest``; return how many were skipped or merged."""
    if isinstance(letter, (str, bytes)):
        letter = [letter]
    at = list(at)
    count = 0
    pos = 0
    for elt in letter:
        if elt is None:
            raise ValueError("'letter' contains NAs")
        data = elt.encode("latin-1") if isinstance(elt, str) else bytes(elt)
        if pos + len(data) > len(at):
            pos += len(data)
            break
        for loc, byte in zip(at[pos:pos + len(data)], data):
            if loc is None or loc < 1 or loc > len(dest):
                raise ValueError("'at' contains NAs or \"out of limits\" locations")
            i = loc - 1
            new = byte
            if table is not None:
                new = table[byte]
                if new is None:
                    raise ValueError(
                        f"'letter' contains invalid letters (first found has code {byte})"
                    )
            old = dest[i]
            if old == new:
                continue
            if action is NotExtendingAction.REPLACE:
                dest[i] = new
                continue
            are_iupac = old < 16 and new < 16
            if are_iupac and (old & ~new) == 0:
                dest[i] = new
                continue
            if action is NotExtendingAction.ERROR:
                raise ValueError(
                    f"new letter (code {new}) does not extend old letter "
                    f"(code {old}) at location {loc}"
                )
            count += 1
            if action is NotExtendingAction.SKIP:
                continue
            if not are_iupac:
                raise ValueError(f"cannot merge non IUPAC letters at location {loc}")
            dest[i] |= new
        pos += len(data)
    if pos != len(at):
        raise ValueError(
            "total nb of letters in 'letter' must be the same as nb of locations"
        )
    return count


def replace_letter_at(
    x: Seq,
    at: Sequence[Optional[int]],
    letter: Union[Seq, Sequence[Optional[Seq]]],
    lkup: Optional[Sequence[Optional[int]]] = None,
    if_not_extending: Union[str, NotExtendingAction] = NotExtendingAction.REPLACE,
    verbose: bool = False,
) -> Seq:
    """Return a copy of ``x`` with the letters at the 1-based locations ``at`` replaced.

    ``letter`` holds as many letters in total as there are locations; with
    ``lkup`` each letter is encoded through it first.
    """
    action = _parse_action(if_not_extending)
    table = table_from_lkup(lkup) if lkup is not None else None
    dest = bytearray(x.encode("latin-1") if isinstance(x, str) else x)
    count = _replace_letters(dest, at, letter, table, action)
    if count and action is not NotExtendingAction.REPLACE and verbose:
        verb = "skipped" if action is NotExtendingAction.SKIP else "merged"
        warnings.warn(f"{verb} {count} letter(s)", stacklevel=2)
    if isinstance(x, str):
        return dest.decode("latin-1")
    return bytes(dest)


def inplace_replace_letter_at(
    x: bytearray,
    at: Sequence[Optional[int]],
    letter: Union[Seq, Sequence[Optional[Seq]]],
    lkup: Optional[Sequence[Optional[int]]] = None,
) -> bytearray:
    """Replace letters of ``x`` in place, merging letters that do not extend; return ``x``."""
    if not isinstance(x, bytearray):
        raise TypeError("'x' must be a bytearray to be modified in place")
    table = table_from_lkup(lkup) if lkup is not None else None
    _replace_letters(x, at, letter, table, NotExtendingAction.MERGE)
    return x


def xscat(*args: Seq) -> Seq:
    """Concatenate sequences; the result has the type of the first one."""
    if not args:
        raise ValueError("xscat(): no input")
    first = args[0]
    return first[:0].join(_coerce(a, first) for a in args)


def xscat_set(*args: Sequence[Seq]) -> list[Seq]:
    """Concatenate sets of sequences element-wise, recycling the shorter sets."""
    if not args:
        raise ValueError("xscat_set(): no input")
    sets = [list(a) for a in args]
    length = max(len(s) for s in sets)
    if length and any(not s for s in sets):
        raise ValueError("cannot recycle an empty set of sequences")
    result = []
    for i in range(length):
        parts = [s[i % len(s)] for s in sets]
        result.append(xscat(*parts))
    return result