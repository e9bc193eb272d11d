"""Byte translation tables and two-bit encoding of nucleotide letters.

A byte table is a list of 256 entries indexed by byte value; an entry is
either an integer code or ``None`` when the byte has no code.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Optional, Union

TABLE_LENGTH = 256

ByteTable = list[Optional[int]]
Letter = Union[int, str, bytes]


def _as_bytes(data: Union[str, bytes, bytearray, Sequence[int]]) -> bytes:
    if isinstance(data, str):
        return data.encode("latin-1")
    return bytes(data)


def _byte_value(c: Letter) -> int:
    if isinstance(c, int):
        return c
    if isinstance(c, (str, bytes, bytearray)) and len(c) == 1:
        return ord(c) if isinstance(c, str) else c[0]
    raise TypeError(f"expected a single letter or byte value, got {c!r}")


def table_from_lkup(lkup: Iterable[Optional[int]]) -> ByteTable:
    """Build a byte table from a lookup vector, padding with ``None``."""
    codes = list(lkup)
    if len(codes) > TABLE_LENGTH:
        raise ValueError(f"lookup table is longer than {TABLE_LENGTH}")
    return codes + [None] * (TABLE_LENGTH - len(codes))


def lkup_from_table(table: Optional[Sequence[Optional[int]]]) -> Optional[list]:
    """Return the lookup vector held by a byte table (``None`` stays ``None``)."""
    if table is None:
        return None
    return list(table)


def byte2offset_from_codes(codes: Iterable[int], error_on_dup: bool = True) -> ByteTable:
    """Map each byte in ``codes`` to its position in ``codes``.

    The first occurrence of a byte wins; a later duplicate raises
    ``ValueError`` when ``error_on_dup`` is true.
    """
    table: ByteTable = [None] * TABLE_LENGTH
    for offset, byte in enumerate(codes):
        if not 0 <= byte < TABLE_LENGTH:
            raise ValueError(f"invalid byte value {byte}")
        if table[byte] is None:
            table[byte] = offset
        elif error_on_dup:
            raise ValueError(f"duplicated byte value {byte}")
    return table


def byte2offset_from_letters(
    seq: Union[str, bytes], match: Callable[[int, int], bool]
) -> ByteTable:
    """Map each byte ``y`` to the first position ``n`` with ``match(seq[n], y)``."""
    letters = _as_bytes(seq)
    return [
        next((n for n, x in enumerate(letters) if match(x, y)), None)
        for y in range(TABLE_LENGTH)
    ]


def translate_bytes(
    data: Union[str, bytes], lkup: Sequence[Optional[int]]
) -> tuple[bytes, int]:
    """Translate ``data`` through ``lkup``, dropping bytes without a code.

    Returns the translated bytes and the number of dropped bytes.
    """
    out = bytearray()
    ninvalid = 0
    for byte in _as_bytes(data):
        code = lkup[byte] if byte < len(lkup) else None
        if code is None:
            ninvalid += 1
            continue
        out.append(code)
    return bytes(out), ninvalid


class TwobitEncoder:
    """Rolling two-bit signature of the last ``buflength`` valid letters."""

    def __init__(self, base_codes: Sequence[int], buflength: int, endianness: int = 0):
        codes = list(base_codes)
        if len(codes) != 4:
            raise ValueError("'base_codes' must be of length 4")
        if not 1 <= buflength <= 15:
            raise ValueError("'buflength' must be >= 1 and <= 15")
        self._byte2twobit = byte2offset_from_codes(codes, True)
        self.buflength = buflength
        self.endianness = endianness
        self._nbit_in_mask = (buflength - 1) * 2
        mask = (1 << self._nbit_in_mask) - 1
        if endianness == 1:
            mask <<= 2
        self._mask = mask
        self.lastin_twobit: Optional[int] = None
        self._nb_valid = 0
        self._signature = 0

    def reset(self) -> None:
        """Forget all letters seen so far."""
        self.lastin_twobit = None
        self._nb_valid = 0
        self._signature = 0

    def shift(self, c: Letter) -> Optional[int]:
        """Push one letter; return the signature once enough letters were seen."""
        byte = _byte_value(c)
        twobit = self._byte2twobit[byte] if 0 <= byte < TABLE_LENGTH else None
        self.lastin_twobit = twobit
        if twobit is None:
            self._nb_valid = 0
            return None
        self._nb_valid += 1
        sig = self._signature & self._mask
        if self.endianness == 1:
            sig = (sig >> 2) + (twobit << self._nbit_in_mask)
        else:
            sig = (sig << 2) + twobit
        self._signature = sig
        if self._nb_valid < self.buflength:
            return None
        return sig

    def signature(self, seq: Union[str, bytes]) -> Optional[int]:
        """Shift every letter of ``seq`` (of length ``buflength``) in turn."""
        if len(seq) != self.buflength:
            raise ValueError("length of 'seq' must equal 'buflength'")
        result = None
        for c in seq:
            result = self.shift(c)
        return result

    def signature_at(self, seq: Union[str, bytes], at: Sequence[Optional[int]]) -> Optional[int]:
        """Shift the letters of ``seq`` found at the 1-based locations ``at``."""
        if len(at) != self.buflength:
            raise ValueError("length of 'at' must equal 'buflength'")
        result = None
        for j in at:
            if j is None or j < 1 or j > len(seq):
                raise IndexError(f"location {j} is out of limits")
            result = self.shift(seq[j - 1])
        return result