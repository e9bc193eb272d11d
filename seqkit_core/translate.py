"""Translation of DNA sequences into amino-acid sequences through codon tables."""

from __future__ import annotations

import warnings
from collections.abc import Sequence
from enum import Enum
from typing import Optional, Union

from .encoding import TwobitEncoder, byte2offset_from_codes

Lookup = Union[str, bytes, Sequence[int]]


class FuzzyCodonAction(Enum):
    """What to do with a codon that contains an ambiguous base."""

    ERROR = "error"
    SOLVE = "solve"
    TO_X = "X"


class TranslationError(ValueError):
    """A DNA sequence cannot be translated."""


def _codes(values: Lookup) -> list[int]:
    if isinstance(values, str):
        return [ord(c) for c in values]
    return list(values)


def _byte(c: Union[int, str, bytes]) -> int:
    if isinstance(c, int):
        return c
    if len(c) != 1:
        raise ValueError(f"expected a single letter, got {c!r}")
    return ord(c) if isinstance(c, str) else c[0]


def _action(value, allowed, name) -> FuzzyCodonAction:
    try:
        action = FuzzyCodonAction(value.value if isinstance(value, FuzzyCodonAction) else value)
    except ValueError:
        action = None
    if action not in allowed:
        raise ValueError(f"invalid '{name}' argument")
    return action


class _Translator:
    def __init__(self, skip_code, dna_codes, lkup, init_lkup, if_non_ambig, if_ambig):
        self.skip = _byte(skip_code)
        self.dna_codes = _codes(dna_codes)
        self.ncodes = len(self.dna_codes)
        self.lkup = _codes(lkup)
        self.init_lkup = _codes(init_lkup)
        if len(self.lkup) != self.ncodes ** 3:
            raise ValueError("length of 'lkup' must equal length of 'dna_codes' power 3")
        if len(self.lkup) != len(self.init_lkup):
            raise ValueError("'lkup' and 'init_lkup' must have the same length")
        self.encoder: Optional[TwobitEncoder] = None
        if self.ncodes == 4:
            self.encoder = TwobitEncoder(self.dna_codes, 3, 0)
        else:
            self.byte2offset = byte2offset_from_codes(self.dna_codes, True)
            self.if_non_ambig = _action(
                if_non_ambig,
                (FuzzyCodonAction.ERROR, FuzzyCodonAction.SOLVE, FuzzyCodonAction.TO_X),
                "if_non_ambig",
            )
            self.if_ambig = _action(
                if_ambig, (FuzzyCodonAction.ERROR, FuzzyCodonAction.TO_X), "if_ambig"
            )

    def _letter(self, out: list[str], key: int) -> str:
        table = self.init_lkup if not out else self.lkup
        return chr(table[key])

    def __call__(self, dna: Union[str, bytes]) -> tuple[str, int]:
        data = dna.encode("latin-1") if isinstance(dna, str) else bytes(dna)
        if self.encoder is not None:
            return self._fast(data)
        return self._general(data)

    def _fast(self, data: bytes) -> tuple[str, int]:
        enc = self.encoder
        enc.reset()
        out: list[str] = []
        phase = 0
        for i, c in enumerate(data):
            if c == self.skip:
                continue
            key = enc.shift(c)
            if enc.lastin_twobit is None:
                raise TranslationError(f"not a base at pos {i + 1}")
            if phase < 2:
                phase += 1
                continue
            out.append(self._letter(out, key))
            phase = 0
        return "".join(out), phase

    def _general(self, data: bytes) -> tuple[str, int]:
        out: list[str] = []
        phase = 0
        is_fuzzy = False
        key = 0
        for i, c in enumerate(data):
            if c == self.skip:
                continue
            offset = self.byte2offset[c]
            if offset is None:
                raise TranslationError(f"not a base at pos {i + 1}")
            if offset >= 4:
                is_fuzzy = True
            if phase == 0:
                key = offset
                phase += 1
                continue
            key = key * self.ncodes + offset
            if phase < 2:
                phase += 1
                continue
            letter = self._letter(out, key)
            if is_fuzzy:
                if letter != "X":
                    if self.if_non_ambig is FuzzyCodonAction.ERROR:
                        raise TranslationError(
                            f"non-ambiguous fuzzy codon starting at pos {i - 1}"
                        )
                    if self.if_non_ambig is FuzzyCodonAction.TO_X:
                        letter = "X"
                elif self.if_ambig is FuzzyCodonAction.ERROR:
                    raise TranslationError(f"ambiguous fuzzy codon starting at pos {i - 1}")
            out.append(letter)
            phase = 0
            is_fuzzy = False
        return "".join(out), phase


def translate_sequence(
    dna: Union[str, bytes],
    skip_code,
    dna_codes: Lookup,
    lkup: Lookup,
    init_lkup: Lookup,
    if_non_ambig: Union[str, FuzzyCodonAction] = FuzzyCodonAction.SOLVE,
    if_ambig: Union[str, FuzzyCodonAction] = FuzzyCodonAction.TO_X,
) -> tuple[str, int]:
    """Translate one DNA sequence.

    Returns the amino-acid sequence and the number of trailing bases
    (0, 1 or 2) that did not form a complete codon.
    """
    translator = _Translator(skip_code, dna_codes, lkup, init_lkup, if_non_ambig, if_ambig)
    return translator(dna)


def translate_set(
    x: Sequence[Union[str, bytes]],
    skip_code,
    dna_codes: Lookup,
    lkup: Lookup,
    init_lkup: Lookup,
    if_non_ambig: Union[str, FuzzyCodonAction] = FuzzyCodonAction.SOLVE,
    if_ambig: Union[str, FuzzyCodonAction] = FuzzyCodonAction.TO_X,
) -> list[str]:
    """Translate every DNA sequence of ``x``, warning about ignored trailing bases."""
    translator = _Translator(skip_code, dna_codes, lkup, init_lkup, if_non_ambig, if_ambig)
    sequences = list(x)
    single = len(sequences) == 1
    result: list[str] = []
    for i, dna in enumerate(sequences, start=1):
        prefix = "" if single else f"in 'x[[{i}]]': "
        try:
            aa, ignored = translator(dna)
        except TranslationError as exc:
            if single:
                raise
            raise TranslationError(f"{prefix}{exc}") from None
        if ignored == 1:
            warnings.warn(f"{prefix}last base was ignored", stacklevel=2)
        elif ignored > 1:
            warnings.warn(f"{prefix}last {ignored} bases were ignored", stacklevel=2)
        result.append(aa)
    return result