import itertools
import warnings

import pytest

from seqkit_core.translate import (
    FuzzyCodonAction,
    TranslationError,
    translate_sequence,
    translate_set,
)

BASES = "TCAG"
CODON_TABLE = "FFLLSSSSYY**CC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG"
DNA_CODES = [ord(b) for b in BASES]


def tr(dna, **kw):
    return translate_sequence(dna, "-", DNA_CODES, CODON_TABLE, CODON_TABLE, **kw)


def fuzzy_setup(gg_letter="G"):
    codes = BASES + "N"
    lkup = []
    for a, b, c in itertools.product(range(5), repeat=3):
        if 4 in (a, b, c):
            lkup.append("X")
        else:
            lkup.append(CODON_TABLE[a * 16 + b * 4 + c])
    # GGN is non-ambiguous: all four codons give glycine
    lkup[(3 * 5 + 3) * 5 + 4] = gg_letter
    return [ord(b) for b in codes], "".join(lkup)


def test_start_codon_example():
    aa, ignored = tr("ATGGCC")
    assert aa == "MA"
    assert ignored == 0


def test_concatenation_of_codons():
    codons = ["TTT", "TGG", "GGG", "TAA"]
    whole, _ = tr("".join(codons))
    assert whole == "".join(tr(c)[0] for c in codons)


def test_skip_code_is_ignored():
    assert tr("AT-G--GCC") == tr("ATGGCC")


def test_trailing_bases_counted():
    seq = "ATGGCCA"
    aa, ignored = tr(seq)
    assert ignored == len(seq) % 3
    assert len(aa) == len(seq) // 3


def test_init_lkup_used_for_first_codon():
    init = "M" * 64
    aa, _ = translate_sequence("TTGTTG", "-", DNA_CODES, CODON_TABLE, init)
    assert aa[0] == "M"
    assert aa[1] == tr("TTG")[0][0]


def test_not_a_base():
    with pytest.raises(TranslationError, match="not a base at pos 3"):
        tr("ATZ")


def test_bad_lkup_length():
    with pytest.raises(ValueError):
        translate_sequence("ATG", "-", DNA_CODES, CODON_TABLE[:-1], CODON_TABLE[:-1])
    with pytest.raises(ValueError):
        translate_sequence("ATG", "-", DNA_CODES, CODON_TABLE, CODON_TABLE[:-1])


def test_general_path_matches_fast_path_for_plain_codons():
    codes, lkup = fuzzy_setup()
    seq = "ATGGCCTAA"
    aa, _ = translate_sequence(seq, "-", codes, lkup, lkup)
    assert aa == tr(seq)[0]


def test_ambiguous_fuzzy_codon():
    codes, lkup = fuzzy_setup()
    aa, _ = translate_sequence("ATGNNN", "-", codes, lkup, lkup, if_ambig="X")
    assert aa == tr("ATG")[0] + "X"
    with pytest.raises(TranslationError, match="ambiguous fuzzy codon starting at pos 4"):
        translate_sequence("ATGNNN", "-", codes, lkup, lkup, if_ambig="error")


@pytest.mark.parametrize(
    "action,expected",
    [(FuzzyCodonAction.SOLVE, "G"), (FuzzyCodonAction.TO_X, "X"), ("solve", "G")],
)
def test_non_ambiguous_fuzzy_codon(action, expected):
    codes, lkup = fuzzy_setup()
    aa, _ = translate_sequence("GGN", "-", codes, lkup, lkup, if_non_ambig=action)
    assert aa == expected


def test_non_ambiguous_fuzzy_codon_error():
    codes, lkup = fuzzy_setup()
    with pytest.raises(TranslationError, match="non-ambiguous"):
        translate_sequence("GGN", "-", codes, lkup, lkup, if_non_ambig="error")


def test_invalid_fuzzy_actions():
    codes, lkup = fuzzy_setup()
    with pytest.raises(ValueError):
        translate_sequence("GGN", "-", codes, lkup, lkup, if_ambig="solve")
    with pytest.raises(ValueError):
        translate_sequence("GGN", "-", codes, lkup, lkup, if_non_ambig="maybe")


def test_translate_set_warnings():
    with pytest.warns(UserWarning, match=r"in 'x\[\[2\]\]': last 2 bases were ignored"):
        out = translate_set(
            ["ATG", "ATGGC"], "-", DNA_CODES, CODON_TABLE, CODON_TABLE
        )
    assert out == [tr("ATG")[0], tr("ATG")[0]]


def test_translate_set_single_warning_has_no_prefix():
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        out = translate_set(["ATGA"], "-", DNA_CODES, CODON_TABLE, CODON_TABLE)
    assert out == ["M"]
    assert [str(w.message) for w in caught] == ["last base was ignored"]


def test_translate_set_error_prefix():
    with pytest.raises(TranslationError, match=r"in 'x\[\[2\]\]': not a base at pos 1"):
        translate_set(["ATG", "ZZZ"], "-", DNA_CODES, CODON_TABLE, CODON_TABLE)
    with pytest.raises(TranslationError, match=r"^not a base at pos 1$"):
        translate_set(["ZZZ"], "-", DNA_CODES, CODON_TABLE, CODON_TABLE)