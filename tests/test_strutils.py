import pytest

from seqkit_core.strutils import compbase, lcprefix, lcsuffix, longest_consecutive


@pytest.mark.parametrize("base,comp", list(zip("TACGtacgn", "ATGCatgcn")))
def test_compbase_table(base, comp):
    assert compbase(base) == comp


def test_compbase_involution():
    for c in "ACGTacgt":
        assert compbase(compbase(c)) == c


@pytest.mark.parametrize("bad", ["N", "x", "", "AC"])
def test_compbase_invalid(bad):
    with pytest.raises(ValueError):
        compbase(bad)


def test_longest_consecutive():
    assert longest_consecutive(["AAGAAA", None, ""], "A") == [3, None, 0]


def test_longest_consecutive_bounded_by_count():
    seqs = ["ACCA", "CCCC", "GATTACA"]
    for seq, run in zip(seqs, longest_consecutive(seqs, "C")):
        assert run <= seq.count("C")
        assert ("C" * run) in seq
        assert ("C" * (run + 1)) not in seq


@pytest.mark.parametrize("bad", ["AA", "", None])
def test_longest_consecutive_bad_letter(bad):
    with pytest.raises(ValueError):
        longest_consecutive(["A"], bad)


def test_lcprefix():
    assert lcprefix("ACGTT", "ACGAA") == 3
    assert lcprefix("ACG", "") == 0


def test_lcprefix_self():
    for s in ["", "A", "ACGT"]:
        assert lcprefix(s, s) == len(s)
        assert lcsuffix(s, s) == len(s)


def test_lcsuffix_is_reversed_prefix():
    pairs = [("AACGT", "TTCGT"), ("GATTACA", "ACA"), (b"xyz", b"yz")]
    for a, b in pairs:
        assert lcsuffix(a, b) == lcprefix(a[::-1], b[::-1])


def test_lcprefix_bytes_bounded_by_shorter():
    assert lcprefix(b"ACGT", b"AC") == len(b"AC")