import pytest

from seqkit_core.matchprobes import (
    MISMATCH_MATCH,
    NO_MATCH,
    PERFECT_MATCH,
    ProbeMatch,
    matchprobes,
    strstr_with_pmormm,
)
from seqkit_core.strutils import compbase

PROBE = "ACGTACGTACGTACGTA"
MM_PROBE = PROBE[:12] + compbase(PROBE[12]) + PROBE[13:]
OTHER = "GGGGGGGGGGGGGGGG"


def test_perfect_match():
    x = "TT" + PROBE + "CC"
    m = strstr_with_pmormm(x, PROBE)
    assert m.kind == PERFECT_MATCH
    assert m.pos2 == 1
    assert x[m.pos1 - 1:m.pos1 - 1 + m.length] == PROBE


def test_mismatch_match():
    x = "TT" + MM_PROBE + "GG"
    m = strstr_with_pmormm(x, PROBE)
    assert m.kind == MISMATCH_MATCH
    assert x[m.pos1 - 1:m.pos1 - 1 + m.length] == MM_PROBE


def test_no_match():
    assert strstr_with_pmormm("TTTTTTTTTTTTTTTTTTTT", PROBE) == ProbeMatch(0, 0, 0, NO_MATCH)


def test_short_probe_without_match_raises():
    with pytest.raises(ValueError):
        strstr_with_pmormm("AAAA", "CCCC")


def test_short_probe_with_match_is_fine():
    m = strstr_with_pmormm("AACCCCAA", "CCCC")
    assert m.kind == PERFECT_MATCH
    assert m.length == len("CCCC")


def test_non_nucleotide_at_flip_position_raises():
    with pytest.raises(ValueError):
        strstr_with_pmormm("AAAA", "AAAAAAAAAAAAXAAA")


def test_matchprobes_with_positions():
    query = ["TT" + PROBE, None, MM_PROBE]
    res = matchprobes(query, [PROBE, None, OTHER], True)
    assert res["match"] == [[1], [], [-1]]
    assert len(res["pos"]) == len(query)
    assert all(len(p) == len(m) for p, m in zip(res["pos"], res["match"]))
    q0 = query[0]
    start = res["pos"][0][0] - 1
    assert q0[start:start + len(PROBE)] == PROBE


def test_matchprobes_without_positions():
    res = matchprobes([PROBE], [OTHER, PROBE], False)
    assert res == {"match": [[2]]}


def test_matchprobes_probepos_must_be_bool():
    with pytest.raises(TypeError):
        matchprobes([PROBE], [PROBE], 1)


def test_matchprobes_query_must_be_strings():
    with pytest.raises(TypeError):
        matchprobes([42], [PROBE], False)