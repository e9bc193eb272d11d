import pytest

from seqkit_core.match_reporting import (
    MatchBuf,
    MatchMode,
    MatchReporter,
    parse_match_mode,
)


def test_parse_match_mode_known_names():
    assert parse_match_mode("MATCHES_AS_COUNTS") is MatchMode.COUNTS
    assert parse_match_mode("MATCHES_AS_COVERAGE") is MatchMode.COVERAGE
    assert parse_match_mode(MatchMode.ENDS) is MatchMode.ENDS


def test_parse_match_mode_unknown():
    with pytest.raises(ValueError):
        parse_match_mode("MATCHES_AS_NOTHING")


@pytest.mark.parametrize("mode", [MatchMode.NORMALRANGES, MatchMode.COVERAGE])
def test_unsupported_buffer_modes(mode):
    with pytest.raises(ValueError):
        MatchBuf(mode, 3)


def test_counts_and_which():
    buf = MatchBuf("MATCHES_AS_COUNTS", 3)
    buf.report(2, 10, 4)
    buf.report(0, 1, 4)
    buf.report(2, 20, 4)
    assert buf.counts() == [1, 0, 2]
    assert buf.which() == [1, 3]
    assert buf.pair_ids == [2, 0]


def test_count_only_modes_have_no_starts():
    buf = MatchBuf(MatchMode.WHICH, 2)
    buf.report(1, 5, 3)
    with pytest.raises(RuntimeError):
        buf.starts()
    with pytest.raises(RuntimeError):
        buf.ends()


def test_flush_resets_everything():
    buf = MatchBuf(MatchMode.RANGES, 2)
    buf.report(0, 5, 3)
    buf.report(1, 9, 2)
    buf.flush()
    assert buf.counts() == [0, 0]
    assert buf.which() == []
    assert buf.as_ranges() == ([[], []], [[], []])


def test_ends_relate_to_starts_and_widths():
    buf = MatchBuf(MatchMode.ENDS, 2)
    buf.report(1, 5, 3)
    buf.report(1, 1, 1)
    ends = buf.as_result()
    assert ends[0] == []
    assert ends[1][1] == 1
    for s, w, e in zip(buf.starts()[1], buf.widths()[1], ends[1]):
        assert e - s + 1 == w
    # computing ends leaves starts untouched
    assert buf.starts()[1] == [5, 1]


def test_append_and_flush_shifts_starts():
    total = MatchBuf(MatchMode.RANGES, 2)
    total.report(0, 3, 2)
    view = MatchBuf(MatchMode.RANGES, 2)
    view.report(0, 1, 2)
    view.report(1, 4, 5)
    total.append_and_flush(view, 100)
    starts, widths = total.as_ranges()
    assert starts[0][0] == 3
    assert starts[0][1] - 100 == 1
    assert starts[1][0] - 100 == 4
    assert widths == [[2, 2], [5]]
    assert total.counts() == [2, 1]
    assert view.counts() == [0, 0]
    assert view.which() == []


def test_append_and_flush_incompatible():
    a = MatchBuf(MatchMode.RANGES, 2)
    b = MatchBuf(MatchMode.RANGES, 3)
    with pytest.raises(ValueError):
        a.append_and_flush(b, 0)
    c = MatchBuf(MatchMode.STARTS, 2)
    with pytest.raises(ValueError):
        a.append_and_flush(c, 0)


def test_append_with_null_is_noop():
    a = MatchBuf(MatchMode.NULL, 2)
    b = MatchBuf(MatchMode.NULL, 2)
    b.report(0, 1, 1)
    a.append_and_flush(b, 5)
    assert a.counts() == [0, 0]
    assert a.as_result() is None


def test_as_result_starts_and_counts():
    buf = MatchBuf(MatchMode.STARTS, 2)
    buf.report(1, 7, 2)
    assert buf.as_result() == [[], [7]]
    counts = MatchBuf(MatchMode.COUNTS, 2)
    counts.report(1, 7, 2)
    assert counts.as_result() == [0, 1]


def test_reporter_ranges_with_shift():
    rep = MatchReporter("MATCHES_AS_RANGES", 2)
    rep.set_active_pair(1)
    rep.set_shift(10)
    rep.report(1, 4)
    rep.report(3, 2)
    starts, widths = rep.result()
    assert [s - 10 for s in starts] == [1, 3]
    assert widths == [4, 2]
    assert rep.count() == 2
    rep.set_active_pair(0)
    assert rep.result() == ([], [])


def test_reporter_counts_and_drop():
    rep = MatchReporter("MATCHES_AS_COUNTS", 1)
    rep.report(1, 1)
    rep.report(2, 1)
    assert rep.result() == 2
    rep.drop()
    assert rep.count() == 0


def test_reporter_null_and_invalid_result():
    assert MatchReporter("MATCHES_AS_NULL", 1).result() is None
    rep = MatchReporter("MATCHES_AS_STARTS", 1)
    rep.report(1, 1)
    with pytest.raises(ValueError):
        rep.result()