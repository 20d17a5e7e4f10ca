"""Unit tests for the go test log parser."""
from datetime import timedelta

import pytest

from ci_testgrid.log_parsers import GoTestLogState, GoTestParser


def _parse(text):
    return GoTestParser().parse_records(text.splitlines(keepends=True))


def test_single_pass_line():
    records = _parse("--- PASS: TestFoo (0.01s)\n")

    assert [r.model_dump() for r in records] == [
        {"name": "TestFoo", "result": "pass", "duration": timedelta(milliseconds=10), "logs": []}
    ]


def test_run_marker_drops_following_output():
    log = "\n".join(
        [
            "=== RUN   TestBar",
            "    some diagnostic line",
            "--- FAIL: TestBar (1.50s)",
        ]
    )

    records = _parse(log)

    assert len(records) == 1
    assert records[0].name == "TestBar"
    assert records[0].result == "fail"
    assert records[0].duration == timedelta(seconds=1.5)
    assert records[0].logs == []


def test_trailing_result_captures_output():
    log = "\n".join(
        [
            "=== FAIL: . TestBaz (0.00s)",
            "    log line one",
            "    log line two",
        ]
    )

    records = _parse(log)

    assert len(records) == 1
    assert records[0].name == "TestBaz"
    assert records[0].result == "fail"
    assert records[0].duration == timedelta(0)
    assert records[0].logs == ["    log line one", "    log line two"]


def test_zero_duration_does_not_replace_known_duration():
    log = "\n".join(
        [
            "--- PASS: TestQux (0.02s)",
            "=== FAIL: . TestQux (0.00s)",
        ]
    )

    records = _parse(log)

    assert len(records) == 1
    assert records[0].result == "fail"
    assert records[0].duration == timedelta(milliseconds=20)


def test_unparseable_duration_keeps_known_duration():
    log = "\n".join(
        [
            "--- FAIL: TestQux (3.5s)",
            "--- PASS: TestQux (soon)",
        ]
    )

    records = _parse(log)

    assert records[0].result == "pass"
    assert records[0].duration == timedelta(seconds=3.5)


def test_non_zero_duration_overwrites():
    log = "\n".join(
        [
            "--- FAIL: TestQux (3.5s)",
            "--- PASS: TestQux (1s)",
        ]
    )

    records = _parse(log)

    assert records[0].duration == timedelta(seconds=1)


def test_noise_lines_produce_nothing():
    log = "\n".join(
        [
            "+ make e2e",
            '{"Action":"run","Test":"TestFoo"}',
            "+--- PASS: TestFoo (0.01s)",
            "{--- PASS: TestFoo (0.01s)",
            "FAIL",
            "FAIL\tgithub.com/openshift/hypershift/test/e2e\t1234.567s",
        ]
    )

    assert _parse(log) == []


def test_output_sorted_by_name_and_unique():
    log = "\n".join(
        [
            "--- PASS: TestZeta (0.01s)",
            "--- SKIP: TestAlpha (0.00s)",
            "    --- FAIL: TestMid/subtest (0.30s)",
            "--- PASS: TestAlpha (0.02s)",
            "--- FAIL: TestMid (0.40s)",
        ]
    )

    records = _parse(log)
    names = [r.name for r in records]

    assert names == ["TestAlpha", "TestMid", "TestMid/subtest", "TestZeta"]
    assert len(set(names)) == len(names)
    assert records[0].result == "pass"
    assert records[2].result == "fail"


def test_repeated_parse_is_identical():
    log = "\n".join(
        [
            "=== RUN   TestB",
            "--- PASS: TestB (0.01s)",
            "=== FAIL: . TestA (1.00s)",
            "    boom",
            "=== PASS: . TestC (0.10s)",
        ]
    )

    first = [r.model_dump() for r in _parse(log)]
    second = [r.model_dump() for r in _parse(log)]

    assert first == second


def test_primary_result_closes_log_block():
    log = "\n".join(
        [
            "=== FAIL: . TestA (0.00s)",
            "    captured",
            "--- PASS: TestB (0.00s)",
            "    dropped",
        ]
    )

    records = {r.name: r for r in _parse(log)}

    assert records["TestA"].logs == ["    captured"]
    assert records["TestB"].logs == []


def test_start_marker_closes_log_block():
    log = "\n".join(
        [
            "=== PASS: . TestA (0.00s)",
            "    captured",
            "=== CONT  TestB",
            "    dropped",
            "=== NAME  TestA",
            "    dropped too",
        ]
    )

    records = _parse(log)

    assert records[0].logs == ["    captured"]


def test_unindented_and_boundary_lines_are_not_captured():
    log = "\n".join(
        [
            "=== FAIL: . TestA (0.00s)",
            "not indented",
            "    ---  stray boundary",
            "    ===",
            "\ttab indented",
            "        deeply indented",
        ]
    )

    records = _parse(log)

    assert records[0].logs == ["\ttab indented", "        deeply indented"]


def test_line_terminators_are_removed():
    records = _parse("=== FAIL: . TestA (0.5s)\r\n    windows line\r\n")

    assert records[0].duration == timedelta(milliseconds=500)
    assert records[0].logs == ["    windows line"]


def test_unknown_lines_are_ignored():
    log = "\n".join(
        [
            "PASS",
            "ok  \tgithub.com/user/pkg\t0.123s",
            "--- XFAIL: TestA (0.01s)",
            "--- PASS: TestA",
            "=== PAUSE TestA",
        ]
    )

    assert _parse(log) == []


def test_state_tracks_current_test():
    state = GoTestLogState()

    state.feed("=== FAIL: . TestA (0.00s)\n")
    assert state.current_test == "TestA"

    state.feed("=== RUN   TestB\n")
    assert state.current_test is None

    state.feed("=== SKIP: . TestB (0.00s)\n")
    state.feed("--- PASS: TestC (0.00s)\n")
    assert state.current_test is None
    assert [r.name for r in state.records()] == ["TestA", "TestB", "TestC"]


def test_stream_errors_propagate():
    def lines():
        yield "--- PASS: TestA (0.01s)\n"
        raise OSError("connection reset")

    with pytest.raises(OSError, match="connection reset"):
        GoTestParser().parse_records(lines())


def test_parse_returns_aggregate_counts():
    log = "\n".join(
        [
            "--- PASS: TestA (1.00s)",
            "--- FAIL: TestB (2.00s)",
            "--- SKIP: TestC (0.00s)",
            "--- PASS: TestD (0.50s)",
        ]
    )

    result = GoTestParser().parse(log)

    assert result.framework == "gotest"
    assert result.language == "go"
    assert result.tests_run == 4
    assert result.tests_failed == 1
    assert result.tests_skipped == 1
    assert result.tests_ok == 2
    assert result.failed_tests == ["TestB"]
    assert result.test_duration_seconds == 3.5


def test_parse_returns_none_without_tests():
    assert GoTestParser().parse("+ make test\nok  \tpkg\t0.1s\n") is None


def test_out_of_range_duration_becomes_zero():
    log = "\n".join(
        [
            "--- PASS: TestX (99999999999999999999999999999s)",
            "=== FAIL: . TestY (" + "1" * 40 + "h)",
            "    still captured",
        ]
    )

    records = _parse(log)

    assert [r.name for r in records] == ["TestX", "TestY"]
    assert records[0].duration == timedelta(0)
    assert records[1].duration == timedelta(0)
    assert records[1].logs == ["    still captured"]
