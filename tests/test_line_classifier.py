"""Tests for the result file line classifier (collector.line_classifier)."""

import logging

import pytest

from collector.line_classifier import (
    ClassifiedLines,
    ReadState,
    classify_lines,
    decode_content,
    parse_score,
    split_lines,
)


def _lines(text: str) -> list[str]:
    return split_lines(text)


# ---------------------------------------------------------------------------
# split_lines / parse_score
# ---------------------------------------------------------------------------


class TestSplitLines:
    def test_trims_and_drops_blank_lines(self):
        assert split_lines("  a  \r\n\n   \nb\n") == ["a", "b"]

    def test_empty_content(self):
        assert split_lines("") == []

    def test_crlf_line_endings(self):
        assert split_lines("Map: Hue ATG\r\nDate: 2024-12-18\r\n") == [
            "Map: Hue ATG",
            "Date: 2024-12-18",
        ]

    @pytest.mark.parametrize("sep", ["\x0b", "\x1c", "\x1e", "\x85", "\u2028"])
    def test_only_newline_splits(self, sep):
        line = f"Ram{sep}bo pnts: 1 kills: 1 dths: 1"
        assert split_lines(f"{line}\nnext") == [line, "next"]


class TestDecodeContent:
    def test_utf8(self):
        assert decode_content("Jiří".encode("utf-8")) == "Jiří"

    def test_cp1250_fallback(self):
        assert decode_content("[USClan]Jiří".encode("cp1250")) == "[USClan]Jiří"

    def test_cp1250_names_stay_distinct(self):
        a = decode_content("Jiří".encode("cp1250"))
        b = decode_content("Jiťí".encode("cp1250"))
        assert (a, b) == ("Jiří", "Jiťí")

    def test_unmappable_bytes_replaced_and_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="collector.line_classifier"):
            text = decode_content(b"Rambo\x81", "endresults-2024-12-18_20-30-00.txt")
        assert text.startswith("Rambo")
        assert "\ufffd" in text
        assert "Undecodable bytes in endresults-2024-12-18_20-30-00.txt" in caplog.text

    def test_clean_decode_not_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="collector.line_classifier"):
            decode_content("Jiří".encode("cp1250"))
        assert caplog.records == []


class TestParseScore:
    def test_plain_integer(self):
        assert parse_score("10") == 10

    def test_surrounding_whitespace(self):
        assert parse_score("  8 ") == 8

    def test_leading_integer_only(self):
        assert parse_score("12 (overtime)") == 12

    def test_non_numeric_is_zero(self):
        assert parse_score("n/a") == 0


# ---------------------------------------------------------------------------
# classify_lines
# ---------------------------------------------------------------------------


class TestHeaderFields:
    def test_all_header_fields(self):
        result = classify_lines(_lines(
            "Map: NVA Base CTF\n"
            "Date: 2024-12-18\n"
            "Time: 20:30:00\n"
            "US Army points: 10\n"
            "Vietcong points: 8\n"
        ))
        assert result.map_name == "NVA Base CTF"
        assert result.date == "2024-12-18"
        assert result.time == "20:30:00"
        assert result.points_us == 10
        assert result.points_vc == 8

    def test_labels_case_insensitive(self):
        result = classify_lines(["MAP: Hue ATG", "date: 2024-01-01", "US ARMY POINTS: 3"])
        assert result.map_name == "Hue ATG"
        assert result.date == "2024-01-01"
        assert result.points_us == 3

    def test_missing_scores_are_none(self):
        result = classify_lines(["Map: Hue ATG"])
        assert result.points_us is None
        assert result.points_vc is None

    def test_zero_score_is_present(self):
        result = classify_lines(["US Army points: 0", "Vietcong points: 0"])
        assert result.points_us == 0
        assert result.points_vc == 0

    def test_empty_input(self):
        assert classify_lines([]) == ClassifiedLines()


class TestPlayerBuckets:
    def test_lines_routed_by_points_label(self):
        result = classify_lines([
            "US Army points: 10",
            "us1 pnts: 1 kills: 1 dths: 1",
            "us2 pnts: 1 kills: 1 dths: 1",
            "Vietcong points: 8",
            "vc1 pnts: 1 kills: 1 dths: 1",
        ])
        assert result.us_lines == [
            "us1 pnts: 1 kills: 1 dths: 1",
            "us2 pnts: 1 kills: 1 dths: 1",
        ]
        assert result.vc_lines == ["vc1 pnts: 1 kills: 1 dths: 1"]

    def test_lines_before_any_points_label_ignored(self):
        result = classify_lines(["Server: RC War", "orphan line", "US Army points: 1"])
        assert result.us_lines == []
        assert result.vc_lines == []

    def test_header_label_inside_block_is_not_a_player_line(self):
        result = classify_lines([
            "US Army points: 10",
            "us1 pnts: 1 kills: 1 dths: 1",
            "Date: 2024-12-18",
            "us2 pnts: 1 kills: 1 dths: 1",
        ])
        assert result.date == "2024-12-18"
        assert result.us_lines == [
            "us1 pnts: 1 kills: 1 dths: 1",
            "us2 pnts: 1 kills: 1 dths: 1",
        ]

    def test_repeated_vc_label_keeps_reading_vc(self):
        result = classify_lines([
            "Vietcong points: 8",
            "vc1 pnts: 1 kills: 1 dths: 1",
            "Vietcong points: 9",
            "vc2 pnts: 1 kills: 1 dths: 1",
        ])
        assert result.points_vc == 9
        assert result.vc_lines == [
            "vc1 pnts: 1 kills: 1 dths: 1",
            "vc2 pnts: 1 kills: 1 dths: 1",
        ]
        assert result.us_lines == []

    def test_trailing_lines_stay_in_last_bucket(self):
        result = classify_lines([
            "Vietcong points: 8",
            "vc1 pnts: 1 kills: 1 dths: 1",
            "Map end rule: 00:00",
        ])
        assert result.vc_lines[-1] == "Map end rule: 00:00"

    def test_line_never_in_both_buckets(self):
        lines = [
            "US Army points: 1", "a", "b",
            "Vietcong points: 2", "c",
            "US Army points: 3", "d",
        ]
        result = classify_lines(lines)
        assert result.us_lines == ["a", "b", "d"]
        assert result.vc_lines == ["c"]
        assert not set(result.us_lines) & set(result.vc_lines)


class TestReadState:
    def test_states(self):
        assert {s.name for s in ReadState} == {"NONE", "READING_US", "READING_VC"}
