"""Tests for the player line parser (collector.player_parser)."""

import pytest

from collector.player_parser import (
    PlayerStat,
    kd_ratio,
    parse_players,
    player_names,
)


class TestKdRatio:
    def test_zero_deaths_equals_kills(self):
        assert kd_ratio(5, 0) == 5
        assert isinstance(kd_ratio(5, 0), int)

    def test_zero_kills_zero_deaths(self):
        assert kd_ratio(0, 0) == 0

    def test_rounded_to_four_places(self):
        assert kd_ratio(2, 3) == 0.6667
        assert kd_ratio(1, 7) == round(1 / 7, 4)

    def test_whole_ratio(self):
        assert kd_ratio(4, 2) == 2.0


class TestParsePlayers:
    def test_single_line(self):
        players = parse_players(["[USClan]Rambo pnts: 12     kills: 4    dths: 1"])
        assert players == [
            PlayerStat(name="[USClan]Rambo", points=12, kills=4, deaths=1, k_d=4.0)
        ]

    def test_name_with_spaces_and_punctuation(self):
        players = parse_players(["Big Tom (the 2nd) pnts: 3 kills: 1 dths: 2"])
        assert players[0].name == "Big Tom (the 2nd)"

    def test_case_insensitive_tokens(self):
        players = parse_players(["Hawk PNTS: 1 KILLS: 2 DTHS: 0"])
        assert players[0].kills == 2
        assert players[0].k_d == 2

    def test_zero_stats_player_kept(self):
        players = parse_players(["Newbie pnts: 0 kills: 0 dths: 0"])
        assert players[0].points == 0
        assert players[0].k_d == 0

    @pytest.mark.parametrize("name", ["Spectator(1)", "spectator(Bob)", "SPECTATOR(x)"])
    def test_spectators_excluded(self, name):
        players = parse_players([
            f"{name} pnts: 0 kills: 0 dths: 0",
            "Rambo pnts: 1 kills: 1 dths: 1",
        ])
        assert player_names(players) == ["Rambo"]

    def test_malformed_lines_dropped(self):
        players = parse_players([
            "Rambo pnts: 1 kills: 2",
            "Hawk kills: 1 dths: 1",
            "Map end rule: 00:00",
            "Charlie pnts: 4 kills: 2 dths: 1",
        ])
        assert player_names(players) == ["Charlie"]
        assert players[0].k_d == 2.0

    def test_order_preserved(self):
        lines = [f"p{i} pnts: {i} kills: {i} dths: 1" for i in range(5)]
        assert player_names(parse_players(lines)) == ["p0", "p1", "p2", "p3", "p4"]

    def test_duplicate_names_both_returned(self):
        players = parse_players([
            "Twin pnts: 1 kills: 1 dths: 1",
            "Twin pnts: 2 kills: 2 dths: 1",
        ])
        assert len(players) == 2

    def test_empty_bucket(self):
        assert parse_players([]) == []
