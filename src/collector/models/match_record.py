"""Pydantic v2 model for a complete match record (one wire array element)."""

from pydantic import BaseModel, Field

from .match import MatchModel
from .player_stats import PlayerStatsModel


class MatchRecordModel(BaseModel):
    """One finished round as posted to the remote collector."""

    hash: str = Field(pattern=r"^[0-9a-f]{32}$")  # md5 of the raw file
    file: str = Field(min_length=1)
    tag: str = ""
    server_name: str = ""
    match: MatchModel
    players_us: dict[str, PlayerStatsModel]
    players_vc: dict[str, PlayerStatsModel]
