"""Pydantic v2 models for the match records sent to the remote collector.

Re-exports all model classes for convenient import::

    from collector.models import MatchRecordModel, PlayerStatsModel
"""

from .match import MatchModel
from .match_record import MatchRecordModel
from .player_stats import PlayerStatsModel

__all__ = [
    "MatchModel",
    "MatchRecordModel",
    "PlayerStatsModel",
]
