"""Pydantic v2 validation model for one player's scoreboard entry."""

from pydantic import BaseModel, Field, model_validator
from typing_extensions import Self


class PlayerStatsModel(BaseModel):
    """Per-player stats as they appear in ``players_us`` / ``players_vc``.

    The player name is the mapping key, not a field.
    """

    points: int = Field(ge=0)
    kills: int = Field(ge=0)
    deaths: int = Field(ge=0)
    # int when deaths == 0 (k_d equals kills), float otherwise
    k_d: int | float

    @model_validator(mode="after")
    def check_kd_consistency(self) -> Self:
        """k_d must follow from kills and deaths."""
        if self.deaths == 0:
            expected = self.kills
        else:
            expected = round(self.kills / self.deaths, 4)
        if abs(self.k_d - expected) > 1e-9:
            raise ValueError(
                f"k_d {self.k_d} inconsistent with "
                f"{self.kills} kills / {self.deaths} deaths"
            )
        return self
