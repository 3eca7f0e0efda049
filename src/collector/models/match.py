"""Pydantic v2 validation model for the ``match`` block of a record."""

import warnings

from pydantic import BaseModel, Field, model_validator
from typing_extensions import Self


class MatchModel(BaseModel):
    """Header of one finished round: map, mode, timing, scores and tags."""

    map: str = Field(min_length=1)  # mode token already stripped
    mode: str = Field(min_length=1)
    date: str = Field(min_length=1)
    time: str = Field(min_length=1)
    points_us: int
    points_vc: int
    team_us: str = Field(min_length=1)
    team_vc: str = Field(min_length=1)

    @model_validator(mode="after")
    def warn_same_team_tag(self) -> Self:
        """Both sides resolving to one tag usually means a mixed clan scrim."""
        if self.team_us == self.team_vc:
            warnings.warn(
                f"US and VC share clan tag {self.team_us!r} "
                f"on {self.map.strip()} {self.date} {self.time}",
                stacklevel=2,
            )
        return self
