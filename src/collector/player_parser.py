"""Player line parser for one team block of a result file.

Provides:
- parse_players: pure function extracting PlayerStat rows from raw lines
- kd_ratio: kill/death ratio with the zero-deaths policy
- player_names: ordered names fed to clan tag identification
"""

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# "<name> pnts: X     kills: Y    dths: Z" -- the name may hold spaces and
# any punctuation, so it is everything before the first "pnts:".
PLAYER_LINE_RE = re.compile(
    r"^(?P<name>.*?)pnts:\s+(?P<points>\d+)\s+kills:\s+(?P<kills>\d+)"
    r"\s+dths:\s+(?P<deaths>\d+)",
    re.IGNORECASE,
)

SPECTATOR_PREFIX = "spectator("

KD_PRECISION = 4


@dataclass
class PlayerStat:
    """Scoreboard stats for one player on one side of a match."""

    name: str
    points: int
    kills: int
    deaths: int
    k_d: float | int


def kd_ratio(kills: int, deaths: int) -> float | int:
    """Kills per death rounded to 4 places; equals ``kills`` when deaths is 0."""
    if deaths > 0:
        return round(kills / deaths, KD_PRECISION)
    return kills


def is_spectator(name: str) -> bool:
    return name.lower().startswith(SPECTATOR_PREFIX)


def parse_players(lines: list[str]) -> list[PlayerStat]:
    """Parse a bucket of player lines into PlayerStat rows.

    Lines that do not match the scoreboard grammar are dropped, as are
    spectators. Neither case stops parsing of the following lines.

    Args:
        lines: Raw lines of one team block, in file order.

    Returns:
        PlayerStat rows in the order they appear.
    """
    players: list[PlayerStat] = []

    for line in lines:
        m = PLAYER_LINE_RE.match(line.strip())
        if m is None:
            logger.debug("Ignoring non-player line: %r", line)
            continue

        name = m.group("name").strip()
        if is_spectator(name):
            continue

        kills = int(m.group("kills"))
        deaths = int(m.group("deaths"))
        players.append(
            PlayerStat(
                name=name,
                points=int(m.group("points")),
                kills=kills,
                deaths=deaths,
                k_d=kd_ratio(kills, deaths),
            )
        )

    return players


def player_names(players: list[PlayerStat]) -> list[str]:
    return [p.name for p in players]
