"""Match record assembly for a single result file.

Runs classifier, player parser and clan tag identification over one file
and combines the results into a validated wire record. Every rejection is
a skip: ``assemble_match`` returns ``None`` and the caller moves on to
the next file. Only a missing header field is reported above DEBUG, since
it points at a server writing truncated results rather than at a round
that simply does not qualify (unfinished, wrong mode, no clan match).
"""

import hashlib
import logging
from collections.abc import Sequence

from collector.clan_tag import identify_clan_tag
from collector.config import CollectorConfig
from collector.line_classifier import classify_lines, decode_content, split_lines
from collector.models import MatchRecordModel
from collector.player_parser import PlayerStat, parse_players, player_names
from collector.validation import validate_record

logger = logging.getLogger(__name__)


def content_hash(content: bytes | str) -> str:
    """MD5 hex digest of the raw file content, used as the record identity.

    Pass the bytes as read from disk; line endings and encoding are part
    of the identity. A str is hashed as its UTF-8 encoding.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.md5(content).hexdigest()


def find_mode(map_name: str, allowed_modes: Sequence[str]) -> str | None:
    """Return the first allowed mode token contained in ``map_name``.

    A map name holding several allowed tokens (``"Hill CTF ATG"``) is not
    rejected: the token listed first in ``allowed_modes`` is used.
    """
    for mode in allowed_modes:
        if mode and mode in map_name:
            return mode
    return None


def strip_mode(map_name: str, mode: str) -> str:
    """Remove the mode token from the map name, keeping other whitespace."""
    return map_name.replace(mode, "")


def roster_mapping(players: list[PlayerStat]) -> dict[str, dict]:
    """Re-key a roster by player name; a repeated name keeps its last entry."""
    return {
        p.name: {
            "points": p.points,
            "kills": p.kills,
            "deaths": p.deaths,
            "k_d": p.k_d,
        }
        for p in players
    }


def assemble_match(
    content: bytes | str, filename: str, config: CollectorConfig
) -> dict | None:
    """Build the wire record for one result file.

    Args:
        content: Raw bytes of the result file (hashed as-is, then decoded),
            or its already-decoded text.
        filename: Base name of the file, stored in the record.
        config: Run configuration (labels, allowed modes, tag threshold).

    Returns:
        The validated record dict, or ``None`` if the file is skipped.
    """
    text = decode_content(content, filename) if isinstance(content, bytes) else content

    if config.end_marker not in text:
        logger.debug("Skipping %s: round not finished", filename)
        return None

    classified = classify_lines(split_lines(text))

    mode = find_mode(classified.map_name, config.allowed_modes)
    if mode is None:
        logger.debug(
            "Skipping %s: map %r has no allowed mode",
            filename, classified.map_name,
        )
        return None
    map_name = strip_mode(classified.map_name, mode)

    missing = [
        label
        for label, value in (
            ("map", map_name),
            ("date", classified.date),
            ("time", classified.time),
        )
        if not value
    ]
    if classified.points_us is None:
        missing.append("points_us")
    if classified.points_vc is None:
        missing.append("points_vc")
    if missing:
        logger.warning(
            "Invalid match: missing data in %s (%s)", filename, ", ".join(missing)
        )
        return None

    us_players = parse_players(classified.us_lines)
    vc_players = parse_players(classified.vc_lines)

    team_us = identify_clan_tag(player_names(us_players), config.min_tag_matches)
    team_vc = identify_clan_tag(player_names(vc_players), config.min_tag_matches)
    if not team_us or not team_vc:
        logger.debug(
            "Skipping %s: clan tags not identified (us=%r, vc=%r)",
            filename, team_us, team_vc,
        )
        return None

    record = {
        "hash": content_hash(content),
        "file": filename,
        "tag": config.tag,
        "server_name": config.server_name,
        "match": {
            "map": map_name,
            "mode": mode,
            "date": classified.date,
            "time": classified.time,
            "points_us": classified.points_us,
            "points_vc": classified.points_vc,
            "team_us": team_us,
            "team_vc": team_vc,
        },
        "players_us": roster_mapping(us_players),
        "players_vc": roster_mapping(vc_players),
    }

    return validate_record(record, MatchRecordModel, {"file": filename})
