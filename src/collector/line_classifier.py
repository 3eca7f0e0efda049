"""Line classifier for server end-of-round result files.

Provides:
- split_lines: raw file content -> trimmed, non-empty lines
- classify_lines: pure function turning lines into header fields plus the
  raw US / VC player line buckets
- ReadState, ClassifiedLines: state enum and structured return type

A result file looks like::

    Map: NVA Base CTF
    Date: 2024-12-18
    Time: 20:30:00
    US Army points: 10
    [US]Rambo pnts: 12 kills: 4 dths: 1
    ...
    Vietcong points: 8
    Charlie[VC] pnts: 7 kills: 2 dths: 3
    ...
    Map end rule: 00:00
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)

# Windows Central European code page, used by Czech and Slovak servers
FALLBACK_ENCODING = "cp1250"

MAP_LABEL = "map:"
DATE_LABEL = "date:"
TIME_LABEL = "time:"
US_POINTS_LABEL = "us army points:"
VC_POINTS_LABEL = "vietcong points:"

_LEADING_INT = re.compile(r"^[+-]?\d+")


class ReadState(Enum):
    """Which player bucket non-label lines are currently routed to."""

    NONE = "none"
    READING_US = "reading_us"
    READING_VC = "reading_vc"


@dataclass
class ClassifiedLines:
    """Header fields and raw player lines extracted from one result file."""

    map_name: str = ""
    date: str = ""
    time: str = ""
    points_us: int | None = None  # None until the label is seen
    points_vc: int | None = None
    us_lines: list[str] = field(default_factory=list)
    vc_lines: list[str] = field(default_factory=list)


def decode_content(raw: bytes, filename: str = "") -> str:
    """Decode raw result file bytes.

    UTF-8 is tried first, then cp1250. Bytes that neither encoding maps
    are replaced, and that loss is logged since it can merge two player
    names into one roster key.
    """
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        pass
    try:
        return raw.decode(FALLBACK_ENCODING)
    except UnicodeDecodeError:
        logger.warning(
            "Undecodable bytes in %s replaced; player names may be altered",
            filename or "result file",
        )
        return raw.decode(FALLBACK_ENCODING, errors="replace")


def split_lines(content: str) -> list[str]:
    """Split content on "\\n" into trimmed lines, dropping blank ones.

    Only "\\n" separates lines; other Unicode line breaks may be part of a
    player name. A trailing "\\r" is removed by the trim.
    """
    return [line.strip() for line in content.split("\n") if line.strip()]


def parse_score(value: str) -> int:
    """Parse the leading integer of a score value; anything else counts as 0."""
    m = _LEADING_INT.match(value.strip())
    return int(m.group(0)) if m else 0


def _value_after(line: str, label: str) -> str:
    return line[len(label):].strip()


def classify_lines(lines: list[str]) -> ClassifiedLines:
    """Classify result file lines into header fields and player buckets.

    Pure function: lines in, ClassifiedLines out. No side effects.

    Header labels are matched as case-insensitive prefixes and always win
    over bucket assignment, so a label line is never stored as a player
    line. Only the points labels move the state machine; a repeated label
    overwrites the earlier value.

    Args:
        lines: Lines of one result file, in file order.

    Returns:
        ClassifiedLines with whatever header fields were found and the
        non-label lines seen after each points label.
    """
    result = ClassifiedLines()
    state = ReadState.NONE

    for raw in lines:
        line = raw.strip()
        if not line:
            continue
        lowered = line.lower()

        if lowered.startswith(MAP_LABEL):
            result.map_name = _value_after(line, MAP_LABEL)
        elif lowered.startswith(DATE_LABEL):
            result.date = _value_after(line, DATE_LABEL)
        elif lowered.startswith(TIME_LABEL):
            result.time = _value_after(line, TIME_LABEL)
        elif lowered.startswith(US_POINTS_LABEL):
            result.points_us = parse_score(_value_after(line, US_POINTS_LABEL))
            state = ReadState.READING_US
        elif lowered.startswith(VC_POINTS_LABEL):
            result.points_vc = parse_score(_value_after(line, VC_POINTS_LABEL))
            state = ReadState.READING_VC
        elif state is ReadState.READING_US:
            result.us_lines.append(line)
        elif state is ReadState.READING_VC:
            result.vc_lines.append(line)

    return result
