"""Collector configuration with defaults matching the reference deployment."""

from dataclasses import dataclass

DEFAULT_API_ENDPOINT = "https://api.vietcong-hub.cz/v1/rounds"

# endresults-YYYY-MM-DD_HH-mm-ss.txt
FILE_PATTERN = r"endresults-\d{4}-\d{2}-\d{2}_\d{2}-\d{2}-\d{2}\.txt$"

DEFAULT_MODES = ("CTF", "ATG")

# Written by the server only once a round has fully ended
END_MARKER = "Map end rule: 00:00"


@dataclass(frozen=True)
class CollectorConfig:
    """Configuration for one collector run.

    Frozen: every pipeline stage receives the same instance.
    """

    # Labels attached to every record sent by this server
    server_name: str = ""
    tag: str = ""

    # Mode tokens accepted in the map name, in priority order
    allowed_modes: tuple[str, ...] = DEFAULT_MODES

    # Result file source
    directory: str = "mpresults"
    only_today: bool = False
    today: str | None = None       # YYYY-MM-DD override; local date when None

    # Remote collector
    api_endpoint: str = DEFAULT_API_ENDPOINT
    request_timeout: float = 30.0  # seconds, POST fails rather than hangs

    # Minimum players that must share a substring for it to be a clan tag
    min_tag_matches: int = 3

    end_marker: str = END_MARKER

    # Logs go to {data_dir}/logs/
    data_dir: str = "data"
