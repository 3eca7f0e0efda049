"""Logging setup for collector runs.

Console output is what the operator watching a cron mail or terminal sees:
INFO and above, short timestamps. Each run can also keep its own DEBUG log
file, which records every skipped result file and why it was skipped.
"""

import logging
from datetime import datetime
from pathlib import Path

CONSOLE_FORMAT = "%(asctime)s %(levelname)-5s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"


def setup_logging(
    data_dir: str = "data",
    console_level: int = logging.INFO,
    write_file: bool = True,
) -> Path | None:
    """Attach console (and optionally file) handlers to the root logger.

    Root handlers are cleared first, so repeated calls (tests, several runs
    in one interpreter) never duplicate output.

    Args:
        data_dir: Base data directory; the log file goes to ``{data_dir}/logs/``.
        console_level: Minimum level shown on the console.
        write_file: When False only the console handler is installed.

    Returns:
        Path of the run log file, or ``None`` when ``write_file`` is False.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    root.addHandler(console)

    # httpx logs every request at INFO; the single POST is reported by us.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    if not write_file:
        return None

    log_dir = Path(data_dir) / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"run-{datetime.now():%Y-%m-%d-%H%M%S}.log"

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
    root.addHandler(file_handler)

    return log_file
