"""Batch pipeline for the results collector.

Provides the run entry points that turn a results directory (or any
iterable of ``(filename, content)`` pairs) into a batch of match records
and hand it to the transport:

* **process_contents** -- assemble records from in-memory file contents.
* **collect_directory** -- discover and read files, then process them.
* **run_collection** -- collect and send; returns a ``RunSummary``.

Also provides **ProgressTracker**, which counts processed and skipped
files and formats the end-of-run summary.

Files are processed one at a time; per-file state is dropped as soon as
its record is assembled or the file is skipped.
"""

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass, field

from collector.assembler import assemble_match
from collector.config import CollectorConfig
from collector.discovery import discover_result_files, read_result_file
from collector.http_client import ResultsClient, SendResult

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Progress tracking
# ---------------------------------------------------------------------------

class ProgressTracker:
    """Count per-file outcomes and report them at the end of a run."""

    def __init__(self, total: int = 0) -> None:
        self.total = total
        self.assembled: int = 0
        self.skipped: int = 0
        self.unreadable: int = 0
        self.errors: int = 0
        self._start_time: float = time.monotonic()

    def record_assembled(self, filename: str) -> None:
        self.assembled += 1
        logger.debug("[%d/%d] %s assembled", self.seen, self.total, filename)

    def record_skipped(self, filename: str) -> None:
        self.skipped += 1
        logger.debug("[%d/%d] %s skipped", self.seen, self.total, filename)

    def record_unreadable(self, filename: str) -> None:
        self.unreadable += 1
        logger.debug("[%d/%d] %s unreadable", self.seen, self.total, filename)

    def record_error(self, filename: str) -> None:
        self.errors += 1
        logger.debug("[%d/%d] %s failed", self.seen, self.total, filename)

    @property
    def seen(self) -> int:
        return self.assembled + self.skipped + self.unreadable + self.errors

    def summary(self) -> dict:
        """Machine-readable counts for the run."""
        return {
            "total": self.total,
            "seen": self.seen,
            "assembled": self.assembled,
            "skipped": self.skipped,
            "unreadable": self.unreadable,
            "errors": self.errors,
            "elapsed": round(time.monotonic() - self._start_time, 3),
        }

    def format_summary(self) -> str:
        s = self.summary()
        return (
            f"{s['seen']} files processed: {s['assembled']} matches, "
            f"{s['skipped']} skipped, {s['unreadable']} unreadable, "
            f"{s['errors']} errors ({s['elapsed']:.1f}s)"
        )


@dataclass
class BatchResult:
    """Records assembled from one pass over the result files."""

    records: list[dict] = field(default_factory=list)
    progress: ProgressTracker = field(default_factory=ProgressTracker)


@dataclass
class RunSummary:
    """Outcome of a full collect-and-send run."""

    batch: BatchResult
    send_result: SendResult | None = None  # None on dry runs

    @property
    def success(self) -> bool:
        return self.send_result is None or self.send_result.success

    @property
    def sent(self) -> int:
        if self.send_result is not None and self.send_result.success:
            return len(self.batch.records)
        return 0


# ---------------------------------------------------------------------------
# Processing
# ---------------------------------------------------------------------------

def _assemble_one(
    filename: str,
    content: bytes | str,
    config: CollectorConfig,
    batch: BatchResult,
) -> None:
    progress = batch.progress
    try:
        record = assemble_match(content, filename, config)
    except Exception:
        logger.exception("Unexpected error assembling %s, skipping", filename)
        progress.record_error(filename)
        return

    if record is None:
        progress.record_skipped(filename)
    else:
        batch.records.append(record)
        progress.record_assembled(filename)


def process_contents(
    items: Iterable[tuple[str, bytes | str]],
    config: CollectorConfig,
) -> BatchResult:
    """Assemble match records from ``(filename, content)`` pairs.

    ``content`` is the raw file bytes, or already-decoded text.

    Args:
        items: Result files in processing order.
        config: Run configuration.

    Returns:
        BatchResult with records in input order and per-file counts.
    """
    items = list(items)
    batch = BatchResult(progress=ProgressTracker(total=len(items)))
    for filename, content in items:
        _assemble_one(filename, content, config, batch)
    return batch


def collect_directory(config: CollectorConfig) -> BatchResult:
    """Discover, read and assemble every result file in ``config.directory``.

    Raises:
        DiscoveryError: If the directory cannot be listed.
    """
    files = discover_result_files(
        config.directory, only_today=config.only_today, today=config.today
    )
    batch = BatchResult(progress=ProgressTracker(total=len(files)))

    for result_file in files:
        content = read_result_file(result_file)
        if content is None:
            batch.progress.record_unreadable(result_file.filename)
            continue
        _assemble_one(result_file.filename, content, config, batch)

    logger.info(batch.progress.format_summary())
    return batch


def format_match_line(index: int, record: dict) -> str:
    """One-line human summary of a record, as printed on dry runs."""
    match = record["match"]
    return "{}. {} vs {} {}:{} ({}) - {}".format(
        index,
        match["team_us"],
        match["team_vc"],
        match["points_us"],
        match["points_vc"],
        match["map"],
        record["file"],
    )


def run_collection(
    config: CollectorConfig,
    client: ResultsClient | None = None,
    dry_run: bool = False,
) -> RunSummary:
    """Collect the batch for ``config`` and send it in one POST.

    An empty batch is still posted, the same as a batch with records.

    Args:
        config: Run configuration.
        client: Transport to use; one is built from ``config`` (and closed
            afterwards) when omitted.
        dry_run: Assemble and log the batch without sending it.

    Returns:
        RunSummary with the batch and the send result.

    Raises:
        DiscoveryError: If the directory cannot be listed.
    """
    batch = collect_directory(config)

    if dry_run:
        for i, record in enumerate(batch.records, start=1):
            logger.info(format_match_line(i, record))
        logger.info("Dry run: %d matches not sent", len(batch.records))
        return RunSummary(batch=batch)

    owns_client = client is None
    if client is None:
        client = ResultsClient(config.api_endpoint, timeout=config.request_timeout)
    try:
        send_result = client.send(batch.records)
    finally:
        if owns_client:
            client.close()

    if send_result.success:
        logger.info(
            "Successfully sent %d matches to the API", len(batch.records)
        )
    return RunSummary(batch=batch, send_result=send_result)
