from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..dataset.parser import MalformedInputError
from ..export.image import ExportError
from ..models.error_record import ErrorRecord

"""Error log for fatal dataset load / card export failures.

- JSON Lines with a fixed key set (see ErrorRecord)
- one ``logs/errors-YYYYMMDD-HHMMSS.log`` (UTC) per run, created on first flush
- exceptions are classified into an error type and, where the failure can be
  located, the 1-based dataset line
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
    "MALFORMED_INPUT",
    "READ_FAILED",
    "EXPORT_FAILED",
    "UNEXPECTED_ERROR",
    "classify_failure",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"

MALFORMED_INPUT = "MALFORMED_INPUT"  # 引用符が閉じていない
READ_FAILED = "READ_FAILED"  # 読み込み失敗 / UTF-8 として不正
EXPORT_FAILED = "EXPORT_FAILED"
UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


def _decode_error_line(exc: UnicodeDecodeError) -> int:
    data = exc.object
    if not isinstance(data, (bytes, bytearray)):
        return -1
    return data[: exc.start].count(b"\n") + 1


def classify_failure(exc: BaseException) -> tuple[str, int]:
    """Map an exception to (error_type, line); line is -1 when unknown."""
    if isinstance(exc, MalformedInputError):
        return MALFORMED_INPUT, exc.line
    if isinstance(exc, UnicodeDecodeError):
        return READ_FAILED, _decode_error_line(exc)
    if isinstance(exc, OSError):
        return READ_FAILED, -1
    if isinstance(exc, ExportError):
        return EXPORT_FAILED, -1
    return UNEXPECTED_ERROR, -1


class ErrorLogBuffer:
    """Buffers failure records for one run; flush() appends them as JSON Lines."""

    def __init__(self, logs_dir: Path = LOGS_DIR) -> None:
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None
        self._logs_dir = logs_dir

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"errors-{stamp}.log"
        return self._file_path

    @property
    def records(self) -> tuple[ErrorRecord, ...]:
        return tuple(self._records)

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def record_failure(self, source: str, exc: BaseException) -> ErrorRecord:
        """Classify ``exc`` and buffer a record for ``source`` (dataset path or export dir)."""
        error_type, line = classify_failure(exc)
        record = ErrorRecord.create(source, line, error_type, str(exc))
        self._records.append(record)
        return record

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; returns the log path, or None if nothing was written."""
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
