"""JSONL event logging.

Every event goes to ``logs.jsonl``. Events at error level are also written
to ``errors.jsonl`` so failures can be reviewed without the noise.
Passphrases are never logged.
"""

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

LEVEL_INFO = "info"
LEVEL_WARNING = "warning"
LEVEL_ERROR = "error"


@dataclass
class LogEntry:
    """A single log entry."""

    timestamp: str
    event: str
    level: str = LEVEL_INFO
    user_id: int | None = None
    command: str | None = None
    wordlist: str | None = None
    length: int | None = None
    error: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict, excluding None values."""
        data = asdict(self)
        return {k: v for k, v in data.items() if v is not None and v != {} and v != []}


class JSONLLogger:
    """Logger that writes structured logs in JSONL format."""

    def __init__(
        self,
        log_dir: str | Path | None = None,
        filename: str = "logs.jsonl",
        error_filename: str = "errors.jsonl",
        max_size_mb: float = 10.0,
    ) -> None:
        if log_dir is None:
            log_dir = Path.home() / ".passph" / "logs"
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.filename = filename
        self.error_filename = error_filename
        self.max_size_bytes = int(max_size_mb * 1024 * 1024)

    @property
    def log_path(self) -> Path:
        """Current log file path."""
        return self.log_dir / self.filename

    @property
    def error_log_path(self) -> Path:
        """Current error log file path."""
        return self.log_dir / self.error_filename

    def _rotate_if_needed(self, path: Path) -> None:
        """Rotate a log file if it exceeds max size."""
        if not path.exists():
            return

        if path.stat().st_size >= self.max_size_bytes:
            timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S_%f")
            path.rename(self.log_dir / f"{path.stem}_{timestamp}.jsonl")

    def _append(self, path: Path, line: str) -> None:
        self._rotate_if_needed(path)
        with open(path, "a", encoding="utf-8") as f:
            f.write(line)

    def _write(self, entry: LogEntry) -> None:
        """Write a log entry to the file(s)."""
        line = json.dumps(entry.to_dict(), ensure_ascii=False) + "\n"
        self._append(self.log_path, line)
        if entry.level == LEVEL_ERROR:
            self._append(self.error_log_path, line)

    def log(
        self,
        event: str,
        *,
        level: str = LEVEL_INFO,
        user_id: int | None = None,
        command: str | None = None,
        wordlist: str | None = None,
        length: int | None = None,
        error: str | None = None,
        **extra: Any,
    ) -> None:
        """Log an event."""
        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            event=event,
            level=level,
            user_id=user_id,
            command=command,
            wordlist=wordlist,
            length=length,
            error=error,
            extra=extra if extra else {},
        )
        self._write(entry)

    def log_command(self, command: str, *, user_id: int, known: bool = True) -> None:
        """Log a command sent by a user."""
        self.log(
            "command",
            level=LEVEL_INFO if known else LEVEL_WARNING,
            user_id=user_id,
            command=command,
            known=known,
        )

    def log_generated(self, *, user_id: int, wordlist: str, length: int, regenerated: bool = False) -> None:
        """Log that a passphrase was generated (not the passphrase itself)."""
        self.log(
            "passphrase_generated",
            user_id=user_id,
            wordlist=wordlist,
            length=length,
            regenerated=regenerated,
        )

    def log_setting(self, setting: str, *, user_id: int, **details: Any) -> None:
        """Log a changed user setting."""
        self.log("setting_changed", user_id=user_id, setting=setting, **details)

    def log_rejected(self, setting: str, reason: str, *, user_id: int) -> None:
        """Log user input that failed validation."""
        self.log(
            "input_rejected",
            level=LEVEL_WARNING,
            user_id=user_id,
            setting=setting,
            error=reason,
        )

    def log_error(self, error: str, *, user_id: int | None = None, context: str | None = None) -> None:
        """Log an error."""
        if context:
            self.log("error", level=LEVEL_ERROR, user_id=user_id, error=error, context=context)
        else:
            self.log("error", level=LEVEL_ERROR, user_id=user_id, error=error)


# Global logger instance
_logger: JSONLLogger | None = None


def get_logger() -> JSONLLogger:
    """Get the global logger instance."""
    global _logger
    if _logger is None:
        _logger = JSONLLogger()
    return _logger


def configure_logger(log_dir: str | Path | None = None, max_size_mb: float = 10.0) -> JSONLLogger:
    """Configure and return the global logger."""
    global _logger
    _logger = JSONLLogger(log_dir=log_dir, max_size_mb=max_size_mb)
    return _logger
