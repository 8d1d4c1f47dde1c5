"""Structured logging and verbosity levels for accessor generation runs."""

from __future__ import annotations

import json
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from pathlib import Path
from typing import Any

from rich.console import Console


class Verbosity(IntEnum):
    """Verbosity levels for console output."""

    DEFAULT = 0   # Summary table only
    VERBOSE = 1   # + per-request status
    DEBUG = 2     # + identities and timing


@dataclass
class RequestLog:
    """Per-request generation statistics."""

    name: str
    identity: str = ""
    built: bool = False
    cached: bool = False
    class_count: int = 0
    time_seconds: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "identity": self.identity,
            "built": self.built,
            "cached": self.cached,
            "class_count": self.class_count,
            "time_seconds": self.time_seconds,
        }


@dataclass
class RunLog:
    """Structured log of a complete generation run.

    The dict format is::

        {
            "run_id": "20240315T101500Z",
            "requests": {
                "generation of dependency accessors for libs": {
                    "identity": "9f2c...",
                    "built": true,
                    "cached": false,
                    "class_count": 1,
                    "time_seconds": 0.04,
                },
                ...
            },
            "validation_errors": [],
            "total_built": 1,
            "total_cached": 0,
            "total_time": 0.05,
        }
    """

    run_id: str = ""
    requests: dict[str, RequestLog] = field(default_factory=dict)
    validation_errors: list[str] = field(default_factory=list)
    total_time: float = 0.0
    total_built: int = 0
    total_cached: int = 0

    def get_or_create_request(self, name: str) -> RequestLog:
        """Get existing request log or create a new one."""
        if name not in self.requests:
            self.requests[name] = RequestLog(name=name)
        return self.requests[name]

    def finalize(self) -> None:
        """Compute totals from request data."""
        self.total_built = sum(1 for r in self.requests.values() if r.built)
        self.total_cached = sum(1 for r in self.requests.values() if r.cached)

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "requests": {name: req.to_dict() for name, req in self.requests.items()},
            "validation_errors": list(self.validation_errors),
            "total_built": self.total_built,
            "total_cached": self.total_cached,
            "total_time": self.total_time,
        }


class TypecatLogger:
    """Structured logger for accessor generation runs.

    Writes JSONL log files to ``logs_dir`` and optionally emits console
    output via Rich based on verbosity level. Safe to call from worker
    threads.
    """

    def __init__(
        self,
        verbosity: Verbosity = Verbosity.DEFAULT,
        logs_dir: Path | None = None,
        console: Console | None = None,
    ):
        self.verbosity = verbosity
        self.run_log = RunLog(
            run_id=datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ"),
        )
        self._console = console
        self._lock = threading.Lock()
        self._log_file = None
        self._log_path: Path | None = None
        self._starts: dict[str, float] = {}

        if logs_dir is not None:
            logs_dir.mkdir(parents=True, exist_ok=True)
            self._log_path = logs_dir / f"{self.run_log.run_id}.jsonl"
            self._log_file = open(self._log_path, "a")

    @property
    def log_path(self) -> Path | None:
        return self._log_path

    def _write_event(self, event: dict[str, Any]) -> None:
        """Write a JSON event to the JSONL log file. Caller holds the lock."""
        if self._log_file is not None:
            event["timestamp"] = datetime.now(timezone.utc).isoformat()
            self._log_file.write(json.dumps(event) + "\n")
            self._log_file.flush()

    def _console_print(self, message: str, min_verbosity: Verbosity) -> None:
        if self.verbosity >= min_verbosity:
            if self._console is None:
                self._console = Console()
            self._console.print(message)

    # -- Request events --

    def request_start(self, name: str) -> None:
        with self._lock:
            self._starts[name] = time.time()
            self.run_log.get_or_create_request(name)
            self._write_event({"event": "request_start", "request": name})

    def workspace_cached(self, name: str, identity: str, class_count: int) -> None:
        """Log that a request was served from an existing workspace."""
        with self._lock:
            req = self._finish(name, identity, class_count)
            req.cached = True
            self._write_event({
                "event": "workspace_cached",
                "request": name,
                "identity": identity,
                "time_seconds": round(req.time_seconds, 3),
            })
            self._console_print(f"  [cyan]=[/cyan] {name} (cached)", Verbosity.VERBOSE)
            self._console_print(f"      [dim]{identity}[/dim]", Verbosity.DEBUG)

    def workspace_built(self, name: str, identity: str, class_count: int) -> None:
        """Log that a request was generated and compiled."""
        with self._lock:
            req = self._finish(name, identity, class_count)
            req.built = True
            self._write_event({
                "event": "workspace_built",
                "request": name,
                "identity": identity,
                "class_count": class_count,
                "time_seconds": round(req.time_seconds, 3),
            })
            self._console_print(
                f"  [green]+[/green] {name} ({class_count} classes)", Verbosity.VERBOSE
            )
            self._console_print(
                f"      [dim]{identity} in {req.time_seconds:.2f}s[/dim]", Verbosity.DEBUG
            )

    def _finish(self, name: str, identity: str, class_count: int) -> RequestLog:
        req = self.run_log.get_or_create_request(name)
        req.identity = identity
        req.class_count = class_count
        req.time_seconds = time.time() - self._starts.pop(name, time.time())
        return req

    def validation_failed(self, errors: list[str]) -> None:
        """Log project-name violations (project accessors skipped)."""
        with self._lock:
            self.run_log.validation_errors.extend(errors)
            self._write_event({"event": "validation_failed", "errors": list(errors)})
            self._console_print(
                f"  [yellow]![/yellow] project accessors skipped ({len(errors)} violations)",
                Verbosity.VERBOSE,
            )

    # -- Run lifecycle --

    def run_start(self, request_count: int) -> None:
        with self._lock:
            self._write_event({"event": "run_start", "request_count": request_count})

    def run_finish(self, total_time: float) -> None:
        """Log the completion of a run and finalize stats."""
        with self._lock:
            self.run_log.total_time = total_time
            self.run_log.finalize()
            self._write_event({
                "event": "run_finish",
                "total_time": round(total_time, 3),
                "total_built": self.run_log.total_built,
                "total_cached": self.run_log.total_cached,
            })
            self._close()

    def close(self) -> None:
        """Close the log file if open."""
        with self._lock:
            self._close()

    def _close(self) -> None:
        if self._log_file is not None:
            self._log_file.close()
            self._log_file = None
