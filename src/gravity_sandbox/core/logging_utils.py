"""Buffered CSV recording of simulation runs."""
from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence, TextIO


class _BufferedCsv:
    """One CSV file whose rows are written in batches."""

    def __init__(self, path: Path, header: Sequence[str], threshold: int) -> None:
        self.path = path
        self._fh: TextIO = path.open("w", newline="")
        self._fh.write(",".join(header) + "\n")
        self._rows: list[str] = []
        self._threshold = max(1, threshold)

    def append(self, row: str) -> None:
        self._rows.append(row)
        if len(self._rows) >= self._threshold:
            self.flush()

    def flush(self) -> None:
        if self._rows:
            self._fh.write("\n".join(self._rows) + "\n")
            self._fh.flush()
            self._rows.clear()

    def close(self) -> None:
        self.flush()
        self._fh.close()


class RunLogger:
    """Stores the numeric history of one run in its own folder.

    Parameters
    ----------
    root_dir:
        Directory holding one sub-folder per run.
    run_id:
        Optional identifier. Defaults to ``YYYYmmdd_HHMMSS_run``; a numeric
        suffix is added when the folder already exists.
    timeseries_flush_threshold, events_flush_threshold:
        Number of buffered rows that triggers a write to disk.
    """

    TIMESERIES_HEADER = ["t", "x", "y", "vx", "vy", "energy", "px", "py", "e", "p", "focus"]
    EVENTS_HEADER = ["t", "type", "focus", "e", "details"]

    TIMESERIES_FILENAME = "timeseries.csv"
    EVENTS_FILENAME = "events.csv"
    META_FILENAME = "meta.json"
    LAST_RUN_FILENAME = "last_run.txt"

    def __init__(
        self,
        root_dir: str | Path = "data/runs",
        run_id: Optional[str] = None,
        *,
        timeseries_flush_threshold: int = 200,
        events_flush_threshold: int = 20,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)

        self.run_id = self._unique_run_id(run_id)
        self.run_dir = self.root_dir / self.run_id
        self.run_dir.mkdir(parents=True, exist_ok=False)

        self.meta_path = self.run_dir / self.META_FILENAME
        self._timeseries = _BufferedCsv(
            self.run_dir / self.TIMESERIES_FILENAME,
            self.TIMESERIES_HEADER,
            timeseries_flush_threshold,
        )
        self._events = _BufferedCsv(
            self.run_dir / self.EVENTS_FILENAME,
            self.EVENTS_HEADER,
            events_flush_threshold,
        )
        self._closed = False

        (self.root_dir / self.LAST_RUN_FILENAME).write_text(self.run_id, encoding="utf-8")

    def _unique_run_id(self, run_id: Optional[str]) -> str:
        base = run_id or f"{datetime.now().strftime('%Y%m%d_%H%M%S')}_run"
        candidate = base
        suffix = 1
        while (self.root_dir / candidate).exists():
            candidate = f"{base}_{suffix:02d}"
            suffix += 1
        return candidate

    @property
    def timeseries_path(self) -> Path:
        return self._timeseries.path

    @property
    def events_path(self) -> Path:
        return self._events.path

    def write_meta(self, meta: dict) -> None:
        with self.meta_path.open("w", encoding="utf-8") as fh:
            json.dump(meta, fh, indent=2, sort_keys=True)

    def log_ts(self, values: Sequence[float]) -> None:
        if len(values) != len(self.TIMESERIES_HEADER):
            raise ValueError(
                f"expected {len(self.TIMESERIES_HEADER)} time series values, got {len(values)}"
            )
        self._timeseries.append(",".join(self._format_value(v) for v in values))

    def log_event(self, values: Sequence[object]) -> None:
        if len(values) != len(self.EVENTS_HEADER):
            raise ValueError(
                f"expected {len(self.EVENTS_HEADER)} event values, got {len(values)}"
            )
        self._events.append(",".join(self._format_event_value(v) for v in values))

    def close(self) -> None:
        if self._closed:
            return
        self._timeseries.close()
        self._events.close()
        self._closed = True

    @staticmethod
    def _format_value(value: float) -> str:
        return f"{value:.10g}"

    @staticmethod
    def _format_event_value(value: object) -> str:
        if isinstance(value, (int, float)):
            return f"{value:.10g}"
        text = str(value)
        if "," in text or '"' in text:
            return '"' + text.replace('"', '""') + '"'
        return text

    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None


__all__ = ["RunLogger"]
