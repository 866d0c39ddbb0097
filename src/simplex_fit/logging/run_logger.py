"""CSV logger for per-iteration metrics of simplex runs."""

from __future__ import annotations

import csv
import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, MutableMapping, Optional

import pandas as pd

# Columns written by `optimize()`; metadata columns follow them.
ITERATION_FIELDS = (
    'timestamp',
    'iteration',
    'evaluations',
    'best_value',
    'worst_value',
    'move',
    'runtime_ms',
)


def _utc_stamp() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


@dataclass
class RunLogger:
    """Buffer iteration rows with shared run metadata and write them as CSV."""

    base_dir: Path
    filename: Optional[str] = None
    metadata: Optional[Dict[str, object]] = None
    field_order: Optional[Iterable[str]] = None

    _records: List[MutableMapping[str, object]] = field(default_factory=list, init=False)
    _resolved_path: Optional[Path] = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.base_dir = Path(self.base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self.metadata = dict(self.metadata) if self.metadata else {}

    def log_iteration(self, **metrics: object) -> None:
        """Buffer one iteration; metadata is copied into the row."""

        record: MutableMapping[str, object] = {'timestamp': _utc_stamp()}
        record.update(self.metadata)
        record.update(metrics)
        self._records.append(record)

    def update_metadata(self, **extra: object) -> None:
        """Merge metadata shared by all rows logged from now on."""

        self.metadata.update(extra)

    @property
    def records(self) -> List[MutableMapping[str, object]]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def to_frame(self) -> pd.DataFrame:
        """Buffered rows as a DataFrame, columns in CSV order."""

        return pd.DataFrame(self._records, columns=self._determine_fieldnames())

    def flush(self) -> Path:
        """Write buffered rows to disk and return the file path."""

        if not self._records:
            raise RuntimeError("No records to write; did the run complete any iteration?")

        path = self._resolve_path()
        with path.open('w', newline='') as handle:
            writer = csv.DictWriter(handle, fieldnames=self._determine_fieldnames(), extrasaction='ignore')
            writer.writeheader()
            for record in self._records:
                writer.writerow(record)

        return path

    def _resolve_path(self) -> Path:
        if self._resolved_path is None:
            stamp = dt.datetime.now(dt.timezone.utc).strftime('%Y%m%dT%H%M%S')
            self._resolved_path = self.base_dir / (self.filename or f"nelder_mead_{stamp}.csv")
        return self._resolved_path

    def _determine_fieldnames(self) -> List[str]:
        if self.field_order:
            return list(self.field_order)

        keys: List[str] = [k for k in ITERATION_FIELDS if any(k in r for r in self._records)]
        for record in self._records:
            for key in record.keys():
                if key not in keys:
                    keys.append(key)
        return keys
