# lbfgs_engine/logger.py
# Iteration trace: solver callback, DataFrame view, CSV export.
from __future__ import annotations
import csv
from typing import Dict, List, Optional
import pathlib

import pandas as pd

from .types import IterationRecord


class TraceLogger:
    """
    Collects per-iteration records and knows how to flush them to CSV.
    Pass an instance as ``callback`` to keep the solver loop free of I/O.
    """

    def __init__(self, run_name: str = "lbfgs", out_dir: Optional[pathlib.Path] = None):
        self.run_name = run_name
        self.out_dir = pathlib.Path(out_dir) if out_dir is not None else None
        self._records: List[Dict] = []
        self._columns: set[str] = set()

    # solver callback
    def __call__(self, record: IterationRecord) -> None:
        self.log(record.to_dict())

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> List[Dict]:
        return list(self._records)

    def log(self, record: Dict) -> None:
        """Append one row; rows may carry different keys, missing ones stay blank."""
        self._records.append(record)
        self._columns.update(record)

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(self._records, columns=sorted(self._columns))

    def flush(self) -> pathlib.Path:
        """Dump the trace to ``<out_dir>/<run_name>.csv`` and return that path.

        Columns are the sorted union of all keys seen. An empty trace
        creates the directory but no file.
        """
        if self.out_dir is None:
            raise ValueError("TraceLogger has no out_dir to flush to")
        self.out_dir.mkdir(parents=True, exist_ok=True)
        path = self.out_dir / f"{self.run_name}.csv"
        if not self._records:
            return path
        with path.open("w", newline="") as fh:
            writer = csv.DictWriter(fh, fieldnames=sorted(self._columns))
            writer.writeheader()
            writer.writerows(self._records)
        return path
