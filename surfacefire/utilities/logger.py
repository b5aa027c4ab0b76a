"""Step-by-step trace of pipeline evaluations.

For every step run, the trace records the step name and the name, native
value and native unit of each of its input and output quantities. Rows are
cached in memory, written to parquet part files on :meth:`TraceLogger.flush`
and merged into a single ``trace.parquet`` on :meth:`TraceLogger.finish`.

A logger created without a folder is disabled: callers check
:attr:`TraceLogger.enabled` before building any rows.
"""
import datetime
import glob
import json
import os
import shutil
from typing import Iterable, Optional

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from surfacefire.utilities.logger_schemas import TraceEntry
from surfacefire.utilities.parquet_writer import ParquetWriter


class TraceLogger:
    def __init__(self, log_folder: Optional[str] = None):
        self.log_folder = log_folder
        self._pass_id = 0
        self._trace_cache = []

        if log_folder is None:
            self._session_folder = None
            self.trace_writer = None
            return

        os.makedirs(self.log_folder, exist_ok=True)
        self._session_folder = self.generate_session_folder()
        os.makedirs(self._session_folder, exist_ok=True)

        self.trace_writer = ParquetWriter(
            os.path.join(self._session_folder, "trace_parts"), schema=TraceEntry
        )

        self._status_log = {
            "session_start": datetime.datetime.now().isoformat(),
            "messages": [],
            "latest_flush": None,
            "passes": 0
        }

    @property
    def enabled(self) -> bool:
        return self._session_folder is not None

    @property
    def session_folder(self) -> Optional[str]:
        return self._session_folder

    @property
    def pass_id(self) -> int:
        return self._pass_id

    def generate_session_folder(self) -> str:
        """Generates the path for this session's trace files based on current datetime

        :return: Session folder path string
        :rtype: str
        """
        date_time_str = datetime.datetime.now().strftime('%d-%b-%Y-%H-%M-%S-%f')
        return os.path.join(self.log_folder, f"trace_{date_time_str}")

    def begin_pass(self):
        if not self.enabled:
            return
        self._pass_id += 1
        self._status_log["passes"] = self._pass_id

    def log_step(self, complex_label: str, step: str, inputs: Iterable, outputs: Iterable):
        """Caches one row per input and output quantity of a step.

        Args:
            complex_label (str): Which fuel complex the pass evaluated.
            step (str): Step name.
            inputs (Iterable[Quantity]): Quantities the step read.
            outputs (Iterable[Quantity]): Quantities the step wrote.
        """
        if not self.enabled:
            return
        for role, quantities in (("input", inputs), ("output", outputs)):
            for q in quantities:
                self._trace_cache.append(TraceEntry(
                    pass_id=self._pass_id,
                    complex=complex_label,
                    step=step,
                    role=role,
                    quantity=q.name,
                    value=float(q.value),
                    unit=q.unit
                ))

    def discard_pass(self):
        """Drops the rows cached for the current pass after it failed."""
        if not self.enabled:
            return
        self._trace_cache = [e for e in self._trace_cache if e.pass_id != self._pass_id]
        self.log_message(f"Pass {self._pass_id} failed, trace rows discarded")

    def log_message(self, message: str):
        if not self.enabled:
            return
        timestamp = datetime.datetime.now().isoformat()
        self._status_log["messages"].append(f"[{timestamp}]: {message}")

    def flush(self):
        if not self.enabled:
            return
        self.trace_writer.write_batch(self._trace_cache)
        self._trace_cache.clear()

        self._status_log["latest_flush"] = datetime.datetime.now().isoformat()
        self._write_status_log()

    def finish(self) -> Optional[str]:
        """Flushes, merges the part files and removes them.

        Returns:
            str: Path of the merged trace file, or None if nothing was traced.
        """
        if not self.enabled:
            return None
        self.flush()

        parts_path = os.path.join(self._session_folder, "trace_parts")
        output_file = os.path.join(self._session_folder, "trace.parquet")
        merged = self._merge_parquet_files(parts_path, output_file)

        if os.path.exists(parts_path):
            shutil.rmtree(parts_path)

        return output_file if merged else None

    def _merge_parquet_files(self, folder_path: str, output_file: str) -> bool:
        parquet_files = sorted(glob.glob(os.path.join(folder_path, "part-*.parquet")))

        if not parquet_files:
            print(f"No parquet files found in {folder_path}")
            return False

        dfs = [pd.read_parquet(f) for f in parquet_files]
        combined_df = pd.concat(dfs, ignore_index=True)

        table = pa.Table.from_pandas(combined_df, preserve_index=False)
        pq.write_table(table, output_file, compression='snappy')
        return True

    def _write_status_log(self):
        status_path = os.path.join(self._session_folder, "status_log.json")
        with open(status_path, 'w') as f:
            json.dump(self._status_log, f, indent = 2)
