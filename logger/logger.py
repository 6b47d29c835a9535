import json
import os
from datetime import datetime, timezone


class JSONLogger:
    """Appends run records as JSON lines, one file per UTC day."""

    def __init__(self, output_directory="logs/", log_file_prefix="tapemachine_"):
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        os.makedirs(self.output_directory, exist_ok=True)
        self.today = self._today()
        self.current_log = self._get_log_filename()

    @staticmethod
    def _today():
        return datetime.now(timezone.utc).strftime("%Y-%m-%d")

    def _get_log_filename(self):
        filename = f"{self.log_file_prefix}{self.today}.jsonl"
        return os.path.join(self.output_directory, filename)

    def _append(self, path, entries):
        with open(path, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(entry, default=str) + "\n")

    def log(self, entry: dict):
        """Log a single run record to the main log."""
        self._append(self.current_log, [entry])

    def log_batch(self, entries: list):
        self._append(self.current_log, entries)

    def rotate(self):
        """Start a new main log file if the UTC day changed."""
        self.today = self._today()
        self.current_log = self._get_log_filename()

    def log_halted(self, entries: list):
        """Log runs that stopped in a terminal state."""
        self._append(os.path.join(self.output_directory, f"halted_{self.today}.jsonl"), entries)

    def log_failed(self, entries: list):
        """Log runs that stopped on a machine error or ran out of steps."""
        self._append(os.path.join(self.output_directory, f"failed_{self.today}.jsonl"), entries)

    def log_result(self, entry: dict):
        """Log to the main log and to the halted/failed log matching ``entry['halted']``."""
        self.log(entry)
        if entry.get("halted"):
            self.log_halted([entry])
        else:
            self.log_failed([entry])
