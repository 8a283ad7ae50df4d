"""
Mini-HIDS — Process Sampler

Walks the process table root (normally /proc) and reads the short name
(/proc/<pid>/comm) and argument vector (/proc/<pid>/cmdline) of every
process. Processes can exit between listing and reading; such PIDs are
skipped.
"""

import os

from agent.logging_config import logger
from agent.models import ProcessRecord


def _read_text(path: str) -> str:
    with open(path, "rb") as f:
        return f.read().decode("utf-8", errors="replace")


class ProcessSampler:

    def __init__(self, proc_root: str = "/proc"):
        self._proc_root = proc_root

    def sample(self) -> list[ProcessRecord]:
        """Snapshot of the processes that could be read. Never raises."""
        try:
            entries = os.listdir(self._proc_root)
        except OSError as e:
            logger.warning("Failed to read %s: %s", self._proc_root, e)
            return []

        processes = []
        for entry in entries:
            if not (entry.isascii() and entry.isdigit()):
                continue
            record = self.read_process(int(entry))
            if record is not None:
                processes.append(record)
        return processes

    def read_process(self, pid: int) -> ProcessRecord | None:
        """Identity of one process, or None if it vanished mid-read."""
        base = os.path.join(self._proc_root, str(pid))
        try:
            name = _read_text(os.path.join(base, "comm")).strip()
            cmdline = _read_text(os.path.join(base, "cmdline"))
        except OSError:
            return None

        return ProcessRecord(
            pid=pid,
            name=name,
            cmdline=cmdline.replace("\x00", " ").strip(),
        )
