"""
Mini-HIDS — System Facts Reader

Host identity, OS/kernel version, uptime and load average. Each fact is
read on its own; a failed read turns that one field into "Unknown".
CPU, memory and disk usage are not measured and stay at 0.
"""

import socket

from agent.models import SystemFacts

UNKNOWN = "Unknown"


def format_duration(seconds: float) -> str:
    """Whole-second duration in h/m/s form: 3723 -> "1h2m3s", 59 -> "59s"."""
    total = int(seconds)
    sign = "-" if total < 0 else ""
    total = abs(total)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{sign}{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{sign}{minutes}m{secs}s"
    return f"{sign}{secs}s"


class SystemFactsReader:

    def __init__(
        self,
        proc_root: str = "/proc",
        os_release_path: str = "/etc/os-release",
    ):
        self._version_path = f"{proc_root}/version"
        self._uptime_path = f"{proc_root}/uptime"
        self._loadavg_path = f"{proc_root}/loadavg"
        self._os_release_path = os_release_path

    def read(self) -> SystemFacts:
        return SystemFacts(
            hostname=self.hostname(),
            os=self.os_name(),
            kernel=self.kernel_version(),
            uptime=self.uptime(),
            load_average=self.load_average(),
        )

    # ── Individual facts ─────────────────────────────────────────

    def hostname(self) -> str:
        try:
            return socket.gethostname()
        except OSError:
            return UNKNOWN

    def os_name(self) -> str:
        try:
            with open(self._os_release_path) as f:
                lines = f.read().splitlines()
        except OSError:
            return UNKNOWN

        for line in lines:
            if line.startswith("PRETTY_NAME="):
                return line[len("PRETTY_NAME="):].strip('"')
        return "Linux"

    def kernel_version(self) -> str:
        # "Linux version 6.1.0-18-amd64 (debian-kernel@...) ..."
        fields = self._read_fields(self._version_path)
        if fields is None or len(fields) < 3:
            return UNKNOWN
        return fields[2]

    def uptime(self) -> str:
        fields = self._read_fields(self._uptime_path)
        if not fields:
            return UNKNOWN
        try:
            return format_duration(float(fields[0]))
        except ValueError:
            return UNKNOWN

    def load_average(self) -> str:
        fields = self._read_fields(self._loadavg_path)
        if fields is None or len(fields) < 3:
            return UNKNOWN
        return " ".join(fields[:3])

    @staticmethod
    def _read_fields(path: str) -> list[str] | None:
        try:
            with open(path) as f:
                return f.read().split()
        except OSError:
            return None
