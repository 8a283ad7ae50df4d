"""
Mini-HIDS — Snapshot Cache

Holds the most recent telemetry snapshot. The sample task replaces it
wholesale on every refresh; the report task reads it through export(),
which hands out a fresh top-level mapping so callers never touch the
cached object.
"""

import threading
from contextlib import contextmanager

from agent.collectors.connection_table import ConnectionTableDecoder
from agent.collectors.process_sampler import ProcessSampler
from agent.collectors.system_facts import SystemFactsReader
from agent.config import AgentConfig
from agent.logging_config import logger
from agent.models import Snapshot


class ReadWriteLock:
    """
    Many readers or one writer. Waiting writers are not given priority.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False

    @contextmanager
    def shared(self):
        with self._cond:
            while self._writing:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def exclusive(self):
        with self._cond:
            while self._writing or self._readers:
                self._cond.wait()
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class SnapshotCache:
    """
    Thread-safe holder for the latest Snapshot.

    Disabled categories are never sampled and never appear in exports.
    """

    def __init__(
        self,
        config: AgentConfig,
        process_sampler: ProcessSampler | None = None,
        connection_decoder: ConnectionTableDecoder | None = None,
        facts_reader: SystemFactsReader | None = None,
    ):
        self._config = config
        self._processes = process_sampler or ProcessSampler(config.proc_root)
        self._connections = connection_decoder or ConnectionTableDecoder()
        self._facts = facts_reader or SystemFactsReader(
            proc_root=config.proc_root,
            os_release_path=config.os_release_path,
        )
        self._tcp_path = f"{config.proc_root}/net/tcp"
        self._udp_path = f"{config.proc_root}/net/udp"

        self._lock = ReadWriteLock()
        self._snapshot = Snapshot()
        self._version = 0

    # ── Mutations ────────────────────────────────────────────────

    def refresh(self) -> None:
        """Sample every enabled category and swap the result in."""
        snapshot = self._sample()
        with self._lock.exclusive():
            self._snapshot = snapshot
            self._version += 1
            version = self._version
        logger.debug(
            "Snapshot v%d: %d processes, %d connections",
            version,
            len(snapshot.processes or ()),
            len(snapshot.network or ()),
        )

    def _sample(self) -> Snapshot:
        cfg = self._config
        processes = network = system = None

        if cfg.collect_process:
            processes = tuple(self._processes.sample())
        if cfg.collect_network:
            network = tuple(
                self._connections.read_connections(self._tcp_path, self._udp_path)
            )
        if cfg.collect_system:
            system = self._facts.read()

        return Snapshot(processes=processes, network=network, system=system)

    # ── Queries ──────────────────────────────────────────────────

    def export(self) -> dict:
        """
        Point-in-time copy keyed by category name.

        The mapping and the record lists are new on every call; the records
        themselves are frozen and shared with the cached snapshot.
        """
        with self._lock.shared():
            snapshot = self._snapshot

        exported = {}
        if snapshot.processes is not None:
            exported["processes"] = list(snapshot.processes)
        if snapshot.network is not None:
            exported["network"] = list(snapshot.network)
        if snapshot.system is not None:
            exported["system"] = snapshot.system
        return exported

    @property
    def version(self) -> int:
        """Number of completed refreshes."""
        with self._lock.shared():
            return self._version

    @property
    def empty(self) -> bool:
        return not self.export()
