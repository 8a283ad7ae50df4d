#!/usr/bin/env python3
"""
Mini-HIDS — Host Telemetry Agent

Main entry point. Samples /proc into the snapshot cache on one timer and
reports the cached snapshot to the collector on another.

Usage:
    python3 -m agent.main
    MINIHIDS_CONFIG=/etc/minihids/agent.json python3 -m agent.main
"""

import os
import signal
import sys
import threading

# ── Ensure we can import the agent package ──────────────────────
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from agent.logging_config import logger, set_level
from agent.config import CONFIG_PATH, HOSTNAME, load_config
from agent.scheduler.periodic_task import PeriodicTask
from agent.tracking.snapshot_cache import SnapshotCache
from agent.transport.http_transport import Reporter


BANNER = r"""
  __  __ _       _       _   _ ___ ____  ____
 |  \/  (_)_ __ (_)     | | | |_ _|  _ \/ ___|
 | |\/| | | '_ \| |_____| |_| || || | | \___ \
 | |  | | | | | | |_____|  _  || || |_| |___) |
 |_|  |_|_|_| |_|_|     |_| |_|___|____/|____/

  Host Telemetry Agent v1.0
"""


def main() -> None:
    config = load_config(CONFIG_PATH)
    set_level(config.log_level)

    print(BANNER, file=sys.stderr)
    logger.info("Hostname  : %s", HOSTNAME)
    logger.info("Collector : %s", config.ingest_url)
    logger.info("Intervals : sample=%ds report=%ds",
                config.sample_interval, config.report_interval)
    logger.info(
        "Collecting: processes=%s network=%s system=%s",
        config.collect_process, config.collect_network, config.collect_system,
    )

    # ── Initialize components ────────────────────────────────
    stop_event = threading.Event()
    cache = SnapshotCache(config)
    reporter = Reporter(cache, config)

    sampler_task = PeriodicTask(
        "sample", config.sample_interval, cache.refresh, stop_event,
        run_immediately=True,
    )
    report_task = PeriodicTask(
        "report", config.report_interval, reporter.report_once, stop_event,
    )

    # ── Graceful shutdown ────────────────────────────────────
    def shutdown(signum, frame):
        if stop_event.is_set():
            return
        logger.info("Received stop signal, shutting down...")
        stop_event.set()

    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)

    sampler_task.start()
    report_task.start()
    logger.info("Agent running. Press Ctrl+C to stop.")

    # In-flight cycles are abandoned; the daemon threads die with us.
    while not stop_event.wait(timeout=1.0):
        pass

    logger.info("Reports sent   : %d", reporter.sent_count)
    logger.info("Reports failed : %d", reporter.failed_count)
    logger.info("Agent stopped.")


if __name__ == "__main__":
    main()
