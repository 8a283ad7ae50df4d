"""
Mini-HIDS — Snapshot Reporter

Wraps the cached snapshot in an envelope and POSTs it to the collector.

One attempt per cycle: a failed send is logged and dropped. The request
timeout bounds how long an unreachable collector can hold the report loop.
"""

import json
from datetime import datetime, timezone
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from agent.config import HOSTNAME, AgentConfig
from agent.logging_config import logger
from agent.models import Envelope
from agent.tracking.snapshot_cache import SnapshotCache

USER_AGENT = "MiniHIDS-Agent/1.0"


class Reporter:

    def __init__(
        self,
        cache: SnapshotCache,
        config: AgentConfig,
        hostname: str = HOSTNAME,
    ):
        self._cache = cache
        self._url = config.ingest_url
        self._timeout = config.request_timeout
        self._hostname = hostname
        self.sent_count = 0
        self.failed_count = 0

    def build_envelope(self, data: dict) -> Envelope:
        return Envelope(
            agent_id=self._hostname,
            hostname=self._hostname,
            timestamp=datetime.now(timezone.utc).isoformat(),
            data=data,
        )

    def report_once(self) -> bool:
        """
        Run one report cycle.

        Returns True only when the collector answered 200; any other status,
        other 2xx codes included, counts toward failed_count. An empty cache
        skips the cycle without contacting the collector.
        """
        data = self._cache.export()
        if not data:
            logger.debug("Snapshot empty, skipping report cycle")
            return False

        envelope = self.build_envelope(data)
        ok = self._send(envelope)
        if ok:
            self.sent_count += 1
        else:
            self.failed_count += 1
        return ok

    def _send(self, envelope: Envelope) -> bool:
        try:
            payload = json.dumps(envelope.to_dict(), ensure_ascii=True).encode("utf-8")
        except (TypeError, ValueError) as e:
            logger.error("Failed to serialize envelope: %s", e)
            return False

        req = Request(
            self._url,
            data=payload,
            headers={
                "Content-Type": "application/json",
                "User-Agent": USER_AGENT,
            },
            method="POST",
        )

        try:
            with urlopen(req, timeout=self._timeout) as resp:
                if resp.status == 200:
                    logger.debug("Report delivered to %s", self._url)
                    return True
                logger.warning("Collector returned HTTP %d", resp.status)
                return False
        except HTTPError as e:
            logger.warning("Collector returned HTTP %d", e.code)
            return False
        except URLError as e:
            logger.warning("Failed to send data to collector: %s", e.reason)
            return False
        except OSError as e:
            logger.warning("Failed to send data to collector: %s", e)
            return False
