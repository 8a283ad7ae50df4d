"""
Mini-HIDS Agent — Configuration

Defaults come from environment variables. An optional JSON file
(MINIHIDS_CONFIG) can override them using the keys of AgentConfig.
"""

import json
import os
import socket
from dataclasses import dataclass, fields

from agent.logging_config import logger


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# ── Host identity ────────────────────────────────────────────────
HOSTNAME = socket.gethostname()

# ── Collector connection ─────────────────────────────────────────
SERVER_HOST = os.environ.get("MINIHIDS_SERVER_HOST", "127.0.0.1")
SERVER_PORT = int(os.environ.get("MINIHIDS_SERVER_PORT", "8080"))
INGEST_PATH = "/api/agent/data"
REQUEST_TIMEOUT_SEC = float(os.environ.get("MINIHIDS_REQUEST_TIMEOUT", "10"))

# ── Agent behaviour ─────────────────────────────────────────────
SAMPLE_INTERVAL_SEC = 10
REPORT_INTERVAL_SEC = int(os.environ.get("MINIHIDS_REPORT_INTERVAL", "30"))
LOG_LEVEL = os.environ.get("MINIHIDS_LOG_LEVEL", "info")

COLLECT_PROCESS = _env_bool("MINIHIDS_COLLECT_PROCESS", True)
COLLECT_NETWORK = _env_bool("MINIHIDS_COLLECT_NETWORK", True)
COLLECT_SYSTEM = _env_bool("MINIHIDS_COLLECT_SYSTEM", True)

# ── Paths ────────────────────────────────────────────────────────
PROC_ROOT = os.environ.get("MINIHIDS_PROC_ROOT", "/proc")
OS_RELEASE_PATH = "/etc/os-release"
CONFIG_PATH = os.environ.get("MINIHIDS_CONFIG", "config.json")


@dataclass
class AgentConfig:
    server_host: str = SERVER_HOST
    server_port: int = SERVER_PORT
    report_interval: int = REPORT_INTERVAL_SEC
    sample_interval: int = SAMPLE_INTERVAL_SEC
    request_timeout: float = REQUEST_TIMEOUT_SEC
    log_level: str = LOG_LEVEL

    collect_process: bool = COLLECT_PROCESS
    collect_network: bool = COLLECT_NETWORK
    collect_system: bool = COLLECT_SYSTEM

    proc_root: str = PROC_ROOT
    os_release_path: str = OS_RELEASE_PATH

    @property
    def ingest_url(self) -> str:
        return f"http://{self.server_host}:{self.server_port}{INGEST_PATH}"


def _coerce(value, expected: type):
    """Return value as the field's type, or raise TypeError on a mismatch."""
    # bool is an int subclass; keep the two apart.
    if expected is bool:
        if isinstance(value, bool):
            return value
    elif expected is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    elif isinstance(value, expected) and not isinstance(value, bool):
        return value
    raise TypeError(
        f"expected {expected.__name__}, got {type(value).__name__}"
    )


def load_config(path: str = CONFIG_PATH) -> AgentConfig:
    """
    Build the agent configuration.

    A missing file is not an error. An unreadable or malformed file, or one
    with a value of the wrong type, is logged and the environment defaults
    are used. Unknown keys (for example the legacy "collect_file" and
    "watch_paths") are ignored.
    """
    config = AgentConfig()
    if not path or not os.path.exists(path):
        return config

    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Failed to read config file %s: %s, using defaults", path, e)
        return config

    if not isinstance(data, dict):
        logger.warning("Config file %s is not a JSON object, using defaults", path)
        return config

    known = {f.name: f.type for f in fields(AgentConfig)}
    overrides = {}
    for key, value in data.items():
        if key not in known:
            continue
        try:
            overrides[key] = _coerce(value, known[key])
        except TypeError as e:
            logger.warning(
                "Config file %s: invalid %s (%s), using defaults", path, key, e
            )
            return config

    for key, value in overrides.items():
        setattr(config, key, value)

    logger.info("Loaded config from %s", path)
    return config
