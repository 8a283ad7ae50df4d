import socket

import pytest

from agent.collectors.system_facts import SystemFactsReader, format_duration


@pytest.fixture
def reader(agent_config):
    return SystemFactsReader(
        proc_root=agent_config.proc_root,
        os_release_path=agent_config.os_release_path,
    )


def test_reads_all_facts(reader):
    facts = reader.read()

    assert facts.hostname == socket.gethostname()
    assert facts.os == "Debian GNU/Linux 12 (bookworm)"
    assert facts.kernel == "6.1.0-18-amd64"
    assert facts.uptime == "1h2m3s"
    assert facts.load_average == "0.15 0.25 0.35"
    assert (facts.cpu_usage, facts.memory_usage, facts.disk_usage) == (0.0, 0.0, 0.0)


def test_failures_are_independent(reader, fake_proc):
    (fake_proc / "uptime").unlink()
    (fake_proc / "version").unlink()

    facts = reader.read()

    assert facts.uptime == "Unknown"
    assert facts.kernel == "Unknown"
    assert facts.load_average == "0.15 0.25 0.35"
    assert facts.os == "Debian GNU/Linux 12 (bookworm)"


def test_missing_os_release_is_unknown(tmp_path, fake_proc):
    reader = SystemFactsReader(
        proc_root=str(fake_proc),
        os_release_path=str(tmp_path / "nope"),
    )
    assert reader.os_name() == "Unknown"


def test_os_release_without_pretty_name(tmp_path, fake_proc):
    path = tmp_path / "os-release"
    path.write_text("NAME=Alpine\nID=alpine\n")

    reader = SystemFactsReader(proc_root=str(fake_proc), os_release_path=str(path))
    assert reader.os_name() == "Linux"


def test_short_loadavg_is_unknown(reader, fake_proc):
    (fake_proc / "loadavg").write_text("0.15 0.25\n")
    assert reader.load_average() == "Unknown"


def test_garbage_uptime_is_unknown(reader, fake_proc):
    (fake_proc / "uptime").write_text("soon\n")
    assert reader.uptime() == "Unknown"


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0, "0s"),
        (0.9, "0s"),
        (59, "59s"),
        (60, "1m0s"),
        (3600, "1h0m0s"),
        (3723.45, "1h2m3s"),
        (90061, "25h1m1s"),
    ],
)
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected
