import pytest

from agent.config import AgentConfig


TCP_TABLE = """\
  sl  local_address rem_address   st tx_queue rx_queue tr tm->when retrnsmt   uid  timeout inode
   0: 0100007F:1F90 00000000:0000 0A 00000000:00000000 00:00000000 00000000  1000        0 31337 1 0000000000000000 100 0 0 10 0
   1: 0F02000A:0016 0202000A:C350 01 00000000:00000000 02:0009A1B2 00000000     0        0 40001 4 0000000000000000 20 4 31 10 -1
"""

UDP_TABLE = """\
   sl  local_address rem_address   st tx_queue rx_queue tr tm->when retrnsmt   uid  timeout inode ref pointer drops
  123: 00000000:0044 00000000:0000 07 00000000:00000000 00:00000000 00000000     0        0 15873 2 0000000000000000 0
"""


def _write(path, content, binary=False):
    path.parent.mkdir(parents=True, exist_ok=True)
    if binary:
        path.write_bytes(content)
    else:
        path.write_text(content)


@pytest.fixture
def fake_proc(tmp_path):
    """A minimal /proc tree with two processes and TCP/UDP tables."""
    root = tmp_path / "proc"

    _write(root / "1" / "comm", "systemd\n")
    _write(root / "1" / "cmdline", b"/sbin/init\x00splash\x00", binary=True)
    _write(root / "4242" / "comm", "python3\n")
    _write(root / "4242" / "cmdline", b"python3\x00-m\x00agent.main\x00", binary=True)

    # Non-numeric entries are not processes.
    _write(root / "self" / "comm", "bash\n")
    _write(root / "sys" / "kernel" / "hostname", "ignored\n")

    _write(root / "net" / "tcp", TCP_TABLE)
    _write(root / "net" / "udp", UDP_TABLE)

    _write(root / "version",
           "Linux version 6.1.0-18-amd64 (debian-kernel@lists.debian.org) "
           "(gcc-12 (Debian 12.2.0-14) 12.2.0) #1 SMP PREEMPT_DYNAMIC\n")
    _write(root / "uptime", "3723.45 14000.10\n")
    _write(root / "loadavg", "0.15 0.25 0.35 1/123 4567\n")

    _write(tmp_path / "etc" / "os-release",
           'NAME="Debian GNU/Linux"\nPRETTY_NAME="Debian GNU/Linux 12 (bookworm)"\nID=debian\n')

    return root


@pytest.fixture
def agent_config(fake_proc):
    return AgentConfig(
        server_host="127.0.0.1",
        server_port=8080,
        proc_root=str(fake_proc),
        os_release_path=str(fake_proc.parent / "etc" / "os-release"),
    )


@pytest.fixture
def tcp_table():
    return TCP_TABLE
