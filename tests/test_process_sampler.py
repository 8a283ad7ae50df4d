from agent.collectors.process_sampler import ProcessSampler


def by_pid(records):
    return {r.pid: r for r in records}


def test_samples_numeric_entries_only(fake_proc):
    records = by_pid(ProcessSampler(str(fake_proc)).sample())

    assert set(records) == {1, 4242}


def test_cmdline_nul_separators_become_spaces(fake_proc):
    records = by_pid(ProcessSampler(str(fake_proc)).sample())

    assert records[1].name == "systemd"
    assert records[1].cmdline == "/sbin/init splash"
    assert records[4242].cmdline == "python3 -m agent.main"


def test_placeholder_fields(fake_proc):
    record = by_pid(ProcessSampler(str(fake_proc)).sample())[1]

    assert record.user == "unknown"
    assert record.cpu == "0%"
    assert record.memory == "0MB"


def test_vanished_process_is_skipped(fake_proc):
    # comm readable but cmdline gone: the process exited mid-read
    (fake_proc / "777").mkdir()
    (fake_proc / "777" / "comm").write_text("short-lived\n")

    records = by_pid(ProcessSampler(str(fake_proc)).sample())

    assert 777 not in records
    assert set(records) == {1, 4242}


def test_kernel_thread_with_empty_cmdline(fake_proc):
    (fake_proc / "2").mkdir()
    (fake_proc / "2" / "comm").write_text("kthreadd\n")
    (fake_proc / "2" / "cmdline").write_bytes(b"")

    record = by_pid(ProcessSampler(str(fake_proc)).sample())[2]

    assert record.name == "kthreadd"
    assert record.cmdline == ""


def test_missing_root_returns_empty(tmp_path):
    assert ProcessSampler(str(tmp_path / "missing")).sample() == []
