import stat
import sys
from pathlib import Path

import pytest

from roughenough import e2e

SLEEPING_SERVER = "import time\ntime.sleep(30)\n"
EXITING_SERVER = "raise SystemExit(3)\n"


def _client_script(exit_code: int) -> str:
    return (
        "import sys\n"
        "from pathlib import Path\n"
        "Path('client_args.txt').write_text(' '.join(sys.argv[1:]))\n"
        f"raise SystemExit({exit_code})\n"
    )


def _write_exe(path: Path, body: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"#!{sys.executable}\n{body}")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def _install(root: Path, mode: str, server: str, client_exit: int) -> None:
    _write_exe(root / "target" / mode / e2e.SERVER_BINARY, server)
    _write_exe(root / "target" / mode / e2e.CLIENT_BINARY, _client_script(client_exit))


def test_missing_server_fails(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert e2e.run_build_mode("debug", startup_delay=0.0) is False
    assert "Failed to start server" in capsys.readouterr().err


def test_server_exiting_early_fails(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    _install(tmp_path, "debug", EXITING_SERVER, 0)
    assert e2e.run_build_mode("debug", startup_delay=1.0) is False
    assert "Server exited unexpectedly" in capsys.readouterr().err
    assert not (tmp_path / "client_args.txt").exists()


def test_successful_client_passes_with_expected_args(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _install(tmp_path, "debug", SLEEPING_SERVER, 0)
    assert e2e.run_build_mode("debug", startup_delay=0.2) is True
    recorded = (tmp_path / "client_args.txt").read_text()
    assert recorded == " ".join(e2e.CLIENT_ARGS)
    assert e2e.TEST_PUBLIC_KEY in recorded


def test_failing_client_fails(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    _install(tmp_path, "release", SLEEPING_SERVER, 2)
    assert e2e.run_build_mode("release", startup_delay=0.2) is False
    assert "Client failed with exit code: 2" in capsys.readouterr().err


def test_main_all_modes_pass(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    for mode in e2e.BUILD_MODES:
        _install(tmp_path, mode, SLEEPING_SERVER, 0)
    assert e2e.main([]) == 0
    out = capsys.readouterr().out
    assert "=== debug test PASSED" in out
    assert "=== release test PASSED" in out
    assert "All end-to-end integration tests PASSED" in out


def test_main_stops_at_first_failure(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    _install(tmp_path, "release", SLEEPING_SERVER, 0)
    assert e2e.main([]) == 1
    captured = capsys.readouterr()
    assert "=== debug test FAILED" in captured.err
    assert "release" not in captured.out


@pytest.mark.parametrize("mode", ["debug", "release"])
def test_main_with_selected_mode(tmp_path, monkeypatch, mode):
    monkeypatch.chdir(tmp_path)
    _install(tmp_path, mode, SLEEPING_SERVER, 0)
    assert e2e.main([mode]) == 0