import subprocess

import pytest

from adapters import vpn_dialer
from adapters.vpn_dialer import RasdialDialer, ScutilDialer, dial, dialer_for_config
from core.config import DialConfig
from core.domain.errors import DialError
from core.interfaces.dialer import VpnDialer


def _config(**overrides: str) -> DialConfig:
    data = {
        "matrix_url": "https://example.com/matrix",
        "vpn_name": "Office",
        "password": "0000000000000000",
    }
    data.update(overrides)
    return DialConfig.model_validate(data)


def test_scutil_command() -> None:
    dialer = ScutilDialer("shared")
    assert dialer.command("Office", "12345678x") == [
        "scutil",
        "--nc",
        "start",
        "Office",
        "--password",
        "12345678x",
        "--secret",
        "shared",
    ]


def test_rasdial_command() -> None:
    assert RasdialDialer("alice").command("Office", "pw") == ["rasdial.exe", "Office", "alice", "pw"]


def test_dialers_satisfy_protocol() -> None:
    assert isinstance(ScutilDialer("s"), VpnDialer)
    assert isinstance(RasdialDialer("u"), VpnDialer)


def test_dialer_for_macos_needs_secret() -> None:
    assert isinstance(dialer_for_config(_config(secret="s"), platform="darwin"), ScutilDialer)
    with pytest.raises(DialError, match="secret"):
        dialer_for_config(_config(username="alice"), platform="darwin")


def test_dialer_for_windows_needs_username() -> None:
    assert isinstance(dialer_for_config(_config(username="alice"), platform="win32"), RasdialDialer)
    with pytest.raises(DialError, match="username"):
        dialer_for_config(_config(secret="s"), platform="win32")


def test_dial_runs_command_once(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[list[str]] = []

    def fake_run(cmd, check):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, 0)

    monkeypatch.setattr(vpn_dialer.subprocess, "run", fake_run)
    dial(RasdialDialer("alice"), "Office", "pw")
    assert calls == [["rasdial.exe", "Office", "alice", "pw"]]


def test_non_zero_exit_is_dial_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        vpn_dialer.subprocess,
        "run",
        lambda cmd, check: subprocess.CompletedProcess(cmd, 691),
    )
    with pytest.raises(DialError) as excinfo:
        dial(RasdialDialer("alice"), "Office", "pw")
    assert excinfo.value.exit_code == 691


def test_missing_binary_is_dial_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd, check):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(vpn_dialer.subprocess, "run", fake_run)
    with pytest.raises(DialError, match="scutil not found"):
        ScutilDialer("s").dial("Office", "pw")


def test_dialer_is_available_checks_path(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(vpn_dialer.shutil, "which", lambda name: "/usr/sbin/scutil" if name == "scutil" else None)
    assert vpn_dialer.dialer_is_available(ScutilDialer("s"))
    assert not vpn_dialer.dialer_is_available(RasdialDialer("u"))


@pytest.mark.parametrize("error", [PermissionError(13, "Permission denied"), OSError(8, "Exec format error")])
def test_os_error_is_dial_error(monkeypatch: pytest.MonkeyPatch, error: OSError) -> None:
    def fake_run(cmd, check):
        raise error

    monkeypatch.setattr(vpn_dialer.subprocess, "run", fake_run)
    with pytest.raises(DialError, match="Could not run rasdial.exe"):
        RasdialDialer("alice").dial("Office", "pw")
