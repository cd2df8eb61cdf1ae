"""Test configuration for Taskdeck tests."""

import pytest
from keyring.errors import NoKeyringError

from .fakes import FakeCredentialStore


def _no_keyring(*args, **kwargs):
    raise NoKeyringError("no keyring in tests")


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path, monkeypatch):
    """Keep every test away from the real keyring and ~/.taskdeck."""
    monkeypatch.setenv("TASKDECK_HOME", str(tmp_path / "taskdeck-home"))
    monkeypatch.delenv("TASKDECK_BASE_URL", raising=False)
    monkeypatch.delenv("TASKDECK_TIMEOUT", raising=False)
    monkeypatch.setattr("keyring.get_password", _no_keyring)
    monkeypatch.setattr("keyring.set_password", _no_keyring)
    monkeypatch.setattr("keyring.delete_password", _no_keyring)


@pytest.fixture
def credentials():
    """Store already holding a logged-in token pair."""
    return FakeCredentialStore("access-1", "refresh-1")
