"""Shared fixtures."""

import pytest
from structlog.testing import capture_logs

from podidentity.volume import IdentityVolume


@pytest.fixture(autouse=True)
def captured_logs(monkeypatch):
    """Keep structlog output out of stdout and expose emitted events."""
    monkeypatch.setattr("podidentity.infrastructure.logging_setup._LOG_CONFIGURED", True)
    with capture_logs() as logs:
        yield logs


@pytest.fixture
def host_root(tmp_path):
    return (tmp_path / "volumes").resolve()


@pytest.fixture
def volume(host_root):
    return IdentityVolume.from_mount_path(
        "/var/lib/kubelet/pods/pod-1/volumes/athenz~identity/identity",
        host_root=host_root,
    )
