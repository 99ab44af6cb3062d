"""Identity volume layout and lifecycle.

Each volume owns one directory under the host volume root:

    host-root/
      <handle>/            <- hash of the mount path
        data.json          <- pod identifier, not visible inside the pod
        context.json       <- identity context written by the host agent
        mount/             <- the directory mounted into the pod
          connect/         <- bind mount of the agent's socket directory
          id               <- the handle, presented by the pod as its identifier

The pod's client connects to the socket in `connect/` and passes the opaque
value from `id`. Host-only files sit beside `mount/`, never under it, so no
choice of bind mount can expose them to the workload.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Any, Iterator, Optional, TypeVar

import structlog

from podidentity.config import settings
from podidentity.domain.errors import (
    NoContextFoundError,
    VolumeIOError,
    VolumeNotFoundError,
)
from podidentity.domain.pod import PodIdentifier
from podidentity.infrastructure.storage.io_text import (
    DIR_MODE,
    FILE_MODE,
    ensure_directory,
    read_json_file,
    read_text_file,
    write_json_file,
    write_text_file,
)
from podidentity.infrastructure.storage.path_guard import (
    is_valid_handle,
    normalize_path,
    validate_handle,
)
from podidentity.volume.codec import from_jsonable, to_jsonable
from podidentity.volume.hasher import hash_mount_path

logger = structlog.get_logger()

T = TypeVar("T")

MOUNT_DIR = "mount"
CONNECT_DIR = "connect"
DATA_FILE = "data.json"
CONTEXT_FILE = "context.json"
ID_FILE = "id"


class IdentityVolume:
    """On-host state for one identity volume.

    Instances are cheap and hold no open resources; the volume driver builds
    one per lifecycle call from the mount path it was given.

    Usage:
        volume = IdentityVolume.from_mount_path("/var/lib/kubelet/pods/.../identity")
        volume.create("default", "web-0")
        volume.save_context({"token_expiry": 1700000000})
        volume.destroy()
    """

    def __init__(self, handle: str, host_root: str | Path | None = None):
        self._handle = validate_handle(handle)
        self._host_root = normalize_path(
            host_root if host_root is not None else settings.host_volume_root
        )
        # The handle is a single validated segment, so every derived path is
        # built lexically and never depends on what is on disk.
        self._root_dir = self._host_root / self._handle

    @classmethod
    def from_mount_path(
        cls,
        mount_path: str,
        host_root: str | Path | None = None,
    ) -> "IdentityVolume":
        """Volume for the supplied mount path."""
        return cls(hash_mount_path(mount_path), host_root=host_root)

    @classmethod
    def from_handle(
        cls,
        handle: str,
        host_root: str | Path | None = None,
    ) -> "IdentityVolume":
        """Volume for an already hashed mount path.

        Raises:
            InvalidHandleError: if `handle` is not a single safe path segment
        """
        return cls(handle, host_root=host_root)

    @classmethod
    def from_id_file(
        cls,
        id_path: str | Path,
        host_root: str | Path | None = None,
    ) -> "IdentityVolume":
        """Volume whose handle is stored in the id file at `id_path`."""
        handle = read_text_file(id_path, operation="read id file").strip()
        return cls(handle, host_root=host_root)

    # ---- layout -----------------------------------------------------------

    @property
    def handle(self) -> str:
        return self._handle

    @property
    def host_root(self) -> Path:
        return self._host_root

    @property
    def root_dir(self) -> Path:
        return self._root_dir

    @property
    def mount_root(self) -> Path:
        """Directory that is mounted into the container."""
        return self._root_dir / MOUNT_DIR

    @property
    def socket_dir(self) -> Path:
        """Directory where the agent socket is bind mounted."""
        return self.mount_root / CONNECT_DIR

    @property
    def data_file(self) -> Path:
        return self._root_dir / DATA_FILE

    @property
    def context_file(self) -> Path:
        return self._root_dir / CONTEXT_FILE

    @property
    def id_file(self) -> Path:
        return self.mount_root / ID_FILE

    def exists(self) -> bool:
        return self._root_dir.is_dir()

    # ---- lifecycle --------------------------------------------------------

    def create(self, namespace: str, name: str) -> PodIdentifier:
        """Create the volume tree for the pod `namespace`/`name`.

        A failure part way through leaves whatever was already written;
        callers should `destroy()` the volume when this raises.

        Raises:
            PodIdentifierValidationError: if namespace or name is empty
            VolumeIOError: if a directory or file cannot be written
        """
        pod = PodIdentifier(namespace=namespace, name=name).validate()

        ensure_directory(self._host_root, DIR_MODE, parents=True)
        for directory in (
            self._root_dir,
            self.mount_root,
            self.socket_dir,
        ):
            ensure_directory(directory, DIR_MODE)

        write_json_file(
            self.data_file,
            pod.to_dict(),
            mode=FILE_MODE,
            operation="write data file",
        )
        write_text_file(
            self.id_file,
            self._handle,
            mode=FILE_MODE,
            operation="write id file",
        )
        logger.info("identity_volume_created", handle=self._handle, pod=str(pod))
        return pod

    def destroy(self) -> None:
        """Remove the volume tree. A volume that is already gone is not an error."""
        try:
            shutil.rmtree(self._root_dir)
        except FileNotFoundError:
            logger.debug("identity_volume_absent", handle=self._handle)
            return
        except OSError as exc:
            raise VolumeIOError(str(exc), str(self._root_dir), "remove volume") from exc
        logger.info("identity_volume_destroyed", handle=self._handle)

    # ---- persisted state --------------------------------------------------

    def pod_identifier(self) -> PodIdentifier:
        """Return the pod that owns this volume.

        Raises:
            VolumeNotFoundError: if the volume has no data file
            VolumeDecodeError: if the data file is malformed
            PodIdentifierValidationError: if a stored field is empty
        """
        data = read_json_file(self.data_file, operation="read data file")
        return PodIdentifier.from_dict(data).validate()

    def read_id(self) -> str:
        """Return the contents of the workload-visible id file."""
        return read_text_file(self.id_file, operation="read id file")

    def save_context(self, value: Any) -> None:
        """Save agent state outside the mounted subtree, replacing any prior context.

        `value` may be a pydantic model, a dataclass instance or any
        JSON-serializable value.
        """
        write_json_file(
            self.context_file,
            to_jsonable(value),
            mode=FILE_MODE,
            operation="write context file",
        )
        logger.debug("identity_context_saved", handle=self._handle)

    def load_context(self, shape: Optional[type[T]] = None) -> Any:
        """Return the previously saved context, decoded into `shape` if given.

        Raises:
            NoContextFoundError: if no context has been saved yet
            VolumeDecodeError: if the stored context does not decode
            VolumeIOError: if the context file cannot be read
        """
        try:
            data = read_json_file(self.context_file, operation="read context file")
        except VolumeNotFoundError as exc:
            raise NoContextFoundError(str(self.context_file)) from exc
        return from_jsonable(data, shape)

    def has_context(self) -> bool:
        return self.context_file.is_file()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IdentityVolume):
            return NotImplemented
        return (self._handle, self._host_root) == (other._handle, other._host_root)

    def __hash__(self) -> int:
        return hash((self._handle, self._host_root))

    def __repr__(self) -> str:
        return f"IdentityVolume(handle={self._handle!r}, root={self._root_dir})"


def list_volumes(host_root: str | Path | None = None) -> Iterator[IdentityVolume]:
    """Yield a volume for each handle directory under the host root."""
    root = normalize_path(host_root if host_root is not None else settings.host_volume_root)
    try:
        entries = sorted(os.scandir(root), key=lambda entry: entry.name)
    except FileNotFoundError:
        return
    except OSError as exc:
        raise VolumeIOError(str(exc), str(root), "list volumes") from exc
    for entry in entries:
        if entry.is_dir(follow_symlinks=False) and is_valid_handle(entry.name):
            yield IdentityVolume(entry.name, host_root=root)
