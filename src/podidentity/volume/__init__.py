"""Identity volumes - per-pod on-host state shared between driver, agent and pod."""

from podidentity.volume.hasher import hash_mount_path
from podidentity.volume.identity_volume import IdentityVolume, list_volumes

__all__ = [
    "IdentityVolume",
    "hash_mount_path",
    "list_volumes",
]
