"""Operator CLI for inspecting identity volumes on a host."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Optional, Sequence

import structlog

from podidentity.config import settings
from podidentity.domain.errors import IdentityVolumeError, VolumeNotFoundError
from podidentity.volume import IdentityVolume, hash_mount_path, list_volumes

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="podidentity",
        description="Inspect identity volumes under the host volume root",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  # handle for a kubelet mount path
  podidentity hash /var/lib/kubelet/pods/1234/volumes/athenz~identity/id

  # every volume and its pod
  podidentity list --root /var/athenz/volumes

  # paths and state for one volume
  podidentity show Yh3N...Q
        """,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    hash_cmd = sub.add_parser("hash", help="print the volume handle for a mount path")
    hash_cmd.add_argument("mount_path", help="mount path passed to the volume driver")

    list_cmd = sub.add_parser("list", help="list volumes and their pods")
    list_cmd.add_argument("--root", default=None, help="host volume root (default: from settings)")

    show_cmd = sub.add_parser("show", help="show the layout and state of one volume")
    show_cmd.add_argument("handle", help="volume handle")
    show_cmd.add_argument("--root", default=None, help="host volume root (default: from settings)")

    return parser


def _pod_label(volume: IdentityVolume) -> str:
    """Pod of `volume`, `-` when unknown, `!<reason>` when unreadable."""
    try:
        return str(volume.pod_identifier())
    except VolumeNotFoundError:
        return "-"
    except IdentityVolumeError as exc:
        logger.warning("volume_unreadable", handle=volume.handle, error=str(exc))
        return f"!{exc}"


def _cmd_hash(args: argparse.Namespace) -> int:
    print(hash_mount_path(args.mount_path))
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    for volume in list_volumes(args.root):
        print(f"{volume.handle}\t{_pod_label(volume)}")
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    volume = IdentityVolume.from_handle(args.handle, host_root=args.root)
    pod: Optional[dict] = None
    pod_error: Optional[str] = None
    try:
        pod = volume.pod_identifier().to_dict()
    except VolumeNotFoundError:
        pass
    except IdentityVolumeError as exc:
        pod_error = str(exc)
    report = {
        "handle": volume.handle,
        "exists": volume.exists(),
        "root_dir": str(volume.root_dir),
        "mount_root": str(volume.mount_root),
        "socket_dir": str(volume.socket_dir),
        "pod": pod,
        "pod_error": pod_error,
        "has_context": volume.has_context(),
    }
    print(json.dumps(report, indent=2))
    return 0


_COMMANDS = {
    "hash": _cmd_hash,
    "list": _cmd_list,
    "show": _cmd_show,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings.setup_logging()

    try:
        return _COMMANDS[args.command](args)
    except IdentityVolumeError as exc:
        logger.error("command_failed", command=args.command, error=str(exc))
        return 1


if __name__ == "__main__":
    sys.exit(main())
