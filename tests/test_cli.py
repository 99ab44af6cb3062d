"""Tests for the operator CLI."""

import json

import pytest

from podidentity.cli import main
from podidentity.volume import IdentityVolume, hash_mount_path


@pytest.fixture
def populated_root(host_root):
    web = IdentityVolume.from_mount_path("/mnt/web", host_root=host_root)
    web.create("default", "web-0")
    web.save_context({"serial": "01"})
    bare = IdentityVolume.from_mount_path("/mnt/bare", host_root=host_root)
    bare.create("default", "bare-0")
    bare.data_file.unlink()
    return host_root, web, bare


def test_hash_command(capsys):
    assert main(["hash", "/mnt/web"]) == 0
    assert capsys.readouterr().out.strip() == hash_mount_path("/mnt/web")


def test_list_command(populated_root, capsys):
    host_root, web, bare = populated_root

    assert main(["list", "--root", str(host_root)]) == 0

    lines = dict(line.split("\t") for line in capsys.readouterr().out.splitlines())
    assert lines == {web.handle: "default/web-0", bare.handle: "-"}


def test_show_command(populated_root, capsys):
    host_root, web, _ = populated_root

    assert main(["show", web.handle, "--root", str(host_root)]) == 0

    report = json.loads(capsys.readouterr().out)
    assert report["exists"] is True
    assert report["pod"] == {"namespace": "default", "name": "web-0"}
    assert report["has_context"] is True
    assert report["socket_dir"] == str(web.socket_dir)


def test_show_unknown_volume(host_root, capsys):
    handle = hash_mount_path("/mnt/never-created")
    assert main(["show", handle, "--root", str(host_root)]) == 0
    report = json.loads(capsys.readouterr().out)
    assert report["exists"] is False
    assert report["pod"] is None


def test_show_invalid_handle_fails(host_root, captured_logs):
    assert main(["show", "../etc", "--root", str(host_root)]) == 1
    failures = [entry for entry in captured_logs if entry["event"] == "command_failed"]
    assert failures and failures[0]["command"] == "show"


def test_command_is_required():
    with pytest.raises(SystemExit):
        main([])


@pytest.fixture
def corrupt_volume(populated_root):
    host_root, _, _ = populated_root
    broken = IdentityVolume.from_mount_path("/mnt/broken", host_root=host_root)
    broken.create("default", "broken-0")
    broken.data_file.write_text("{bad")
    return broken


def test_list_reports_unreadable_volume_and_continues(populated_root, corrupt_volume, capsys):
    host_root, web, bare = populated_root

    assert main(["list", "--root", str(host_root)]) == 0

    lines = dict(line.split("\t", 1) for line in capsys.readouterr().out.splitlines())
    assert lines[web.handle] == "default/web-0"
    assert lines[bare.handle] == "-"
    assert lines[corrupt_volume.handle].startswith("!")


def test_list_reports_empty_pod_fields(populated_root, capsys):
    host_root, web, _ = populated_root
    web.data_file.write_text(json.dumps({"namespace": "default", "name": ""}))

    assert main(["list", "--root", str(host_root)]) == 0

    lines = dict(line.split("\t", 1) for line in capsys.readouterr().out.splitlines())
    assert lines[web.handle].startswith("!")


def test_show_reports_unreadable_pod(populated_root, corrupt_volume, capsys):
    host_root, _, _ = populated_root

    assert main(["show", corrupt_volume.handle, "--root", str(host_root)]) == 0

    report = json.loads(capsys.readouterr().out)
    assert report["pod"] is None
    assert report["pod_error"]
    assert report["exists"] is True
