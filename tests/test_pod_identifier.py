"""Tests for the pod identifier type."""

import pytest

from podidentity.domain.errors import PodIdentifierValidationError, VolumeDecodeError
from podidentity.domain.pod import PodIdentifier


def test_validate_accepts_complete_identifier():
    pod = PodIdentifier(namespace="default", name="web-0")
    assert pod.validate() is pod
    assert str(pod) == "default/web-0"


@pytest.mark.parametrize(
    "namespace,name,missing",
    [
        ("", "web-0", ["namespace"]),
        ("default", "", ["name"]),
        ("", "", ["namespace", "name"]),
    ],
)
def test_validate_reports_missing_fields(namespace, name, missing):
    with pytest.raises(PodIdentifierValidationError) as exc_info:
        PodIdentifier(namespace=namespace, name=name).validate()
    assert exc_info.value.missing == missing
    assert isinstance(exc_info.value, ValueError)


def test_dict_round_trip_uses_wire_keys():
    pod = PodIdentifier(namespace="kube-system", name="dns")
    assert pod.to_dict() == {"namespace": "kube-system", "name": "dns"}
    assert PodIdentifier.from_dict(pod.to_dict()) == pod


def test_from_dict_tolerates_missing_keys_until_validated():
    pod = PodIdentifier.from_dict({"namespace": "default"})
    assert pod.name == ""
    with pytest.raises(PodIdentifierValidationError):
        pod.validate()


def test_from_dict_rejects_wrong_types():
    with pytest.raises(VolumeDecodeError):
        PodIdentifier.from_dict(["default", "web-0"])
    with pytest.raises(VolumeDecodeError):
        PodIdentifier.from_dict({"namespace": "default", "name": 7})


def test_identifier_is_immutable():
    pod = PodIdentifier(namespace="default", name="web-0")
    with pytest.raises(AttributeError):
        pod.name = "web-1"
