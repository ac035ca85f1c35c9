"""Tests for image reference parsing."""

import pytest

from stagecache.managers.image.utils import (
    build_auth_config,
    format_image_name,
    normalize_repository,
    parse_image_name,
)


def test_registry_port_is_not_a_tag():
    source = parse_image_name("my.registry:5000/ns/img")

    assert source["registry"] == "my.registry:5000"
    assert source["image"] == "ns/img"
    assert source["repository"] == "my.registry:5000/ns/img"
    assert source["tag"] is None


def test_official_image_with_tag():
    source = parse_image_name("ubuntu:20.04")

    assert source["registry"] == "docker.io"
    assert source["image"] == "ubuntu"
    assert source["repository"] == "ubuntu"
    assert source["tag"] == "20.04"


def test_user_namespace_uses_default_registry():
    source = parse_image_name("acme/app:v1")

    assert source["registry"] == "docker.io"
    assert source["image"] == "acme/app"
    assert source["tag"] == "v1"


def test_localhost_registry():
    source = parse_image_name("localhost/app:dev")

    assert source["registry"] == "localhost"
    assert source["image"] == "app"
    assert source["tag"] == "dev"


def test_registry_with_port_and_tag():
    source = parse_image_name("localhost:5000/app:stage-builder")

    assert source["registry"] == "localhost:5000"
    assert source["image"] == "app"
    assert source["tag"] == "stage-builder"


def test_digest_reference():
    source = parse_image_name("ghcr.io/acme/app@sha256:abc")

    assert source["repository"] == "ghcr.io/acme/app"
    assert source["registry"] == "ghcr.io"
    assert source["tag"] == "sha256:abc"


def test_malformed_input_does_not_raise():
    assert parse_image_name("")["repository"] == ""
    assert parse_image_name(":")["tag"] == ""


@pytest.mark.parametrize(
    "name",
    [
        "ubuntu",
        "ubuntu:20.04",
        "my.registry:5000/ns/img",
        "my.registry:5000/ns/img:v2",
        "ghcr.io/acme/app-cache:final",
        "ghcr.io/acme/app@sha256:abc",
        "localhost:5000/app@sha256:0123",
    ],
)
def test_parsing_is_idempotent(name):
    source = parse_image_name(name)

    assert parse_image_name(format_image_name(source)) == source


def test_auth_config_uses_image_registry():
    auth = build_auth_config("ghcr.io/acme/app:v1", {"username": "bot", "password": "secret"})

    assert auth == {"username": "bot", "password": "secret", "serveraddress": "ghcr.io"}


def test_format_digest_reference():
    source = parse_image_name("ghcr.io/acme/app@sha256:abc")

    assert format_image_name(source) == "ghcr.io/acme/app@sha256:abc"


def test_first_at_sign_starts_digest():
    source = parse_image_name("app@sha256:abc@extra")

    assert source["repository"] == "app"
    assert source["tag"] == "sha256:abc@extra"


@pytest.mark.parametrize(
    "repository,expected",
    [
        ("ubuntu", "ubuntu"),
        ("library/ubuntu", "ubuntu"),
        ("docker.io/library/ubuntu", "ubuntu"),
        ("docker.io/acme/app", "acme/app"),
        ("ghcr.io/acme/app", "ghcr.io/acme/app"),
        ("localhost:5000/library/app", "localhost:5000/library/app"),
    ],
)
def test_normalize_repository(repository, expected):
    assert normalize_repository(repository) == expected
