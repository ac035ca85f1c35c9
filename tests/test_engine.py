"""Tests for the Docker engine wrappers: build, push, pull and tag."""

from unittest.mock import Mock

import docker
import pytest

from stagecache.managers.image.base import ImageBuildError, ImagePullError, ImagePushError, ImageTagError
from stagecache.managers.image.build import ImageBuilder
from stagecache.managers.image.push import ImagePusher
from stagecache.managers.image.tag import ImageTagger

AUTH = {"username": "bot", "password": "secret"}


def test_build_returns_image_id(docker_client):
    image_id = ImageBuilder(docker_client).build(
        b"archive", "ghcr.io/acme/app-cache:stage-builder", cache_from=["sha256:old"], target="builder"
    )

    assert image_id == "sha256:ghcr.io/acme/app-cache:stage-builder"
    kwargs = docker_client.api.build.call_args.kwargs
    assert kwargs["tag"] == "ghcr.io/acme/app-cache:stage-builder"
    assert kwargs["cache_from"] == ["sha256:old"]
    assert kwargs["target"] == "builder"
    assert kwargs["custom_context"] is True
    assert kwargs["encoding"] == "gzip"


def test_build_final_stage_has_no_target(docker_client):
    ImageBuilder(docker_client).build(b"archive", "app-cache:final")

    kwargs = docker_client.api.build.call_args.kwargs
    assert kwargs["target"] is None
    assert kwargs["cache_from"] is None
    assert kwargs["dockerfile"] is None


def test_build_forwards_dockerfile(docker_client):
    ImageBuilder(docker_client).build(b"archive", "app-cache:final", dockerfile="docker/Dockerfile.prod")

    assert docker_client.api.build.call_args.kwargs["dockerfile"] == "docker/Dockerfile.prod"


def test_build_error_in_stream(docker_client):
    docker_client.api.build.return_value = iter([{"error": "RUN failed"}])

    with pytest.raises(ImageBuildError, match="RUN failed"):
        ImageBuilder(docker_client).build(b"archive", "app-cache:final")


def test_build_api_error(docker_client):
    docker_client.api.build.side_effect = docker.errors.APIError("daemon gone")

    with pytest.raises(ImageBuildError):
        ImageBuilder(docker_client).build(b"archive", "app-cache:final")


def test_push_uses_registry_auth(docker_client):
    ImagePusher(docker_client).push("ghcr.io/acme/app:v1", AUTH)

    args, kwargs = docker_client.api.push.call_args
    assert args == ("ghcr.io/acme/app",)
    assert kwargs["tag"] == "v1"
    assert kwargs["auth_config"]["serveraddress"] == "ghcr.io"


def test_push_error_in_stream(docker_client):
    docker_client.api.push.return_value = iter([{"error": "denied: access forbidden"}])

    with pytest.raises(ImagePushError, match="denied"):
        ImagePusher(docker_client).push("ghcr.io/acme/app:v1", AUTH)


def test_pull_all_tags(docker_client):
    ImagePusher(docker_client).pull_all_tags("ghcr.io/acme/app-cache", AUTH)

    kwargs = docker_client.api.pull.call_args.kwargs
    assert kwargs["all_tags"] is True


def test_pull_not_found(docker_client):
    docker_client.api.pull.side_effect = docker.errors.NotFound("no such repository")

    with pytest.raises(ImagePullError):
        ImagePusher(docker_client).pull_all_tags("ghcr.io/acme/app-cache", AUTH)


def test_tag_image(docker_client):
    image = Mock()
    docker_client.images.get.side_effect = None
    docker_client.images.get.return_value = image

    ImageTagger(docker_client).tag("sha256:abc", "ghcr.io/acme/app", "v1")

    image.tag.assert_called_once_with("ghcr.io/acme/app", tag="v1")


def test_tag_image_failure(docker_client):
    docker_client.images.get.side_effect = docker.errors.ImageNotFound("missing")

    with pytest.raises(ImageTagError):
        ImageTagger(docker_client).tag("sha256:abc", "ghcr.io/acme/app", "v1")


def test_get_image_tags_skips_placeholders(docker_client):
    docker_client.images.list.return_value = [
        Mock(id="sha256:a", tags=["app-cache:stage-a"], labels={}),
        Mock(id="sha256:b", tags=["app-cache:stage-b", "app-cache:final"], labels=None),
        Mock(id="sha256:empty", tags=["app-cache:stage-old"], labels={"net.snapserv.image-type": "empty"}),
        Mock(id="sha256:dangling", tags=[], labels={}),
        Mock(id="sha256:c", tags=["app-cache:final-old", "ghcr.io/acme/app:v1", "app:latest"], labels={}),
    ]

    tags = ImageTagger(docker_client).get_image_tags("app-cache")

    assert tags == {"stage-a": "sha256:a", "stage-b": "sha256:b", "final": "sha256:b", "final-old": "sha256:c"}
    docker_client.images.list.assert_called_once_with(filters={"reference": "app-cache"})


def test_get_image_tags_ignores_other_repositories(docker_client):
    docker_client.images.list.return_value = [
        Mock(
            id="sha256:final",
            tags=["ghcr.io/acme/app-cache:final", "ghcr.io/acme/app:v1", "ghcr.io/acme/app:latest"],
            labels={},
        ),
    ]

    tags = ImageTagger(docker_client).get_image_tags("ghcr.io/acme/app-cache")

    assert tags == {"final": "sha256:final"}


def test_get_image_tags_normalizes_default_registry(docker_client):
    docker_client.images.list.return_value = [
        Mock(id="sha256:a", tags=["docker.io/library/app-cache:stage-a", "acme/app-cache:v1"], labels={}),
    ]

    tags = ImageTagger(docker_client).get_image_tags("app-cache")

    assert tags == {"stage-a": "sha256:a"}
