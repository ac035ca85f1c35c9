"""Tests for publishing the final image."""

from unittest.mock import Mock, call

import docker
import pytest

from stagecache.managers.image.base import ImagePullError, ImagePushError
from stagecache.managers.publish_manager import PublishError, PublishManager

TARGET = "ghcr.io/acme/app"
AUTH = {"username": "bot", "password": "secret"}


@pytest.fixture
def publish_manager(docker_client):
    manager = PublishManager(TARGET, AUTH, docker_client=docker_client)
    manager.tagger = Mock()
    manager.pusher = Mock()
    return manager


def test_tags_and_pushes_in_order(publish_manager):
    published = publish_manager.publish("sha256:final", ["v1", "sha-abcdef1", "latest"])

    assert published == [f"{TARGET}:v1", f"{TARGET}:sha-abcdef1", f"{TARGET}:latest"]
    assert publish_manager.tagger.tag.call_args_list == [
        call("sha256:final", TARGET, "v1"),
        call("sha256:final", TARGET, "sha-abcdef1"),
        call("sha256:final", TARGET, "latest"),
    ]
    assert publish_manager.pusher.push.call_args_list == [
        call(f"{TARGET}:v1", AUTH),
        call(f"{TARGET}:sha-abcdef1", AUTH),
        call(f"{TARGET}:latest", AUTH),
    ]


def test_failure_aborts_remaining_tags(publish_manager):
    publish_manager.pusher.push.side_effect = [None, ImagePushError("denied"), None]

    with pytest.raises(ImagePushError):
        publish_manager.publish("sha256:final", ["v1", "v2", "v3"])
    assert publish_manager.tagger.tag.call_count == 2


def test_empty_tag_list_publishes_nothing(publish_manager):
    assert publish_manager.publish("sha256:final", []) == []
    publish_manager.pusher.push.assert_not_called()


def test_locate_local_image(publish_manager, docker_client):
    assert publish_manager.locate_image("app-cache:final") == "sha256:app-cache:final"
    publish_manager.pusher.pull.assert_not_called()


def test_locate_pulls_missing_image(publish_manager, docker_client):
    image = Mock(id="sha256:pulled")
    docker_client.images.get.side_effect = [docker.errors.ImageNotFound("missing"), image]

    assert publish_manager.locate_image("app-cache:final", AUTH) == "sha256:pulled"
    publish_manager.pusher.pull.assert_called_once_with("app-cache:final", AUTH)


def test_locate_without_prior_build_fails(publish_manager, docker_client):
    docker_client.images.get.side_effect = docker.errors.ImageNotFound("missing")
    publish_manager.pusher.pull.side_effect = ImagePullError("not found")

    with pytest.raises(PublishError):
        publish_manager.locate_image("app-cache:final", AUTH)
