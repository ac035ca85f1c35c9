"""
Test configuration and fixtures for stagecache tests.

Provides shared fixtures for:
- Mock Docker clients
- Build contexts with multi-stage Dockerfiles
- CI environment variable management
"""

from pathlib import Path
from unittest.mock import Mock

import pytest

MULTI_STAGE_DOCKERFILE = """\
FROM golang:1.20 AS builder
RUN go build ./...
FROM alpine:3.18 AS runtime
FROM scratch
COPY --from=builder /app /app
"""


@pytest.fixture
def docker_client():
    """Provide a mock Docker client.

    images.get() returns an image whose id is derived from the requested name,
    and every streaming API call returns an empty progress stream.
    """
    client = Mock()
    client.api.build.return_value = iter([{"stream": "Step 1/1 : FROM scratch\n"}])
    client.api.push.return_value = iter([{"status": "Pushed"}])
    client.api.pull.return_value = iter([{"status": "Pulled"}])
    client.images.get.side_effect = lambda name: Mock(id=f"sha256:{name}")
    client.images.list.return_value = []
    return client


@pytest.fixture
def build_context(tmp_path: Path) -> Path:
    """Provide a build context containing a multi-stage Dockerfile."""
    (tmp_path / "Dockerfile").write_text(MULTI_STAGE_DOCKERFILE)
    (tmp_path / "main.go").write_text("package main\n")
    return tmp_path


@pytest.fixture(autouse=True)
def clean_ci_env(monkeypatch):
    """Remove CI variables so tests never read the host's environment."""
    for name in ("GITHUB_SHA", "GITHUB_REF", "GITHUB_OUTPUT"):
        monkeypatch.delenv(name, raising=False)
