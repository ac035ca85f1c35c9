"""Tests for build context packaging."""

import gzip
import io
import tarfile

from stagecache.managers.image.context import pack_build_context, pack_dockerfile, parse_ignore_file


def _archive_names(archive: bytes):
    with tarfile.open(fileobj=io.BytesIO(gzip.decompress(archive))) as tar:
        return sorted(tar.getnames())


def test_pack_without_ignore_file(build_context):
    assert _archive_names(pack_build_context(build_context)) == ["Dockerfile", "main.go"]


def test_ignore_file_patterns(tmp_path):
    (tmp_path / "Dockerfile").write_text("FROM scratch\n")
    (tmp_path / "secret.env").write_text("TOKEN=1\n")
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "lib.js").write_text("")
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.py").write_text("")
    (tmp_path / ".dockerignore").write_text("# comment\n\n/node_modules\n*.env\n")

    names = _archive_names(pack_build_context(tmp_path))

    assert names == [".dockerignore", "Dockerfile", "src/app.py"]


def test_parse_ignore_file(tmp_path):
    ignore_file = tmp_path / ".dockerignore"
    ignore_file.write_text("# comment\n\n/build\n*.log\n")

    assert parse_ignore_file(ignore_file) == ["build", "*.log"]


def test_archive_has_no_owner(build_context):
    archive = pack_build_context(build_context)

    with tarfile.open(fileobj=io.BytesIO(gzip.decompress(archive))) as tar:
        for member in tar.getmembers():
            assert member.uid == 0
            assert member.gid == 0


def test_pack_dockerfile():
    archive = pack_dockerfile("FROM scratch\n")

    with tarfile.open(fileobj=io.BytesIO(gzip.decompress(archive))) as tar:
        assert tar.getnames() == ["Dockerfile"]
        assert tar.extractfile("Dockerfile").read() == b"FROM scratch\n"
