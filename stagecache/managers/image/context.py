"""构建上下文打包"""

import gzip
import io
import tarfile
from pathlib import Path
from typing import List, Union

import pathspec
from loguru import logger

from ...constants import DEFAULT_FILES


def parse_ignore_file(file_path: Path) -> List[str]:
    """
    解析.dockerignore文件

    跳过注释行和空行，去掉开头的"/"。

    Args:
        file_path: 忽略文件路径

    Returns:
        List[str]: 忽略规则列表
    """
    patterns = []
    for line in file_path.read_text(encoding="utf-8").splitlines():
        if line.startswith("#"):
            continue
        if not line:
            continue
        if line.startswith("/"):
            line = line[1:]
        patterns.append(line)
    return patterns


def load_ignore_patterns(context_dir: Path) -> pathspec.PathSpec:
    """
    加载构建上下文中的忽略规则

    Args:
        context_dir: 构建上下文目录

    Returns:
        pathspec.PathSpec: 忽略规则
    """
    patterns: List[str] = []
    ignore_file = context_dir / DEFAULT_FILES["dockerignore"]
    try:
        patterns = parse_ignore_file(ignore_file)
        logger.debug(f"从 {ignore_file} 加载了 {len(patterns)} 条忽略规则")
    except OSError as e:
        logger.info(f"无法读取构建上下文中的 {DEFAULT_FILES['dockerignore']}: {e}")

    return pathspec.PathSpec.from_lines("gitwildmatch", patterns)


def collect_entries(context_dir: Path, spec: pathspec.PathSpec) -> List[str]:
    """
    收集构建上下文中未被忽略的文件

    Args:
        context_dir: 构建上下文目录
        spec: 忽略规则

    Returns:
        List[str]: 相对于上下文目录的文件路径，已排序
    """
    entries = []
    for path in sorted(context_dir.rglob("*")):
        if not path.is_file():
            continue
        rel_path = path.relative_to(context_dir).as_posix()
        if spec.match_file(rel_path):
            continue
        entries.append(rel_path)
    return entries


def _reset_owner(info: tarfile.TarInfo) -> tarfile.TarInfo:
    """清除归档中的属主信息"""
    info.uid = info.gid = 0
    info.uname = info.gname = ""
    return info


def pack_build_context(context: Union[str, Path]) -> bytes:
    """
    将构建上下文打包为gzip压缩的tar归档

    Args:
        context: 构建上下文目录

    Returns:
        bytes: 归档内容
    """
    context_dir = Path(context)
    spec = load_ignore_patterns(context_dir)
    entries = collect_entries(context_dir, spec)
    logger.info(f"正在打包构建上下文 {context_dir}，共 {len(entries)} 个文件...")

    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w") as tar:
        for entry in entries:
            tar.add(str(context_dir / entry), arcname=entry, recursive=False, filter=_reset_owner)
    return gzip.compress(buffer.getvalue())


def pack_dockerfile(dockerfile: str) -> bytes:
    """
    将单个Dockerfile内容打包为gzip压缩的tar归档

    Args:
        dockerfile: Dockerfile内容

    Returns:
        bytes: 归档内容
    """
    data = dockerfile.encode("utf-8")
    info = _reset_owner(tarfile.TarInfo(name=DEFAULT_FILES["dockerfile"]))
    info.size = len(data)

    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w") as tar:
        tar.addfile(info, io.BytesIO(data))
    return gzip.compress(buffer.getvalue())
