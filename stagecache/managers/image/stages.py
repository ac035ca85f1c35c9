"""Dockerfile多阶段构建目标解析"""

import re
from pathlib import Path
from typing import List, Union

from loguru import logger

# FROM <镜像> AS <阶段名>，阶段名之后的内容忽略
STAGE_PATTERN = re.compile(r"^\s*FROM\s+\S+\s+AS\s+(?P<target>[^\s+]+)(?:\s.*)?$", re.IGNORECASE)


class DockerfileError(Exception):
    """Dockerfile读取错误"""
    pass


def parse_build_targets(contents: str) -> List[str]:
    """
    按顺序列出Dockerfile中所有命名的构建阶段

    只做文本匹配，不校验阶段名是否重复或引用是否存在，
    Dockerfile是否正确由Docker引擎判断。

    Args:
        contents: Dockerfile内容

    Returns:
        List[str]: 阶段名列表，保留重复项
    """
    targets = []
    for line in contents.splitlines():
        match = STAGE_PATTERN.match(line)
        if match:
            targets.append(match.group("target"))
    return targets


def read_build_targets(dockerfile: Union[str, Path]) -> List[str]:
    """
    读取Dockerfile并解析构建阶段

    Args:
        dockerfile: Dockerfile路径

    Returns:
        List[str]: 阶段名列表

    Raises:
        DockerfileError: Dockerfile无法读取时抛出
    """
    path = Path(dockerfile)
    try:
        contents = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DockerfileError(f"无法读取Dockerfile {path}: {e}") from e

    targets = parse_build_targets(contents)
    logger.info(f"在 {path} 中找到 {len(targets)} 个构建阶段: {', '.join(targets) or '无'}")
    return targets
