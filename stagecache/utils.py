"""工具函数模块"""

import os
from enum import Enum
from typing import List, NamedTuple, Optional

from loguru import logger

from .constants import CI_ENV, ERROR_MESSAGES, FALSE_VALUES, TRUE_VALUES


class GitRefType(Enum):
    """Git引用类型"""

    UNKNOWN = "unknown"
    HEAD = "heads"
    PULL_REQUEST = "pull"
    TAG = "tags"


class GitRef(NamedTuple):
    """Git引用"""

    type: GitRefType
    name: Optional[str] = None


class RunMetadata(NamedTuple):
    """触发本次运行的提交信息"""

    sha: Optional[str]
    ref: Optional[str]

    @classmethod
    def from_env(cls, sha: Optional[str] = None, ref: Optional[str] = None) -> "RunMetadata":
        """
        从CI环境变量读取提交信息，显式传入的值优先

        Args:
            sha: 提交SHA
            ref: Git引用

        Returns:
            RunMetadata: 提交信息
        """
        return cls(
            sha=sha or os.environ.get(CI_ENV["sha"]) or None,
            ref=ref or os.environ.get(CI_ENV["ref"]) or None,
        )


def parse_bool(value: str) -> bool:
    """
    解析布尔值输入

    Args:
        value: 输入字符串

    Returns:
        bool: 解析结果

    Raises:
        ValueError: 无法解析时抛出
    """
    value = value.strip().lower()
    if value in TRUE_VALUES:
        return True
    elif value in FALSE_VALUES:
        return False
    raise ValueError(ERROR_MESSAGES["invalid_bool"].format(value))


def parse_git_ref(ref: str) -> GitRef:
    """
    解析Git引用，例如 refs/heads/master、refs/pull/42/merge、refs/tags/v1.0

    Args:
        ref: Git引用字符串

    Returns:
        GitRef: 解析结果，无法识别时类型为UNKNOWN
    """
    parts = ref.split("/")
    if len(parts) < 3 or not parts[1] or not parts[2]:
        return GitRef(GitRefType.UNKNOWN)

    for ref_type in (GitRefType.HEAD, GitRefType.PULL_REQUEST, GitRefType.TAG):
        if parts[1] == ref_type.value:
            return GitRef(ref_type, parts[2])
    return GitRef(GitRefType.UNKNOWN)


def split_tags(value: Optional[str]) -> List[str]:
    """拆分逗号分隔的标签列表，去除空项"""
    if not value:
        return []
    return [tag.strip() for tag in value.split(",") if tag.strip()]


def write_output(name: str, value: str) -> None:
    """
    写入CI步骤输出

    Args:
        name: 输出名称
        value: 输出值
    """
    logger.info(f"输出 {name}={value}")
    output_file = os.environ.get(CI_ENV["output"])
    if not output_file:
        return

    with open(output_file, "a", encoding="utf-8") as f:
        f.write(f"{name}={value}\n")
