"""镜像管理工具函数"""

from typing import Optional, Tuple

from ...constants import DEFAULT_REGISTRY, LIBRARY_NAMESPACE, LOCALHOST_REGISTRY
from .base import AuthData, ImageSource


def _split_repository_tag(value: str) -> Tuple[str, Optional[str]]:
    """
    分离仓库名和标签（或摘要）

    Args:
        value: 镜像名称

    Returns:
        Tuple[str, Optional[str]]: 仓库名和标签，没有标签时为None
    """
    if "@" in value:
        # 摘要以第一个"@"为准
        separator_pos = value.index("@")
    elif ":" in value:
        separator_pos = value.rindex(":")
    else:
        return value, None

    tag = value[separator_pos + 1:]
    # 冒号后含有"/"说明是端口号，例如 host:5000/image
    if "/" in tag:
        return value, None
    return value[:separator_pos], tag


def _split_registry_image(repository: str) -> Tuple[str, str]:
    """
    分离注册表和镜像路径

    Args:
        repository: 仓库名

    Returns:
        Tuple[str, str]: 注册表和镜像路径
    """
    parts = repository.split("/", 1)
    if len(parts) == 1:
        return DEFAULT_REGISTRY, repository

    host = parts[0]
    if "." not in host and ":" not in host and host != LOCALHOST_REGISTRY:
        return DEFAULT_REGISTRY, repository
    return host, parts[1]


def parse_image_name(image_name: str) -> ImageSource:
    """
    解析镜像名称，分离注册表、镜像路径和标签

    不会抛出异常，格式错误的输入按最可能的含义解析。

    Args:
        image_name: 镜像名称，例如 "my.registry:5000/ns/img:tag"

    Returns:
        ImageSource: 解析结果
    """
    repository, tag = _split_repository_tag(image_name)
    registry, image = _split_registry_image(repository)
    return {
        "repository": repository,
        "registry": registry,
        "image": image,
        "tag": tag,
    }


def format_image_name(source: ImageSource) -> str:
    """根据解析结果重新拼接 仓库名[:标签] 或 仓库名@摘要"""
    if source["tag"] is None:
        return source["repository"]
    # 标签不能包含冒号，含冒号的只能是摘要，例如 sha256:abc
    separator = "@" if ":" in source["tag"] else ":"
    return f"{source['repository']}{separator}{source['tag']}"


def normalize_repository(repository: str) -> str:
    """
    规范化仓库名，去掉默认注册表的 docker.io/ 和 library/ 前缀

    Args:
        repository: 仓库名（不含标签）

    Returns:
        str: 规范化后的仓库名
    """
    registry, image = _split_registry_image(repository)
    if registry != DEFAULT_REGISTRY:
        return repository
    if image.startswith(LIBRARY_NAMESPACE):
        return image[len(LIBRARY_NAMESPACE):]
    return image


def build_auth_config(image_name: str, auth: AuthData) -> dict:
    """
    生成Docker引擎使用的认证配置

    Args:
        image_name: 镜像名称，用于确定注册表地址
        auth: 认证信息

    Returns:
        dict: 认证配置
    """
    return {
        "username": auth["username"],
        "password": auth["password"],
        "serveraddress": parse_image_name(image_name)["registry"],
    }
