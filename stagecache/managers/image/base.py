"""镜像管理基础类型定义"""

from typing import Dict, Optional, TypedDict


class ImageBuildError(Exception):
    """镜像构建错误"""
    pass


class ImagePushError(Exception):
    """镜像推送错误"""
    pass


class ImagePullError(Exception):
    """镜像拉取错误"""
    pass


class ImageTagError(Exception):
    """镜像标签错误"""
    pass


class ImageSource(TypedDict):
    """镜像引用解析结果"""
    repository: str
    registry: str
    image: str
    tag: Optional[str]


class AuthData(TypedDict):
    """仓库认证信息"""
    username: str
    password: str


# 标签 -> 镜像ID，表示缓存仓库中已存在的镜像
TaggedImages = Dict[str, str]

# 仓库:标签 -> 镜像ID，表示本次运行中构建的镜像
ImageHashes = Dict[str, str]
