"""镜像标签管理相关功能"""

from typing import Dict

import docker
from loguru import logger

from ...constants import PLACEHOLDER_LABEL_KEY, PLACEHOLDER_LABEL_VALUE
from .base import ImageTagError, TaggedImages
from .utils import normalize_repository, parse_image_name


class ImageTagger:
    """镜像标签管理器类"""

    def __init__(self, docker_client):
        """
        初始化镜像标签管理器

        Args:
            docker_client: Docker客户端实例
        """
        self.docker_client = docker_client

    def tag(self, image: str, repository: str, tag: str) -> None:
        """
        为镜像添加新标签

        Args:
            image: 源镜像ID或名称
            repository: 目标仓库名
            tag: 目标标签

        Raises:
            ImageTagError: 添加标签失败时抛出
        """
        try:
            if not self.docker_client.images.get(image).tag(repository, tag=tag):
                raise ImageTagError(f"为镜像 {image} 添加标签 {repository}:{tag} 失败")
        except docker.errors.APIError as e:
            raise ImageTagError(f"为镜像 {image} 添加标签 {repository}:{tag} 失败: {e}") from e
        logger.debug(f"已为镜像 {image} 添加标签 {repository}:{tag}")

    def get_image_tags(self, repository: str) -> TaggedImages:
        """
        获取本地仓库中各标签对应的镜像ID，忽略占位镜像和其他仓库的标签

        Args:
            repository: 仓库名

        Returns:
            TaggedImages: 标签 -> 镜像ID
        """
        expected_repository = normalize_repository(repository)
        tags: Dict[str, str] = {}
        for image in self.docker_client.images.list(filters={"reference": repository}):
            labels = image.labels or {}
            if labels.get(PLACEHOLDER_LABEL_KEY) == PLACEHOLDER_LABEL_VALUE:
                continue

            for repo_tag in image.tags or []:
                source = parse_image_name(repo_tag)
                # 同一镜像可能还带有其他仓库的标签（例如发布标签）
                if normalize_repository(source["repository"]) != expected_repository:
                    continue
                if source["tag"]:
                    tags[source["tag"]] = image.id
        return tags
