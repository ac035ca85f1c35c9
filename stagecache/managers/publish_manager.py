"""发布管理器类"""

from typing import List, Optional

import docker
from docker.client import DockerClient
from loguru import logger

from ..constants import ERROR_MESSAGES
from .base_manager import BaseManager
from .image.base import AuthData, ImagePullError
from .image.push import ImagePusher
from .image.tag import ImageTagger


class PublishError(Exception):
    """发布错误"""

    pass


class PublishManager(BaseManager):
    """发布管理器类，为最终镜像打上发布标签并推送到目标仓库"""

    def __init__(
        self,
        target_repository: str,
        target_auth: Optional[AuthData] = None,
        docker_client: Optional[DockerClient] = None,
    ) -> None:
        """
        初始化发布管理器

        Args:
            target_repository: 目标仓库名
            target_auth: 目标仓库认证信息
            docker_client: Docker客户端实例
        """
        super().__init__(docker_client)
        self.target_repository = target_repository
        self.target_auth = target_auth
        self.pusher = ImagePusher(self.docker_client)
        self.tagger = ImageTagger(self.docker_client)

    def locate_image(self, image_name: str, auth: Optional[AuthData] = None) -> str:
        """
        查找先前构建的最终镜像，本地不存在时尝试从缓存仓库拉取

        Args:
            image_name: 最终镜像名称
            auth: 缓存仓库认证信息

        Returns:
            str: 镜像ID

        Raises:
            PublishError: 找不到镜像时抛出
        """
        try:
            return self.docker_client.images.get(image_name).id
        except docker.errors.ImageNotFound:
            logger.info(f"本地不存在镜像 {image_name}，尝试从缓存仓库拉取...")

        try:
            self.pusher.pull(image_name, auth)
            return self.docker_client.images.get(image_name).id
        except (ImagePullError, docker.errors.APIError) as e:
            raise PublishError(ERROR_MESSAGES["missing_build"].format(image_name)) from e

    def publish(self, image: str, tags: List[str]) -> List[str]:
        """
        为镜像添加所有发布标签并逐个推送

        任一标签失败即中止，不继续处理剩余标签。

        Args:
            image: 最终镜像ID或名称
            tags: 发布标签列表

        Returns:
            List[str]: 已推送的镜像名称
        """
        if not tags:
            logger.warning("没有可用的发布标签，跳过发布")
            return []

        published = []
        for tag in tags:
            image_name = f"{self.target_repository}:{tag}"
            logger.info(f"正在发布 {image_name}...")
            self.tagger.tag(image, self.target_repository, tag)
            self.pusher.push(image_name, self.target_auth)
            published.append(image_name)

        logger.success(f"已发布 {len(published)} 个标签: {', '.join(tags)}")
        return published
