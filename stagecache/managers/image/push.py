"""镜像推送与拉取相关功能"""

from typing import Iterable, Optional

import docker
from loguru import logger

from .base import AuthData, ImagePullError, ImagePushError
from .utils import build_auth_config, parse_image_name


class ImagePusher:
    """镜像推送器类"""

    def __init__(self, docker_client):
        """
        初始化镜像推送器

        Args:
            docker_client: Docker客户端实例
        """
        self.docker_client = docker_client

    def push(self, image_name: str, auth: Optional[AuthData] = None) -> None:
        """
        推送镜像到远程仓库

        Args:
            image_name: 镜像名称（仓库名:标签）
            auth: 仓库认证信息

        Raises:
            ImagePushError: 推送失败时抛出
        """
        source = parse_image_name(image_name)
        logger.info(f"开始推送镜像 {image_name}...")
        try:
            push_output = self.docker_client.api.push(
                source["repository"],
                tag=source["tag"],
                auth_config=build_auth_config(image_name, auth) if auth else None,
                stream=True,
                decode=True,
            )
            self._follow_progress(push_output, ImagePushError)
        except docker.errors.APIError as e:
            raise ImagePushError(f"推送镜像 {image_name} 失败: {e}") from e
        logger.success(f"镜像 {image_name} 推送成功")

    def pull_all_tags(self, repository: str, auth: Optional[AuthData] = None) -> None:
        """
        拉取仓库的所有标签

        Args:
            repository: 仓库名（不含标签）
            auth: 仓库认证信息

        Raises:
            ImagePullError: 拉取失败时抛出
        """
        logger.debug(f"正在拉取 {repository} 的所有镜像版本...")
        try:
            pull_output = self.docker_client.api.pull(
                repository,
                all_tags=True,
                auth_config=build_auth_config(repository, auth) if auth else None,
                stream=True,
                decode=True,
            )
            self._follow_progress(pull_output, ImagePullError)
        except docker.errors.APIError as e:
            raise ImagePullError(f"拉取镜像 {repository} 失败: {e}") from e

    def pull(self, image_name: str, auth: Optional[AuthData] = None) -> None:
        """
        拉取单个镜像

        Args:
            image_name: 镜像名称（仓库名:标签）
            auth: 仓库认证信息

        Raises:
            ImagePullError: 拉取失败时抛出
        """
        source = parse_image_name(image_name)
        logger.info(f"正在拉取镜像 {image_name}...")
        try:
            pull_output = self.docker_client.api.pull(
                source["repository"],
                tag=source["tag"],
                auth_config=build_auth_config(image_name, auth) if auth else None,
                stream=True,
                decode=True,
            )
            self._follow_progress(pull_output, ImagePullError)
        except docker.errors.APIError as e:
            raise ImagePullError(f"拉取镜像 {image_name} 失败: {e}") from e

    @staticmethod
    def _follow_progress(output: Iterable[dict], error_class: type) -> None:
        """
        处理推送或拉取输出

        Args:
            output: 解码后的输出流
            error_class: 遇到错误时抛出的异常类型
        """
        for line in output:
            if "error" in line:
                raise error_class(line["error"])
            elif "status" in line:
                logger.debug(line["status"])
