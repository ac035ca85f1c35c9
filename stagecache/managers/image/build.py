"""镜像构建相关功能"""

import io
from typing import Iterable, List, Optional

import docker
from loguru import logger

from .base import ImageBuildError


class ImageBuilder:
    """镜像构建器类"""

    def __init__(self, docker_client) -> None:
        """
        初始化镜像构建器

        Args:
            docker_client: Docker客户端实例
        """
        self.docker_client = docker_client

    def build(
        self,
        archive: bytes,
        image_name: str,
        cache_from: Optional[List[str]] = None,
        target: Optional[str] = None,
        dockerfile: Optional[str] = None,
    ) -> str:
        """
        从打包好的构建上下文构建镜像

        Args:
            archive: gzip压缩的tar构建上下文
            image_name: 镜像名称（含标签）
            cache_from: 可复用层的缓存镜像列表
            target: 多阶段构建的目标阶段，None表示最终阶段
            dockerfile: 上下文中的Dockerfile路径，None表示上下文根目录的Dockerfile

        Returns:
            str: 构建出的镜像ID

        Raises:
            ImageBuildError: 构建失败时抛出
        """
        logger.info(f"开始构建镜像 {image_name}" + (f"（阶段 {target}）" if target else "") + "...")

        try:
            build_result = self.docker_client.api.build(
                fileobj=io.BytesIO(archive),
                custom_context=True,
                encoding="gzip",
                tag=image_name,
                cache_from=list(cache_from) if cache_from else None,
                target=target,
                dockerfile=dockerfile,
                decode=True,
                rm=True,
            )
            self._follow_progress(build_result)
            image = self.docker_client.images.get(image_name)
        except docker.errors.APIError as e:
            raise ImageBuildError(f"构建镜像 {image_name} 失败: {e}") from e

        logger.success(f"镜像 {image_name} 构建成功: {image.id}")
        return image.id

    def _follow_progress(self, build_result: Iterable[dict]) -> None:
        """
        处理构建输出

        Args:
            build_result: 解码后的构建输出流

        Raises:
            ImageBuildError: 输出中包含错误时抛出
        """
        for line in build_result:
            if "error" in line:
                raise ImageBuildError(line["error"])
            elif "stream" in line:
                log_line = line["stream"].strip()
                if log_line:
                    logger.debug(log_line)
            elif "status" in line:
                logger.debug(line["status"])
