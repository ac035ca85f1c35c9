"""阶段缓存管理器类

每个命名构建阶段以 <缓存仓库>:stage-<阶段名> 保存到缓存仓库，最终阶段保存为
<缓存仓库>:final。下次运行时拉取这些镜像作为cache_from，使未变化的阶段命中层缓存。
"""

from pathlib import Path
from typing import List, Optional, Union

from docker.client import DockerClient
from loguru import logger

from ..constants import ERROR_MESSAGES, FINAL_TAG, STAGE_TAG_PREFIX
from .base_manager import BaseManager
from .image.base import AuthData, ImageBuildError, ImageHashes, TaggedImages
from .image.build import ImageBuilder
from .image.cleanup import ImageCleaner
from .image.context import pack_build_context
from .image.push import ImagePusher
from .image.stages import DockerfileError, read_build_targets
from .image.tag import ImageTagger
from .image.utils import parse_image_name


class CacheManager(BaseManager):
    """阶段缓存管理器类，负责拉取、构建、推送和清理缓存镜像"""

    def __init__(
        self,
        build_context: Union[str, Path],
        dockerfile: Union[str, Path],
        cache_repository: str,
        cache_auth: Optional[AuthData] = None,
        docker_client: Optional[DockerClient] = None,
        cleaner: Optional[ImageCleaner] = None,
    ) -> None:
        """
        初始化阶段缓存管理器

        Args:
            build_context: 构建上下文目录
            dockerfile: Dockerfile路径
            cache_repository: 缓存仓库名
            cache_auth: 缓存仓库认证信息
            docker_client: Docker客户端实例
            cleaner: 过期镜像清理器，默认按注册表选择策略
        """
        super().__init__(docker_client)
        self.build_context = Path(build_context)
        self.dockerfile = Path(dockerfile)
        self.cache_repository = cache_repository
        self.cache_auth = cache_auth

        # 初始化子组件
        self.builder = ImageBuilder(self.docker_client)
        self.pusher = ImagePusher(self.docker_client)
        self.tagger = ImageTagger(self.docker_client)
        self.cleaner = cleaner or ImageCleaner(self.docker_client)

    @property
    def final_image(self) -> str:
        """最终阶段镜像名称"""
        return f"{self.cache_repository}:{FINAL_TAG}"

    @property
    def dockerfile_name(self) -> str:
        """
        Dockerfile相对于构建上下文的路径，传给引擎的dockerfile参数

        Raises:
            DockerfileError: Dockerfile不在构建上下文中时抛出
        """
        try:
            return self.dockerfile.resolve().relative_to(self.build_context.resolve()).as_posix()
        except ValueError as e:
            raise DockerfileError(f"Dockerfile {self.dockerfile} 不在构建上下文 {self.build_context} 中") from e

    def stage_image(self, target: str) -> str:
        """构建阶段镜像名称"""
        return f"{self.cache_repository}:{STAGE_TAG_PREFIX}{target}"

    def run(self) -> ImageHashes:
        """
        执行完整的缓存构建流程：拉取、构建、推送、清理

        Returns:
            ImageHashes: 本次构建的镜像
        """
        stage_cache = self.pull_cached_stages()
        new_images = self.assemble_image(stage_cache)
        self.push_cached_stages(new_images)
        self.clean_cached_stages(stage_cache, new_images)
        return new_images

    def pull_cached_stages(self) -> TaggedImages:
        """
        拉取缓存仓库的所有标签

        任何失败都视为缓存为空，不会中断构建。

        Returns:
            TaggedImages: 已有缓存镜像
        """
        try:
            logger.info(f"正在拉取缓存仓库 {self.cache_repository} 的所有镜像版本...")
            self.pusher.pull_all_tags(self.cache_repository, self.cache_auth)

            logger.debug(f"正在分析 {self.cache_repository} 的缓存镜像...")
            stage_cache = self.tagger.get_image_tags(self.cache_repository)
            logger.info(f"找到 {len(stage_cache)} 个缓存镜像: {', '.join(stage_cache)}")
            return stage_cache
        except Exception as e:
            logger.warning(f"无法获取缓存镜像，将在无缓存的情况下继续构建: {e}")
            return {}

    def assemble_image(self, stage_cache: TaggedImages) -> ImageHashes:
        """
        依次构建每个阶段和最终阶段

        每构建完一个阶段，就把它加入cache_from，供后续阶段复用。

        Args:
            stage_cache: 已有缓存镜像

        Returns:
            ImageHashes: 本次构建的镜像

        Raises:
            ImageBuildError: 构建失败或未生成最终镜像时抛出
        """
        dockerfile = self.dockerfile_name
        archive = pack_build_context(self.build_context)

        new_images: ImageHashes = {}
        cache_from: List[str] = list(stage_cache.values())

        for target in read_build_targets(self.dockerfile):
            image_name = self.stage_image(target)
            image_id = self.builder.build(
                archive, image_name, cache_from=cache_from, target=target, dockerfile=dockerfile
            )

            new_images[image_name] = image_id
            cache_from.append(image_id)
            logger.info(f"已构建阶段 {target}: {image_id}")

        image_name = self.final_image
        image_id = self.builder.build(archive, image_name, cache_from=cache_from, dockerfile=dockerfile)
        if not image_id:
            raise ImageBuildError(ERROR_MESSAGES["missing_final"].format(image_name))

        new_images[image_name] = image_id
        logger.info(f"已构建最终阶段 {image_name}: {image_id}")
        return new_images

    def push_cached_stages(self, new_images: ImageHashes) -> None:
        """
        将本次构建的镜像推送到缓存仓库

        Args:
            new_images: 本次构建的镜像
        """
        for image_name, image_id in new_images.items():
            logger.info(f"正在推送缓存镜像 {image_name} ({image_id})...")
            self.pusher.push(image_name, self.cache_auth)

    def expected_tags(self, new_images: ImageHashes) -> List[str]:
        """本次构建应当存在于缓存仓库中的标签"""
        tags = []
        for image_name in new_images:
            tag = parse_image_name(image_name)["tag"]
            if tag:
                tags.append(tag)
        return tags

    def clean_cached_stages(self, stage_cache: TaggedImages, new_images: ImageHashes) -> List[str]:
        """
        下架不再对应任何构建阶段的缓存标签

        Args:
            stage_cache: 拉取到的缓存镜像
            new_images: 本次构建的镜像

        Returns:
            List[str]: 已下架的镜像名称
        """
        expected = self.expected_tags(new_images)
        removed = []
        for tag in stage_cache:
            if tag in expected:
                continue

            image_name = f"{self.cache_repository}:{tag}"
            logger.info(f"发现过期缓存镜像: {image_name}")
            self.cleaner.unpublish(image_name, self.cache_auth)
            removed.append(image_name)
        return removed
