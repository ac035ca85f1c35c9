"""构建流程管理器类"""

from typing import List, Optional, TypedDict

from docker.client import DockerClient
from loguru import logger

from ..constants import ERROR_MESSAGES
from ..utils import RunMetadata, parse_git_ref
from .base_manager import BaseManager
from .cache_manager import CacheManager
from .config_manager import ConfigManager
from .image.base import ImageBuildError, ImageHashes
from .image.resolve import resolve_tags
from .publish_manager import PublishManager


class BuildResult(TypedDict):
    """构建结果类型"""
    build_output: str
    images: ImageHashes
    tags: List[str]
    published: List[str]


class BuildManager(BaseManager):
    """构建流程管理器类，依次执行构建阶段和发布阶段"""

    config_manager: ConfigManager
    cache_manager: CacheManager
    publish_manager: PublishManager

    def __init__(self, config_manager: ConfigManager, docker_client: Optional[DockerClient] = None) -> None:
        """
        初始化构建流程管理器

        Args:
            config_manager: 配置管理器
            docker_client: Docker客户端实例，所有子管理器共用
        """
        super().__init__(docker_client)
        self.config_manager = config_manager
        config = config_manager.get_config()

        self.cache_manager = CacheManager(
            config["build_context"],
            config_manager.dockerfile_path,
            config["cache_repository"],
            config_manager.cache_auth,
            docker_client=self.docker_client,
        )
        self.publish_manager = PublishManager(
            config["target_repository"],
            config_manager.target_auth,
            docker_client=self.docker_client,
        )

    def resolve_tags(self) -> List[str]:
        """
        根据配置和提交信息计算发布标签

        Returns:
            List[str]: 发布标签列表
        """
        config = self.config_manager.get_config()
        metadata = RunMetadata.from_env(config["sha"], config["ref"])
        return resolve_tags(
            config["tags"],
            tag_with_ref=config["tag_with_ref"],
            git_ref=parse_git_ref(metadata.ref) if metadata.ref else None,
            tag_with_sha=config["tag_with_sha"],
            commit_sha=metadata.sha,
        )

    def run(self) -> BuildResult:
        """
        执行构建和发布

        Returns:
            BuildResult: 构建结果

        Raises:
            ImageBuildError: 构建失败时抛出
            PublishError: 发布失败时抛出
        """
        config = self.config_manager.get_config()
        self.config_manager.validate_config()

        result: BuildResult = {
            "build_output": self.cache_manager.final_image,
            "images": {},
            "tags": [],
            "published": [],
        }

        if config["build"]:
            logger.info("开始构建阶段...")
            result["images"] = self.cache_manager.run()
            if self.cache_manager.final_image not in result["images"]:
                raise ImageBuildError(ERROR_MESSAGES["missing_final"].format(self.cache_manager.final_image))
        else:
            logger.info("已禁用构建阶段")

        if config["publish"]:
            logger.info("开始发布阶段...")
            image = result["images"].get(self.cache_manager.final_image) or self.publish_manager.locate_image(
                self.cache_manager.final_image, self.config_manager.cache_auth
            )
            result["tags"] = self.resolve_tags()
            result["published"] = self.publish_manager.publish(image, result["tags"])
        else:
            logger.info("已禁用发布阶段")

        return result
