"""过期缓存镜像清理相关功能

大部分镜像仓库（包括GitHub Package Registry）没有删除镜像的API，
因此用带标签的空占位镜像覆盖过期标签。枚举缓存时会忽略占位镜像，
过期标签虽然仍在仓库中，但不会再被当作缓存使用。
"""

from threading import Lock
from typing import Dict, Optional, Protocol

from loguru import logger

from ...constants import FALLBACK_TAG, PLACEHOLDER_DOCKERFILE
from .base import AuthData
from .build import ImageBuilder
from .context import pack_dockerfile
from .push import ImagePusher
from .tag import ImageTagger
from .utils import parse_image_name


class UnpublishStrategy(Protocol):
    """仓库下架策略协议"""

    def unpublish(self, image_name: str, auth: Optional[AuthData]) -> None:
        """从远程仓库下架指定镜像"""
        ...


class PlaceholderImage:
    """占位镜像，每次运行最多构建一次"""

    def __init__(self, builder: ImageBuilder) -> None:
        """
        初始化占位镜像

        Args:
            builder: 镜像构建器
        """
        self.builder = builder
        self._image_id: Optional[str] = None
        self._lock = Lock()

    @property
    def built(self) -> bool:
        """占位镜像是否已构建"""
        return self._image_id is not None

    def get(self, image_name: str) -> str:
        """
        获取占位镜像ID，首次调用时构建

        Args:
            image_name: 首次构建时使用的镜像名称

        Returns:
            str: 占位镜像ID
        """
        with self._lock:
            if self._image_id is None:
                logger.info(f"正在为 {image_name} 构建占位镜像...")
                self._image_id = self.builder.build(pack_dockerfile(PLACEHOLDER_DOCKERFILE), image_name)
            else:
                logger.info(f"复用占位镜像 {self._image_id} 覆盖 {image_name}...")
            return self._image_id


class PlaceholderOverwriteStrategy:
    """用占位镜像覆盖标签的下架策略"""

    def __init__(self, placeholder: PlaceholderImage, tagger: ImageTagger, pusher: ImagePusher) -> None:
        """
        初始化占位覆盖策略

        Args:
            placeholder: 占位镜像
            tagger: 镜像标签管理器
            pusher: 镜像推送器
        """
        self.placeholder = placeholder
        self.tagger = tagger
        self.pusher = pusher

    def unpublish(self, image_name: str, auth: Optional[AuthData]) -> None:
        """
        用占位镜像覆盖指定标签并推送

        Args:
            image_name: 镜像名称（仓库名:标签）
            auth: 仓库认证信息
        """
        logger.info(f"仓库不支持删除镜像，正在向 {image_name} 上传空镜像...")
        image_id = self.placeholder.get(image_name)

        source = parse_image_name(image_name)
        self.tagger.tag(image_id, source["repository"], source["tag"] or FALLBACK_TAG)
        self.pusher.push(image_name, auth)


class ImageCleaner:
    """过期缓存镜像清理器类，按注册表选择下架策略"""

    def __init__(self, docker_client) -> None:
        """
        初始化镜像清理器

        Args:
            docker_client: Docker客户端实例
        """
        self.docker_client = docker_client
        self.placeholder = PlaceholderImage(ImageBuilder(docker_client))
        self.default_strategy: UnpublishStrategy = PlaceholderOverwriteStrategy(
            self.placeholder, ImageTagger(docker_client), ImagePusher(docker_client)
        )
        self.strategies: Dict[str, UnpublishStrategy] = {
            "docker.pkg.github.com": self.default_strategy,
            "ghcr.io": self.default_strategy,
        }

    def register_strategy(self, registry: str, strategy: UnpublishStrategy) -> None:
        """
        为指定注册表注册下架策略

        Args:
            registry: 注册表主机名
            strategy: 下架策略
        """
        self.strategies[registry] = strategy

    def get_strategy(self, image_name: str) -> UnpublishStrategy:
        """根据镜像所在注册表选择下架策略"""
        registry = parse_image_name(image_name)["registry"]
        return self.strategies.get(registry, self.default_strategy)

    def unpublish(self, image_name: str, auth: Optional[AuthData] = None) -> None:
        """
        从远程仓库下架镜像

        Args:
            image_name: 镜像名称（仓库名:标签）
            auth: 仓库认证信息
        """
        self.get_strategy(image_name).unpublish(image_name, auth)
