"""Docker镜像管理相关功能模块

该子包包含镜像管理相关的各个功能模块，如构建、推送、标签管理、缓存清理等。
"""

from .base import (
    AuthData,
    ImageBuildError,
    ImageHashes,
    ImagePullError,
    ImagePushError,
    ImageSource,
    ImageTagError,
    TaggedImages,
)
from .build import ImageBuilder
from .push import ImagePusher
from .tag import ImageTagger
from .cleanup import ImageCleaner, PlaceholderImage, PlaceholderOverwriteStrategy, UnpublishStrategy
from .context import pack_build_context, pack_dockerfile
from .resolve import resolve_tags
from .stages import DockerfileError, parse_build_targets, read_build_targets
from .utils import build_auth_config, format_image_name, normalize_repository, parse_image_name

__all__ = [
    "AuthData",
    "ImageBuildError",
    "ImageHashes",
    "ImagePullError",
    "ImagePushError",
    "ImageSource",
    "ImageTagError",
    "TaggedImages",
    "ImageBuilder",
    "ImagePusher",
    "ImageTagger",
    "ImageCleaner",
    "PlaceholderImage",
    "PlaceholderOverwriteStrategy",
    "UnpublishStrategy",
    "pack_build_context",
    "pack_dockerfile",
    "resolve_tags",
    "DockerfileError",
    "parse_build_targets",
    "read_build_targets",
    "build_auth_config",
    "format_image_name",
    "normalize_repository",
    "parse_image_name",
]
