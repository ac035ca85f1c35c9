"""Docker镜像管理器模块

该模块包含各种管理器类，用于阶段缓存构建和镜像发布。
"""

from .base_manager import BaseManager
from .build_manager import BuildManager, BuildResult
from .cache_manager import CacheManager
from .config_manager import ConfigError, ConfigManager
from .publish_manager import PublishError, PublishManager

__all__ = [
    "BaseManager",
    "BuildManager",
    "BuildResult",
    "CacheManager",
    "ConfigManager",
    "ConfigError",
    "PublishManager",
    "PublishError",
]
