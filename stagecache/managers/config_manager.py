"""配置管理器类"""

from pathlib import Path
from typing import Any, Dict, cast

from loguru import logger

from ..constants import (
    CACHE_REPOSITORY_SUFFIX,
    DEFAULT_BUILD_CONFIG,
    ERROR_MESSAGES,
    BuildConfig,
)
from ..utils import parse_bool, split_tags
from .image.base import AuthData


class ConfigError(Exception):
    """配置错误"""

    pass


class ConfigManager:
    """配置管理器类，将CLI/CI输入整理为构建配置"""

    config: BuildConfig

    REQUIRED_INPUTS = [
        "target_repository",
        "target_registry_username",
        "target_registry_password",
    ]
    BOOL_INPUTS = ["build", "publish", "tag_with_ref", "tag_with_sha"]

    def __init__(self, inputs: Dict[str, Any]) -> None:
        """
        初始化配置管理器

        Args:
            inputs: 原始输入，值为None或空字符串表示未提供
        """
        self.config = self.load_config(inputs)

    def load_config(self, inputs: Dict[str, Any]) -> BuildConfig:
        """
        合并默认值并推导缓存仓库配置

        Args:
            inputs: 原始输入

        Returns:
            BuildConfig: 构建配置

        Raises:
            ConfigError: 输入缺失或无法解析时抛出
        """
        config: Dict[str, Any] = dict(DEFAULT_BUILD_CONFIG)
        for key, value in inputs.items():
            if value is None or value == "":
                continue
            config[key] = value

        for key in self.REQUIRED_INPUTS:
            if not config.get(key):
                raise ConfigError(ERROR_MESSAGES["required_input"].format(key))

        for key in self.BOOL_INPUTS:
            if isinstance(config[key], str):
                try:
                    config[key] = parse_bool(config[key])
                except ValueError as e:
                    raise ConfigError(f"{key}: {e}") from e

        if isinstance(config["tags"], str):
            config["tags"] = split_tags(config["tags"])

        config["cache_repository"] = (
            config.get("cache_repository") or f"{config['target_repository']}{CACHE_REPOSITORY_SUFFIX}"
        )
        config["cache_registry_username"] = (
            config.get("cache_registry_username") or config["target_registry_username"]
        )
        config["cache_registry_password"] = (
            config.get("cache_registry_password") or config["target_registry_password"]
        )
        config.setdefault("ref", None)
        config.setdefault("sha", None)

        logger.debug(
            f"目标仓库: {config['target_repository']}，缓存仓库: {config['cache_repository']}，"
            f"构建: {config['build']}，发布: {config['publish']}"
        )
        return cast(BuildConfig, config)

    def validate_config(self) -> None:
        """
        验证构建上下文和Dockerfile是否存在

        Raises:
            ConfigError: 路径验证失败时抛出
        """
        context_dir = Path(self.config["build_context"])
        if not context_dir.is_dir():
            raise ConfigError(ERROR_MESSAGES["file_not_found"].format("构建上下文目录", context_dir))

        if self.config["build"] and not self.dockerfile_path.is_file():
            raise ConfigError(ERROR_MESSAGES["file_not_found"].format("Dockerfile", self.dockerfile_path))

    @property
    def dockerfile_path(self) -> Path:
        """Dockerfile路径，相对于构建上下文"""
        return Path(self.config["build_context"]) / self.config["build_dockerfile"]

    @property
    def target_auth(self) -> AuthData:
        """目标仓库认证信息"""
        return {
            "username": self.config["target_registry_username"],
            "password": self.config["target_registry_password"],
        }

    @property
    def cache_auth(self) -> AuthData:
        """缓存仓库认证信息"""
        return {
            "username": self.config["cache_registry_username"],
            "password": self.config["cache_registry_password"],
        }

    def get_config(self) -> BuildConfig:
        """
        获取当前配置

        Returns:
            BuildConfig: 当前配置
        """
        return self.config
