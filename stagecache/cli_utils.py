"""CLI工具模块，包含CLI命令行接口的辅助函数"""

import sys
from functools import wraps
from typing import Any, Callable, List, TypeVar

from loguru import logger

from .constants import CI_ENV

F = TypeVar('F', bound=Callable[..., Any])


def input_envvars(name: str, *aliases: str) -> List[str]:
    """
    生成CI输入对应的环境变量名

    Args:
        name: 输入名称
        aliases: 兼容的旧输入名称

    Returns:
        List[str]: 环境变量名列表，例如 INPUT_TARGET_REPOSITORY
    """
    return [f"{CI_ENV['input_prefix']}{key.upper()}" for key in (name, *aliases)]


def exit_on_error(func: F) -> F:
    """
    捕获命令中的异常，记录错误并以失败状态退出的装饰器

    Args:
        func: 被装饰的函数

    Returns:
        Callable: 装饰后的函数
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            logger.error(f"错误：{str(e)}")
            sys.exit(1)

    return wrapper  # type: ignore
