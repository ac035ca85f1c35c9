"""Docker多阶段构建缓存工具包"""

# 导入loguru并配置logger
from loguru import logger

LOG_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"


def configure_logging(level: str = "INFO") -> None:
    """
    配置日志输出

    Args:
        level: 日志级别
    """
    # 移除已有处理器
    logger.remove()
    # 添加标准输出处理器
    logger.add(
        sink=lambda msg: print(msg, end=""),  # 使用标准输出
        format=LOG_FORMAT,
        colorize=True,
        level=level,
    )


configure_logging()

# 导入其他模块
from .cli import app, main

__version__ = "0.1.0"

__all__ = [
    "logger",
    "configure_logging",
    "app",
    "main",
]
