"""构建结果格式化模块"""

from typing import List

from loguru import logger

from ..managers.build_manager import BuildResult


def format_build_result(result: BuildResult) -> None:
    """格式化并显示构建结果

    Args:
        result: 构建结果
    """
    logger.info("\n构建结果:")
    logger.info(f"  最终镜像: {result['build_output']}")

    _format_images(result)
    _format_published(result["tags"], result["published"])


def _format_images(result: BuildResult) -> None:
    """显示本次构建的缓存镜像"""
    if not result["images"]:
        logger.info("  本次未构建镜像")
        return

    logger.info("  缓存镜像:")
    for image_name, image_id in result["images"].items():
        logger.info(f"    - {image_name} ({image_id})")


def _format_published(tags: List[str], published: List[str]) -> None:
    """显示发布结果"""
    if not published:
        logger.info("  本次未发布镜像")
        return

    logger.success(f"  已发布 {len(published)}/{len(tags)} 个标签:")
    for image_name in published:
        logger.success(f"    - {image_name}")
