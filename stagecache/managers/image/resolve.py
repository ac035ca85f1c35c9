"""发布标签计算"""

from typing import Iterable, List, Optional

from loguru import logger

from ...constants import DEFAULT_BRANCH, FALLBACK_TAG, PR_TAG_PREFIX, SHA_TAG_LENGTH, SHA_TAG_PREFIX
from ...utils import GitRef, GitRefType


def ref_tag(git_ref: GitRef) -> Optional[str]:
    """
    根据Git引用计算标签

    Args:
        git_ref: Git引用

    Returns:
        Optional[str]: 标签，无法识别的引用返回None
    """
    if git_ref.type == GitRefType.HEAD:
        return FALLBACK_TAG if git_ref.name == DEFAULT_BRANCH else git_ref.name
    elif git_ref.type == GitRefType.PULL_REQUEST:
        return f"{PR_TAG_PREFIX}{git_ref.name}"
    elif git_ref.type == GitRefType.TAG:
        return git_ref.name
    return None


def resolve_tags(
    static_tags: Iterable[str],
    tag_with_ref: bool = False,
    git_ref: Optional[GitRef] = None,
    tag_with_sha: bool = False,
    commit_sha: Optional[str] = None,
) -> List[str]:
    """
    计算最终发布的标签列表

    顺序为：静态标签、sha-<前7位>、Git引用标签。不去重。

    Args:
        static_tags: 静态标签
        tag_with_ref: 是否添加Git引用标签
        git_ref: Git引用
        tag_with_sha: 是否添加提交SHA标签
        commit_sha: 提交SHA

    Returns:
        List[str]: 标签列表
    """
    tags = [tag for tag in static_tags if tag]

    if tag_with_sha:
        if commit_sha and len(commit_sha) >= SHA_TAG_LENGTH:
            tags.append(f"{SHA_TAG_PREFIX}{commit_sha[:SHA_TAG_LENGTH]}")
        else:
            logger.debug("未获取到有效的提交SHA，跳过SHA标签")

    if tag_with_ref:
        tag = ref_tag(git_ref) if git_ref else None
        if tag:
            tags.append(tag)
        else:
            logger.debug(f"无法从Git引用 {git_ref} 生成标签，跳过")

    return tags
