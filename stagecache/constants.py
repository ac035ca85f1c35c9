"""常量配置模块"""

from typing import Dict, List, Optional, TypedDict

# 文件相关
class DefaultFiles(TypedDict):
    dockerfile: str
    dockerignore: str
    env_file: str

DEFAULT_FILES: DefaultFiles = {
    "dockerfile": "Dockerfile",
    "dockerignore": ".dockerignore",
    "env_file": ".env",
}

# 镜像仓库相关
DEFAULT_REGISTRY: str = "docker.io"
LOCALHOST_REGISTRY: str = "localhost"
LIBRARY_NAMESPACE: str = "library/"
CACHE_REPOSITORY_SUFFIX: str = "-cache"

# 缓存标签
STAGE_TAG_PREFIX: str = "stage-"
FINAL_TAG: str = "final"
FALLBACK_TAG: str = "latest"

# 占位镜像标签，带有该标签的镜像在枚举缓存时被忽略
PLACEHOLDER_LABEL_KEY: str = "net.snapserv.image-type"
PLACEHOLDER_LABEL_VALUE: str = "empty"
PLACEHOLDER_DOCKERFILE: str = "\n".join(
    [
        "FROM scratch",
        f"LABEL {PLACEHOLDER_LABEL_KEY}={PLACEHOLDER_LABEL_VALUE}",
    ]
)

# 发布标签
SHA_TAG_PREFIX: str = "sha-"
SHA_TAG_LENGTH: int = 7
PR_TAG_PREFIX: str = "pr-"
DEFAULT_BRANCH: str = "master"

# 布尔值输入
TRUE_VALUES: List[str] = ["1", "t", "true"]
FALSE_VALUES: List[str] = ["0", "f", "false"]

# 构建配置
class BuildConfig(TypedDict):
    build: bool
    publish: bool
    build_context: str
    build_dockerfile: str
    target_repository: str
    target_registry_username: str
    target_registry_password: str
    cache_repository: str
    cache_registry_username: str
    cache_registry_password: str
    tags: List[str]
    tag_with_ref: bool
    tag_with_sha: bool
    ref: Optional[str]
    sha: Optional[str]

DEFAULT_BUILD_CONFIG: Dict[str, object] = {
    "build": True,
    "publish": True,
    "build_context": ".",
    "build_dockerfile": DEFAULT_FILES["dockerfile"],
    "tags": [],
    "tag_with_ref": False,
    "tag_with_sha": False,
}

# CI环境变量
class CIEnvironment(TypedDict):
    sha: str
    ref: str
    output: str
    input_prefix: str

CI_ENV: CIEnvironment = {
    "sha": "GITHUB_SHA",
    "ref": "GITHUB_REF",
    "output": "GITHUB_OUTPUT",
    "input_prefix": "INPUT_",
}

# 错误消息
class ErrorMessages(TypedDict):
    required_input: str
    invalid_bool: str
    docker_connection: str
    file_not_found: str
    missing_final: str
    missing_build: str

ERROR_MESSAGES: ErrorMessages = {
    "required_input": "缺少必需的输入项: {}",
    "invalid_bool": "无法将 [{}] 解析为布尔值，可选值: 1, t, true, 0, f, false（不区分大小写）",
    "docker_connection": "无法连接到Docker守护进程: {}",
    "file_not_found": "{}不存在: {}",
    "missing_final": "构建完成后未找到最终镜像: {}",
    "missing_build": "未找到先前构建的镜像 {}，请先启用构建阶段",
}
