"""CLI命令行接口模块"""

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from loguru import logger

from stagecache import configure_logging
from stagecache.cli_utils import exit_on_error, input_envvars
from stagecache.constants import DEFAULT_FILES
from stagecache.formatters.summary import format_build_result
from stagecache.managers.build_manager import BuildManager
from stagecache.managers.config_manager import ConfigManager
from stagecache.managers.image.stages import read_build_targets
from stagecache.managers.image.resolve import resolve_tags
from stagecache.utils import RunMetadata, parse_bool, parse_git_ref, split_tags, write_output

# 创建CLI应用
app = typer.Typer(
    help="Docker多阶段构建缓存工具",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich"
)


@app.callback()
def setup(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="输出调试日志")
):
    """按阶段缓存构建Docker镜像，并发布到目标仓库"""
    if verbose:
        configure_logging("DEBUG")


@app.command("run")
@exit_on_error
def run_build(
    build: str = typer.Option("true", "--build", envvar=input_envvars("build"), help="是否执行构建阶段"),
    publish: str = typer.Option("true", "--publish", envvar=input_envvars("publish"), help="是否执行发布阶段"),
    build_context: str = typer.Option(
        ".", "-c", "--build-context", envvar=input_envvars("build_context"), help="构建上下文目录"
    ),
    build_dockerfile: str = typer.Option(
        DEFAULT_FILES["dockerfile"], "-f", "--build-dockerfile",
        envvar=input_envvars("build_dockerfile"), help="Dockerfile路径，相对于构建上下文"
    ),
    target_repository: str = typer.Option(
        None, "-t", "--target-repository", envvar=input_envvars("target_repository", "target_image"),
        help="目标镜像仓库"
    ),
    target_registry_username: str = typer.Option(
        None, "--target-registry-username", envvar=input_envvars("target_registry_username"),
        help="目标仓库用户名"
    ),
    target_registry_password: str = typer.Option(
        None, "--target-registry-password", envvar=input_envvars("target_registry_password"),
        help="目标仓库密码", show_default=False
    ),
    cache_repository: str = typer.Option(
        None, "--cache-repository", envvar=input_envvars("cache_repository", "cache_image"),
        help="缓存镜像仓库，默认为目标仓库加 -cache 后缀"
    ),
    cache_registry_username: str = typer.Option(
        None, "--cache-registry-username", envvar=input_envvars("cache_registry_username"),
        help="缓存仓库用户名，默认与目标仓库相同"
    ),
    cache_registry_password: str = typer.Option(
        None, "--cache-registry-password", envvar=input_envvars("cache_registry_password"),
        help="缓存仓库密码，默认与目标仓库相同", show_default=False
    ),
    tags: str = typer.Option(
        None, "--tags", envvar=input_envvars("tags", "static_tags"), help="逗号分隔的发布标签"
    ),
    tag_with_ref: str = typer.Option(
        "false", "--tag-with-ref", envvar=input_envvars("tag_with_ref"), help="是否使用Git引用作为标签"
    ),
    tag_with_sha: str = typer.Option(
        "false", "--tag-with-sha", envvar=input_envvars("tag_with_sha"), help="是否使用提交SHA作为标签"
    ),
    ref: Optional[str] = typer.Option(None, "--ref", help="Git引用，默认读取GITHUB_REF"),
    sha: Optional[str] = typer.Option(None, "--sha", help="提交SHA，默认读取GITHUB_SHA"),
):
    """构建镜像并发布"""
    config_manager = ConfigManager(
        {
            "build": build,
            "publish": publish,
            "build_context": build_context,
            "build_dockerfile": build_dockerfile,
            "target_repository": target_repository,
            "target_registry_username": target_registry_username,
            "target_registry_password": target_registry_password,
            "cache_repository": cache_repository,
            "cache_registry_username": cache_registry_username,
            "cache_registry_password": cache_registry_password,
            "tags": tags,
            "tag_with_ref": tag_with_ref,
            "tag_with_sha": tag_with_sha,
            "ref": ref,
            "sha": sha,
        }
    )
    result = BuildManager(config_manager).run()

    write_output("build_output", result["build_output"])
    format_build_result(result)


@app.command("tags")
@exit_on_error
def show_tags(
    tags: str = typer.Option(
        None, "--tags", envvar=input_envvars("tags", "static_tags"), help="逗号分隔的发布标签"
    ),
    tag_with_ref: str = typer.Option(
        "false", "--tag-with-ref", envvar=input_envvars("tag_with_ref"), help="是否使用Git引用作为标签"
    ),
    tag_with_sha: str = typer.Option(
        "false", "--tag-with-sha", envvar=input_envvars("tag_with_sha"), help="是否使用提交SHA作为标签"
    ),
    ref: Optional[str] = typer.Option(None, "--ref", help="Git引用，默认读取GITHUB_REF"),
    sha: Optional[str] = typer.Option(None, "--sha", help="提交SHA，默认读取GITHUB_SHA"),
):
    """只计算并显示发布标签"""
    metadata = RunMetadata.from_env(sha, ref)
    resolved = resolve_tags(
        split_tags(tags),
        tag_with_ref=parse_bool(tag_with_ref),
        git_ref=parse_git_ref(metadata.ref) if metadata.ref else None,
        tag_with_sha=parse_bool(tag_with_sha),
        commit_sha=metadata.sha,
    )
    if not resolved:
        logger.warning("没有可用的发布标签")
    for tag in resolved:
        typer.echo(tag)


@app.command("stages")
@exit_on_error
def show_stages(
    dockerfile: Path = typer.Argument(Path(DEFAULT_FILES["dockerfile"]), help="Dockerfile路径"),
):
    """显示Dockerfile中的构建阶段"""
    for target in read_build_targets(dockerfile):
        typer.echo(target)


def main():
    """主入口函数"""
    load_dotenv(DEFAULT_FILES["env_file"])
    app()

if __name__ == "__main__":
    main()
