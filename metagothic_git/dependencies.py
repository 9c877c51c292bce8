from fastapi import Depends

from .config.settings import Settings, get_settings
from .protocols import AssistantRunnerProtocol, GitRunnerProtocol
from .services import (
    AssistantRunner,
    CommitMessageSynthesizer,
    GitRunner,
    RepositoryScanner,
)


def get_git_runner(settings: Settings = Depends(get_settings)) -> GitRunnerProtocol:
    return GitRunner(
        max_output_bytes=settings.GIT_MAX_OUTPUT_BYTES,
        timeout=settings.GIT_COMMAND_TIMEOUT,
    )


def get_assistant_runner(
    settings: Settings = Depends(get_settings),
) -> AssistantRunnerProtocol:
    return AssistantRunner(
        command=settings.ASSISTANT_COMMAND,
        args=settings.ASSISTANT_ARGS,
        timeout=settings.ASSISTANT_TIMEOUT,
        max_output_bytes=settings.ASSISTANT_MAX_OUTPUT_BYTES,
        temp_dir=settings.TEMP_DIR,
    )


# Services depend on the runner getters above
def get_repository_scanner(
    settings: Settings = Depends(get_settings),
    git_runner: GitRunnerProtocol = Depends(get_git_runner),
) -> RepositoryScanner:
    return RepositoryScanner(
        git_runner=git_runner,
        packages_root=settings.packages_root,
        packages=settings.PACKAGES,
    )


def get_commit_synthesizer(
    settings: Settings = Depends(get_settings),
    git_runner: GitRunnerProtocol = Depends(get_git_runner),
    assistant_runner: AssistantRunnerProtocol = Depends(get_assistant_runner),
) -> CommitMessageSynthesizer:
    return CommitMessageSynthesizer(
        git_runner=git_runner,
        assistant_runner=assistant_runner,
        workspace_root=settings.workspace_root,
        backlog_path=settings.backlog_path,
        backlog_max_lines=settings.BACKLOG_MAX_LINES,
        diff_max_lines=settings.DIFF_MAX_LINES,
        preview_max_lines=settings.PREVIEW_MAX_LINES,
    )
