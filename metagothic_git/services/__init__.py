"""Services for the application."""

from .assistant_runner import AssistantRunner
from .commit_synthesizer import CommitMessageSynthesizer
from .git_runner import GitRunner
from .repository_scanner import RepositoryScanner, filter_reportable, parse_porcelain_status
from .workspace import check_git_args, resolve_within

__all__ = [
    "AssistantRunner",
    "CommitMessageSynthesizer",
    "GitRunner",
    "RepositoryScanner",
    "check_git_args",
    "filter_reportable",
    "parse_porcelain_status",
    "resolve_within",
]
