import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse, PlainTextResponse

from ...config.settings import Settings, get_settings
from ...dependencies import (
    get_commit_synthesizer,
    get_git_runner,
    get_repository_scanner,
)
from ...errors import (
    ForbiddenGitOptionError,
    GitCommandFailedError,
    PathOutsideWorkspaceError,
)
from ...protocols import GitRunnerProtocol
from ...schemas import (
    ChangeRecord,
    GenerateCommitMessagesRequest,
    GenerateCommitMessagesResponse,
    GitExecRequest,
    GitStatusRequest,
    GitStatusResponse,
    HealthResponse,
)
from ...services import (
    CommitMessageSynthesizer,
    RepositoryScanner,
    check_git_args,
    filter_reportable,
    resolve_within,
)

logger = logging.getLogger(__name__)

git_router = APIRouter(prefix="/git", tags=["git"])
claude_router = APIRouter(prefix="/claude", tags=["claude"])


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@git_router.post("/exec", response_class=PlainTextResponse)
async def exec_git_command(
    request: GitExecRequest,
    settings: Settings = Depends(get_settings),
    git_runner: GitRunnerProtocol = Depends(get_git_runner),
):
    """Run an arbitrary git command inside the workspace and return its stdout."""
    try:
        cwd = resolve_within(request.cwd, settings.workspace_root)
        check_git_args(request.args)
    except (PathOutsideWorkspaceError, ForbiddenGitOptionError) as e:
        raise HTTPException(status_code=403, detail=str(e))

    try:
        output = await git_runner.run_async(cwd, request.args)
    except GitCommandFailedError as e:
        return PlainTextResponse(str(e), status_code=500)
    return PlainTextResponse(output)


@git_router.post("/status", response_model=GitStatusResponse)
async def get_workspace_status(
    request: Optional[GitStatusRequest] = None,
    settings: Settings = Depends(get_settings),
    git_runner: GitRunnerProtocol = Depends(get_git_runner),
):
    """Porcelain status for a workspace, defaulting to the workspace root."""
    target = request.workspace_path if request and request.workspace_path else None
    try:
        workspace = resolve_within(target or settings.workspace_root, settings.workspace_root)
    except PathOutsideWorkspaceError as e:
        raise HTTPException(status_code=403, detail=str(e))

    logger.info("Getting git status for workspace: %s", workspace)
    try:
        output = await git_runner.run_async(workspace, ["status", "--porcelain=v1"])
    except GitCommandFailedError as e:
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": str(e),
                "output": "",
                "workspacePath": str(workspace),
                "timestamp": _timestamp(),
            },
        )

    return GitStatusResponse(
        success=True,
        output=output,
        workspace_path=str(workspace),
        timestamp=_timestamp(),
    )


@git_router.get(
    "/scan-all", response_model=List[ChangeRecord], response_model_exclude_none=True
)
async def scan_all_packages(
    scanner: RepositoryScanner = Depends(get_repository_scanner),
):
    """Scan every configured package; only dirty or failing packages are returned."""
    try:
        records = await scanner.scan_all()
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Scan failed: {str(e)}")
    return filter_reportable(records)


@git_router.get("/health", response_model=HealthResponse)
async def git_health_check(settings: Settings = Depends(get_settings)):
    return HealthResponse(status="ok", version=settings.VERSION)


@claude_router.post(
    "/generate-commit-messages", response_model=GenerateCommitMessagesResponse
)
async def generate_commit_messages(
    request: GenerateCommitMessagesRequest,
    synthesizer: CommitMessageSynthesizer = Depends(get_commit_synthesizer),
):
    """Draft a commit message per package with the external assistant."""
    try:
        result = await synthesizer.synthesize(request.changes)
    except Exception as e:
        logger.exception("Failed to generate commit messages")
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": str(e), "timestamp": _timestamp()},
        )

    return GenerateCommitMessagesResponse(
        success=True,
        messages=result.messages,
        claude_output=result.raw_output,
        timestamp=_timestamp(),
    )
