from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PACKAGES = [
    "claude-client",
    "prompt-toolkit",
    "sdlc-config",
    "sdlc-engine",
    "sdlc-content",
    "graphql-toolkit",
    "context-aggregator",
    "ui-components",
]


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every path, port, limit and timeout the server uses is read from here.
    Relative paths are resolved against WORKSPACE_ROOT, which is also the
    boundary for any path supplied by a caller.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Server
    GIT_SERVER_HOST: str = "127.0.0.1"
    GIT_SERVER_PORT: int = 3003
    VERSION: str = "1.0.0"

    # Workspace layout
    WORKSPACE_ROOT: str = "."
    PACKAGES_DIR: str = "packages"
    PACKAGES: List[str] = DEFAULT_PACKAGES
    BACKLOG_PATH: str = "docs/backlog.md"

    # Context gathering limits
    BACKLOG_MAX_LINES: int = 50
    DIFF_MAX_LINES: int = 20
    PREVIEW_MAX_LINES: int = 10

    # git
    GIT_MAX_OUTPUT_BYTES: int = 10 * 1024 * 1024
    GIT_COMMAND_TIMEOUT: Optional[float] = None

    # External assistant
    ASSISTANT_COMMAND: str = "claude"
    ASSISTANT_ARGS: List[str] = ["--print", "--output-format", "json"]
    ASSISTANT_TIMEOUT: float = 30.0  # seconds
    ASSISTANT_MAX_OUTPUT_BYTES: int = 5 * 1024 * 1024
    TEMP_DIR: Optional[str] = None

    # Dashboard client
    API_BASE_URL: str = "http://127.0.0.1:3003"

    # Development and debugging
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    @property
    def workspace_root(self) -> Path:
        return Path(self.WORKSPACE_ROOT).resolve()

    @property
    def packages_root(self) -> Path:
        return self.workspace_root / self.PACKAGES_DIR

    @property
    def backlog_path(self) -> Path:
        return self.workspace_root / self.BACKLOG_PATH


@lru_cache
def get_settings() -> Settings:
    return Settings()
