"""Assistant runner protocol interface."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class AssistantRunnerProtocol(Protocol):
    """Protocol for invoking the external assistant with a prompt."""

    async def run(self, prompt: str) -> str:
        """Return the raw stdout of the assistant. Raises AssistantInvocationError."""
        ...
