"""Canned implementation of AssistantRunnerProtocol for development."""

import json


class MockAssistantRunner:
    """Answers like `claude --print --output-format json` without spawning anything."""

    def __init__(self, message: str = "chore: update {project}"):
        self.message = message
        self.prompts = []

    async def run(self, prompt: str) -> str:
        self.prompts.append(prompt)
        projects = [
            line.split("Package: ", 1)[1].split(" (", 1)[0]
            for line in prompt.splitlines()
            if line.startswith("Package: ")
        ]
        suggestions = [
            {
                "project": project,
                "message": self.message.format(project=project),
                "description": f"Mock suggestion for {project}.",
            }
            for project in projects
        ]
        print(f"Mock: drafted {len(suggestions)} commit messages")
        return json.dumps(
            {"type": "result", "result": "```json\n" + json.dumps(suggestions) + "\n```"}
        )
