"""Prompt assembly for commit message generation."""

from typing import List

from ..schemas import ChangeRecord

PROJECT_CONTEXT = """\
You are analyzing git changes for the metaGOTHIC framework to generate intelligent commit messages.

## PROJECT CONTEXT
The metaGOTHIC framework is an AI-guided development platform that provides:
- Health monitoring dashboards
- CI/CD pipeline control
- Real-time git integration with Claude Code
- Repository management tools"""

OUTPUT_INSTRUCTIONS = """\
## TASK:
Generate thoughtful commit messages by:

1. **Analyzing the actual code changes** - understand what functionality was added/modified/removed
2. **Considering the project backlog** - see if changes relate to planned work items
3. **Understanding the package purpose** - each package has a specific role in metaGOTHIC
4. **Focusing on user impact** - what does this change enable or improve?

## OUTPUT REQUIREMENTS:
Return a JSON array with one object per package containing {project, message, description}

- **project**: the package name exactly as given in the change summary
- **message**: Concise conventional commit (feat:, fix:, refactor:, docs:, etc.)
- **description**: 1-2 sentences explaining the business value and technical change

## GUIDELINES:
- Use conventional commits format (feat:, fix:, refactor:, docs:, chore:, etc.)
- Focus on WHY and WHAT the change accomplishes, not just WHICH files changed
- Reference backlog items if changes relate to planned work
- Be specific about the functionality added/improved
- Keep messages concise but informative"""

EXAMPLE_SUGGESTION = """\
Example good commit:
{
  "project": "ui-components",
  "message": "feat: implement real-time git status detection with Claude integration",
  "description": "Replaces mock data with live git status API and adds a Claude Code subprocess for commit message generation, enabling real-time repository management in the Tools page."
}"""

CLOSING_LINE = "Analyze the changes and generate appropriate commit messages:"


def build_change_summary(changes: List[ChangeRecord]) -> str:
    blocks = []
    for record in changes:
        files = ", ".join(f"{change.status_code} {change.path}" for change in record.files)
        blocks.append(f"Package: {record.project} ({record.directory})\nFiles: {files}")
    return "\n\n".join(blocks)


def build_prompt(backlog: str, file_details: str, changes: List[ChangeRecord]) -> str:
    sections = [
        PROJECT_CONTEXT,
        f"## CURRENT BACKLOG (for context about ongoing work):\n{backlog}",
        f"## FILE CHANGES TO ANALYZE:\n{file_details}",
        f"## CHANGE SUMMARY:\n{build_change_summary(changes)}",
        OUTPUT_INSTRUCTIONS,
        EXAMPLE_SUGGESTION,
        CLOSING_LINE,
    ]
    return "\n\n".join(sections) + "\n"
