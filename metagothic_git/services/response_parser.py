"""
Parsing of the assistant's free-form output into commit suggestions.

The assistant is asked for a JSON array but may wrap it in a JSON envelope,
prose or code fences. Parsing is an ordered chain of attempts:

1. unwrap the `--output-format json` envelope (`result`, then `content`),
   falling back to the raw output when it is not JSON;
2. find the first JSON array in that text whose elements are suggestions;
3. synthesize one fallback suggestion per package.

The result always holds exactly one suggestion per requested package.
Nothing in here raises on malformed output.
"""

import json
import logging
import re
from typing import Any, List

from pydantic import TypeAdapter, ValidationError

from ..schemas import ChangeRecord, CommitSuggestion

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE_TEMPLATE = "refactor: update {project} based on Claude analysis"
FALLBACK_DESCRIPTION_TEMPLATE = "Generated from Claude analysis: {excerpt}..."
FALLBACK_DESCRIPTION_CHARS = 200

_suggestion_list = TypeAdapter(List[CommitSuggestion])
_array_start = re.compile(r"\[")


class ParseAttemptError(ValueError):
    """One tier of the parse chain could not produce a result."""


def extract_response_text(raw_output: str) -> str:
    """Return the assistant's answer text from the CLI's JSON envelope."""
    try:
        envelope = json.loads(raw_output)
    except ValueError:
        return raw_output

    if isinstance(envelope, dict):
        for key in ("result", "content"):
            text = envelope.get(key)
            if isinstance(text, str) and text:
                return text
    return raw_output


def extract_suggestions(text: str) -> List[CommitSuggestion]:
    """Decode the first JSON array in text that holds commit suggestions."""
    decoder = json.JSONDecoder()
    for match in _array_start.finditer(text):
        try:
            value, _ = decoder.raw_decode(text, match.start())
        except ValueError:
            continue
        if not isinstance(value, list) or not value:
            continue
        try:
            return _suggestion_list.validate_python(value)
        except ValidationError:
            continue
    raise ParseAttemptError("No JSON array found in assistant response")


def fallback_suggestion(project: str, text: Any) -> CommitSuggestion:
    excerpt = str(text)[:FALLBACK_DESCRIPTION_CHARS]
    return CommitSuggestion(
        project=project,
        message=FALLBACK_MESSAGE_TEMPLATE.format(project=project),
        description=FALLBACK_DESCRIPTION_TEMPLATE.format(excerpt=excerpt),
    )


def parse_assistant_output(
    raw_output: str, changes: List[ChangeRecord]
) -> List[CommitSuggestion]:
    """Turn raw assistant output into suggestions covering every package."""
    text = extract_response_text(raw_output)
    try:
        suggestions = extract_suggestions(text)
    except ParseAttemptError as e:
        logger.warning(
            "Failed to parse assistant JSON, generating fallback response: %s", e
        )
        return [fallback_suggestion(record.project, text) for record in changes]

    logger.info("Parsed %d commit messages from assistant output", len(suggestions))
    return _one_per_package(suggestions, changes, text)


def _one_per_package(
    suggestions: List[CommitSuggestion], changes: List[ChangeRecord], text: str
) -> List[CommitSuggestion]:
    """Keep the first suggestion for each requested package, pad the rest."""
    requested = {record.project for record in changes}
    kept: List[CommitSuggestion] = []
    covered = set()
    for suggestion in suggestions:
        if suggestion.project not in requested or suggestion.project in covered:
            logger.warning(
                "Dropping assistant suggestion for %s: unknown or duplicate package",
                suggestion.project,
            )
            continue
        covered.add(suggestion.project)
        kept.append(suggestion)

    missing = [record.project for record in changes if record.project not in covered]
    if missing:
        logger.warning("Assistant omitted packages %s, using fallback messages", missing)
        kept.extend(fallback_suggestion(project, text) for project in missing)
    return kept
