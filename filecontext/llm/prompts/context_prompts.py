"""
Context prompt construction.

Aggregated files are filtered to recognized text types, concatenated,
truncated to a character budget and wrapped in a fixed instruction template.
Everything here is a pure string transformation.
"""
from typing import Iterable, NamedTuple

from filecontext.core.config import DEFAULT_MAX_CONTEXT_LENGTH
from filecontext.filesystem.paths import is_text_file
from filecontext.models.file_record import FileRecord

TRUNCATION_MARKER = "\n... (truncated)"

# A newline past this share of the budget is a good enough cut point
NATURAL_BREAK_RATIO = 0.8

CONTEXT_PROMPT_TEMPLATE = """
You are an AI assistant analyzing the following content:

---BEGIN CONTEXT---
{context}
---END CONTEXT---

Please respond to the following query:
{query}

Base your response only on the information provided in the context above.
"""


class BuiltPrompt(NamedTuple):
    """The final prompt plus the untruncated context it was built from."""
    prompt: str
    raw_context: str


def select_text_records(records: Iterable[FileRecord]) -> list:
    """Keep records that have content and a recognized text extension."""
    return [
        record for record in records
        if not record.is_directory and record.content and is_text_file(record.name)
    ]


def build_context(records: Iterable[FileRecord]) -> str:
    """Join text records as 'File: <name>' blocks separated by a blank line."""
    return "\n\n".join(
        f"File: {record.name}\n{record.content}"
        for record in select_text_records(records)
    )


def truncate_context(context: str, max_length: int = DEFAULT_MAX_CONTEXT_LENGTH) -> str:
    """
    Bound a context string to `max_length` characters plus the marker.

    Content within the budget is returned unchanged. Longer content is cut
    at the budget; if the last newline inside the cut lies past 80% of the
    budget the cut moves back to it so no line is split.
    """
    if len(context) <= max_length:
        return context

    truncated = context[:max_length]
    last_newline = truncated.rfind("\n")

    if last_newline > max_length * NATURAL_BREAK_RATIO:
        return truncated[:last_newline] + TRUNCATION_MARKER

    return truncated + TRUNCATION_MARKER


def format_context_prompt(context: str, query: str) -> str:
    """Wrap context and query in the fixed instruction template."""
    return CONTEXT_PROMPT_TEMPLATE.format(context=context, query=query)


def build_prompt(
    records: Iterable[FileRecord],
    query: str,
    max_length: int = DEFAULT_MAX_CONTEXT_LENGTH,
) -> BuiltPrompt:
    """
    Build the provider prompt from aggregated records.

    Args:
        records: Output of the content aggregator, in order
        query: The caller's question
        max_length: Character budget for the context section

    Returns:
        BuiltPrompt with the templated prompt and the untruncated context
    """
    raw_context = build_context(records)
    prompt = format_context_prompt(truncate_context(raw_context, max_length), query)
    return BuiltPrompt(prompt=prompt, raw_context=raw_context)
