"""
Prompts module - LLM prompt templates.

The context template is a fixed contract: other components pass values into
it but never alter its wording.
"""
from filecontext.llm.prompts.context_prompts import (
    CONTEXT_PROMPT_TEMPLATE,
    TRUNCATION_MARKER,
    BuiltPrompt,
    build_context,
    build_prompt,
    format_context_prompt,
    select_text_records,
    truncate_context,
)

__all__ = [
    "CONTEXT_PROMPT_TEMPLATE",
    "TRUNCATION_MARKER",
    "BuiltPrompt",
    "build_context",
    "build_prompt",
    "format_context_prompt",
    "select_text_records",
    "truncate_context",
]
