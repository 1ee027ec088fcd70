"""Prompt assembly helpers.

Two join rules combine the user's prompt with auxiliary data into the single
text each backend family sends:

* :func:`prose_join` (OpenAI chat and responses) reads as one sentence.
* :func:`labeled_join` (Ollama) puts the data in a labelled fenced block.

Both strip the prompt and the data independently before deciding which parts
are present, and both return ``""`` when neither is. They are pure functions.
"""

from __future__ import annotations

FENCE = "```"


def prose_join(prompt: str, data: str) -> str:
    """Join prompt and data as prose.

    >>> prose_join("count words", "one two")
    'count words in the following data: one two'
    >>> prose_join("", "one two")
    'Data:\\n```\\none two\\n```\\n'
    """
    p = (prompt or "").strip()
    d = (data or "").strip()
    if p and d:
        return f"{p} in the following data: {d}"
    if p:
        return p
    if d:
        return f"Data:\n{FENCE}\n{d}\n{FENCE}\n"
    return ""


def labeled_join(prompt: str, data: str) -> str:
    """Join prompt and data with an explicit ``Data:`` section.

    >>> labeled_join("count words", "one two")
    'count words\\n\\nData:\\n```\\none two\\n```'
    """
    p = (prompt or "").strip()
    d = (data or "").strip()
    if p and d:
        return f"{p}\n\nData:\n{FENCE}\n{d}\n{FENCE}"
    if p:
        return p
    if d:
        return f"Here is some data to analyze:\n\n{FENCE}\n{d}\n{FENCE}"
    return ""


__all__ = ["prose_join", "labeled_join"]
