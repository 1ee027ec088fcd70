"""Prompt assembly tests for the prose and labeled join rules."""

from __future__ import annotations

import pytest

from relay_providers.base.utils.prompt import labeled_join, prose_join


def test_prose_join_prompt_and_data():
    assert prose_join("count words", "one two three four 5") == (  # nosec B101
        "count words in the following data: one two three four 5"
    )


def test_labeled_join_prompt_and_data():
    assert labeled_join("count words", "one two three four 5") == (  # nosec B101
        "count words\n\nData:\n```\none two three four 5\n```"
    )


def test_prompt_alone_is_verbatim_after_trim():
    assert prose_join("  hello  ", "") == "hello"  # nosec B101
    assert labeled_join("hello", "   ") == "hello"  # nosec B101


def test_data_alone():
    assert prose_join("", "x y") == "Data:\n```\nx y\n```\n"  # nosec B101
    assert labeled_join(" ", "x y") == "Here is some data to analyze:\n\n```\nx y\n```"  # nosec B101


@pytest.mark.parametrize("join", [prose_join, labeled_join])
def test_both_empty_yield_empty_string(join):
    assert join("", "") == ""  # nosec B101
    assert join(" \n", "\t") == ""  # nosec B101


def test_data_is_trimmed_independently():
    assert prose_join("p", "\n\n d \n") == "p in the following data: d"  # nosec B101
