from __future__ import annotations

"""Markdown chunking behavior tests."""

from pine_assist.loaders.chunking import chunk_markdown, estimate_tokens, split_sections


def test_estimate_tokens_rounds_up() -> None:
    assert estimate_tokens("") == 0
    assert estimate_tokens("abcd") == 1
    assert estimate_tokens("abcde") == 2


def test_split_sections_breaks_before_level_two_and_three_headers() -> None:
    parts = split_sections("intro\n## One\nbody\n### Two\nmore\n#### Four\nstill two\n")
    assert parts == ["intro\n", "## One\nbody\n", "### Two\nmore\n#### Four\nstill two\n"]


def test_small_sections_are_packed_into_one_chunk() -> None:
    text = "## Alpha\n" + "alpha text " * 20 + "\n## Beta\n" + "beta text " * 20 + "\n"

    chunks = chunk_markdown(text, default_title="guide")

    assert len(chunks) == 1
    assert chunks[0].title == "Alpha"
    assert "## Beta" in chunks[0].content


def test_sections_flush_when_budget_is_exceeded() -> None:
    body = "word " * 400
    text = f"## Alpha\n{body}\n## Beta\n{body}\n## Gamma\n{body}\n"

    chunks = chunk_markdown(text, default_title="guide")

    assert [chunk.title for chunk in chunks] == ["Alpha", "Beta", "Gamma"]
    assert chunks[1].content.startswith("## Beta")
    assert all(estimate_tokens(chunk.content) <= 800 for chunk in chunks)


def test_oversized_section_is_split_outside_code_blocks() -> None:
    text = (
        "## Big\n"
        + "line of prose text\n" * 150
        + "```pine\n"
        + "plot(close)\n" * 300
        + "```\n"
        + "tail prose line\n" * 60
    )

    chunks = chunk_markdown(text, default_title="guide")

    assert len(chunks) > 1
    assert all(chunk.title == "Big" for chunk in chunks)
    assert all(chunk.content.count("```") % 2 == 0 for chunk in chunks)


def test_untitled_text_uses_default_title() -> None:
    chunks = chunk_markdown("plain paragraph " * 20, default_title="overview")
    assert [chunk.title for chunk in chunks] == ["overview"]


def test_tiny_trailing_fragment_is_dropped() -> None:
    assert chunk_markdown("## Tiny\nsmall", default_title="guide") == []
