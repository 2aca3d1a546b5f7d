from __future__ import annotations

from pine_assist.rag.keywords import extract_keywords
from pine_assist.rag.tokenizer import extract_function_mentions, tokenize


def test_tokenize_keeps_dotted_identifiers() -> None:
    assert tokenize("Use ta.sma(close, 14) & A") == ["use", "ta.sma", "close", "14"]


def test_tokenize_drops_single_characters_and_punctuation() -> None:
    assert tokenize("a b -- x_y!") == ["x_y"]


def test_extract_function_mentions_finds_namespaced_and_standalone() -> None:
    mentions = extract_function_mentions("how do I plot ta.sma with request.security?")
    assert mentions == ["ta.sma", "request.security", "plot"]


def test_extract_function_mentions_requires_whole_words() -> None:
    assert extract_function_mentions("plotting alerts") == []


def test_extract_keywords_collects_identifiers_and_language_keywords() -> None:
    keywords = extract_keywords("Use ta.sma() with plot.style_line in an INDICATOR")

    assert "ta.sma" in keywords
    assert "plot.style_line" in keywords
    assert "indicator" in keywords
    assert "plot" in keywords
    assert len(keywords) == len(set(keywords))


def test_extract_keywords_ignores_unrelated_text() -> None:
    assert extract_keywords("hello world") == []
