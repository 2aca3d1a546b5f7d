from __future__ import annotations

"""Shared pytest fixtures and test environment defaults."""

import os
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("RAG_METRICS_ENABLED", "true")
os.environ.setdefault("PINE_DEFAULT_VERSION", "v6")

from pine_assist.rag.artifacts import CorpusArtifacts  # noqa: E402
from pine_assist.rag.bm25 import build_search_index  # noqa: E402
from pine_assist.rag.indexer import index_collections  # noqa: E402
from pine_assist.rag.types import (  # noqa: E402
    DocChunk,
    ExampleScript,
    FunctionReference,
)


@pytest.fixture
def sample_artifacts() -> CorpusArtifacts:
    """Small corpus with several documents per category."""
    doc_chunks = [
        DocChunk(
            id="doc-0",
            source="concepts/averages.md",
            section="concepts",
            title="Simple Moving Average",
            content="The ta.sma function calculates the simple moving average of a series.",
            keywords=["ta.sma"],
        ),
        DocChunk(
            id="doc-1",
            source="basics.md",
            section="root",
            title="Pine Script Basics",
            content="Introduction to the pine script programming language.",
        ),
        DocChunk(
            id="doc-2",
            source="concepts/averages.md",
            section="concepts",
            title="Averages",
            content="Moving average types: simple, exponential and weighted moving average.",
        ),
    ]
    references = [
        FunctionReference(
            id="ref-0",
            namespace="ta",
            function="ta.sma",
            signature="ta.sma(...)",
            description="Simple moving average",
            returns="series float",
            example="ta.sma(close, 14)",
            keywords=["ta.sma", "ta"],
        ),
        FunctionReference(
            id="ref-1",
            namespace="ta",
            function="ta.ema",
            signature="ta.ema(...)",
            description="Exponential moving average",
            returns="series float",
            keywords=["ta.ema", "ta"],
        ),
        FunctionReference(
            id="ref-2",
            namespace="math",
            function="math.round",
            signature="math.round(...)",
            description="Rounds a number",
            keywords=["math.round", "math"],
        ),
    ]
    examples = [
        ExampleScript(
            id="script-0",
            source="strategies/trend/sma_cross.pine",
            category="trend",
            title="SMA Crossover Strategy",
            version="v6",
            script_type="strategy",
            code='//@version=6\nstrategy("SMA Crossover Strategy")\nfast = ta.sma(close, 10)',
            functions_used=["ta.sma"],
            keywords=["sma crossover strategy", "trend", "ta.sma", "moving", "average"],
        ),
        ExampleScript(
            id="script-1",
            source="indicators/momentum/rsi.pine",
            category="momentum",
            title="RSI Indicator",
            version="v6",
            script_type="indicator",
            code='//@version=6\nindicator("RSI Indicator")\nr = ta.rsi(close, 14)',
            functions_used=["ta.rsi"],
            keywords=["rsi indicator", "momentum", "ta.rsi", "moving", "average"],
        ),
        ExampleScript(
            id="script-2",
            source="indicators/trend/ema.pine",
            category="trend",
            title="EMA Ribbon",
            version="v6",
            script_type="indicator",
            code='//@version=6\nindicator("EMA Ribbon")\ne = ta.ema(close, 20)',
            functions_used=["ta.ema"],
            keywords=["ema ribbon", "trend", "ta.ema", "moving", "average"],
        ),
    ]
    return CorpusArtifacts(
        doc_chunks=doc_chunks,
        references=references,
        examples=examples,
        index=index_collections(doc_chunks, references, examples),
    )


@pytest.fixture
def empty_artifacts() -> CorpusArtifacts:
    return CorpusArtifacts(index=build_search_index([]))
