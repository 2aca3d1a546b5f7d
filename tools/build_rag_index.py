from __future__ import annotations

"""CLI utility to rebuild the retrieval artifacts from the raw corpus."""

import argparse
import logging
from pathlib import Path

from pine_assist.app.settings import settings
from pine_assist.rag.artifacts import ArtifactError
from pine_assist.rag.indexer import rebuild


def main() -> None:
    """Rebuild doc chunks, references, examples and the BM25 index."""
    parser = argparse.ArgumentParser(description="Build the Pine Script RAG artifacts.")
    parser.add_argument(
        "--docs",
        default=settings.rag_raw_docs_dir,
        help="Markdown documentation root.",
    )
    parser.add_argument(
        "--scripts",
        default=settings.rag_raw_scripts_dir,
        help="Example .pine script root.",
    )
    parser.add_argument(
        "--output",
        default=settings.rag_data_dir,
        help="Directory receiving the JSON artifacts.",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.strip().upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    try:
        artifacts = rebuild(Path(args.docs), Path(args.scripts), Path(args.output))
    except ArtifactError as exc:
        raise SystemExit(str(exc)) from exc

    stats = artifacts.stats()
    print(f"{stats['doc_chunks']} doc chunks")
    print(f"{stats['references']} function references")
    print(f"{stats['examples']} example scripts")
    print(f"{stats['total_docs']} indexed documents, {stats['unique_terms']} unique terms")
    print(f"Output written to {args.output}/")


if __name__ == "__main__":
    main()
