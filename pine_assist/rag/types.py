from __future__ import annotations

"""Core data types for indexed documents, the BM25 index and retrieval results."""

from dataclasses import asdict, dataclass, field
from typing import Any, Literal

DocumentType = Literal["documentation", "reference", "example"]


@dataclass(frozen=True)
class DocChunk:
    """Bounded slice of a documentation markdown file."""
    id: str
    source: str
    section: str
    title: str
    content: str
    keywords: list[str] = field(default_factory=list)
    type: DocumentType = "documentation"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DocChunk:
        return cls(
            id=str(data["id"]),
            source=str(data.get("source", "")),
            section=str(data.get("section", "")),
            title=str(data.get("title", "")),
            content=str(data.get("content", "")),
            keywords=list(data.get("keywords", [])),
        )


@dataclass(frozen=True)
class FunctionParam:
    name: str
    type: str
    description: str


@dataclass(frozen=True)
class FunctionReference:
    """Reference entry for a built-in function, variable, constant or type."""
    id: str
    namespace: str
    function: str
    signature: str
    description: str
    returns: str = ""
    example: str = ""
    params: list[FunctionParam] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    type: DocumentType = "reference"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FunctionReference:
        params = [
            FunctionParam(
                name=str(item.get("name", "")),
                type=str(item.get("type", "")),
                description=str(item.get("description", "")),
            )
            for item in data.get("params", [])
            if isinstance(item, dict)
        ]
        return cls(
            id=str(data["id"]),
            namespace=str(data.get("namespace", "")),
            function=str(data.get("function", "")),
            signature=str(data.get("signature", "")),
            description=str(data.get("description", "")),
            returns=str(data.get("returns", "")),
            example=str(data.get("example", "")),
            params=params,
            keywords=list(data.get("keywords", [])),
        )


@dataclass(frozen=True)
class ExampleScript:
    """Example script with detected version, declaration and function usage."""
    id: str
    source: str
    category: str
    title: str
    version: str
    script_type: str
    code: str
    functions_used: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    type: DocumentType = "example"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExampleScript:
        return cls(
            id=str(data["id"]),
            source=str(data.get("source", "")),
            category=str(data.get("category", "")),
            title=str(data.get("title", "")),
            version=str(data.get("version", "unknown")),
            script_type=str(data.get("script_type", "indicator")),
            code=str(data.get("code", "")),
            functions_used=list(data.get("functions_used", [])),
            keywords=list(data.get("keywords", [])),
        )


@dataclass(frozen=True)
class IndexedDocument:
    """Document id with its ordered term multiset."""
    id: str
    terms: list[str]


@dataclass(frozen=True)
class SearchIndex:
    """BM25 corpus statistics; documents are referenced by id only."""
    documents: list[IndexedDocument] = field(default_factory=list)
    idf: dict[str, float] = field(default_factory=dict)
    avg_dl: float = 0.0
    total_docs: int = 0

    @property
    def is_empty(self) -> bool:
        return self.total_docs == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "documents": [{"id": doc.id, "terms": doc.terms} for doc in self.documents],
            "idf": self.idf,
            "avgDl": self.avg_dl,
            "totalDocs": self.total_docs,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SearchIndex:
        documents = [
            IndexedDocument(id=str(item["id"]), terms=[str(term) for term in item.get("terms", [])])
            for item in data.get("documents", [])
            if isinstance(item, dict) and "id" in item
        ]
        return cls(
            documents=documents,
            idf={str(key): float(value) for key, value in data.get("idf", {}).items()},
            avg_dl=float(data.get("avgDl", 0.0) or 0.0),
            total_docs=int(data.get("totalDocs", 0) or 0),
        )


@dataclass(frozen=True)
class SearchOptions:
    """Independent per-category result caps."""
    max_docs: int = 3
    max_refs: int = 5
    max_examples: int = 2


@dataclass(frozen=True)
class RagResult:
    """Ranked retrieval hit with display-ready content."""
    id: str
    type: DocumentType
    score: float
    content: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
