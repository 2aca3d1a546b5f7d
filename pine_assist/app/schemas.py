from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class SearchRequest(BaseModel):
    query: str = Field(min_length=1)
    max_docs: int | None = Field(default=None, ge=0, le=50)
    max_refs: int | None = Field(default=None, ge=0, le=50)
    max_examples: int | None = Field(default=None, ge=0, le=50)


class RagResultModel(BaseModel):
    id: str
    type: Literal["documentation", "reference", "example"]
    score: float
    content: str


class SearchResponse(BaseModel):
    results: list[RagResultModel]


class ValidateRequest(BaseModel):
    code: str = ""
    version: Literal["v5", "v6"] | None = None


class ValidationResultModel(BaseModel):
    rule: str
    status: Literal["pass", "warn", "error"]
    message: str
    line: int | None = None
    suggestion: str | None = None


class ValidateResponse(BaseModel):
    results: list[ValidationResultModel]
    errors: int
    warnings: int
    passed: int


class IndexStatsResponse(BaseModel):
    total_docs: int
    doc_chunks: int
    references: int
    examples: int
    unique_terms: int
    avg_dl: float
    loaded: bool
