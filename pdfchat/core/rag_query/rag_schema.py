"""
RAG answer schemas.

Defines the immutable answer returned by the orchestrator and cached by the
query cache, including page attribution.

Dependencies: pydantic
System role: Answer schema definitions
"""

from pydantic import BaseModel, ConfigDict, Field


class SourceExcerpt(BaseModel):
    """Short excerpt of a retrieved chunk and the page it is attributed to."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(ge=1, description="Estimated page number of the chunk")
    excerpt: str = Field(
        description=(
            "Leading excerpt_length characters of the chunk text, suffixed with"
            " \"...\" when cut, so at most excerpt_length + 3 characters"
        )
    )


class RAGAnswer(BaseModel):
    """Generated answer with its page attribution."""

    model_config = ConfigDict(frozen=True)

    answer: str = Field(description="Answer generated from the retrieved context")
    source_pages: tuple[int, ...] = Field(
        default=(),
        description="Ascending unique pages of the retrieved chunks",
    )
    sources: tuple[SourceExcerpt, ...] = Field(
        default=(),
        description="One excerpt per retrieved chunk, in rank order",
    )
