"""
RAG system prompt.

Prompt template instructing the model to answer strictly from the retrieved
document context, with a fixed section layout and page references.

Dependencies: langchain_core.prompts
System role: Prompt template for answer generation
"""

from langchain_core.prompts import ChatPromptTemplate

from pdfchat.core.retrieval.retrieval_schemas import RetrievedChunk

CONTEXT_SEPARATOR = "\n\n"

SYSTEM_PROMPT = """You are a careful reading assistant. You answer questions about a single PDF document using only the excerpts of that document supplied as context.

## Instructions
1. Base every statement on the supplied context. Do not draw on outside knowledge.
2. If the context does not contain the answer, say so plainly instead of guessing.
3. Point to page-level evidence whenever the context supports a claim.
4. Prefer the document's own terminology.

## Answer Layout
Structure the answer with these markdown sections, in this order:

### Direct Answer
One or two sentences that answer the question.

### Detailed Explanation
The supporting reasoning drawn from the context.

### Key Insights
A short bulleted list of the most important points.

### Source References
The passages or pages the answer relies on.

### Related Concepts
Other ideas from the document that are connected to the question."""

RAG_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    ("human", """Context:
{context}

Question: {question}

Answer using only the context above."""),
])


def build_context(hits: list[RetrievedChunk]) -> str:
    """
    Join retrieved chunk texts in rank order.

    Args:
        hits: Ranked retrieval results

    Returns:
        str: Chunk texts separated by a blank line
    """
    return CONTEXT_SEPARATOR.join(hit.chunk.text for hit in hits)


def get_rag_prompt() -> ChatPromptTemplate:
    """Return the answer generation prompt template."""
    return RAG_PROMPT
