"""
Factory for the embedding and chat models.

Both models come from Google Generative AI. Credentials are read from
GOOGLE_API_KEY (loaded from .env when present).

Dependencies: langchain_google_genai, python-dotenv
System role: Model construction for ingestion and answer generation
"""

import logging

from dotenv import load_dotenv
from langchain_core.embeddings import Embeddings
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI, GoogleGenerativeAIEmbeddings

from pdfchat.configs.rag import RAGSettings

logger = logging.getLogger(__name__)

load_dotenv()


def create_embeddings(settings: RAGSettings) -> Embeddings:
    """
    Build the embedding model used for chunks and questions.

    Args:
        settings: RAG settings

    Returns:
        Embeddings: Google Generative AI embeddings model
    """
    kwargs = {"model": settings.embedding_model}
    if settings.google_api_key:
        kwargs["google_api_key"] = settings.google_api_key

    logger.info(f"{__name__}:create_embeddings - model={settings.embedding_model}")
    return GoogleGenerativeAIEmbeddings(**kwargs)


def create_chat_model(settings: RAGSettings) -> BaseChatModel:
    """
    Build the chat model used for answer generation.

    Args:
        settings: RAG settings

    Returns:
        BaseChatModel: Google Generative AI chat model
    """
    kwargs = {"model": settings.llm_model, "temperature": settings.temperature}
    if settings.google_api_key:
        kwargs["google_api_key"] = settings.google_api_key

    logger.info(f"{__name__}:create_chat_model - model={settings.llm_model}")
    return ChatGoogleGenerativeAI(**kwargs)
