"""
LLM Generator Module
====================
Uses a model served by Ollama to answer a question from retrieved context.
"""

from rag_cli.core.config import settings
from rag_cli.core.logger import get_logger
from rag_cli.rag.models import SearchResult
from rag_cli.services.ollama_client import OllamaClient
from typing import List, Optional

logger = get_logger(__name__)

PROMPT_TEMPLATE = """Use the following pieces of context to answer the question at the end. If you don't know the answer based on the context, just say that you don't know, don't try to make up an answer.

Context:
{context}

Question: {question}

Answer:"""

NO_CONTEXT_ANSWER = (
    "No relevant documents found in the knowledge base. "
    "Please ingest some PDFs first."
)


def build_prompt(question: str, context_chunks: List[SearchResult]) -> str:
    """Fill the fixed template with the chunk texts and the question."""
    context = "\n\n".join(result.chunk.text for result in context_chunks)
    return PROMPT_TEMPLATE.format(context=context, question=question)


class OllamaGenerator:
    """Generates answers with an Ollama model from retrieved context."""

    def __init__(self, client: Optional[OllamaClient] = None,
                 model_name: Optional[str] = None):
        self.client = client or OllamaClient()
        self.model_name = model_name or settings.LLM_MODEL
        logger.debug(f"🤖 Generator initialized: {self.model_name}")

    def generate(self, query: str, context_chunks: List[SearchResult]) -> str:
        """
        Generate a response using the model with retrieved context.

        Args:
            query: The user's question
            context_chunks: Retrieved chunks, most similar first

        Returns:
            Generated answer text
        """
        if not context_chunks:
            logger.warning("⚠️ No context retrieved; skipping generation")
            return NO_CONTEXT_ANSWER

        prompt = build_prompt(query, context_chunks)

        logger.info("🤖 Generating answer...")
        answer = self.client.generate(self.model_name, prompt)
        logger.info("✅ Response generated successfully")
        return answer.strip()
