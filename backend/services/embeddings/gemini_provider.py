"""Google Gemini embeddings with error handling."""

import logging

from google import genai
from google.genai import types

from services.embeddings.base import EmbeddingProvider, EmbeddingUnavailableError

logger = logging.getLogger(__name__)


class GeminiEmbeddingProvider(EmbeddingProvider):
    provider_name = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-embedding-001",
        dimensions: int = 1536,
        max_chars: int = 8000,
    ) -> None:
        super().__init__(dimensions)
        self.model = model
        self.max_chars = max_chars
        self._api_key = api_key
        self._client: genai.Client | None = None

    def load(self) -> None:
        if not self._api_key:
            logger.warning("No GEMINI_API_KEY set - remote embeddings disabled")
            return
        self._client = genai.Client(api_key=self._api_key)

    async def embed(self, text: str) -> list[float]:
        self.ensure_loaded()
        if not text or not text.strip():
            return self.zero_vector()
        if self._client is None:
            raise EmbeddingUnavailableError("Gemini client not configured")

        try:
            response = await self._client.aio.models.embed_content(
                model=self.model,
                contents=text[: self.max_chars],
                config=types.EmbedContentConfig(output_dimensionality=self.dimensions),
            )
        except Exception as e:
            logger.error("Gemini embedding error: %s", e)
            raise EmbeddingUnavailableError(f"Gemini embedding request failed: {e}") from e

        if not response.embeddings or not response.embeddings[0].values:
            raise EmbeddingUnavailableError("Gemini returned no embedding values")
        return self.fit_dimensions(list(response.embeddings[0].values))
