"""
Windowed article chunker with boundary heuristics.

Splits article text into overlapping fixed-size windows, pulling each
window's end back to the last sentence or paragraph break when that break
falls in the back half of the window.

Dependencies: hashlib, article_index.models.chunk
System role: First stage of article ingestion
"""

import enum
import hashlib
import logging
from typing import Iterator

from article_index.core.exceptions import ValidationError
from article_index.models.chunk import ArticleMetadata, Chunk, ChunkMetadata

logger = logging.getLogger(__name__)

SENTENCE_BREAK = "."
PARAGRAPH_BREAK = "\n\n"


class ChunkIdStrategy(str, enum.Enum):
    """How chunk ids are derived."""

    TITLE = "title"
    CONTENT_HASH = "content_hash"


class ArticleChunker:
    """Split articles into overlapping, boundary-aware chunks."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
        boundary_ratio: float = 0.5,
        id_strategy: ChunkIdStrategy | str = ChunkIdStrategy.TITLE,
    ) -> None:
        """
        Initialize chunker with window configuration.

        Args:
            chunk_size: Window size in characters
            chunk_overlap: Characters repeated at the start of the next chunk
            boundary_ratio: Minimum position of a break, as a share of the window
            id_strategy: Chunk id derivation

        Raises:
            ValueError: When the overlap could stall the window walk
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if chunk_overlap < 0:
            raise ValueError("chunk_overlap cannot be negative")
        # Every emitted window is longer than chunk_size * boundary_ratio, except
        # the last, so the step stays positive only below that length.
        if chunk_overlap >= chunk_size * boundary_ratio:
            raise ValueError(
                f"chunk_overlap ({chunk_overlap}) must be smaller than "
                f"chunk_size * boundary_ratio ({chunk_size * boundary_ratio})"
            )

        self._chunk_size = chunk_size
        self._chunk_overlap = chunk_overlap
        self._boundary_ratio = boundary_ratio
        self._id_strategy = ChunkIdStrategy(id_strategy)

    def split(self, content: str, metadata: ArticleMetadata) -> list[Chunk]:
        """
        Split article content into ordered chunks.

        Args:
            content: Article text
            metadata: Article provenance metadata

        Returns:
            list[Chunk]: Chunks with contiguous indices starting at 0

        Raises:
            ValidationError: When content is empty
        """
        if not content or not content.strip():
            raise ValidationError("Content must not be empty", field="content")

        pieces = list(self._walk(content))
        total = len(pieces)
        title = metadata.title or "Untitled Article"

        chunks = [
            Chunk(
                id=self._chunk_id(metadata, index, piece),
                content=piece,
                metadata=ChunkMetadata(
                    title=title,
                    author=metadata.author,
                    url=metadata.url,
                    published_date=metadata.published_date,
                    chunk_index=index,
                    total_chunks=total,
                ),
            )
            for index, piece in enumerate(pieces)
        ]

        logger.debug(
            f"{__name__}:split - Produced {total} chunks",
            extra={"title": title, "content_length": len(content)},
        )
        return chunks

    def _walk(self, content: str) -> Iterator[str]:
        """Yield trimmed chunk texts in document order."""
        length = len(content)
        start = 0

        while start < length:
            end = min(start + self._chunk_size, length)
            window = content[start:end]

            if end < length:
                break_point = max(
                    window.rfind(SENTENCE_BREAK),
                    window.rfind(PARAGRAPH_BREAK),
                )
                if break_point > self._chunk_size * self._boundary_ratio:
                    window = window[: break_point + 1]

            text = window.strip()
            if text:
                yield text

            if end >= length:
                break

            # Step from the emitted window, not the nominal size
            start += len(window) - self._chunk_overlap

    def _chunk_id(self, metadata: ArticleMetadata, index: int, content: str) -> str:
        if self._id_strategy is ChunkIdStrategy.CONTENT_HASH:
            hash_input = (
                f"{metadata.title}:{metadata.author or ''}:{metadata.url or ''}:{index}:{content}"
            )
            return hashlib.sha256(hash_input.encode()).hexdigest()[:16]
        return f"{metadata.title or 'article'}-chunk-{index}"
