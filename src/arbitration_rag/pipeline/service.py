"""Retrieval service — corpus → chunks → store, then question → sources → answer.

The service has two states. It starts uninitialized; ``initialize`` loads
and indexes the corpus exactly once and moves it to ready. Queries before
that are a programming error and raise ``NotInitializedError``.
"""

from __future__ import annotations

import logging
import threading

from arbitration_rag.chunking.base import BaseChunker
from arbitration_rag.chunking.schemas import Chunk
from arbitration_rag.chunking.sentence_chunker import SentenceChunker
from arbitration_rag.config import Settings
from arbitration_rag.corpus.loader import CaseLoader
from arbitration_rag.embeddings.factory import MODEL_SIZED_PROVIDERS, get_embedding_provider
from arbitration_rag.embeddings.service import EmbeddingService
from arbitration_rag.llm.base import LLMProvider
from arbitration_rag.llm.factory import get_llm_provider
from arbitration_rag.pipeline.citations import extract_citations
from arbitration_rag.pipeline.prompts import RAG_SYSTEM_PROMPT, build_rag_prompt
from arbitration_rag.pipeline.schemas import AnswerStatus, IngestResult, RAGResponse
from arbitration_rag.vectorstore.base import VectorStore
from arbitration_rag.vectorstore.memory_store import InMemoryVectorStore
from arbitration_rag.vectorstore.schemas import MetadataFilter, SearchResult, StoreStats

logger = logging.getLogger(__name__)

NO_SOURCES_ANSWER = "No relevant sources were found in the case corpus for this question."
GENERATION_FAILED_ANSWER = "Sorry, I encountered an error while generating the answer."
EMPTY_GENERATION_ANSWER = "Unable to generate answer."


class NotInitializedError(RuntimeError):
    """Raised when the service is queried before ``initialize`` completed."""


class RetrievalService:
    """Orchestrates load → chunk → embed/store, and retrieve → generate."""

    def __init__(
        self,
        loader: CaseLoader,
        chunker: BaseChunker,
        embedding_service: EmbeddingService,
        llm_provider: LLMProvider,
        vector_store: VectorStore | None = None,
        system_prompt: str = RAG_SYSTEM_PROMPT,
    ):
        self.loader = loader
        self.chunker = chunker
        self.embedding_service = embedding_service
        self.vector_store = vector_store or InMemoryVectorStore(embedding_service)
        self.llm_provider = llm_provider
        self.system_prompt = system_prompt
        self._ready = False
        self._init_lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> RetrievalService:
        """Build a service and its collaborators from configuration.

        Raises:
            ValueError: If ``embedding.dimension`` is set and the provider
                produces vectors of another size.
        """
        emb = settings.embedding
        emb_kwargs: dict[str, object] = {}
        if emb.model:
            emb_kwargs["model"] = emb.model
        if emb.dimension is not None and emb.provider.lower() not in MODEL_SIZED_PROVIDERS:
            emb_kwargs["dimension"] = emb.dimension
        provider = get_embedding_provider(emb.provider, **emb_kwargs)
        if emb.dimension is not None and provider.dimension != emb.dimension:
            raise ValueError(
                f"embedding.dimension is {emb.dimension} but {provider.provider_name()} "
                f"produces {provider.dimension}-dim vectors"
            )

        llm = get_llm_provider(
            settings.llm.provider,
            model=settings.llm.model,
            temperature=settings.llm.temperature,
            max_tokens=settings.llm.max_tokens,
            timeout=settings.llm.timeout,
        )

        return cls(
            loader=CaseLoader(settings.corpus.data_path),
            chunker=SentenceChunker(
                chunk_size=settings.chunking.chunk_size,
                overlap=settings.chunking.overlap,
            ),
            embedding_service=EmbeddingService(provider),
            llm_provider=llm,
        )

    @property
    def is_ready(self) -> bool:
        return self._ready

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> IngestResult:
        """Load, chunk and index the whole corpus.

        Safe to call more than once or from several threads: only the first
        call populates the store, later calls log and return an empty result.
        """
        with self._init_lock:
            if self._ready:
                logger.info("Retrieval service already initialized")
                return IngestResult()

            logger.info("Initializing retrieval service")

            loaded = self.loader.load_all()
            logger.info("Loaded %d cases", len(loaded.cases))

            chunks = self.chunker.chunk_all(loaded.cases)
            logger.info("Created %d chunks", len(chunks))

            stored = self.vector_store.add_chunks(chunks)

            stats = self.vector_store.stats()
            logger.info(
                "Store ready: %d chunks (%d embedded) from %d cases, by type %s",
                stats.total_chunks,
                stats.chunks_with_embeddings,
                stats.unique_cases,
                stats.chunks_by_type,
            )

            self._ready = True
            return IngestResult(
                cases_loaded=len(loaded.cases),
                files_skipped=list(loaded.skipped),
                chunks_created=len(chunks),
                chunks_stored=stored,
            )

    # ------------------------------------------------------------------
    # Querying
    # ------------------------------------------------------------------

    def retrieve(self, text: str, top_k: int = 5) -> list[SearchResult]:
        """Return the ``top_k`` passages most similar to ``text``."""
        self._require_ready()
        results = self.vector_store.search(text, top_k)
        logger.info("Retrieved %d chunks for query", len(results))
        return results

    def query(self, text: str, top_k: int = 5) -> RAGResponse:
        """Answer ``text`` from the ``top_k`` retrieved passages.

        Retrieval errors propagate. A failing generator does not: the
        response then carries ``GENERATION_FAILED`` and still lists the
        sources.
        """
        logger.info("Processing query: %r", text)
        sources = self.retrieve(text, top_k)
        model = self.llm_provider.model

        if not sources:
            return RAGResponse(
                query=text,
                answer=NO_SOURCES_ANSWER,
                status=AnswerStatus.NO_RELEVANT_SOURCES,
                model=model,
            )

        prompt = build_rag_prompt(text, sources)
        try:
            answer = self.llm_provider.generate(prompt, system=self.system_prompt)
        except Exception:
            logger.exception("Error generating answer")
            return RAGResponse(
                query=text,
                answer=GENERATION_FAILED_ANSWER,
                sources=sources,
                status=AnswerStatus.GENERATION_FAILED,
                model=model,
            )

        answer = answer.strip() or EMPTY_GENERATION_ANSWER
        citations = extract_citations(answer, sources)
        logger.info(
            "Query answered: %d sources, %d citations", len(sources), len(citations),
        )
        return RAGResponse(
            query=text,
            answer=answer,
            sources=sources,
            status=AnswerStatus.ANSWERED,
            citations=citations,
            model=model,
        )

    # ------------------------------------------------------------------
    # Store inspection
    # ------------------------------------------------------------------

    def get_stats(self) -> StoreStats:
        return self.vector_store.stats()

    def search_by_metadata(
        self,
        filters: MetadataFilter | None = None,
        top_k: int = 10,
    ) -> list[Chunk]:
        return self.vector_store.search_by_metadata(filters, top_k)

    def get_case_chunks(self, case_id: str) -> list[Chunk]:
        return self.vector_store.get_chunks_by_case(case_id)

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    def _require_ready(self) -> None:
        if not self._ready:
            raise NotInitializedError(
                "Retrieval service not initialized. Call initialize() first."
            )
