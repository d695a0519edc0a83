"""Tests for prompts, citations and the retrieval service — no network calls."""

from __future__ import annotations

import json
import threading
from pathlib import Path

import httpx
import pytest

from arbitration_rag.chunking.schemas import Chunk, ChunkMetadata, DocumentType
from arbitration_rag.chunking.sentence_chunker import SentenceChunker
from arbitration_rag.config import Settings
from arbitration_rag.corpus.loader import CaseLoader
from arbitration_rag.embeddings.factory import clear_cache as clear_embedding_cache
from arbitration_rag.embeddings.hash_provider import HashEmbeddingProvider
from arbitration_rag.embeddings.service import EmbeddingService
from arbitration_rag.llm.base import LLMProvider
from arbitration_rag.llm.ollama_provider import OllamaLLMProvider
from arbitration_rag.pipeline.citations import extract_citations, format_citations
from arbitration_rag.pipeline.prompts import (
    RAG_SYSTEM_PROMPT,
    build_rag_prompt,
    format_context,
    format_source,
)
from arbitration_rag.pipeline.schemas import AnswerStatus, Citation, IngestResult
from arbitration_rag.pipeline.service import (
    EMPTY_GENERATION_ANSWER,
    GENERATION_FAILED_ANSWER,
    NO_SOURCES_ANSWER,
    NotInitializedError,
    RetrievalService,
)
from arbitration_rag.vectorstore.schemas import MetadataFilter, SearchResult

# ---------------------------------------------------------------------------
# Mock LLM provider
# ---------------------------------------------------------------------------


class MockLLM(LLMProvider):
    """Records prompts and returns a canned answer, or raises."""

    def __init__(self, answer: str = "The tribunal found a breach [1].", error: bool = False):
        super().__init__(model="mock-llm")
        self.answer = answer
        self.error = error
        self.calls: list[tuple[str, str | None]] = []

    def _complete(self, prompt: str, system: str | None) -> str:
        self.calls.append((prompt, system))
        if self.error:
            raise RuntimeError("model server unavailable")
        return self.answer


def _result(
    idx: int,
    content: str = "The respondent breached the treaty.",
    score: float = 0.9,
    date: str | None = "2019-05-16",
) -> SearchResult:
    chunk = Chunk(
        id=f"C{idx}-decision-0-0",
        content=content,
        metadata=ChunkMetadata(
            case_id=f"C{idx}",
            case_title=f"Claimant {idx} v. State",
            document_type=DocumentType.DECISION,
            document_title="Award",
            date=date,
        ),
    )
    return SearchResult(chunk=chunk, score=score)


def _service(data_path: Path, llm: LLMProvider | None = None) -> RetrievalService:
    return RetrievalService(
        loader=CaseLoader(data_path),
        chunker=SentenceChunker(chunk_size=500, overlap=50),
        embedding_service=EmbeddingService(HashEmbeddingProvider(dimension=256)),
        llm_provider=llm or MockLLM(),
    )


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


class TestPrompts:
    def test_format_source(self):
        text = format_source(1, _result(1, content="Award text.", score=0.87654))
        assert text == (
            "Source 1 (Score: 0.877):\n"
            "Case: Claimant 1 v. State\n"
            "Document: Decision - Award\n"
            "Date: 2019-05-16\n"
            "Content: Award text.\n"
            "\n---"
        )

    def test_unknown_date(self):
        assert "Date: Unknown\n" in format_source(1, _result(1, date=None))

    def test_context_numbered_in_rank_order(self):
        context = format_context([_result(1, score=0.9), _result(2, score=0.5)])
        first = context.index("Source 1 (Score: 0.900)")
        second = context.index("Source 2 (Score: 0.500)")
        assert first < second
        assert "Claimant 2 v. State" in context[second:]

    def test_context_empty(self):
        assert format_context([]) == ""

    def test_build_prompt(self):
        prompt = build_rag_prompt("Was there a breach?", [_result(1)])
        assert prompt.startswith("Context:\nSource 1")
        assert "User Question: Was there a breach?" in prompt
        assert prompt.rstrip().endswith("Answer:")

    def test_system_prompt_requires_grounding(self):
        assert "ONLY" in RAG_SYSTEM_PROMPT
        assert "[1]" in RAG_SYSTEM_PROMPT


# ---------------------------------------------------------------------------
# Citations
# ---------------------------------------------------------------------------


class TestCitations:
    @pytest.fixture
    def results(self) -> list[SearchResult]:
        return [_result(i, score=1.0 - i / 10) for i in range(1, 4)]

    def test_single_and_list(self, results):
        citations = extract_citations("Held [1]; see also [2, 3].", results)
        assert [c.index for c in citations] == [1, 2, 3]
        assert citations[0].chunk_id == "C1-decision-0-0"
        assert citations[0].case_title == "Claimant 1 v. State"
        assert citations[0].document_title == "Award"
        assert citations[0].score == pytest.approx(0.9)

    def test_range(self, results):
        assert [c.index for c in extract_citations("[1-3]", results)] == [1, 2, 3]

    def test_range_clamped_to_results(self, results):
        assert [c.index for c in extract_citations("[2-9]", results)] == [2, 3]

    def test_source_mentions(self, results):
        citations = extract_citations("According to Source 2, the claim fails.", results)
        assert [c.index for c in citations] == [2]

    def test_out_of_range_ignored(self, results):
        assert extract_citations("See [0] and [7].", results) == []

    def test_duplicates_collapsed(self, results):
        assert [c.index for c in extract_citations("[1] and again [1]", results)] == [1]

    def test_no_citations(self, results):
        assert extract_citations("No references here.", results) == []

    def test_snippet_truncated(self):
        citations = extract_citations("[1]", [_result(1, content="z" * 300)])
        assert citations[0].text == "z" * 200 + "..."

    def test_format_citations(self):
        text = format_citations([
            Citation(index=1, chunk_id="a", case_id="C1", case_title="A v. B",
                     text="...", document_title="Award"),
            Citation(index=2, chunk_id="b", case_id="C2", case_title="", text="..."),
        ])
        assert "**Sources:**" in text
        assert "- [1] | A v. B | Award" in text
        assert "- [2] | C2" in text

    def test_format_citations_empty(self):
        assert format_citations([]) == ""


# ---------------------------------------------------------------------------
# Service lifecycle
# ---------------------------------------------------------------------------


class TestLifecycle:
    def test_not_ready_before_initialize(self, corpus_dir: Path):
        service = _service(corpus_dir)
        assert not service.is_ready
        with pytest.raises(NotInitializedError):
            service.retrieve("expropriation")
        with pytest.raises(NotInitializedError):
            service.query("expropriation")

    def test_initialize_indexes_corpus(self, corpus_dir: Path):
        service = _service(corpus_dir)
        result = service.initialize()
        assert service.is_ready
        assert result.cases_loaded == 2
        assert sorted(result.files_skipped) == ["broken.json", "no_identifier.json"]
        assert result.chunks_created == 4
        assert result.chunks_stored == 4

        stats = service.get_stats()
        assert stats.total_chunks == 4
        assert stats.chunks_with_embeddings == 4
        assert stats.unique_cases == 2
        assert stats.chunks_by_type == {"Decision": 3, "Opinion": 1}

    def test_second_initialize_is_noop(self, corpus_dir: Path):
        service = _service(corpus_dir)
        service.initialize()
        assert service.initialize() == IngestResult()
        assert service.get_stats().total_chunks == 4

    def test_concurrent_initialize_indexes_once(self, corpus_dir: Path):
        service = _service(corpus_dir)
        barrier = threading.Barrier(4)

        def run() -> None:
            barrier.wait()
            service.initialize()

        threads = [threading.Thread(target=run) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert service.is_ready
        assert service.get_stats().total_chunks == 4

    def test_missing_corpus_stays_uninitialized(self, tmp_path: Path):
        service = _service(tmp_path / "missing")
        with pytest.raises(FileNotFoundError):
            service.initialize()
        assert not service.is_ready

    def test_empty_corpus(self, empty_corpus_dir: Path):
        service = _service(empty_corpus_dir)
        result = service.initialize()
        assert service.is_ready
        assert result.chunks_stored == 0


# ---------------------------------------------------------------------------
# Querying
# ---------------------------------------------------------------------------


class TestQuery:
    @pytest.fixture
    def llm(self) -> MockLLM:
        return MockLLM()

    @pytest.fixture
    def service(self, corpus_dir: Path, llm: MockLLM) -> RetrievalService:
        service = _service(corpus_dir, llm)
        service.initialize()
        return service

    def test_retrieve_ranks_relevant_chunk_first(self, service: RetrievalService):
        results = service.retrieve("fair and equitable treatment legitimate expectations", 2)
        assert len(results) == 2
        assert results[0].chunk.id == "ICSID-ARB-01-decision-0-0"
        assert results[0].score >= results[1].score

    def test_retrieve_top_k(self, service: RetrievalService):
        assert len(service.retrieve("tribunal", 10)) == 4
        assert service.retrieve("tribunal", 0) == []

    def test_answered(self, service: RetrievalService, llm: MockLLM):
        response = service.query("Did Spain breach fair and equitable treatment?", top_k=3)
        assert response.status == AnswerStatus.ANSWERED
        assert response.answer == "The tribunal found a breach [1]."
        assert len(response.sources) == 3
        assert response.model == "mock-llm"
        assert [c.index for c in response.citations] == [1]
        assert response.citations[0].chunk_id == response.sources[0].chunk.id

        prompt, system = llm.calls[0]
        assert system == RAG_SYSTEM_PROMPT
        assert "Did Spain breach fair and equitable treatment?" in prompt
        assert "Source 3 (Score:" in prompt
        assert "Source 4" not in prompt

    def test_generation_failure_keeps_sources(self, corpus_dir: Path):
        service = _service(corpus_dir, MockLLM(error=True))
        service.initialize()
        response = service.query("mining concession jurisdiction", top_k=2)
        assert response.status == AnswerStatus.GENERATION_FAILED
        assert response.answer == GENERATION_FAILED_ANSWER
        assert len(response.sources) == 2
        assert response.citations == []

    def test_empty_generation(self, corpus_dir: Path):
        service = _service(corpus_dir, MockLLM(answer="   "))
        service.initialize()
        response = service.query("annulment")
        assert response.status == AnswerStatus.ANSWERED
        assert response.answer == EMPTY_GENERATION_ANSWER

    def test_no_sources_skips_generation(self, empty_corpus_dir: Path):
        llm = MockLLM()
        service = _service(empty_corpus_dir, llm)
        service.initialize()
        response = service.query("expropriation")
        assert response.status == AnswerStatus.NO_RELEVANT_SOURCES
        assert response.answer == NO_SOURCES_ANSWER
        assert response.sources == []
        assert llm.calls == []

    def test_retrieval_error_propagates(self, service: RetrievalService, monkeypatch):
        def boom(text: str) -> list[float]:
            raise RuntimeError("embedding backend down")

        monkeypatch.setattr(service.embedding_service, "embed", boom)
        with pytest.raises(RuntimeError, match="embedding backend down"):
            service.query("expropriation")

    def test_search_by_metadata(self, service: RetrievalService):
        chunks = service.search_by_metadata(MetadataFilter(document_type="Opinion"))
        assert [c.id for c in chunks] == ["ICSID-ARB-01-opinion-0-0-0"]
        assert len(service.search_by_metadata(top_k=2)) == 2

    def test_get_case_chunks(self, service: RetrievalService):
        ids = [c.id for c in service.get_case_chunks("ICSID-ARB-01")]
        assert ids == [
            "ICSID-ARB-01-decision-0-0",
            "ICSID-ARB-01-opinion-0-0-0",
            "ICSID-ARB-01-decision-1-0",
        ]
        assert service.get_case_chunks("UNKNOWN") == []


# ---------------------------------------------------------------------------
# Construction from settings
# ---------------------------------------------------------------------------


class TestFromSettings:
    def test_builds_collaborators(self, corpus_dir: Path):
        settings = Settings.model_validate({
            "corpus": {"data_path": str(corpus_dir)},
            "chunking": {"chunk_size": 300, "overlap": 30},
            "embedding": {"provider": "hash", "dimension": 64},
            "llm": {"provider": "ollama", "model": "qwen2.5:7b", "temperature": 0.0},
        })
        service = RetrievalService.from_settings(settings)

        assert service.loader.data_path == corpus_dir
        assert service.chunker.chunk_size == 300
        assert service.chunker.overlap == 30
        assert service.embedding_service.dimension == 64
        assert isinstance(service.llm_provider, OllamaLLMProvider)
        assert service.llm_provider.model == "qwen2.5:7b"
        assert service.llm_provider.temperature == 0.0

        result = service.initialize()
        assert result.chunks_stored == 4

    def test_unset_dimension_keeps_native_size(self, corpus_dir: Path):
        clear_embedding_cache()
        settings = Settings.model_validate({
            "corpus": {"data_path": str(corpus_dir)},
            "embedding": {"provider": "ollama"},
        })
        service = RetrievalService.from_settings(settings)
        assert service.embedding_service.dimension == 768

        def handler(request: httpx.Request) -> httpx.Response:
            inputs = json.loads(request.content)["input"]
            return httpx.Response(200, json={"embeddings": [[0.5] * 768 for _ in inputs]})

        provider = service.embedding_service.provider
        provider._client = httpx.Client(
            base_url=provider.base_url, transport=httpx.MockTransport(handler),
        )
        try:
            service.initialize()
            stored = service.search_by_metadata(top_k=10)
            assert len(stored) == 4
            assert all(any(stored_chunk.embedding) for stored_chunk in stored)
            results = service.retrieve("fair and equitable treatment", 2)
            assert len(results) == 2
            assert results[0].score == pytest.approx(1.0)
        finally:
            clear_embedding_cache()

    def test_dimension_mismatch_fails_fast(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(
            "arbitration_rag.pipeline.service.get_embedding_provider",
            lambda name, **kwargs: HashEmbeddingProvider(dimension=32),
        )
        settings = Settings.model_validate({"embedding": {"provider": "hash", "dimension": 64}})
        with pytest.raises(ValueError, match="embedding.dimension is 64"):
            RetrievalService.from_settings(settings)

    def test_unknown_llm_provider(self):
        settings = Settings.model_validate({"llm": {"provider": "nope"}})
        with pytest.raises(ValueError, match="Unknown LLM provider"):
            RetrievalService.from_settings(settings)
