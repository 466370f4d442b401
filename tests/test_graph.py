"""Tests for the case workflow."""
import asyncio
from datetime import datetime, timezone

import pytest

from core.config import LuAIConfig, ModelConfig
from core.errors import NetworkError, ParseError, UpstreamError
from core.graph import CaseWorkflow, create_case_workflow
from core.models import CaseInput, FetchedPage
from core.prompts import DECISION_SYSTEM, DOCUMENT_ANALYSIS_SYSTEM, WEB_ANALYSIS_SYSTEM
from fakes import RecordingChatModel, make_pdf


class FakeFetcher:

    def __init__(self, fail=()):
        self.fail = set(fail)
        self.fetched = []

    async def fetch(self, url):
        self.fetched.append(url)
        if url in self.fail:
            raise NetworkError(url, "HTTP 503")
        return FetchedPage(
            url=url,
            title=f"Página {url}",
            content=f"conteúdo de {url}",
            fetched_at=datetime.now(timezone.utc),
        )


def build_workflow(llm, fetcher=None) -> CaseWorkflow:
    config = LuAIConfig(model=ModelConfig(api_key="sk-test"))
    return create_case_workflow(config, llm=llm, fetcher=fetcher or FakeFetcher())


@pytest.fixture
def two_pdfs(tmp_path):
    paths = []
    for name in ("cnis.pdf", "ppp.pdf"):
        path = tmp_path / name
        path.write_bytes(make_pdf([f"Documento {name}"]))
        paths.append(str(path))
    return paths


class TestCaseWorkflow:

    def test_query_only_makes_a_single_synthesis_call(self):
        llm = RecordingChatModel(["DECISÃO: análise necessária"])
        workflow = build_workflow(llm)

        result = asyncio.run(workflow.run(CaseInput(query="Tem direito?")))

        assert len(llm.calls) == 1
        assert llm.system_prompts == [DECISION_SYSTEM]
        assert llm.user_prompts == ["Caso / Consulta:\nTem direito?"]
        assert result.sources == []
        assert result.decision == "DECISÃO: análise necessária"
        assert result.reasoning == ""

    def test_urls_then_pdfs_then_synthesis(self, two_pdfs):
        llm = RecordingChatModel(["web 1", "web 2", "pdf 1", "pdf 2", "A\n\nB\n\nC"])
        fetcher = FakeFetcher()
        workflow = build_workflow(llm, fetcher)
        case = CaseInput(
            query="Tem direito?",
            urls=["https://a.test", "https://b.test"],
            pdf_paths=two_pdfs,
        )

        result = asyncio.run(workflow.run(case))

        assert llm.system_prompts == [
            WEB_ANALYSIS_SYSTEM,
            WEB_ANALYSIS_SYSTEM,
            DOCUMENT_ANALYSIS_SYSTEM,
            DOCUMENT_ANALYSIS_SYSTEM,
            DECISION_SYSTEM,
        ]
        assert fetcher.fetched == ["https://a.test", "https://b.test"]
        assert "Página https://a.test (https://a.test)" in llm.user_prompts[0]
        assert "Página https://b.test (https://b.test)" in llm.user_prompts[1]
        assert "Documento cnis.pdf" in llm.user_prompts[2]
        assert "Documento ppp.pdf" in llm.user_prompts[3]

        synthesis_prompt = llm.user_prompts[4]
        assert synthesis_prompt.index("## Fonte web: https://a.test\nweb 1") \
            < synthesis_prompt.index("## Fonte web: https://b.test\nweb 2") \
            < synthesis_prompt.index(f"## Documento PDF: {two_pdfs[0]}\npdf 1") \
            < synthesis_prompt.index(f"## Documento PDF: {two_pdfs[1]}\npdf 2")

        assert result.sources == ["https://a.test", "https://b.test"] + two_pdfs
        assert result.decision == "A"
        assert result.reasoning == "B\n\nC"

    def test_duplicate_sources_are_kept(self):
        llm = RecordingChatModel()
        workflow = build_workflow(llm)
        case = CaseInput(query="q", urls=["https://a.test", "https://a.test"])

        result = asyncio.run(workflow.run(case))

        assert result.sources == ["https://a.test", "https://a.test"]
        assert len(llm.calls) == 3

    def test_failing_url_aborts_the_case(self, two_pdfs):
        llm = RecordingChatModel()
        workflow = build_workflow(llm, FakeFetcher(fail=["https://b.test"]))
        case = CaseInput(query="q", urls=["https://a.test", "https://b.test"], pdf_paths=two_pdfs)

        with pytest.raises(NetworkError):
            asyncio.run(workflow.run(case))

        # Only the first page reached the model; no PDF or synthesis call
        assert len(llm.calls) == 1

    def test_failing_pdf_aborts_the_case(self, tmp_path):
        bad = tmp_path / "corrompido.pdf"
        bad.write_bytes(b"not a pdf")
        llm = RecordingChatModel()
        workflow = build_workflow(llm)
        case = CaseInput(query="q", urls=["https://a.test"], pdf_paths=[str(bad)])

        with pytest.raises(ParseError):
            asyncio.run(workflow.run(case))

        assert len(llm.calls) == 1

    def test_missing_pdf_aborts_the_case(self, tmp_path):
        workflow = build_workflow(RecordingChatModel())
        case = CaseInput(query="q", pdf_paths=[str(tmp_path / "sumiu.pdf")])

        with pytest.raises(FileNotFoundError):
            asyncio.run(workflow.run(case))

    def test_failing_synthesis_aborts_the_case(self):
        llm = RecordingChatModel(["web", RuntimeError("overloaded")])
        workflow = build_workflow(llm)

        with pytest.raises(UpstreamError):
            asyncio.run(workflow.run(CaseInput(query="q", urls=["https://a.test"])))

    def test_nothing_is_memoized(self):
        llm = RecordingChatModel()
        fetcher = FakeFetcher()
        workflow = build_workflow(llm, fetcher)
        case = CaseInput(query="q", urls=["https://a.test"])

        asyncio.run(workflow.run(case))
        asyncio.run(workflow.run(case))

        assert fetcher.fetched == ["https://a.test", "https://a.test"]
        assert len(llm.calls) == 4


class TestCreateCaseWorkflow:

    def test_builds_separate_models_from_config(self):
        config = LuAIConfig(model=ModelConfig(api_key="sk-test"))

        workflow = create_case_workflow(config)

        assert workflow.web_agent.llm is workflow.document_agent.llm
        assert workflow.web_agent.llm.max_tokens == 4096
        assert workflow.synthesis_agent.llm.max_tokens == 8192
        assert workflow.web_agent.fetcher.config.user_agent == "LuAI Legal Assistant / 0.1.0"

    def test_injected_model_is_shared(self):
        llm = RecordingChatModel()
        workflow = build_workflow(llm)
        assert workflow.synthesis_agent.llm is llm
