"""
LangGraph workflow for LuAI case orchestration.
"""
import logging
from typing import Any, Dict, Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langgraph.graph import END, StateGraph

from agents.document import DocumentAnalysisAgent
from agents.synthesis import SynthesisAgent, split_decision
from agents.web import WebAnalysisAgent
from core.config import LuAIConfig
from core.llm import build_chat_model
from core.models import CaseInput, CaseResult, SourceAnalysis
from core.state import CaseState
from tools.web_scraper import PageFetcher

logger = logging.getLogger(__name__)


class CaseWorkflow:
    """Main workflow: collect web sources, collect PDFs, synthesize, split.

    Steps run strictly one after another. Any error raised by a fetch, parse
    or model call aborts the whole case and reaches the caller unchanged.
    """

    def __init__(
        self,
        web_agent: WebAnalysisAgent,
        document_agent: DocumentAnalysisAgent,
        synthesis_agent: SynthesisAgent,
    ):
        self.web_agent = web_agent
        self.document_agent = document_agent
        self.synthesis_agent = synthesis_agent

        # Build the graph
        self.graph = self._build_graph()

    def _build_graph(self) -> Any:
        """Build the LangGraph state machine."""
        workflow = StateGraph(CaseState)

        workflow.add_node("collect_web", self.collect_web)
        workflow.add_node("collect_pdf", self.collect_pdf)
        workflow.add_node("synthesize", self.synthesize)
        workflow.add_node("split", self.split)

        # Linear flow, no branching
        workflow.set_entry_point("collect_web")
        workflow.add_edge("collect_web", "collect_pdf")
        workflow.add_edge("collect_pdf", "synthesize")
        workflow.add_edge("synthesize", "split")
        workflow.add_edge("split", END)

        return workflow.compile()

    async def collect_web(self, state: CaseState) -> Dict[str, Any]:
        """Analyze every URL in input order."""
        case = state["case"]
        analyses = list(state.get("analyses", []))
        sources = list(state.get("sources", []))

        for url in case.urls:
            logger.info("[Orchestrator] Fetching: %s", url)
            answer = await self.web_agent.analyze(url, case.query)
            analyses.append(SourceAnalysis(kind="web", source=url, answer=answer))
            sources.append(url)

        return {"analyses": analyses, "sources": sources}

    async def collect_pdf(self, state: CaseState) -> Dict[str, Any]:
        """Analyze every PDF path in input order."""
        case = state["case"]
        analyses = list(state.get("analyses", []))
        sources = list(state.get("sources", []))

        for pdf_path in case.pdf_paths:
            logger.info("[Orchestrator] Parsing PDF: %s", pdf_path)
            answer = await self.document_agent.analyze(pdf_path, case.query)
            analyses.append(SourceAnalysis(kind="pdf", source=pdf_path, answer=answer))
            sources.append(pdf_path)

        return {"analyses": analyses, "sources": sources}

    async def synthesize(self, state: CaseState) -> Dict[str, Any]:
        """Make the final decision call over everything collected."""
        logger.info("[Orchestrator] Synthesizing decision from %d source(s)", len(state.get("analyses", [])))
        reply = await self.synthesis_agent.synthesize(state["case"].query, state.get("analyses", []))
        return {"reply": reply}

    def split(self, state: CaseState) -> Dict[str, Any]:
        """Separate the decision paragraph from the reasoning."""
        decision, reasoning = split_decision(state.get("reply", ""))
        return {"decision": decision, "reasoning": reasoning}

    async def run(self, case: CaseInput) -> CaseResult:
        """Run the workflow for one case.

        Nothing is cached: running the same case twice repeats every fetch,
        parse and model call.
        """
        initial_state: CaseState = {
            "case": case,
            "analyses": [],
            "sources": [],
            "reply": "",
            "decision": "",
            "reasoning": "",
        }

        result = await self.graph.ainvoke(initial_state)

        return CaseResult(
            decision=result["decision"],
            reasoning=result["reasoning"],
            sources=result["sources"],
        )


def create_case_workflow(
    config: LuAIConfig,
    llm: Optional[BaseChatModel] = None,
    synthesis_llm: Optional[BaseChatModel] = None,
    fetcher: Optional[PageFetcher] = None,
) -> CaseWorkflow:
    """Factory function to create a case workflow.

    Args:
        config: Loaded configuration
        llm: Chat model for the analysis agents (built from config when omitted)
        synthesis_llm: Chat model for the decision call (defaults to `llm`
            when that is given, otherwise built from config)
        fetcher: Page fetcher (built from config when omitted)
    """
    if llm is None:
        llm = build_chat_model(config.model, config.model.agent_max_tokens)
        if synthesis_llm is None:
            synthesis_llm = build_chat_model(config.model, config.model.synthesis_max_tokens)
    synthesis_llm = synthesis_llm or llm
    fetcher = fetcher or PageFetcher(config.fetch)

    return CaseWorkflow(
        web_agent=WebAnalysisAgent(llm=llm, fetcher=fetcher, config=config.agents),
        document_agent=DocumentAnalysisAgent(llm=llm, config=config.agents),
        synthesis_agent=SynthesisAgent(llm=synthesis_llm),
    )
