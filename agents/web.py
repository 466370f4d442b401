"""Web analysis agent for extracting legally relevant information from pages."""
import logging
from typing import Optional

from langchain_core.language_models.chat_models import BaseChatModel

from core.config import AgentConfig
from core.llm import stream_reply
from core.models import FetchedPage
from core.prompts import WEB_ANALYSIS_PROMPT
from tools.web_scraper import PageFetcher
from utils.text import truncate
from utils.tracing import trace_agent

logger = logging.getLogger(__name__)


class WebAnalysisAgent:
    """Agent that reads a web page in the context of Brazilian social security law."""

    def __init__(self, llm: BaseChatModel, fetcher: PageFetcher, config: Optional[AgentConfig] = None):
        """Initialize the web analysis agent."""
        self.llm = llm
        self.fetcher = fetcher
        self.config = config or AgentConfig()

    @trace_agent("web_analysis")
    async def analyze(self, url: str, question: str) -> str:
        """Fetch a page and answer the question from its content.

        Args:
            url: Page to fetch
            question: Case query

        Returns:
            The model's answer, or "" when the reply has no text block
        """
        page = await self.fetcher.fetch(url)
        return await self.analyze_page(page, question)

    async def analyze_page(self, page: FetchedPage, question: str) -> str:
        """Answer the question from an already fetched page."""
        messages = WEB_ANALYSIS_PROMPT.format_messages(
            title=page.title,
            url=page.url,
            fetched_at=page.fetched_at.isoformat(),
            content=truncate(page.content, self.config.max_source_chars),
            question=question
        )

        logger.debug("[WebAgent] Asking model about %s (%d chars)", page.url, len(page.content))
        return await stream_reply(self.llm, messages)
