"""Document analysis agent for PDFs such as CNIS extracts and case files."""
import logging
from typing import Optional, Union

from langchain_core.language_models.chat_models import BaseChatModel

from core.config import AgentConfig
from core.llm import stream_reply
from core.models import ParsedDocument
from core.prompts import DOCUMENT_ANALYSIS_PROMPT
from tools.pdf_parser import parse_pdf_buffer, parse_pdf_file
from utils.text import truncate
from utils.tracing import trace_agent

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_LABEL = "documento.pdf"


class DocumentAnalysisAgent:
    """Agent that reads a PDF and extracts dates, amounts and contribution periods."""

    def __init__(self, llm: BaseChatModel, config: Optional[AgentConfig] = None):
        """Initialize the document analysis agent."""
        self.llm = llm
        self.config = config or AgentConfig()

    @trace_agent("document_analysis")
    async def analyze(self, source: Union[str, bytes], question: str, label: Optional[str] = None) -> str:
        """Parse a PDF and answer the question from its text.

        Args:
            source: File path, or the raw PDF bytes
            question: Case query
            label: Name reported to the model when `source` is a buffer

        Returns:
            The model's answer, or "" when the reply has no text block
        """
        if isinstance(source, (bytes, bytearray)):
            document = await parse_pdf_buffer(bytes(source), label or DEFAULT_BUFFER_LABEL)
        else:
            document = await parse_pdf_file(source)

        return await self.analyze_document(document, question)

    async def analyze_document(self, document: ParsedDocument, question: str) -> str:
        """Answer the question from an already parsed document."""
        messages = DOCUMENT_ANALYSIS_PROMPT.format_messages(
            source_label=document.source_label,
            page_count=document.page_count,
            parsed_at=document.parsed_at.isoformat(),
            text=truncate(document.text, self.config.max_source_chars),
            question=question
        )

        logger.debug("[PdfAgent] Asking model about %s (%d pages)", document.source_label, document.page_count)
        return await stream_reply(self.llm, messages)
