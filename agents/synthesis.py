"""Synthesis agent that turns collected analyses into a legal decision."""
import logging
from typing import List, Tuple

from langchain_core.language_models.chat_models import BaseChatModel

from core.llm import stream_reply
from core.models import SourceAnalysis
from core.prompts import CONTEXT_SEPARATOR, DECISION_PROMPT, build_decision_request
from utils.tracing import trace_agent

logger = logging.getLogger(__name__)

PARAGRAPH_BREAK = "\n\n"


def split_decision(reply: str) -> Tuple[str, str]:
    """Split a reply into (decision, reasoning) at the first blank line.

    Best effort: the model is asked for a four-part answer but nothing checks
    that it complied, so whatever precedes the first blank line is treated as
    the decision.
    """
    first, *rest = reply.split(PARAGRAPH_BREAK)
    return first, PARAGRAPH_BREAK.join(rest)


class SynthesisAgent:
    """Agent that issues the final structured-decision call."""

    def __init__(self, llm: BaseChatModel):
        """Initialize the synthesis agent."""
        self.llm = llm

    @trace_agent("synthesis")
    async def synthesize(self, query: str, analyses: List[SourceAnalysis]) -> str:
        """Ask the model for a decision over the case query and all analyses.

        Returns:
            The full reply text
        """
        context = CONTEXT_SEPARATOR.join(a.as_context_block() for a in analyses)
        messages = DECISION_PROMPT.format_messages(
            request=build_decision_request(query, context)
        )

        logger.debug("[Synthesis] Context from %d source(s), %d chars", len(analyses), len(context))
        return await stream_reply(self.llm, messages)
