"""State definition for the case workflow."""
from typing import List, TypedDict

from core.models import CaseInput, SourceAnalysis


class CaseState(TypedDict, total=False):
    """State object that flows through the LangGraph workflow."""
    # Input
    case: CaseInput

    # Collected by the analysis agents, in processing order
    analyses: List[SourceAnalysis]
    sources: List[str]

    # Synthesis
    reply: str
    decision: str
    reasoning: str
