"""Core models for LuAI."""

from datetime import datetime
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class CaseInput(BaseModel):
    """A legal question plus the pages and documents that support it."""
    model_config = ConfigDict(frozen=True)

    query: str = Field(description="Free-text description of the case or question")
    urls: Tuple[str, ...] = Field(default=(), description="Pages to fetch and analyze")
    pdf_paths: Tuple[str, ...] = Field(default=(), description="Local PDF files to parse")


class CaseResult(BaseModel):
    """Decision produced for one case."""
    model_config = ConfigDict(frozen=True)

    decision: str
    reasoning: str
    sources: List[str]


class FetchedPage(BaseModel):
    """Readable text of a fetched web page."""
    model_config = ConfigDict(frozen=True)

    url: str
    title: str
    content: str
    fetched_at: datetime


class ParsedDocument(BaseModel):
    """Text extracted from a PDF file or buffer."""
    model_config = ConfigDict(frozen=True)

    source_label: str
    text: str
    page_count: int
    parsed_at: datetime


class SourceAnalysis(BaseModel):
    """Answer produced by an analysis agent for a single source."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["web", "pdf"]
    source: str
    answer: str

    def as_context_block(self) -> str:
        """Render the labelled block fed into the synthesis prompt."""
        label = "Fonte web" if self.kind == "web" else "Documento PDF"
        return f"## {label}: {self.source}\n{self.answer}"


class PortalTask(BaseModel):
    """A task card scraped from the SuperSapiens inbox."""
    id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    deadline: Optional[str] = None
    status: Optional[str] = None
    raw_text: Optional[str] = None


class TaskListSnapshot(BaseModel):
    """Task list persisted by the download agent."""
    fetched_at: datetime
    url: str
    count: int
    tasks: List[PortalTask]
