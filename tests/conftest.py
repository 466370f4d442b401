"""Fixtures shared by the LuAI tests."""
import pytest

from fakes import RecordingChatModel, make_pdf


@pytest.fixture
def recording_llm():
    return RecordingChatModel()


@pytest.fixture
def pdf_file(tmp_path):
    """Write a two-page PDF and return its path."""
    path = tmp_path / "cnis.pdf"
    path.write_bytes(make_pdf(["Vinculo   INSS 1990", "Contribuicoes ate 2024"]))
    return path
