"""Test doubles shared across the LuAI tests."""
from pathlib import Path
from typing import List, Optional, Sequence, Union

import fitz
from langchain_core.messages import AIMessageChunk, BaseMessage

from core.models import PortalTask


class RecordingChatModel:
    """Stand-in chat model that streams scripted replies and records each call.

    Each entry in `replies` is either the reply text or an exception to raise
    on that call. Once the script runs out, `default` is streamed.
    """

    def __init__(self, replies: Sequence[Union[str, Exception]] = (), default: str = "ok"):
        self.replies = list(replies)
        self.default = default
        self.calls: List[List[BaseMessage]] = []

    async def astream(self, messages, **kwargs):
        self.calls.append(list(messages))
        reply = self.replies.pop(0) if self.replies else self.default
        if isinstance(reply, Exception):
            raise reply
        # Stream in a few pieces to exercise chunk assembly
        step = max(1, len(reply) // 3)
        for i in range(0, len(reply), step):
            yield AIMessageChunk(content=reply[i:i + step])

    @property
    def system_prompts(self) -> List[str]:
        return [call[0].content for call in self.calls]

    @property
    def user_prompts(self) -> List[str]:
        return [call[-1].content for call in self.calls]


class FakePortal:
    """In-memory TaskPortal that records the calls made against it."""

    def __init__(self, tasks: Sequence[PortalTask] = (), fail_on: Optional[str] = None):
        self.tasks = list(tasks)
        self.fail_on = fail_on
        self.events: List[str] = []
        self.current_url = "https://portal.test/minhas-tarefas/entrada"

    async def __aenter__(self):
        self.events.append("open")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.events.append("close")

    def _record(self, name: str) -> None:
        self.events.append(name)
        if self.fail_on == name:
            raise RuntimeError(f"{name} failed")

    async def login(self) -> None:
        self._record("login")

    async def list_tasks(self) -> List[PortalTask]:
        self._record("list_tasks")
        return list(self.tasks)

    async def fetch_task_detail(self, task_id: str) -> PortalTask:
        self._record("fetch_task_detail")
        return PortalTask(id=task_id, raw_text=f"detail {task_id}")

    async def screenshot(self, path: Path) -> None:
        self._record("screenshot")
        Path(path).write_bytes(b"\x89PNG")


def make_pdf(pages: Sequence[str]) -> bytes:
    """Build an in-memory PDF with one text line per page."""
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data
