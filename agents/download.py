"""Download agent that saves the SuperSapiens task inbox to disk."""
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Tuple

from core.models import PortalTask, TaskListSnapshot
from tools.portal import TaskPortal
from utils.tracing import trace_agent

logger = logging.getLogger(__name__)


class DownloadAgent:
    """Logs in to the task portal, scrapes the inbox and persists it."""

    def __init__(self, portal: TaskPortal, output_dir: Path):
        self.portal = portal
        self.output_dir = Path(output_dir)
        self.last_output_file: Optional[Path] = None

    def output_paths(self, when: datetime) -> Tuple[Path, Path]:
        """Return (json path, screenshot path) for the given day."""
        day = when.date().isoformat()
        return (
            self.output_dir / f"tarefas-{day}.json",
            self.output_dir / f"screenshot-{day}.png",
        )

    @trace_agent("download")
    async def download_tasks(self) -> List[PortalTask]:
        """Scrape every task in the inbox and write the JSON snapshot.

        The portal session is closed whether or not scraping succeeds.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        json_path, screenshot_path = self.output_paths(datetime.now(timezone.utc))

        async with self.portal as portal:
            await portal.login()
            tasks = await portal.list_tasks()

            await portal.screenshot(screenshot_path)
            logger.info("[DownloadAgent] Screenshot saved: %s", screenshot_path)

            snapshot = TaskListSnapshot(
                fetched_at=datetime.now(timezone.utc),
                url=portal.current_url,
                count=len(tasks),
                tasks=tasks,
            )

        json_path.write_text(snapshot.model_dump_json(indent=2), encoding="utf-8")
        self.last_output_file = json_path
        logger.info("[DownloadAgent] Saved %d task(s) to: %s", len(tasks), json_path)

        return tasks
