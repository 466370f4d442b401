"""
Task portal capability and its SuperSapiens (AGU) implementation.

Everything tied to the portal's current DOM lives in SuperSapiensPortal; the
rest of the code only sees the TaskPortal protocol.
"""
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from core.config import PortalConfig
from core.errors import PortalError
from core.models import PortalTask
from utils.text import normalize_whitespace

logger = logging.getLogger(__name__)


class TaskPortal(Protocol):
    """Browser capability used by the download agent."""

    current_url: str

    async def __aenter__(self) -> "TaskPortal": ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None: ...

    async def login(self) -> None: ...

    async def list_tasks(self) -> List[PortalTask]: ...

    async def fetch_task_detail(self, task_id: str) -> PortalTask: ...

    async def screenshot(self, path: Path) -> None: ...


# Selectors are guesses against the Angular app's current markup
LOGIN_INPUT_SELECTOR = "input[type='text'], input[type='email'], input[name*='user'], input[name*='login']"
EMAIL_FIELD_SELECTOR = "input[type='email'], input[name*='user'], input[name*='login'], input[type='text']"
PASSWORD_FIELD_SELECTOR = "input[type='password']"
TASK_CARD_SELECTOR = "[class*='tarefa'], [class*='task'], [class*='card'], [class*='item-tarefa'], li[class*='item']"
MAIN_CONTAINER_SELECTOR = "main, [role='main'], app-root, .content"

MAX_FALLBACK_CHARS = 200_000

EXTRACT_TASKS_JS = """
({cardSelector, mainSelector, maxChars}) => {
  const text = (root, selector) => {
    const el = root.querySelector(selector);
    return el && el.textContent ? el.textContent.trim() : null;
  };
  const cards = document.querySelectorAll(cardSelector);
  if (cards.length > 0) {
    return Array.from(cards).map((card) => ({
      id: card.getAttribute('data-id') || card.id || null,
      title: text(card, "[class*='titulo'], [class*='title'], h3, h4, strong"),
      description: text(card, "[class*='descricao'], [class*='desc'], p"),
      deadline: text(card, "[class*='prazo'], [class*='date'], [class*='data']"),
      status: text(card, "[class*='status'], [class*='badge']"),
      raw_text: card.textContent || null,
    }));
  }
  const main = document.querySelector(mainSelector) || document.body;
  return [{raw_text: main.innerText.slice(0, maxChars), fallback: true}];
}
"""


def _to_task(item: Dict[str, Any]) -> PortalTask:
    raw_text = item.get("raw_text") or None
    if raw_text and not item.get("fallback"):
        # Card text is flattened; the whole-page fallback keeps its line breaks
        raw_text = normalize_whitespace(raw_text)
    return PortalTask(
        id=item.get("id") or None,
        title=item.get("title"),
        description=item.get("description"),
        deadline=item.get("deadline"),
        status=item.get("status"),
        raw_text=raw_text,
    )


class SuperSapiensPortal:
    """Playwright driver for the SuperSapiens "Minhas Tarefas" inbox."""

    def __init__(self, config: PortalConfig):
        self.config = config
        self._playwright = None
        self._browser = None
        self._context = None
        self._page = None

    async def __aenter__(self) -> "SuperSapiensPortal":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.stop()

    @property
    def current_url(self) -> str:
        return self._page.url if self._page is not None else ""

    async def start(self) -> None:
        """Launch Chromium and open a blank page."""
        if self._page is not None:
            return

        from playwright.async_api import async_playwright

        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(
                headless=self.config.headless,
                slow_mo=self.config.slow_mo_ms,
            )
            self._context = await self._browser.new_context(
                viewport={"width": 1280, "height": 900},
            )
            self._page = await self._context.new_page()
        except Exception as e:
            await self.stop()
            raise PortalError(f"Could not launch browser: {e}") from e

    async def stop(self) -> None:
        """Close the browser and release Playwright.

        Each step runs even when an earlier one fails, so the driver process
        is always stopped.
        """
        context, browser, playwright = self._context, self._browser, self._playwright
        self._playwright = self._browser = self._context = self._page = None

        try:
            if context is not None:
                await context.close()
        finally:
            try:
                if browser is not None:
                    await browser.close()
            finally:
                if playwright is not None:
                    await playwright.stop()

    def _require_page(self):
        if self._page is None:
            raise PortalError("Portal session not started")
        return self._page

    async def login(self) -> None:
        """Sign in through "Rede AGU" and wait for the task inbox."""
        from playwright.async_api import Error as PlaywrightError

        page = self._require_page()
        try:
            logger.info("[DownloadAgent] Navigating to SuperSapiens...")
            await page.goto(
                self.config.tasks_url,
                wait_until="networkidle",
                timeout=self.config.navigation_timeout_ms,
            )

            logger.info("[DownloadAgent] Looking for 'Rede AGU' button...")
            rede_agu = re.compile(r"rede\s*agu", re.IGNORECASE)
            button = page.get_by_role("button", name=rede_agu).or_(page.get_by_text(rede_agu).first)
            await button.first.wait_for(timeout=self.config.element_timeout_ms)
            await button.first.click()

            logger.info("[DownloadAgent] Filling credentials...")
            await page.wait_for_selector(LOGIN_INPUT_SELECTOR, timeout=self.config.element_timeout_ms)
            await page.locator(EMAIL_FIELD_SELECTOR).first.fill(self.config.email)
            await page.locator(PASSWORD_FIELD_SELECTOR).first.fill(self.config.password)

            submit = page.get_by_role(
                "button", name=re.compile(r"entrar|login|acessar|sign in", re.IGNORECASE)
            ).first
            await submit.click()
            logger.info("[DownloadAgent] Submitted login form.")

            await page.wait_for_url(re.compile(r"minhas-tarefas"), timeout=self.config.navigation_timeout_ms)
            await page.wait_for_load_state("networkidle", timeout=self.config.navigation_timeout_ms)
            logger.info("[DownloadAgent] Tasks page loaded.")
        except PlaywrightError as e:
            raise PortalError(f"Login failed: {e}") from e

    async def _scroll_to_end(self) -> None:
        """Scroll until the page stops growing (infinite scroll)."""
        page = self._require_page()
        previous_height = 0
        for _ in range(self.config.max_scrolls):
            current_height = await page.evaluate("() => document.body.scrollHeight")
            if current_height == previous_height:
                break
            previous_height = current_height
            await page.evaluate("() => window.scrollTo(0, document.body.scrollHeight)")
            await page.wait_for_timeout(self.config.scroll_pause_ms)

    async def list_tasks(self) -> List[PortalTask]:
        """Load the whole inbox and scrape its task cards."""
        from playwright.async_api import Error as PlaywrightError

        page = self._require_page()
        try:
            logger.info("[DownloadAgent] Scrolling to load all tasks...")
            await self._scroll_to_end()

            logger.info("[DownloadAgent] Extracting task data...")
            items = await page.evaluate(
                EXTRACT_TASKS_JS,
                {
                    "cardSelector": TASK_CARD_SELECTOR,
                    "mainSelector": MAIN_CONTAINER_SELECTOR,
                    "maxChars": MAX_FALLBACK_CHARS,
                },
            )
        except PlaywrightError as e:
            raise PortalError(f"Could not read task list: {e}") from e

        return [_to_task(item) for item in items]

    async def fetch_task_detail(self, task_id: str) -> PortalTask:
        """Open the card mentioning `task_id` and return the detail view text."""
        from playwright.async_api import Error as PlaywrightError

        page = self._require_page()
        try:
            card = page.locator(TASK_CARD_SELECTOR).filter(has_text=task_id).first
            await card.click(timeout=self.config.element_timeout_ms)
            await page.wait_for_load_state("networkidle", timeout=self.config.navigation_timeout_ms)
            detail = await page.locator(MAIN_CONTAINER_SELECTOR).first.inner_text()
        except PlaywrightError as e:
            raise PortalError(f"Could not open task {task_id}: {e}") from e

        return PortalTask(id=task_id, raw_text=normalize_whitespace(detail)[:MAX_FALLBACK_CHARS])

    async def screenshot(self, path: Path) -> None:
        """Save a full-page screenshot."""
        page = self._require_page()
        await page.screenshot(path=str(path), full_page=True)
