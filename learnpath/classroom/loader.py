"""
Loaders - One-shot asynchronous loading of the catalog and quiz bank.

Callers await a single shared "ready" future instead of polling. A failed
load leaves the loader in FAILED state; calling load() again retries.
"""

import asyncio
import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

import yaml

from learnpath.errors import CatalogUnavailableError
from learnpath.schemas import Course, CoursesConfig, QuizzesConfig

from .catalog import ContentCatalog, QuizBank


logger = logging.getLogger(__name__)

T = TypeVar("T")

Fetcher = Callable[[], Awaitable[Any]]


class LoadState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


def read_config_file(path: Path) -> Any:
    """Read a JSON or YAML document, chosen by file suffix."""
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() in (".yaml", ".yml"):
            return yaml.safe_load(f)
        return json.load(f)


class _OneShotLoader(Generic[T]):
    """Shared machinery: one outstanding fetch, one ready future."""

    kind = "document"

    def __init__(self, source: Path | str | None = None, fetcher: Optional[Fetcher] = None):
        """
        Initialize loader.

        Args:
            source: Path to a JSON/YAML config file
            fetcher: Async callable returning the raw document (wins over source)
        """
        if source is None and fetcher is None:
            raise ValueError("Either source or fetcher is required")
        self.source = Path(source) if source is not None else None
        self._fetcher = fetcher
        self._future: Optional[asyncio.Future] = None
        self._task: Optional[asyncio.Task] = None
        self.state = LoadState.IDLE
        self.error: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.state == LoadState.LOADING

    async def _fetch_raw(self) -> Any:
        if self._fetcher is not None:
            return await self._fetcher()
        return await asyncio.to_thread(read_config_file, self.source)

    def _parse(self, raw: Any) -> T:
        raise NotImplementedError

    async def _run(self, future: asyncio.Future) -> None:
        try:
            raw = await self._fetch_raw()
            result = self._parse(raw)
        except Exception as e:
            # Any fetch or parse failure resolves the future so waiters never hang
            self.state = LoadState.FAILED
            self.error = f"Failed to load {self.kind}: {e}"
            logger.warning(self.error)
            error = CatalogUnavailableError(self.error)
            error.__cause__ = e
            future.set_exception(error)
            return
        self.state = LoadState.READY
        self.error = None
        future.set_result(result)

    def load(self) -> asyncio.Future:
        """
        Start loading if not already loading or loaded.

        Must be called from a running event loop. Returns the shared
        future; a FAILED loader starts a fresh attempt.
        """
        if self._future is not None and self.state != LoadState.FAILED:
            return self._future

        loop = asyncio.get_running_loop()
        future = loop.create_future()
        # Retrieved by ready(); keeps an unawaited failure from being reported
        future.add_done_callback(lambda f: f.cancelled() or f.exception())
        self._future = future
        self.state = LoadState.LOADING
        self._task = loop.create_task(self._run(future))
        return future

    async def ready(self) -> T:
        """
        Wait for the loaded content.

        Raises:
            CatalogUnavailableError: If fetching or parsing failed
        """
        return await asyncio.shield(self.load())


class CatalogLoader(_OneShotLoader[ContentCatalog]):
    """Load courses.config.json ({"courses": [...]}) into a ContentCatalog."""

    kind = "courses"

    def _parse(self, raw: Any) -> ContentCatalog:
        config = CoursesConfig.model_validate(raw)
        for course in config.courses:
            _warn_on_unordered(course)
        catalog = ContentCatalog(config.courses)
        logger.info(f"Loaded {len(catalog)} courses")
        return catalog


class QuizBankLoader(_OneShotLoader[QuizBank]):
    """Load quizzes.config.json ({"quizzes": [...]}) into a QuizBank."""

    kind = "quizzes"

    def _parse(self, raw: Any) -> QuizBank:
        config = QuizzesConfig.model_validate(raw)
        bank = QuizBank(config.quizzes)
        logger.info(f"Loaded {len(bank)} quizzes")
        return bank


def _warn_on_unordered(course: Course) -> None:
    """Log when order fields disagree with list order. Traversal still uses list order."""
    lesson_orders = [lesson.order for lesson in course.lessons]
    if any(b <= a for a, b in zip(lesson_orders, lesson_orders[1:])):
        logger.warning(f"Course {course.id}: lesson order values are not strictly increasing")
    for lesson in course.lessons:
        item_orders = [item.order for item in lesson.learning_items]
        if any(b <= a for a, b in zip(item_orders, item_orders[1:])):
            logger.warning(f"Lesson {lesson.id}: item order values are not strictly increasing")
