"""Per-session dashboard state and its single writer.

Each upload replaces the session's analysis wholesale and bumps
``generation``. Word-cloud requests run in the background and carry the
generation they were started for; a completion for an older generation is
dropped so a slow response can never overwrite the image of a newer upload.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass, replace

from patent_analysis.aggregate import AnalysisResult
from patent_analysis.errors import PatentAnalysisError
from patent_analysis.pipeline import AnalysisPipeline
from patent_analysis.report import DashboardReport
from patent_analysis.utils.files import compute_sha256

from ..core.logging import get_logger
from .wordcloud import WordCloudClient, WordCloudError

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class DashboardState:
    generation: int = 0
    file_name: str | None = None
    file_sha256: str | None = None
    loading: bool = False
    error: str | None = None
    analysis: AnalysisResult | None = None
    report: DashboardReport | None = None
    wordcloud_loading: bool = False
    wordcloud_image: str | None = None
    wordcloud_error: str | None = None


def begin_upload(state: DashboardState, *, file_name: str, file_sha256: str) -> DashboardState:
    return replace(
        state,
        generation=state.generation + 1,
        file_name=file_name,
        file_sha256=file_sha256,
        loading=True,
        error=None,
    )


def complete_analysis(
    state: DashboardState, *, analysis: AnalysisResult, report: DashboardReport
) -> DashboardState:
    return replace(state, loading=False, error=None, analysis=analysis, report=report)


def fail_analysis(state: DashboardState, *, message: str) -> DashboardState:
    return replace(state, loading=False, error=message)


def begin_wordcloud(state: DashboardState) -> DashboardState:
    return replace(state, wordcloud_loading=True, wordcloud_error=None)


def finish_wordcloud(
    state: DashboardState,
    *,
    generation: int,
    image: str | None = None,
    error: str | None = None,
) -> DashboardState:
    """Apply a word-cloud completion, or return ``state`` unchanged when stale."""

    if generation != state.generation:
        return state
    if error is not None:
        return replace(state, wordcloud_loading=False, wordcloud_error=error)
    return replace(state, wordcloud_loading=False, wordcloud_image=image, wordcloud_error=None)


class DashboardController:
    """Owns one session's :class:`DashboardState` and applies transitions atomically."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        self._state = DashboardState()
        self._lock = threading.Lock()

    @property
    def state(self) -> DashboardState:
        return self._state

    def upload(self, file_name: str, content: bytes, pipeline: AnalysisPipeline) -> DashboardState:
        """Analyse an upload into this session. Failures are recorded, not raised."""

        with self._lock:
            self._state = begin_upload(self._state, file_name=file_name, file_sha256=compute_sha256(content))
            generation = self._state.generation

        log = logger.bind(session_id=self.session_id, generation=generation, file=file_name)

        try:
            result = pipeline.analyze(content)
            report = pipeline.report(result)
        except PatentAnalysisError as exc:
            message = exc.message
            log.info("dashboard.upload.failed", error=message)
            return self._apply(generation, lambda state: fail_analysis(state, message=message))

        log.info("dashboard.upload.completed", records=result.record_count)
        return self._apply(generation, lambda state: complete_analysis(state, analysis=result, report=report))

    def start_wordcloud(self) -> int:
        """Mark the word cloud as loading and return the token for the request."""

        with self._lock:
            self._state = begin_wordcloud(self._state)
            return self._state.generation

    def finish_wordcloud(self, token: int, *, image: str | None = None, error: str | None = None) -> bool:
        with self._lock:
            applied = token == self._state.generation
            self._state = finish_wordcloud(self._state, generation=token, image=image, error=error)

        if not applied:
            logger.info(
                "dashboard.wordcloud.stale",
                session_id=self.session_id,
                token=token,
                generation=self._state.generation,
            )
        return applied

    def _apply(
        self, generation: int, transition: Callable[[DashboardState], DashboardState]
    ) -> DashboardState:
        with self._lock:
            if generation == self._state.generation:
                self._state = transition(self._state)
            return self._state


def render_wordcloud(
    controller: DashboardController,
    token: int,
    client: WordCloudClient,
    *,
    file_name: str,
    content: bytes,
    content_type: str | None = None,
) -> None:
    """Background task body: fetch the image and hand it back to the controller."""

    try:
        image = client.render(file_name, content, content_type)
    except WordCloudError as exc:
        controller.finish_wordcloud(token, error=exc.message)
        return

    controller.finish_wordcloud(token, image=image)


class DashboardStore:
    """Bounded registry of dashboard sessions; the least recently used is evicted."""

    def __init__(self, *, max_sessions: int) -> None:
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, DashboardController] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, session_id: str) -> DashboardController | None:
        with self._lock:
            controller = self._sessions.get(session_id)
            if controller is not None:
                self._sessions.move_to_end(session_id)
            return controller

    def get_or_create(self, session_id: str) -> DashboardController:
        with self._lock:
            controller = self._sessions.get(session_id)
            if controller is None:
                controller = DashboardController(session_id)
                self._sessions[session_id] = controller
                while len(self._sessions) > self.max_sessions:
                    evicted, _ = self._sessions.popitem(last=False)
                    logger.info("dashboard.session.evicted", session_id=evicted)
            else:
                self._sessions.move_to_end(session_id)
            return controller

    def clear(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)
