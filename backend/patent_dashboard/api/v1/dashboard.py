"""Session-backed dashboard endpoints."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, HTTPException, Response, UploadFile, status
from starlette.concurrency import run_in_threadpool

from patent_analysis.errors import UnsupportedFileTypeError
from patent_analysis.pipeline import AnalysisPipeline

from .. import deps
from ...core.config import AppSettings
from ...core.logging import get_logger
from ...models.schemas import DashboardStateResponse
from ...services.dashboard import DashboardStore, render_wordcloud
from ...services.wordcloud import WordCloudClient

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/dashboard/upload",
    response_model=DashboardStateResponse,
    status_code=status.HTTP_200_OK,
    summary="Replace a session's dashboard with a new upload.",
)
async def upload_to_dashboard(
    background_tasks: BackgroundTasks,
    file: UploadFile = File(...),
    session_id: str | None = Form(default=None),
    settings: AppSettings = Depends(deps.get_app_settings),
    pipeline: AnalysisPipeline = Depends(deps.get_pipeline),
    client: WordCloudClient = Depends(deps.get_wordcloud_client),
    store: DashboardStore = Depends(deps.get_dashboard_store),
) -> DashboardStateResponse:
    """Analyse the upload into the session and request its word cloud in the background.

    Analysis failures are reported in the returned state's ``error`` field so
    the previous dashboard remains available to the client.
    """

    try:
        file_name = deps.validate_upload(file)
    except UnsupportedFileTypeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc

    session_id = session_id or str(uuid.uuid4())
    controller = store.get_or_create(session_id)
    content = await file.read()

    state = await run_in_threadpool(controller.upload, file_name, content, pipeline)

    if settings.wordcloud_enabled:
        token = controller.start_wordcloud()
        background_tasks.add_task(
            render_wordcloud,
            controller,
            token,
            client,
            file_name=file_name,
            content=content,
            content_type=file.content_type,
        )
        state = controller.state
        logger.info("dashboard.wordcloud.scheduled", session_id=session_id, token=token)

    return DashboardStateResponse.from_state(session_id, state)


@router.get(
    "/dashboard/{session_id}",
    response_model=DashboardStateResponse,
    summary="Current dashboard state for a session.",
)
async def get_dashboard(
    session_id: str,
    store: DashboardStore = Depends(deps.get_dashboard_store),
) -> DashboardStateResponse:
    controller = store.get(session_id)
    if controller is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown dashboard session.")
    return DashboardStateResponse.from_state(session_id, controller.state)


@router.delete(
    "/dashboard/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Discard a session's dashboard.",
)
async def clear_dashboard(
    session_id: str,
    store: DashboardStore = Depends(deps.get_dashboard_store),
) -> Response:
    store.clear(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
