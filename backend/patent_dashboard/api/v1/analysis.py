"""Stateless analysis of an uploaded export."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from starlette.concurrency import run_in_threadpool

from patent_analysis.errors import AnalysisError, PatentAnalysisError
from patent_analysis.pipeline import AnalysisPipeline

from .. import deps
from ...core.logging import get_logger
from ...models.schemas import AnalysisResponse

logger = get_logger(__name__)

router = APIRouter()


def http_error(exc: PatentAnalysisError) -> HTTPException:
    """Map a pipeline failure onto the status code reported to the client."""

    if isinstance(exc, AnalysisError):
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    else:
        code = status.HTTP_400_BAD_REQUEST
    return HTTPException(status_code=code, detail=exc.message)


@router.post(
    "/analysis",
    response_model=AnalysisResponse,
    status_code=status.HTTP_200_OK,
    summary="Aggregate a J-PlatPat CSV export.",
)
async def analyze_upload(
    file: UploadFile = File(...),
    pipeline: AnalysisPipeline = Depends(deps.get_pipeline),
) -> AnalysisResponse:
    """Return per-year, per-applicant and per-classification statistics with chart payloads."""

    try:
        file_name = deps.validate_upload(file)
        content = await file.read()
        outcome = await run_in_threadpool(pipeline.run, content, file_name=file_name)
    except PatentAnalysisError as exc:
        logger.info("analysis.request.rejected", file=file.filename, error=exc.message)
        raise http_error(exc) from exc

    return AnalysisResponse(
        file_name=outcome.file_name,
        sha256=outcome.sha256,
        result=outcome.result,
        report=outcome.report,
    )
