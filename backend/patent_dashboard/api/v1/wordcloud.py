"""Pass-through to the external word-cloud service."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from starlette.concurrency import run_in_threadpool

from patent_analysis.errors import UnsupportedFileTypeError

from .. import deps
from ...models.schemas import WordCloudResponse
from ...services.wordcloud import WordCloudClient, WordCloudError

router = APIRouter()


@router.post(
    "/wordcloud",
    response_model=WordCloudResponse,
    status_code=status.HTTP_200_OK,
    summary="Render a word cloud for an uploaded CSV export.",
)
async def generate_wordcloud(
    file: UploadFile = File(...),
    client: WordCloudClient = Depends(deps.get_wordcloud_client),
) -> WordCloudResponse:
    try:
        file_name = deps.validate_upload(file)
    except UnsupportedFileTypeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc

    content = await file.read()

    try:
        image = await run_in_threadpool(client.render, file_name, content, file.content_type)
    except WordCloudError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.message) from exc

    return WordCloudResponse(success=True, image=image)
