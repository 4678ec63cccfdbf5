"""Client for the external word-cloud rendering service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import requests

from patent_analysis.errors import PatentAnalysisError

from ..core.config import AppSettings
from ..core.logging import get_logger

logger = get_logger(__name__)


class WordCloudError(PatentAnalysisError):
    default_message = "Word cloud generation failed."


class WordCloudTransportError(WordCloudError):
    """The service could not be reached."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Communication error: {detail}")


class WordCloudServiceError(WordCloudError):
    """The service answered but did not produce an image."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Word cloud error: {detail}")


@dataclass(slots=True)
class WordCloudClient:
    """Forward a raw CSV upload and return the rendered image as a data URI.

    The service contract is ``POST`` multipart field ``file`` answered by JSON
    ``{"success": true, "image": "data:image/png;base64,..."}`` or
    ``{"success": false, "error": "..."}``. No retries are attempted.
    """

    url: str
    timeout: float | None = None
    session: Any = field(default_factory=requests.Session)

    def render(self, file_name: str, content: bytes, content_type: str | None = None) -> str:
        files = {"file": (file_name, content, content_type or "text/csv")}

        try:
            response = self.session.post(self.url, files=files, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("wordcloud.request.failed", url=self.url, error=str(exc))
            raise WordCloudTransportError(str(exc)) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("wordcloud.response.invalid", status=response.status_code)
            raise WordCloudServiceError(f"non-JSON response (HTTP {response.status_code})") from exc

        if not isinstance(payload, dict):
            raise WordCloudServiceError(f"unexpected response (HTTP {response.status_code})")

        if not payload.get("success"):
            detail = payload.get("error") or f"HTTP {response.status_code}"
            logger.info("wordcloud.response.unsuccessful", status=response.status_code, error=detail)
            raise WordCloudServiceError(str(detail))

        image = payload.get("image")
        if not isinstance(image, str) or not image:
            raise WordCloudServiceError("response did not include an image")

        logger.info("wordcloud.response.ok", file=file_name, image_chars=len(image))
        return image

    def close(self) -> None:
        self.session.close()


def build_wordcloud_client(settings: AppSettings) -> WordCloudClient:
    return WordCloudClient(url=settings.wordcloud_url, timeout=settings.wordcloud_timeout)
