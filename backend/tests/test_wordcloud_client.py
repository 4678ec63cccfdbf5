import pytest
import requests
from fastapi.testclient import TestClient

from patent_dashboard.api import deps
from patent_dashboard.main import create_app
from patent_dashboard.services.wordcloud import (
    WordCloudClient,
    WordCloudServiceError,
    WordCloudTransportError,
    build_wordcloud_client,
)


def test_render_posts_raw_file_and_returns_data_uri(ok_session, export_csv) -> None:
    client = WordCloudClient(url="http://wordcloud.test/generate-wordcloud", session=ok_session)

    image = client.render("export.csv", export_csv, "text/csv")

    assert image == "data:image/png;base64,AAAA"
    (call,) = ok_session.calls
    assert call["url"] == "http://wordcloud.test/generate-wordcloud"
    assert call["files"] == {"file": ("export.csv", export_csv, "text/csv")}
    assert call["timeout"] is None


def test_transport_failure_is_distinguished(offline_session) -> None:
    client = WordCloudClient(url="http://wordcloud.test", session=offline_session)

    with pytest.raises(WordCloudTransportError) as excinfo:
        client.render("export.csv", b"data")

    assert excinfo.value.message.startswith("Communication error:")


def test_unsuccessful_response_reports_service_error(make_session) -> None:
    session = make_session({"success": False, "error": "CSV has no text column"}, status_code=400)
    client = WordCloudClient(url="http://wordcloud.test", session=session)

    with pytest.raises(WordCloudServiceError) as excinfo:
        client.render("export.csv", b"data")

    assert excinfo.value.message == "Word cloud error: CSV has no text column"


@pytest.mark.parametrize(
    "session_kwargs",
    [
        {"invalid_json": True, "status_code": 502},
        {"payload": ["not", "an", "object"]},
        {"payload": {"success": True}},
        {"payload": {"success": False}},
    ],
)
def test_malformed_responses_are_service_errors(make_session, session_kwargs) -> None:
    client = WordCloudClient(url="http://wordcloud.test", session=make_session(**session_kwargs))

    with pytest.raises(WordCloudServiceError):
        client.render("export.csv", b"data")


def test_build_client_uses_settings(settings) -> None:
    client = build_wordcloud_client(settings.model_copy(update={"wordcloud_timeout": 12.5}))

    assert client.url == settings.wordcloud_url
    assert client.timeout == 12.5
    assert isinstance(client.session, requests.Session)


def test_wordcloud_endpoint_returns_image(settings, ok_session, export_csv) -> None:
    app = create_app(settings)
    app.dependency_overrides[deps.get_wordcloud_client] = lambda: WordCloudClient(
        url=settings.wordcloud_url, session=ok_session
    )
    client = TestClient(app)

    response = client.post("/v1/wordcloud", files={"file": ("export.csv", export_csv, "text/csv")})

    assert response.status_code == 200
    assert response.json() == {"success": True, "image": "data:image/png;base64,AAAA"}


def test_wordcloud_endpoint_maps_failures_to_bad_gateway(settings, offline_session, export_csv) -> None:
    app = create_app(settings)
    app.dependency_overrides[deps.get_wordcloud_client] = lambda: WordCloudClient(
        url=settings.wordcloud_url, session=offline_session
    )
    client = TestClient(app)

    response = client.post("/v1/wordcloud", files={"file": ("export.csv", export_csv, "text/csv")})

    assert response.status_code == 502
    assert response.json()["detail"].startswith("Communication error:")


def test_wordcloud_endpoint_rejects_non_csv(settings) -> None:
    client = TestClient(create_app(settings))

    response = client.post("/v1/wordcloud", files={"file": ("notes.txt", b"hello", "text/plain")})

    assert response.status_code == 400
    assert response.json()["detail"] == "Only CSV files can be uploaded."


def test_app_shares_one_client_and_closes_it_on_shutdown(settings, ok_session, export_csv) -> None:
    app = create_app(settings)
    shared = WordCloudClient(url=settings.wordcloud_url, session=ok_session)
    app.state.wordcloud_client = shared

    with TestClient(app) as client:
        for _ in range(2):
            response = client.post("/v1/wordcloud", files={"file": ("export.csv", export_csv, "text/csv")})
            assert response.status_code == 200
        assert ok_session.closed is False

    assert len(ok_session.calls) == 2
    assert ok_session.closed is True


def test_create_app_builds_client_from_settings(settings) -> None:
    app = create_app(settings)

    assert isinstance(app.state.wordcloud_client, WordCloudClient)
    assert app.state.wordcloud_client.url == settings.wordcloud_url
