"""Cross-origin access for pages that embed the calculators."""

import pytest
from flask.testing import FlaskClient

from fincalc.backend.app import create_app

BLOG = "https://blog.example.in"
PARTNER = "https://partner.example.in"
STRANGER = "https://unknown.example.com"


@pytest.fixture()
def embedding_client(monkeypatch: pytest.MonkeyPatch) -> FlaskClient:
    # The partner entry carries a trailing slash, as copied from a browser bar.
    monkeypatch.setenv("FINCALC_ALLOWED_ORIGINS", f"{BLOG}, {PARTNER}/")

    app = create_app()
    app.config.update(TESTING=True)

    with app.test_client() as client:
        yield client


def test_listed_origin_may_read_calculator_index(embedding_client: FlaskClient) -> None:
    response = embedding_client.get("/api/v1/calculators", headers={"Origin": BLOG})

    assert response.status_code == 200
    assert response.headers.get("Access-Control-Allow-Origin") == BLOG


def test_listed_origin_may_post_calculations(embedding_client: FlaskClient) -> None:
    response = embedding_client.options(
        "/api/v1/calculators/sip/calculations",
        headers={
            "Origin": PARTNER,
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type, Accept-Language",
        },
    )

    assert response.status_code == 200
    assert response.headers.get("Access-Control-Allow-Origin") == PARTNER
    assert "POST" in response.headers.get("Access-Control-Allow-Methods", "")


def test_unlisted_origin_gets_no_allow_header(embedding_client: FlaskClient) -> None:
    response = embedding_client.get("/api/v1/config/meta", headers={"Origin": STRANGER})

    assert response.status_code == 200
    assert "Access-Control-Allow-Origin" not in response.headers


def test_empty_allow_list_is_flagged_at_startup(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FINCALC_ALLOWED_ORIGINS", raising=False)

    with pytest.warns(UserWarning, match="No allowed origins configured"):
        create_app()
