"""Integration tests for the post translation API.

Tests cover:
- POST /api/v1/translate-post: camelCase wire format, per-language results
- 400 responses for requests that cannot start
- 422 responses for malformed requests
- Listing, publishing and deleting stored translations
"""

import json

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from app.api.v1.translations import get_client_factory
from app.integrations.base import CompletionResult
from app.models import ApiSetting, Post

TRANSLATED_CONTENT = (
    "<h2>Hvorfor compliance er vigtigt</h2>"
    "<p>Finansielle institutioner i hele EU skal overholde strenge regler for "
    "rapportering. Denne guide forklarer, hvordan du forbereder dit team.</p>"
)


def _model_response() -> str:
    return "```json\n" + json.dumps(
        {
            "title": "EU-compliance guide for banker",
            "content": TRANSLATED_CONTENT,
            "excerpt": "En praktisk guide",
            "meta_title": "EU-compliance",
            "meta_description": "Alt om EU-compliance",
            "meta_keywords": "compliance, Danmark",
        }
    ) + "\n```"


@pytest.fixture
def install_client(app: FastAPI, scripted_client_factory):
    """Route the endpoint's LLM calls to a scripted client."""

    def _install(responses):
        factory, client = scripted_client_factory(responses)
        app.dependency_overrides[get_client_factory] = lambda: factory
        return factory, client

    return _install


async def _translate(async_client: AsyncClient, post: Post, languages: list[str]) -> dict:
    response = await async_client.post(
        "/api/v1/translate-post",
        json={
            "postId": post.id,
            "targetLanguages": languages,
            "translationProvider": "claude",
        },
    )
    assert response.status_code == 200
    return response.json()


class TestTranslatePostEndpoint:
    """Tests for POST /api/v1/translate-post."""

    async def test_translates_each_language(
        self,
        async_client: AsyncClient,
        post: Post,
        claude_api_key: ApiSetting,
        install_client,
    ) -> None:
        install_client(
            [_model_response(), CompletionResult(success=False, error="Rate limit exceeded")]
        )

        body = await _translate(async_client, post, ["da", "sv"])

        assert body["success"] is True
        first, second = body["results"]
        assert first["languageCode"] == "da"
        assert first["status"] == "completed"
        assert first["qualityScore"] == 100
        assert first["warnings"] == []
        assert first["provenance"] == "parsed"
        assert "translationId" in first
        assert second == {
            "languageCode": "sv",
            "status": "error",
            "error": "Rate limit exceeded",
        }

    async def test_second_request_skips_completed(
        self,
        async_client: AsyncClient,
        post: Post,
        claude_api_key: ApiSetting,
        install_client,
    ) -> None:
        _, client = install_client([_model_response()])

        first = await _translate(async_client, post, ["da"])
        second = await _translate(async_client, post, ["da"])

        assert second["results"] == [
            {
                "languageCode": "da",
                "status": "skipped",
                "reason": "Translation already completed",
                "translationId": first["results"][0]["translationId"],
            }
        ]
        assert len(client.prompts) == 1

    async def test_invalid_model(
        self,
        async_client: AsyncClient,
        post: Post,
        claude_api_key: ApiSetting,
        install_client,
    ) -> None:
        factory, _ = install_client([])

        response = await async_client.post(
            "/api/v1/translate-post",
            json={
                "postId": post.id,
                "targetLanguages": ["da"],
                "translationProvider": "claude",
                "model": "claude-2",
            },
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"].startswith("Invalid model: claude-2. Allowed models: ")
        assert factory.calls == []

    async def test_post_not_found(
        self,
        async_client: AsyncClient,
        claude_api_key: ApiSetting,
        install_client,
    ) -> None:
        install_client([])

        response = await async_client.post(
            "/api/v1/translate-post",
            json={
                "postId": "missing-post",
                "targetLanguages": ["da"],
                "translationProvider": "claude",
            },
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Post not found"

    async def test_missing_api_key(
        self,
        async_client: AsyncClient,
        post: Post,
        install_client,
    ) -> None:
        install_client([])

        response = await async_client.post(
            "/api/v1/translate-post",
            json={
                "postId": post.id,
                "targetLanguages": ["da"],
                "translationProvider": "openai",
            },
        )

        assert response.status_code == 400
        assert response.json()["error"] == "openai API key not configured or inactive"

    @pytest.mark.parametrize(
        "payload",
        [
            {"postId": "p", "targetLanguages": [], "translationProvider": "claude"},
            {"postId": "p", "targetLanguages": ["da"], "translationProvider": "gemini"},
            {"postId": "p", "targetLanguages": ["  "], "translationProvider": "claude"},
            {"targetLanguages": ["da"], "translationProvider": "claude"},
        ],
    )
    async def test_validation_errors(
        self, async_client: AsyncClient, payload: dict
    ) -> None:
        response = await async_client.post("/api/v1/translate-post", json=payload)

        assert response.status_code == 422
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert "request_id" in body


class TestTranslationManagement:
    """Tests for listing, publishing and deleting translations."""

    async def test_list_publish_and_delete(
        self,
        async_client: AsyncClient,
        post: Post,
        claude_api_key: ApiSetting,
        install_client,
    ) -> None:
        install_client([_model_response()])
        body = await _translate(async_client, post, ["da"])
        translation_id = body["results"][0]["translationId"]

        listed = await async_client.get(f"/api/v1/posts/{post.id}/translations")
        assert listed.status_code == 200
        rows = listed.json()
        assert len(rows) == 1
        assert rows[0]["id"] == translation_id
        assert rows[0]["language_code"] == "da"
        assert rows[0]["published"] is False
        assert rows[0]["localization_status"] == "reviewed"

        published = await async_client.patch(
            f"/api/v1/translations/{translation_id}/published",
            json={"published": True},
        )
        assert published.status_code == 200
        assert published.json()["published"] is True

        deleted = await async_client.delete(f"/api/v1/translations/{translation_id}")
        assert deleted.status_code == 204

        listed = await async_client.get(f"/api/v1/posts/{post.id}/translations")
        assert listed.json() == []

    async def test_list_unknown_post(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/api/v1/posts/missing/translations")

        assert response.status_code == 404

    async def test_publish_unknown_translation(self, async_client: AsyncClient) -> None:
        response = await async_client.patch(
            "/api/v1/translations/missing/published", json={"published": True}
        )

        assert response.status_code == 404

    async def test_delete_unknown_translation(self, async_client: AsyncClient) -> None:
        response = await async_client.delete("/api/v1/translations/missing")

        assert response.status_code == 404
