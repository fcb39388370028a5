"""Integration tests for the console HTTP API.

Drives a real workspace through FastAPI with httpx's ASGI transport.
"""

import pytest
from httpx import AsyncClient

from intelx import __version__
from intelx.models.schemas import ConversationResult, SessionList


async def _sessions(client: AsyncClient) -> SessionList:
    response = await client.get("/sessions")
    assert response.status_code == 200
    return SessionList.model_validate(response.json())


class TestHealth:
    async def test_health(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "service": "intelx-console",
            "version": __version__,
        }


class TestSessionEndpoints:
    async def test_list_returns_seeded_sessions(self, async_client: AsyncClient) -> None:
        sessions = await _sessions(async_client)

        assert len(sessions.sessions) == 2
        assert sessions.selected_id == sessions.sessions[0].id

    async def test_create_session(self, async_client: AsyncClient) -> None:
        response = await async_client.post("/sessions")

        assert response.status_code == 201
        created = response.json()
        assert created["title"] == "New Chat"

        sessions = await _sessions(async_client)
        assert sessions.sessions[0].id == created["id"]
        assert sessions.selected_id == created["id"]
        assert sessions.editing_id == created["id"]

    async def test_rename_trims_and_ignores_blank(self, async_client: AsyncClient) -> None:
        session_id = (await _sessions(async_client)).sessions[0].id

        blank = await async_client.patch(f"/sessions/{session_id}", json={"title": "   "})
        assert blank.status_code == 200
        assert blank.json()["applied"] is False

        renamed = await async_client.patch(f"/sessions/{session_id}", json={"title": "  Foo  "})
        assert renamed.json()["applied"] is True
        assert renamed.json()["session"]["title"] == "Foo"

    async def test_delete_selected_session_clears_selection(
        self, async_client: AsyncClient
    ) -> None:
        selected = (await _sessions(async_client)).selected_id

        response = await async_client.delete(f"/sessions/{selected}")

        assert response.json() == {"applied": True}
        sessions = await _sessions(async_client)
        assert sessions.selected_id is None
        assert len(sessions.sessions) == 1

    async def test_search_filters_titles(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/sessions", params={"q": "longest"})

        titles = [s["title"] for s in response.json()["sessions"]]
        assert titles == ["Who was the one to initiate the longest call..."]

    @pytest.mark.parametrize(
        ("method", "path", "body"),
        [
            ("POST", "/sessions/missing/select", None),
            ("PATCH", "/sessions/missing", {"title": "Foo"}),
            ("DELETE", "/sessions/missing", None),
        ],
    )
    async def test_unknown_session_returns_404(
        self, async_client: AsyncClient, method: str, path: str, body: dict | None
    ) -> None:
        response = await async_client.request(method, path, json=body)

        assert response.status_code == 404
        assert "not found" in response.json()["detail"]


class TestConversationEndpoints:
    async def test_submit_and_wait_for_reply(self, async_client: AsyncClient) -> None:
        await async_client.put("/conversation/draft", json={"text": "hello"})

        response = await async_client.post("/conversation/submit", params={"wait": True})

        result = ConversationResult.model_validate(response.json())
        assert result.applied is True
        assert [m.text for m in result.conversation.messages] == [
            "hello",
            "Here's a dummy IntelX response for your query.",
        ]
        assert result.conversation.response_pending is False

    async def test_submit_without_wait_leaves_reply_pending(
        self, async_client: AsyncClient
    ) -> None:
        await async_client.put("/conversation/draft", json={"text": "hello"})

        first = await async_client.post("/conversation/submit")
        await async_client.put("/conversation/draft", json={"text": "again"})
        second = await async_client.post("/conversation/submit")

        assert first.json()["applied"] is True
        assert first.json()["conversation"]["response_pending"] is True
        assert second.json()["applied"] is False
        assert len(second.json()["conversation"]["messages"]) == 1

    async def test_empty_submit_is_not_applied(self, async_client: AsyncClient) -> None:
        response = await async_client.post("/conversation/submit")

        assert response.status_code == 200
        assert response.json()["applied"] is False

    async def test_upload_stages_and_submit_moves_attachments(
        self, async_client: AsyncClient
    ) -> None:
        files = [
            ("files", ("Statement_1.pdf", b"%PDF-1.4 one", "application/pdf")),
            ("files", ("notes.txt", b"notes", "text/plain")),
        ]

        staged = await async_client.post("/conversation/attachments", files=files)

        assert staged.status_code == 200
        attachments = staged.json()["staged_attachments"]
        assert [a["name"] for a in attachments] == ["Statement_1.pdf", "notes.txt"]
        assert attachments[1]["byte_size"] == 5
        assert attachments[0]["mime_type"] == "application/pdf"

        response = await async_client.post("/conversation/submit", params={"wait": True})

        conversation = response.json()["conversation"]
        assert conversation["staged_attachments"] == []
        sent = conversation["messages"][0]
        assert sent["text"] is None
        assert [a["name"] for a in sent["attachments"]] == ["Statement_1.pdf", "notes.txt"]

    async def test_unstage_out_of_range(self, async_client: AsyncClient) -> None:
        await async_client.post(
            "/conversation/attachments",
            files=[("files", ("a.txt", b"a", "text/plain"))],
        )

        missing = await async_client.delete("/conversation/attachments/3")
        removed = await async_client.delete("/conversation/attachments/0")

        assert missing.json()["applied"] is False
        assert removed.json()["applied"] is True
        assert removed.json()["conversation"]["staged_attachments"] == []

    async def test_new_session_resets_conversation(self, async_client: AsyncClient) -> None:
        await async_client.put("/conversation/draft", json={"text": "hello"})
        await async_client.post("/conversation/submit", params={"wait": True})

        await async_client.post("/sessions")

        conversation = (await async_client.get("/conversation")).json()
        assert conversation["messages"] == []
        assert conversation["response_pending"] is False

    async def test_reset_endpoint(self, async_client: AsyncClient) -> None:
        await async_client.put("/conversation/draft", json={"text": "hello"})
        await async_client.post("/conversation/submit")

        response = await async_client.post("/conversation/reset")

        assert response.json()["messages"] == []
        assert response.json()["response_pending"] is False


class TestFolderEndpoints:
    async def test_rows_and_toggle(self, async_client: AsyncClient) -> None:
        rows = (await async_client.get("/folders")).json()
        assert rows[0]["label"] == "ACC/CR/2025/7/7"
        assert rows[0]["path"] == [0]
        labels = [r["label"] for r in rows]
        assert "OF01_Search and Seizure" not in labels

        toggled = await async_client.post("/folders/toggle", json={"path": [0, 2]})
        assert toggled.json() == {"applied": True}

        labels = [r["label"] for r in (await async_client.get("/folders")).json()]
        assert "OF01_Search and Seizure" in labels

    async def test_toggle_file_not_applied(self, async_client: AsyncClient) -> None:
        response = await async_client.post("/folders/toggle", json={"path": [0, 0, 2, 0]})

        assert response.json() == {"applied": False}

    async def test_toggle_requires_path(self, async_client: AsyncClient) -> None:
        response = await async_client.post("/folders/toggle", json={"path": []})

        assert response.status_code == 422
