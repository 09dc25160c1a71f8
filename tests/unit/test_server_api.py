from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from counterboard.core.config import AppConfig, LLMConfig
from counterboard.llm.offline_provider import OfflineProvider
from counterboard.server.app import create_app


@pytest.fixture
def client(provider: Mock) -> TestClient:
    return TestClient(create_app(AppConfig(), provider=provider))


def test_health(client: TestClient) -> None:
    health = client.get("/api/health").json()
    assert health["status"] == "ok"
    assert "version" in health


def test_counter_scenario(client: TestClient) -> None:
    assert client.get("/api/counter").json() == {"count": 0}

    client.post("/api/counter/add", json={"value": 10})
    assert client.post("/api/counter/add", json={"value": 5}).json()["count"] == 15
    assert client.post("/api/counter/subtract", json={"value": 5}).json()["count"] == 10
    assert client.post("/api/counter/multiply", json={"value": 2}).json()["count"] == 20
    assert client.post("/api/counter/divide", json={"value": 4}).json()["count"] == 5
    assert client.post("/api/counter/increment").json()["count"] == 6
    assert client.post("/api/counter/reset").json()["count"] == 0


def test_counter_divide_by_zero_keeps_state(client: TestClient) -> None:
    client.post("/api/counter/add", json={"value": 3})

    resp = client.post("/api/counter/divide", json={"value": 0})

    assert resp.status_code == 422
    assert resp.json()["detail"] == "Cannot divide by zero"
    assert client.get("/api/counter").json()["count"] == 3


def test_counter_errors(client: TestClient) -> None:
    assert client.post("/api/counter/square").status_code == 404
    assert client.post("/api/counter/add").status_code == 422


def test_calculator_ratio_on_zero_is_conflict(client: TestClient) -> None:
    resp = client.post("/api/calculator/add-ratio", json={"value": 1})
    assert resp.status_code == 409

    client.post("/api/counter/increment")
    assert client.post("/api/calculator/add-ratio", json={"value": 1}).json()["count"] == 2
    assert client.post("/api/calculator/double").json()["count"] == 4
    assert client.post("/api/calculator/divide", json={"value": 0}).status_code == 422
    assert client.post("/api/calculator/clear").json()["count"] == 0


def test_apps_do_not_share_state(provider: Mock) -> None:
    a = TestClient(create_app(AppConfig(), provider=provider))
    b = TestClient(create_app(AppConfig(), provider=provider))
    a.post("/api/counter/increment")
    assert b.get("/api/counter").json()["count"] == 0


def test_task_crud(client: TestClient) -> None:
    created = client.post("/api/tasks", json={"title": "Write tests", "priority": "HIGH"})
    assert created.status_code == 201
    task = created.json()
    assert task["status"] == "TODO"

    updated = client.patch(f"/api/tasks/{task['id']}", json={"status": "DONE"}).json()
    assert updated["status"] == "DONE"
    assert updated["id"] == task["id"]

    assert client.delete(f"/api/tasks/{task['id']}").status_code == 200
    assert client.get("/api/tasks").json() == []
    assert client.delete(f"/api/tasks/{task['id']}").status_code == 404


def test_extract_adds_todo_tasks(client: TestClient) -> None:
    added = client.post("/api/tasks/extract", json={"message": "buy milk"}).json()["added"]

    assert [t["title"] for t in added] == ["Buy milk", "Call mum"]
    assert {t["status"] for t in added} == {"TODO"}
    assert len(client.get("/api/tasks").json()) == 2


def test_extract_failure_returns_empty(client: TestClient, provider: Mock) -> None:
    provider.generate.return_value = "not json"
    resp = client.post("/api/tasks/extract", json={"message": "buy milk"})
    assert resp.status_code == 200
    assert resp.json()["added"] == []


def test_chat_and_submit(client: TestClient, provider: Mock) -> None:
    provider.generate.return_value = "Hi!"
    body = client.post("/api/chat", json={"message": "hello"}).json()
    assert body["reply"] == "Hi!"
    assert body["transcript"] == ["You: hello", "AI: Hi!"]

    provider.generate.side_effect = RuntimeError("down")
    body = client.post("/api/submit", json={"message": "plan my week"}).json()
    assert body["transcript"][-1] == "AI: Sorry, I encountered an error."
    assert body["added"] == []
    assert client.get("/api/chat").json()[-2] == "You: plan my week"


def test_missing_api_key_falls_back_to_offline() -> None:
    app = create_app(AppConfig(llm=LLMConfig(provider="openai", openai_api_key=None)))
    assert isinstance(app.state.task_manager.chat.provider, OfflineProvider)


@pytest.mark.usefixtures("fast_thread_switching")
def test_concurrent_increments_are_all_counted(provider: Mock) -> None:
    with TestClient(create_app(AppConfig(), provider=provider)) as client:
        with ThreadPoolExecutor(max_workers=16) as pool:
            statuses = list(
                pool.map(lambda _: client.post("/api/counter/increment").status_code, range(400))
            )

        assert statuses == [200] * 400
        assert client.get("/api/counter").json()["count"] == 400


def test_model_routes_refuse_overlapping_calls(provider: Mock) -> None:
    started = threading.Event()
    release = threading.Event()
    in_flight = 0
    peak = 0
    counter_lock = threading.Lock()

    def slow_generate(prompt: str) -> str:
        nonlocal in_flight, peak
        with counter_lock:
            in_flight += 1
            peak = max(peak, in_flight)
        started.set()
        release.wait(timeout=5)
        with counter_lock:
            in_flight -= 1
        return "[]"

    provider.generate.side_effect = slow_generate

    with TestClient(create_app(AppConfig(), provider=provider)) as client:
        with ThreadPoolExecutor(max_workers=1) as pool:
            first = pool.submit(client.post, "/api/tasks/extract", json={"message": "a"})
            try:
                assert started.wait(timeout=5)
                for path in ("/api/chat", "/api/tasks/extract", "/api/submit"):
                    resp = client.post(path, json={"message": "b"})
                    assert resp.status_code == 409, path
                # Store routes stay available while a model call is running.
                assert client.post("/api/counter/increment").json()["count"] == 1
            finally:
                release.set()

            assert first.result(timeout=5).status_code == 200

        assert client.post("/api/chat", json={"message": "c"}).status_code == 200

    assert peak == 1
    assert provider.generate.call_count == 2
