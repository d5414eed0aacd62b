"""
Integration tests for the variants FastAPI server.

Uses httpx.AsyncClient + ASGITransport for in-process HTTP round-trips.
"""

import copy

import pytest
from httpx import ASGITransport, AsyncClient

from variant_service.api.app import create_app
from variant_service.api.config import ApiSettings

SMALL_SETTINGS = ApiSettings(
    max_rows=6,
    max_items=50,
    max_students=100,
    min_seed_length=3,
)


def _make_client(settings: ApiSettings = SMALL_SETTINGS) -> AsyncClient:
    app = create_app(settings=settings)
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://testserver")


def _mc_item(item_id: str, order: int, correct: int) -> dict[str, object]:
    return {
        "item_type": "multiple_choice",
        "id": item_id,
        "order": order,
        "score": 2.0,
        "alternatives": [
            {
                "id": f"{item_id}-{i}",
                "text": f"Option {i}",
                "order": i + 1,
                "is_correct": i == correct,
            }
            for i in range(4)
        ],
    }


def _evaluation(n_items: int = 4) -> dict[str, object]:
    items: list[dict[str, object]] = [
        _mc_item(f"q{i}", i, correct=i % 4) for i in range(1, n_items + 1)
    ]
    items.append(
        {
            "item_type": "open_response",
            "id": "essay",
            "order": n_items + 1,
            "score": 5.0,
        }
    )
    return {
        "id": "ev1",
        "title": "Midterm",
        "blocks": [{"id": "b1", "order": 1, "items": items}],
        "randomize_questions": True,
        "randomize_alternatives": True,
    }


def _students(n: int = 6) -> list[dict[str, str]]:
    return [
        {
            "id": f"s{i}",
            "display_name": f"Student {i}",
            "course_name": "1A" if i % 2 else "1B",
        }
        for i in range(n)
    ]


def _row_items(row: dict) -> list[dict]:
    items = [item for block in row["blocks"] for item in block["items"]]
    return sorted(items, key=lambda item: item["order"])


def _correct_selections(row: dict) -> dict[str, str]:
    selections: dict[str, str] = {}
    for item in _row_items(row):
        if item["item_type"] == "open_response":
            continue
        position = next(
            i for i, alt in enumerate(item["alternatives"]) if alt["is_correct"]
        )
        selections[str(item["order"])] = "abcd"[position]
    return selections


class TestHealthCheck:
    @pytest.mark.asyncio
    async def test_health(self) -> None:
        async with _make_client() as client:
            resp = await client.get("/api/v1/health")
            assert resp.status_code == 200
            data = resp.json()
            assert data["status"] == "ok"
            assert data["version"] == "0.1.0"

    @pytest.mark.asyncio
    async def test_request_id_echoed(self) -> None:
        async with _make_client() as client:
            resp = await client.get(
                "/api/v1/health", headers={"X-Request-ID": "abc123"}
            )
            assert resp.headers["X-Request-ID"] == "abc123"


class TestCompileVariants:
    @pytest.mark.asyncio
    async def test_compile(self) -> None:
        async with _make_client() as client:
            payload = {"evaluation": _evaluation(), "seed": "ev1", "row_count": 3}
            resp = await client.post("/api/v1/variants", json=payload)
            assert resp.status_code == 200
            data = resp.json()
            assert [row["label"] for row in data["rows"]] == ["A", "B", "C"]
            assert set(data["answer_key"]["rows"]) == {"A", "B", "C"}
            assert data["total_score"] == 13.0

            for row in data["rows"]:
                assert [item["order"] for item in _row_items(row)] == [
                    1,
                    2,
                    3,
                    4,
                    5,
                ]
                key = data["answer_key"]["rows"][row["label"]]
                for number, letter in _correct_selections(row).items():
                    assert key[number] == letter.upper()

    @pytest.mark.asyncio
    async def test_reproducible(self) -> None:
        async with _make_client() as client:
            payload = {"evaluation": _evaluation(), "seed": "ev1", "row_count": 2}
            first = await client.post("/api/v1/variants", json=payload)
            second = await client.post("/api/v1/variants", json=payload)
            assert first.json() == second.json()

    @pytest.mark.asyncio
    async def test_short_seed_rejected(self) -> None:
        async with _make_client() as client:
            payload = {"evaluation": _evaluation(), "seed": "ab"}
            resp = await client.post("/api/v1/variants", json=payload)
            assert resp.status_code == 422
            assert resp.json()["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_too_many_rows(self) -> None:
        async with _make_client() as client:
            payload = {"evaluation": _evaluation(), "seed": "ev1", "row_count": 7}
            resp = await client.post("/api/v1/variants", json=payload)
            assert resp.status_code == 422
            assert resp.json()["code"] == "DATA_SIZE_EXCEEDED"

    @pytest.mark.asyncio
    async def test_missing_correct_answer(self) -> None:
        evaluation = _evaluation()
        for alt in evaluation["blocks"][0]["items"][0]["alternatives"]:  # type: ignore[index]
            alt["is_correct"] = False
        async with _make_client() as client:
            payload = {"evaluation": evaluation, "seed": "ev1"}
            resp = await client.post("/api/v1/variants", json=payload)
            assert resp.status_code == 422
            data = resp.json()
            assert data["code"] == "VALIDATION_ERROR"
            assert "q1" in data["message"]


class TestAnswerSheets:
    @pytest.mark.asyncio
    async def test_create_and_list(self) -> None:
        async with _make_client() as client:
            payload = {
                "evaluation": _evaluation(),
                "students": _students(),
                "seed": "ev1",
                "row_count": 2,
            }
            resp = await client.post("/api/v1/answer-sheets", json=payload)
            assert resp.status_code == 201
            data = resp.json()
            assert len(data["assignments"]) == 6
            assert data["assignments"][0]["scan_payload"].startswith("ev1|")

            resp = await client.get("/api/v1/evaluations/ev1/assignments")
            assert resp.status_code == 200
            assert len(resp.json()["assignments"]) == 6

            resp = await client.get("/api/v1/evaluations/ev1/answer-key")
            assert resp.status_code == 200
            frozen = resp.json()
            assert frozen["seed"] == "ev1"
            assert frozen["answer_key"] == data["answer_key"]

    @pytest.mark.asyncio
    async def test_repeat_is_idempotent(self) -> None:
        async with _make_client() as client:
            payload = {
                "evaluation": _evaluation(),
                "students": _students(),
                "seed": "ev1",
            }
            await client.post("/api/v1/answer-sheets", json=payload)
            resp = await client.post("/api/v1/answer-sheets", json=payload)
            assert resp.status_code == 201

            resp = await client.get("/api/v1/evaluations/ev1/assignments")
            assert len(resp.json()["assignments"]) == 6

    @pytest.mark.asyncio
    async def test_conflicting_reprint(self) -> None:
        async with _make_client() as client:
            payload = {
                "evaluation": _evaluation(),
                "students": _students(),
                "seed": "ev1",
            }
            await client.post("/api/v1/answer-sheets", json=payload)

            reprint = {**payload, "seed": "ev1-second"}
            resp = await client.post("/api/v1/answer-sheets", json=reprint)
            assert resp.status_code == 409
            assert resp.json()["code"] == "DUPLICATE_ASSIGNMENT"

            reprint["replace"] = True
            resp = await client.post("/api/v1/answer-sheets", json=reprint)
            assert resp.status_code == 201

    @pytest.mark.asyncio
    async def test_too_many_students(self) -> None:
        settings = ApiSettings(max_students=3)
        async with _make_client(settings) as client:
            payload = {
                "evaluation": _evaluation(),
                "students": _students(4),
                "seed": "ev1",
            }
            resp = await client.post("/api/v1/answer-sheets", json=payload)
            assert resp.status_code == 422
            assert resp.json()["code"] == "DATA_SIZE_EXCEEDED"

    @pytest.mark.asyncio
    async def test_answer_key_not_found(self) -> None:
        async with _make_client() as client:
            resp = await client.get("/api/v1/evaluations/nope/answer-key")
            assert resp.status_code == 404
            assert resp.json()["code"] == "ANSWER_KEY_NOT_FOUND"


    @pytest.mark.asyncio
    async def test_unprintable_student_id_saves_nothing(self) -> None:
        async with _make_client() as client:
            students = _students(2)
            students.append(
                {"id": "s|1", "display_name": "Pipe", "course_name": "1A"}
            )
            payload = {
                "evaluation": _evaluation(),
                "students": students,
                "seed": "ev1",
            }
            resp = await client.post("/api/v1/answer-sheets", json=payload)
            assert resp.status_code == 422
            assert resp.json()["code"] == "INVALID_SCAN_PAYLOAD"

            resp = await client.get("/api/v1/evaluations/ev1/assignments")
            assert resp.json()["assignments"] == []
            resp = await client.get("/api/v1/evaluations/ev1/answer-key")
            assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_edited_key_with_same_seed_conflicts(self) -> None:
        async with _make_client() as client:
            payload = {
                "evaluation": _evaluation(),
                "students": _students(),
                "seed": "ev1",
            }
            resp = await client.post("/api/v1/answer-sheets", json=payload)
            frozen_key = resp.json()["answer_key"]

            edited = copy.deepcopy(_evaluation())
            first_item = edited["blocks"][0]["items"][0]  # type: ignore[index]
            for i, alt in enumerate(first_item["alternatives"]):
                alt["is_correct"] = i == 3
            resp = await client.post(
                "/api/v1/answer-sheets", json={**payload, "evaluation": edited}
            )
            assert resp.status_code == 409
            assert resp.json()["code"] == "ANSWER_KEY_CONFLICT"

            resp = await client.get("/api/v1/evaluations/ev1/answer-key")
            assert resp.json()["answer_key"] == frozen_key


class TestReconcile:
    async def _print(self, client: AsyncClient) -> dict:
        payload = {
            "evaluation": _evaluation(),
            "students": _students(),
            "seed": "ev1",
            "row_count": 3,
        }
        resp = await client.post("/api/v1/answer-sheets", json=payload)
        assert resp.status_code == 201
        data: dict = resp.json()
        return data

    @pytest.mark.asyncio
    async def test_full_marks(self) -> None:
        async with _make_client() as client:
            printed = await self._print(client)
            rows = {row["label"]: row for row in printed["rows"]}

            for assignment in printed["assignments"]:
                row = rows[assignment["row_label"]]
                resp = await client.post(
                    "/api/v1/responses/reconcile",
                    json={
                        "evaluation": _evaluation(),
                        "scan_payload": assignment["scan_payload"],
                        "selections": _correct_selections(row),
                    },
                )
                assert resp.status_code == 200
                data = resp.json()
                assert data["student_id"] == assignment["student_id"]
                assert data["score"] == 8.0
                assert data["total_score"] == 13.0
                assert {r["item_id"] for r in data["responses"]} == {
                    "q1",
                    "q2",
                    "q3",
                    "q4",
                }

    @pytest.mark.asyncio
    async def test_malformed_payload(self) -> None:
        async with _make_client() as client:
            await self._print(client)
            resp = await client.post(
                "/api/v1/responses/reconcile",
                json={
                    "evaluation": _evaluation(),
                    "scan_payload": "ev1|s0",
                    "selections": {},
                },
            )
            assert resp.status_code == 422
            assert resp.json()["code"] == "INVALID_SCAN_PAYLOAD"

    @pytest.mark.asyncio
    async def test_unknown_student(self) -> None:
        async with _make_client() as client:
            await self._print(client)
            resp = await client.post(
                "/api/v1/responses/reconcile",
                json={
                    "evaluation": _evaluation(),
                    "scan_payload": "ev1|ghost|A",
                    "selections": {},
                },
            )
            assert resp.status_code == 404
            assert resp.json()["code"] == "ASSIGNMENT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_key_edited_after_printing(self) -> None:
        async with _make_client() as client:
            printed = await self._print(client)
            assignment = printed["assignments"][0]
            row = next(
                r
                for r in printed["rows"]
                if r["label"] == assignment["row_label"]
            )

            edited = copy.deepcopy(_evaluation())
            first_item = edited["blocks"][0]["items"][0]  # type: ignore[index]
            for i, alt in enumerate(first_item["alternatives"]):
                alt["is_correct"] = i == 3

            resp = await client.post(
                "/api/v1/responses/reconcile",
                json={
                    "evaluation": edited,
                    "scan_payload": assignment["scan_payload"],
                    "selections": _correct_selections(row),
                },
            )
            assert resp.status_code == 422
            data = resp.json()
            assert data["code"] == "VALIDATION_ERROR"
            assert "frozen answer key" in data["message"]
