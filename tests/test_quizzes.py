"""퀴즈 REST API 테스트.

Quiz REST API tests — CRUD, question counts and cascading delete.
"""

import uuid

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.conftest import make_question, make_quiz

URL = "/api/quizzes"
ALERT = "X-quizPracticeApp-alert"


class TestQuizCreate:
    """POST /api/quizzes"""

    async def test_create(self, client: AsyncClient):
        res = await client.post(URL, json={"title": "Skeleton", "description": "Bones", "time_limit": 20})
        assert res.status_code == 201

        body = res.json()
        assert body["title"] == "Skeleton"
        assert body["time_limit"] == 20
        assert body["question_count"] == 0
        assert res.headers["Location"] == f"{URL}/{body['id']}"
        assert res.headers[ALERT] == f"A new quiz is created with identifier {body['id']}"

    async def test_create_zero_time_limit(self, client: AsyncClient):
        res = await client.post(URL, json={"title": "Skeleton", "time_limit": 0})
        assert res.status_code == 400

    async def test_create_empty_title(self, client: AsyncClient):
        res = await client.post(URL, json={"title": ""})
        assert res.status_code == 400

    async def test_create_huge_time_limit(self, client: AsyncClient):
        """int4 범위를 넘는 time_limit은 400."""
        res = await client.post(URL, json={"title": "Skeleton", "time_limit": 10**20})
        assert res.status_code == 400


class TestQuizUpdate:
    """PUT / PATCH /api/quizzes/{id}"""

    async def test_put(self, client: AsyncClient, quiz):
        res = await client.put(f"{URL}/{quiz.id}", json={"id": str(quiz.id), "title": "Renamed"})
        assert res.status_code == 200
        body = res.json()
        assert body["title"] == "Renamed"
        assert body["description"] is None
        assert res.headers[ALERT] == f"A quiz is updated with identifier {quiz.id}"

    async def test_put_id_mismatch(self, client: AsyncClient, quiz):
        res = await client.put(f"{URL}/{quiz.id}", json={"id": str(uuid.uuid4()), "title": "Renamed"})
        assert res.status_code == 400

    async def test_patch(self, client: AsyncClient, quiz):
        res = await client.patch(f"{URL}/{quiz.id}", json={"time_limit": 60})
        assert res.status_code == 200
        body = res.json()
        assert body["time_limit"] == 60
        assert body["description"] == "Intro to bones"

    async def test_patch_huge_time_limit(self, client: AsyncClient, quiz):
        res = await client.patch(f"{URL}/{quiz.id}", json={"time_limit": 2**31})
        assert res.status_code == 400

    async def test_patch_missing(self, client: AsyncClient):
        assert (await client.patch(f"{URL}/{uuid.uuid4()}", json={"title": "x"})).status_code == 404


class TestQuizQuery:
    """GET /api/quizzes, /count, /{id}"""

    async def test_question_count(self, client: AsyncClient, db: AsyncSession, quiz):
        for position in range(4):
            await make_question(db, quiz, position=position)

        res = await client.get(f"{URL}/{quiz.id}")
        assert res.status_code == 200
        assert res.json()["question_count"] == 4

    async def test_list_and_count(self, client: AsyncClient, db: AsyncSession):
        await make_quiz(db, "Skeleton", time_limit=10)
        await make_quiz(db, "Muscles", time_limit=30)
        await make_quiz(db, "Nerves")

        res = await client.get(URL, params={"time_limit.specified": "true", "sort": "time_limit,desc"})
        assert res.status_code == 200
        assert [q["title"] for q in res.json()] == ["Muscles", "Skeleton"]

        count = await client.get(f"{URL}/count", params={"title.contains": "s"})
        assert count.json() == 3

    async def test_get_missing(self, client: AsyncClient):
        assert (await client.get(f"{URL}/{uuid.uuid4()}")).status_code == 404


class TestQuizDelete:
    """DELETE /api/quizzes/{id}"""

    async def test_delete_cascades_to_questions(self, client: AsyncClient, db: AsyncSession, quiz, question):
        """퀴즈 삭제 시 문항도 삭제."""
        res = await client.delete(f"{URL}/{quiz.id}")
        assert res.status_code == 204

        assert (await client.get(f"{URL}/{quiz.id}")).status_code == 404
        assert (await client.get(f"/api/questions/{question.id}")).status_code == 404

    async def test_delete_unknown(self, client: AsyncClient):
        assert (await client.delete(f"{URL}/{uuid.uuid4()}")).status_code == 204
