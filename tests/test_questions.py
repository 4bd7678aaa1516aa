"""문항 REST API 테스트.

Question REST API tests — CRUD, criteria search and the per-question
image listing.
"""

import uuid

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.conftest import make_image, make_question, make_quiz

URL = "/api/questions"
ALERT = "X-quizPracticeApp-alert"


class TestQuestionCreate:
    """POST /api/questions"""

    async def test_create(self, client: AsyncClient, quiz):
        res = await client.post(URL, json={
            "quiz_id": str(quiz.id),
            "content": "Largest bone?",
            "options": ["Femur", "Ulna"],
            "correct_answer": "Femur",
            "position": 2,
        })
        assert res.status_code == 201

        body = res.json()
        assert body["quiz_id"] == str(quiz.id)
        assert body["options"] == ["Femur", "Ulna"]
        assert body["position"] == 2
        assert res.headers["Location"] == f"{URL}/{body['id']}"
        assert res.headers[ALERT] == f"A new question is created with identifier {body['id']}"

    async def test_create_defaults(self, client: AsyncClient, quiz):
        res = await client.post(URL, json={"quiz_id": str(quiz.id), "content": "Open question"})
        assert res.status_code == 201
        assert res.json()["options"] == []
        assert res.json()["position"] == 0

    async def test_create_unknown_quiz(self, client: AsyncClient):
        """존재하지 않는 퀴즈 — 400."""
        res = await client.post(URL, json={"quiz_id": str(uuid.uuid4()), "content": "Orphan?"})
        assert res.status_code == 400

    async def test_create_negative_position(self, client: AsyncClient, quiz):
        res = await client.post(URL, json={"quiz_id": str(quiz.id), "content": "Q", "position": -1})
        assert res.status_code == 400

    async def test_create_with_id_rejected(self, client: AsyncClient, quiz):
        res = await client.post(URL, json={"id": str(uuid.uuid4()), "quiz_id": str(quiz.id), "content": "Q"})
        assert res.status_code == 400

    async def test_create_position_beyond_int4(self, client: AsyncClient, quiz):
        res = await client.post(URL, json={"quiz_id": str(quiz.id), "content": "Q", "position": 2**31})
        assert res.status_code == 400


class TestQuestionUpdate:
    """PUT / PATCH /api/questions/{id}"""

    async def test_put(self, client: AsyncClient, quiz, question):
        res = await client.put(f"{URL}/{question.id}", json={
            "quiz_id": str(quiz.id),
            "content": "Smallest bone?",
            "options": ["Stapes"],
        })
        assert res.status_code == 200
        body = res.json()
        assert body["content"] == "Smallest bone?"
        assert body["correct_answer"] is None

    async def test_put_missing(self, client: AsyncClient, quiz):
        res = await client.put(f"{URL}/{uuid.uuid4()}", json={"quiz_id": str(quiz.id), "content": "Q"})
        assert res.status_code == 404

    async def test_patch(self, client: AsyncClient, question):
        res = await client.patch(f"{URL}/{question.id}", json={"correct_answer": "Tibia"})
        assert res.status_code == 200
        body = res.json()
        assert body["correct_answer"] == "Tibia"
        assert body["options"] == ["Femur", "Tibia", "Ulna"]

    async def test_patch_unknown_quiz(self, client: AsyncClient, question):
        res = await client.patch(f"{URL}/{question.id}", json={"quiz_id": str(uuid.uuid4())})
        assert res.status_code == 400


class TestQuestionQuery:
    """GET /api/questions, /count, /{id}, /{id}/images"""

    async def test_filter_by_quiz(self, client: AsyncClient, db: AsyncSession, quiz):
        other = await make_quiz(db, "Muscles")
        for position in range(3):
            await make_question(db, quiz, position=position)
        await make_question(db, other)

        res = await client.get(URL, params={"quiz_id.equals": str(quiz.id), "sort": "position,asc"})
        assert res.status_code == 200
        assert [q["position"] for q in res.json()] == [0, 1, 2]
        assert res.headers["X-Total-Count"] == "3"

    async def test_position_range(self, client: AsyncClient, db: AsyncSession, quiz):
        for position in range(6):
            await make_question(db, quiz, position=position)

        res = await client.get(f"{URL}/count", params={
            "position.greaterThanOrEqual": 2,
            "position.lessThanOrEqual": 4,
        })
        assert res.json() == 3

    async def test_position_bound_beyond_int4(self, client: AsyncClient):
        res = await client.get(URL, params={"position.greaterThanOrEqual": 10**20})
        assert res.status_code == 400

    async def test_contains_on_uuid_rejected(self, client: AsyncClient):
        res = await client.get(URL, params={"quiz_id.contains": "abc"})
        assert res.status_code == 400

    async def test_get(self, client: AsyncClient, question):
        res = await client.get(f"{URL}/{question.id}")
        assert res.status_code == 200
        assert res.json()["content"] == "Which bone?"

    async def test_get_missing(self, client: AsyncClient):
        assert (await client.get(f"{URL}/{uuid.uuid4()}")).status_code == 404

    async def test_images_of_question(self, client: AsyncClient, db: AsyncSession, question):
        await make_image(db, "diagram", question_id=question.id)
        await make_image(db, "unrelated")

        res = await client.get(f"{URL}/{question.id}/images")
        assert res.status_code == 200
        assert [i["title"] for i in res.json()] == ["diagram"]

    async def test_images_of_missing_question(self, client: AsyncClient):
        res = await client.get(f"{URL}/{uuid.uuid4()}/images")
        assert res.status_code == 404


class TestQuestionDelete:
    """DELETE /api/questions/{id}"""

    async def test_delete_detaches_images(self, client: AsyncClient, db: AsyncSession, question):
        """문항 삭제 시 이미지는 남고 question_id는 null."""
        image_id = (await make_image(db, "diagram", question_id=question.id)).id

        res = await client.delete(f"{URL}/{question.id}")
        assert res.status_code == 204

        db.expire_all()
        img = await client.get(f"/api/images/{image_id}")
        assert img.status_code == 200
        assert img.json()["question_id"] is None

    async def test_delete_unknown(self, client: AsyncClient):
        assert (await client.delete(f"{URL}/{uuid.uuid4()}")).status_code == 204
