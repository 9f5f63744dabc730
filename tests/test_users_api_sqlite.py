"""End-to-end HTTP tests through the app lifespan, get_db and UserStore over in-memory aiosqlite."""

import unittest

from fastapi.testclient import TestClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine

from usersapi.core.security import verify_password
from usersapi.main import app
from usersapi.models import Base, User
from usersapi.models.user import MAX_USER_ID

CREATE_BODY = {
    "firstname": "A",
    "fullname": "B C",
    "lastname": "C",
    "username": "bc",
    "password": "secret1",
    "status": "active",
}


async def _create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def _drop_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def _stored_hash(engine: AsyncEngine, user_id: int) -> str | None:
    async with engine.connect() as conn:
        result = await conn.execute(select(User.password_hash).where(User.id == user_id))
        return result.scalar_one_or_none()


class SqliteApiTestCase(unittest.TestCase):
    """Runs the real lifespan (fresh in-memory database per test) and creates tbl_users."""

    def setUp(self) -> None:
        app.dependency_overrides.clear()
        self.client = self.enterContext(TestClient(app))
        self.engine: AsyncEngine = app.state.engine
        self.client.portal.call(_create_tables, self.engine)

    def stored_hash(self, user_id: int) -> str | None:
        return self.client.portal.call(_stored_hash, self.engine, user_id)


class TestUserLifecycle(SqliteApiTestCase):
    def test_create_update_delete_scenario(self) -> None:
        created = self.client.post("/users", json=CREATE_BODY)
        self.assertEqual(created.status_code, 200)
        body = created.json()
        user_id = body["id"]
        self.assertIsInstance(user_id, int)
        self.assertGreater(user_id, 0)
        self.assertNotIn("password", body)
        self.assertNotIn("passwordHash", body)

        original_hash = self.stored_hash(user_id)
        self.assertNotEqual(original_hash, "secret1")
        self.assertTrue(verify_password("secret1", original_hash))

        resp = self.client.put(f"/users/{user_id}", json={"username": "bc2"})
        self.assertEqual(resp.json(), {"message": "User updated successfully"})
        fetched = self.client.get(f"/users/{user_id}").json()
        self.assertEqual(fetched["username"], "bc2")
        self.assertEqual(fetched["fullname"], "B C")
        self.assertEqual(self.stored_hash(user_id), original_hash)

        self.client.put(f"/users/{user_id}", json={"password": "newsecret"})
        new_hash = self.stored_hash(user_id)
        self.assertNotEqual(new_hash, original_hash)
        self.assertTrue(verify_password("newsecret", new_hash))

        deleted = self.client.delete(f"/users/{user_id}")
        self.assertEqual(deleted.json(), {"message": f"User {user_id} deleted successfully"})
        self.assertEqual(self.client.get(f"/users/{user_id}").status_code, 404)
        again = self.client.delete(f"/users/{user_id}")
        self.assertEqual(again.status_code, 404)
        self.assertEqual(again.json(), {"message": "User not found"})

    def test_form_body_create_and_list(self) -> None:
        created = self.client.post("/users", data=CREATE_BODY).json()
        listed = self.client.get("/users").json()
        self.assertEqual(listed, [created])

    def test_ping(self) -> None:
        resp = self.client.get("/ping")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")


class TestIdBoundaries(SqliteApiTestCase):
    """Ids that do not exist are 404 whether or not the column could hold them."""

    def test_missing_ids_are_404(self) -> None:
        for user_id in (10**20, 2**31, MAX_USER_ID, 0):
            for method, body in (("GET", None), ("PUT", {"username": "x"}), ("DELETE", None)):
                with self.subTest(method=method, user_id=user_id):
                    kwargs = {"json": body} if body is not None else {}
                    resp = self.client.request(method, f"/users/{user_id}", **kwargs)
                    self.assertEqual(resp.status_code, 404)
                    self.assertEqual(resp.json(), {"message": "User not found"})


class TestStoreErrors(SqliteApiTestCase):
    """Real SQLAlchemy errors surface as generic JSON 500s."""

    def test_duplicate_username_is_insert_failed(self) -> None:
        self.assertEqual(self.client.post("/users", json=CREATE_BODY).status_code, 200)
        resp = self.client.post("/users", json=CREATE_BODY)
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "Insert failed"})

    def test_missing_table_is_query_failed(self) -> None:
        self.client.portal.call(_drop_tables, self.engine)
        resp = self.client.get("/users")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "Query failed"})
        self.assertNotIn("tbl_users", resp.text)


if __name__ == "__main__":
    unittest.main()
