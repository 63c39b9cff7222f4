import unittest

from fastapi.testclient import TestClient

from storefront.app import create_app
from storefront.auth import hash_password
from storefront.db import InMemoryDbClient, PlanRecord, ProductRecord, UserRecord
from storefront.dependencies import get_db_client, get_image_storage, get_session_store
from storefront.sessions import InMemorySessionStore
from storefront.storage import InMemoryImageStorage

PASSWORD = "hunter22"


class ApiTestCase(unittest.TestCase):
    """Runs the app against fresh in-memory backends for every test."""

    def setUp(self):
        self.db = InMemoryDbClient()
        self.sessions = InMemorySessionStore()
        self.storage = InMemoryImageStorage()
        self.app = create_app()
        self.app.dependency_overrides[get_db_client] = lambda: self.db
        self.app.dependency_overrides[get_session_store] = lambda: self.sessions
        self.app.dependency_overrides[get_image_storage] = lambda: self.storage
        self.client = TestClient(self.app)

    def make_user(self, email="sam@example.com", role="user") -> UserRecord:
        return self.db.add_user(
            UserRecord(
                f_name="Sam",
                l_name="Shopper",
                username=email.split("@")[0],
                address="1 Main St",
                number="555-0100",
                email=email,
                password_hash=hash_password(PASSWORD),
                role=role,
            )
        )

    def login(self, user: UserRecord, client: TestClient | None = None):
        response = (client or self.client).post(
            "/api/login", json={"email": user.email, "password": PASSWORD}
        )
        self.assertEqual(response.status_code, 200, response.text)
        return response

    def login_new_user(self, email="sam@example.com") -> UserRecord:
        user = self.make_user(email)
        self.login(user)
        return user

    def login_admin(self) -> UserRecord:
        admin = self.make_user("boss@example.com", role="admin")
        self.login(admin)
        return admin

    def make_product(self, **overrides) -> ProductRecord:
        fields = {
            "name": "Protein Powder",
            "original_price": 40.0,
            "discounted_price": 30.0,
            "category": "supplements",
            "stock": 10,
        }
        fields.update(overrides)
        return self.db.add_product(ProductRecord(**fields))

    def make_plan(self, **overrides) -> PlanRecord:
        fields = {"plan_name": "Monthly", "price": 29.99, "duration": "monthly"}
        fields.update(overrides)
        return self.db.add_plan(PlanRecord(**fields))
