# tests/base.py
import unittest

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mentorlink.database import Base, get_db
from mentorlink.main import app


class ApiTestCase(unittest.TestCase):
    """Runs the app against a fresh in-memory database per test"""

    def setUp(self):
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(bind=self.engine)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

        def override_get_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        Base.metadata.drop_all(bind=self.engine)
        self.engine.dispose()

    # Helpers
    def signup(self, email, role, full_name=None, **extra):
        payload = {
            "email": email,
            "password": "secret123",
            "full_name": full_name or email.split("@")[0].title(),
            "role": role,
        }
        payload.update(extra)
        resp = self.client.post("/auth/signup", json=payload)
        self.assertEqual(resp.status_code, 201, resp.text)
        body = resp.json()
        return body["access_token"], body["profile"]

    @staticmethod
    def auth(token):
        return {"Authorization": f"Bearer {token}"}

    def add_window(self, token, day_of_week=1, start_time="09:00", end_time="10:00"):
        resp = self.client.post(
            "/availability",
            json={"day_of_week": day_of_week, "start_time": start_time, "end_time": end_time},
            headers=self.auth(token),
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def book(self, token, mentor_id, date="2025-03-10", time="09:00", duration_minutes=60):
        return self.client.post(
            "/sessions",
            json={
                "mentor_id": mentor_id,
                "date": date,
                "time": time,
                "duration_minutes": duration_minutes,
            },
            headers=self.auth(token),
        )

    def mentor_and_mentee(self):
        mentor_token, mentor = self.signup(
            "ada@example.com", "mentor", "Ada Lovelace", expertise_areas="Python, Leadership"
        )
        mentee_token, mentee = self.signup(
            "grace@example.com", "mentee", "Grace Hopper", learning_goals="Compilers"
        )
        return mentor_token, mentor, mentee_token, mentee
