# tests/test_profiles_api.py
import unittest

from .base import ApiTestCase


class TestAuthentication(ApiTestCase):

    def test_signup_returns_token_and_profile(self):
        token, profile = self.signup("ada@example.com", "mentor", "Ada Lovelace")
        self.assertTrue(token)
        self.assertEqual(profile["role"], "mentor")
        self.assertEqual(profile["email"], "ada@example.com")

        resp = self.client.get("/auth/me", headers=self.auth(token))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["id"], profile["id"])

    def test_mentor_signup_with_empty_expertise_gives_empty_list(self):
        _, profile = self.signup("ada@example.com", "mentor", expertise_areas="")
        self.assertEqual(profile["expertise_areas"], [])

        _, profile = self.signup("alan@example.com", "mentor", expertise_areas=" , ")
        self.assertEqual(profile["expertise_areas"], [])

    def test_comma_separated_expertise_is_trimmed(self):
        _, profile = self.signup(
            "ada@example.com", "mentor", expertise_areas="Python, , Leadership "
        )
        self.assertEqual(profile["expertise_areas"], ["Python", "Leadership"])

    def test_goals_are_dropped_for_mentors(self):
        _, profile = self.signup("ada@example.com", "mentor", learning_goals="Rust")
        self.assertEqual(profile["learning_goals"], [])

    def test_duplicate_email_conflicts(self):
        self.signup("ada@example.com", "mentor")
        resp = self.client.post(
            "/auth/signup",
            json={
                "email": "ADA@example.com",
                "password": "secret123",
                "full_name": "Ada Again",
                "role": "mentee",
            },
        )
        self.assertEqual(resp.status_code, 409)

    def test_invalid_role_is_rejected(self):
        resp = self.client.post(
            "/auth/signup",
            json={
                "email": "x@example.com",
                "password": "secret123",
                "full_name": "X",
                "role": "admin",
            },
        )
        self.assertEqual(resp.status_code, 422)

    def test_short_password_reports_validator_message(self):
        resp = self.client.post(
            "/auth/signup",
            json={
                "email": "x@example.com",
                "password": "abc",
                "full_name": "X",
                "role": "mentee",
            },
        )
        self.assertEqual(resp.status_code, 422)
        errors = resp.json()["detail"]
        self.assertIsInstance(errors, list)
        self.assertIn("at least 6 characters", errors[0]["msg"])
        self.assertEqual(errors[0]["loc"], ["body", "password"])

    def test_signin(self):
        self.signup("ada@example.com", "mentor")
        resp = self.client.post(
            "/auth/signin", json={"email": "ada@example.com", "password": "secret123"}
        )
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()["access_token"])

        resp = self.client.post(
            "/auth/signin", json={"email": "ada@example.com", "password": "wrong-password"}
        )
        self.assertEqual(resp.status_code, 401)

    def test_signout_revokes_existing_tokens(self):
        token, _ = self.signup("ada@example.com", "mentor")
        resp = self.client.post("/auth/signout", headers=self.auth(token))
        self.assertEqual(resp.status_code, 200)

        resp = self.client.get("/auth/me", headers=self.auth(token))
        self.assertEqual(resp.status_code, 401)

        resp = self.client.post(
            "/auth/signin", json={"email": "ada@example.com", "password": "secret123"}
        )
        fresh = resp.json()["access_token"]
        self.assertEqual(self.client.get("/auth/me", headers=self.auth(fresh)).status_code, 200)

    def test_refresh_issues_working_token(self):
        token, _ = self.signup("ada@example.com", "mentor")
        resp = self.client.post("/auth/refresh", headers=self.auth(token))
        self.assertEqual(resp.status_code, 200)
        refreshed = resp.json()["access_token"]
        self.assertEqual(self.client.get("/profiles/me", headers=self.auth(refreshed)).status_code, 200)

    def test_garbage_token_is_unauthorized(self):
        resp = self.client.get("/auth/me", headers=self.auth("not-a-jwt"))
        self.assertEqual(resp.status_code, 401)

    def test_missing_token(self):
        resp = self.client.get("/profiles/me")
        self.assertIn(resp.status_code, (401, 403))

    def test_responses_carry_request_id(self):
        resp = self.client.get("/health", headers={"X-Request-ID": "req-42"})
        self.assertEqual(resp.headers["X-Request-ID"], "req-42")
        self.assertTrue(self.client.get("/health").headers.get("X-Request-ID"))


class TestProfiles(ApiTestCase):

    def test_update_own_profile(self):
        token, _ = self.signup("ada@example.com", "mentor", department="Research")
        resp = self.client.patch(
            "/profiles/me",
            json={"bio": "Analytical engines", "department": "  ", "expertise_areas": "Math,Poetry"},
            headers=self.auth(token),
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        self.assertEqual(body["bio"], "Analytical engines")
        self.assertIsNone(body["department"])
        self.assertEqual(body["expertise_areas"], ["Math", "Poetry"])

    def test_mentee_cannot_set_expertise(self):
        token, _ = self.signup("grace@example.com", "mentee")
        resp = self.client.patch(
            "/profiles/me", json={"expertise_areas": ["COBOL"]}, headers=self.auth(token)
        )
        self.assertEqual(resp.status_code, 400)

    def test_get_profile_by_id(self):
        _, mentor = self.signup("ada@example.com", "mentor")
        token, _ = self.signup("grace@example.com", "mentee")
        resp = self.client.get(f"/profiles/{mentor['id']}", headers=self.auth(token))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["full_name"], mentor["full_name"])

        resp = self.client.get("/profiles/does-not-exist", headers=self.auth(token))
        self.assertEqual(resp.status_code, 404)


class TestMentorDiscovery(ApiTestCase):

    def test_list_and_search_mentors(self):
        self.signup("ada@example.com", "mentor", "Ada Lovelace", expertise_areas="Python")
        self.signup("alan@example.com", "mentor", "Alan Turing", department="Cryptography")
        token, _ = self.signup("grace@example.com", "mentee")

        resp = self.client.get("/mentors", headers=self.auth(token))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.json()), 2)

        resp = self.client.get("/mentors", params={"search": "python"}, headers=self.auth(token))
        self.assertEqual([m["full_name"] for m in resp.json()], ["Ada Lovelace"])

        resp = self.client.get("/mentors", params={"search": "CRYPTO"}, headers=self.auth(token))
        self.assertEqual([m["full_name"] for m in resp.json()], ["Alan Turing"])

    def test_mentor_stats_count_completed_sessions(self):
        mentor_token, mentor, mentee_token, _ = self.mentor_and_mentee()
        first = self.book(mentee_token, mentor["id"]).json()["id"]
        self.book(mentee_token, mentor["id"], time="10:00")
        self.client.post(f"/sessions/{first}/complete", headers=self.auth(mentor_token))
        self.client.post(
            f"/sessions/{first}/feedback", json={"rating": 5}, headers=self.auth(mentee_token)
        )

        resp = self.client.get("/mentors", headers=self.auth(mentee_token))
        card = resp.json()[0]
        self.assertEqual(card["session_count"], 1)
        self.assertEqual(card["avg_rating"], 5)


if __name__ == "__main__":
    unittest.main()
