# tests/test_notifications.py
import asyncio
import unittest
from unittest import mock

from mentorlink.domain.notifications.repository import NotificationRepository
from mentorlink.domain.notifications.service import (
    NotificationService,
    format_local_date,
    format_local_time,
)
from mentorlink.models import MentorshipSession, Notification, NotificationOutbox
from mentorlink.realtime import NotificationHub

from .base import ApiTestCase


class TestFormatting(unittest.TestCase):

    def test_us_style_date_and_time(self):
        from datetime import datetime

        self.assertEqual(format_local_date(datetime(2025, 3, 10, 9, 0)), "3/10/2025")
        self.assertEqual(format_local_time(datetime(2025, 3, 10, 9, 0)), "9:00:00 AM")
        self.assertEqual(format_local_time(datetime(2025, 3, 10, 0, 5)), "12:05:00 AM")
        self.assertEqual(format_local_time(datetime(2025, 3, 10, 13, 30)), "1:30:00 PM")


class TestHub(unittest.TestCase):

    def test_publish_reaches_only_the_recipient(self):
        hub = NotificationHub()

        async def scenario():
            mine = hub.subscribe("u1")
            other = hub.subscribe("u2")
            self.assertEqual(hub.publish("u1", {"message": "hi"}), 1)
            payload = await asyncio.wait_for(mine.get(), timeout=1)
            self.assertEqual(payload, {"message": "hi"})
            self.assertTrue(other.empty())
            hub.unsubscribe("u1", mine)
            self.assertEqual(hub.subscriber_count("u1"), 0)
            self.assertEqual(hub.publish("u1", {"message": "gone"}), 0)

        asyncio.run(scenario())


class TestInbox(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.mentor_token, self.mentor, self.mentee_token, self.mentee = self.mentor_and_mentee()
        self.session_id = self.book(self.mentee_token, self.mentor["id"]).json()["id"]

    def test_list_and_mark_read(self):
        resp = self.client.get("/notifications", headers=self.auth(self.mentor_token))
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["unread_count"], 1)
        notification_id = body["notifications"][0]["id"]

        resp = self.client.post(
            f"/notifications/{notification_id}/read", headers=self.auth(self.mentor_token)
        )
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()["is_read"])

        body = self.client.get("/notifications", headers=self.auth(self.mentor_token)).json()
        self.assertEqual(body["unread_count"], 0)

    def test_cannot_mark_someone_elses_notification(self):
        body = self.client.get("/notifications", headers=self.auth(self.mentor_token)).json()
        notification_id = body["notifications"][0]["id"]
        resp = self.client.post(
            f"/notifications/{notification_id}/read", headers=self.auth(self.mentee_token)
        )
        self.assertEqual(resp.status_code, 404)

    def test_mark_all_read(self):
        self.book(self.mentee_token, self.mentor["id"], time="11:00")
        resp = self.client.post("/notifications/read-all", headers=self.auth(self.mentor_token))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["updated"], 2)

        body = self.client.get("/notifications", headers=self.auth(self.mentor_token)).json()
        self.assertEqual(body["unread_count"], 0)
        mentee_body = self.client.get("/notifications", headers=self.auth(self.mentee_token)).json()
        self.assertEqual(mentee_body["unread_count"], 2)

    def test_list_is_limited_and_newest_first(self):
        with mock.patch("mentorlink.domain.notifications.service.NOTIFICATION_LIST_LIMIT", 2):
            for hour in ("10:00", "11:00"):
                self.book(self.mentee_token, self.mentor["id"], time=hour)
            body = self.client.get("/notifications", headers=self.auth(self.mentor_token)).json()
        self.assertEqual(len(body["notifications"]), 2)
        created = [n["created_at"] for n in body["notifications"]]
        self.assertEqual(created, sorted(created, reverse=True))


class TestOutboxRetry(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.mentor_token, self.mentor, self.mentee_token, self.mentee = self.mentor_and_mentee()

    def test_failed_dispatch_never_fails_booking_and_is_retried(self):
        with mock.patch.object(
            NotificationRepository, "create_notification", side_effect=RuntimeError("store down")
        ):
            resp = self.book(self.mentee_token, self.mentor["id"])
        self.assertEqual(resp.status_code, 201, resp.text)

        db = self.SessionLocal()
        try:
            self.assertEqual(db.query(MentorshipSession).count(), 1)
            self.assertEqual(db.query(Notification).count(), 0)
            pending = db.query(NotificationOutbox).all()
            self.assertEqual(len(pending), 2)
            for entry in pending:
                self.assertEqual(entry.status, "pending")
                self.assertEqual(entry.attempts, 1)
                self.assertIn("store down", entry.last_error)

            result = NotificationService(db, publisher=NotificationHub()).dispatch()
            self.assertEqual(result, {"dispatched": 2, "failed": 0})
            self.assertEqual(db.query(Notification).count(), 2)
            self.assertEqual(
                {e.status for e in db.query(NotificationOutbox).all()}, {"dispatched"}
            )
        finally:
            db.close()

    def test_entries_give_up_after_max_attempts(self):
        with mock.patch.object(
            NotificationRepository, "create_notification", side_effect=RuntimeError("store down")
        ), mock.patch("mentorlink.domain.notifications.service.OUTBOX_MAX_ATTEMPTS", 2):
            self.book(self.mentee_token, self.mentor["id"])
            db = self.SessionLocal()
            try:
                NotificationService(db, publisher=NotificationHub()).dispatch()
                statuses = {e.status for e in db.query(NotificationOutbox).all()}
                self.assertEqual(statuses, {"failed"})
                self.assertEqual(
                    NotificationService(db).dispatch(), {"dispatched": 0, "failed": 0}
                )
            finally:
                db.close()

    def test_claim_succeeds_once(self):
        with mock.patch.object(
            NotificationRepository, "create_notification", side_effect=RuntimeError("store down")
        ):
            self.book(self.mentee_token, self.mentor["id"])

        db = self.SessionLocal()
        try:
            entry_id = db.query(NotificationOutbox).first().id
            self.assertTrue(NotificationRepository.claim_outbox_entry(db, entry_id))
            self.assertFalse(NotificationRepository.claim_outbox_entry(db, entry_id))
            db.commit()
            entry = db.query(NotificationOutbox).filter(NotificationOutbox.id == entry_id).one()
            self.assertEqual(entry.status, "dispatched")
            self.assertEqual(entry.attempts, 2)
            self.assertIsNone(entry.last_error)
        finally:
            db.close()

    def test_stale_dispatcher_does_not_deliver_twice(self):
        with mock.patch.object(
            NotificationRepository, "create_notification", side_effect=RuntimeError("store down")
        ):
            self.book(self.mentee_token, self.mentor["id"])

        first = self.SessionLocal()
        second = self.SessionLocal()
        try:
            # The second dispatcher read the batch before the first one delivered it
            stale_batch = second.query(NotificationOutbox).all()
            self.assertEqual({e.status for e in stale_batch}, {"pending"})

            result = NotificationService(first, publisher=NotificationHub()).dispatch()
            self.assertEqual(result, {"dispatched": 2, "failed": 0})

            with mock.patch.object(
                NotificationRepository, "list_pending_outbox", return_value=stale_batch
            ):
                result = NotificationService(second, publisher=NotificationHub()).dispatch()
            self.assertEqual(result, {"dispatched": 0, "failed": 0})
            self.assertEqual(first.query(Notification).count(), 2)
        finally:
            second.close()
            first.close()

    def test_worker_task_dispatches_pending_entries(self):
        from mentorlink import worker

        with mock.patch.object(
            NotificationRepository, "create_notification", side_effect=RuntimeError("store down")
        ):
            self.book(self.mentee_token, self.mentor["id"])

        with mock.patch.object(worker, "SessionLocal", self.SessionLocal):
            result = asyncio.run(worker.dispatch_notification_outbox_task({}))
        self.assertEqual(result["dispatched"], 2)


class TestRealtime(ApiTestCase):

    def test_websocket_receives_new_notification(self):
        mentor_token, mentor, mentee_token, _ = self.mentor_and_mentee()

        with self.client.websocket_connect(f"/notifications/ws?token={mentor_token}") as ws:
            resp = self.book(mentee_token, mentor["id"])
            self.assertEqual(resp.status_code, 201)
            payload = ws.receive_json()

        self.assertEqual(payload["type"], "session_scheduled")
        self.assertEqual(payload["user_id"], mentor["id"])
        self.assertEqual(payload["session_id"], resp.json()["id"])

    def test_websocket_rejects_bad_token(self):
        from starlette.websockets import WebSocketDisconnect

        with self.assertRaises(WebSocketDisconnect):
            with self.client.websocket_connect("/notifications/ws?token=bad") as ws:
                ws.receive_json()


if __name__ == "__main__":
    unittest.main()
