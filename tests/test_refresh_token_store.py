"""Tests for RefreshTokenStore: record, lookup, owner-scoped removal and purge."""

import unittest
from datetime import UTC, datetime, timedelta

from blog_api.models import RefreshToken, User
from blog_api.services.refresh_tokens import RefreshTokenStore
from tests.helpers import PASSWORD, DatabaseTestCase


class TestRefreshTokenStore(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice = User.create(username="alice", email="alice@example.com", password=PASSWORD)
        self.bob = User.create(username="bob", email="bob@example.com", password=PASSWORD)
        self.db.add_all([self.alice, self.bob])
        self.db.commit()
        self.store = RefreshTokenStore(self.db)
        self.later = datetime.now(UTC) + timedelta(days=7)

    def test_record_then_exists(self) -> None:
        self.store.record("tok-a", self.alice.id, self.later)
        self.db.commit()
        self.assertTrue(self.store.exists("tok-a"))
        self.assertFalse(self.store.exists("tok-unknown"))
        self.assertEqual(self.store.owner_of("tok-a"), self.alice.id)
        self.assertIsNone(self.store.owner_of("tok-unknown"))

    def test_remove_is_idempotent(self) -> None:
        self.store.record("tok-a", self.alice.id, self.later)
        self.db.commit()
        self.assertEqual(self.store.remove("tok-a"), 1)
        self.assertEqual(self.store.remove("tok-a"), 0)
        self.assertFalse(self.store.exists("tok-a"))

    def test_remove_scoped_to_owner(self) -> None:
        self.store.record("tok-a", self.alice.id, self.later)
        self.db.commit()
        self.assertEqual(self.store.remove("tok-a", user_id=self.bob.id), 0)
        self.assertTrue(self.store.exists("tok-a"))
        self.assertEqual(self.store.remove("tok-a", user_id=self.alice.id), 1)

    def test_multiple_tokens_per_user(self) -> None:
        self.store.record("tok-1", self.alice.id, self.later)
        self.store.record("tok-2", self.alice.id, self.later)
        self.store.record("tok-3", self.bob.id, self.later)
        self.db.commit()
        self.store.remove("tok-1")
        self.assertTrue(self.store.exists("tok-2"))
        self.assertEqual(self.store.remove_all_for_user(self.alice.id), 1)
        self.assertTrue(self.store.exists("tok-3"))

    def test_purge_expired_keeps_live_tokens(self) -> None:
        now = datetime.now(UTC)
        self.store.record("old", self.alice.id, now - timedelta(days=1))
        self.store.record("live", self.alice.id, self.later)
        self.db.commit()
        self.assertEqual(self.store.purge_expired(now), 1)
        self.db.commit()
        self.assertFalse(self.store.exists("old"))
        self.assertTrue(self.store.exists("live"))

    def test_deleting_user_removes_tokens(self) -> None:
        self.store.record("tok-a", self.alice.id, self.later)
        self.db.commit()
        self.db.delete(self.alice)
        self.db.commit()
        self.assertEqual(self.db.query(RefreshToken).count(), 0)


if __name__ == "__main__":
    unittest.main()
