"""
Tests for the storage adapters: same contract for the SQL and local JSON backends.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from financekeem.database import create_db_engine, create_session_factory
from financekeem.errors import Conflict, NotFound, StorageUnavailable, ValidationError
from financekeem.storage import COLLECTIONS, LocalStore, SqlStore
from financekeem.storage.sql import integrity_error


class TestStoreContract:
    """Tests run against both backends."""

    def test_create_assigns_id_and_timestamps(self, store):
        record = store.create("leads", {"name": "Ann", "email": "ann@example.com"})

        assert record["id"]
        assert record["status"] == "new"
        assert record["created_at"] is not None
        assert record["updated_at"] is not None
        assert store.get_by_id("leads", record["id"]) == record

    def test_get_newest_first(self, store):
        first = store.create("forms", {"name": "One", "slug": "one-aaaaaa", "fields": []})
        second = store.create("forms", {"name": "Two", "slug": "two-bbbbbb", "fields": []})

        ids = [r["id"] for r in store.get("forms")]
        assert set(ids) == {first["id"], second["id"]}
        assert store.get("forms")[0]["created_at"] >= store.get("forms")[1]["created_at"]

    def test_find_by_field(self, store):
        record = store.create("leads", {"email": "find@example.com"})

        assert store.find_by_field("leads", "email", "find@example.com")["id"] == record["id"]
        assert store.find_by_field("leads", "email", "none@example.com") is None

    def test_filter_by_several_fields(self, store):
        store.create("bookings", {
            "client_name": "A", "client_email": "a@example.com",
            "scheduled_date": "2030-01-14", "scheduled_time": "09:00",
        })
        store.create("bookings", {
            "client_name": "B", "client_email": "b@example.com",
            "scheduled_date": "2030-01-14", "scheduled_time": "10:00", "status": "cancelled",
        })

        found = store.filter("bookings", scheduled_date="2030-01-14", status="scheduled")
        assert [b["client_name"] for b in found] == ["A"]

    def test_update_patches_and_refreshes_updated_at(self, store):
        record = store.create("leads", {"name": "Ann", "email": "ann@example.com"})
        updated = store.update("leads", record["id"], {"phone": "555-0100", "id": "other", "unknown": 1})

        assert updated["id"] == record["id"]
        assert updated["phone"] == "555-0100"
        assert updated["name"] == "Ann"
        assert updated["created_at"] == record["created_at"]
        assert updated["updated_at"] >= record["updated_at"]

    def test_update_missing_raises(self, store):
        with pytest.raises(NotFound):
            store.update("leads", "missing", {"name": "x"})

    def test_delete(self, store):
        record = store.create("leads", {"email": "gone@example.com"})
        store.delete("leads", record["id"])

        assert store.get_by_id("leads", record["id"]) is None
        with pytest.raises(NotFound):
            store.delete("leads", record["id"])

    def test_unique_email(self, store):
        store.create("leads", {"email": "dup@example.com"})
        with pytest.raises(Conflict):
            store.create("leads", {"email": "dup@example.com"})
        assert len(store.get("leads")) == 1

    def test_empty_emails_do_not_collide(self, store):
        store.create("leads", {"name": "One"})
        store.create("leads", {"name": "Two"})
        assert len(store.get("leads")) == 2

    def test_unique_booking_slot(self, store):
        booking = {
            "client_name": "A", "client_email": "a@example.com",
            "scheduled_date": "2030-01-14", "scheduled_time": "09:00",
        }
        store.create("bookings", booking)
        with pytest.raises(Conflict):
            store.create("bookings", dict(booking))

    def test_update_into_existing_email_conflicts(self, store):
        store.create("leads", {"email": "taken@example.com"})
        other = store.create("leads", {"email": "free@example.com"})
        with pytest.raises(Conflict):
            store.update("leads", other["id"], {"email": "taken@example.com"})

    def test_null_for_required_field_rejected(self, store):
        """Test that a NOT NULL column cannot be patched to None."""
        booking = store.create("bookings", {
            "client_name": "A", "client_email": "a@example.com",
            "scheduled_date": "2030-01-14", "scheduled_time": "09:00",
        })

        with pytest.raises(ValidationError) as exc_info:
            store.update("bookings", booking["id"], {"status": None})

        assert exc_info.value.field == "status"
        assert store.get_by_id("bookings", booking["id"])["status"] == "scheduled"

    def test_null_cleared_optional_field(self, store):
        lead = store.create("leads", {"email": "opt@example.com", "phone": "555"})
        assert store.update("leads", lead["id"], {"phone": None})["phone"] is None

    def test_unknown_collection(self, store):
        with pytest.raises(ValueError):
            store.get("appointments")

    def test_clear(self, store):
        store.create("leads", {"email": "a@example.com"})
        store.create("quiz_responses", {"answers": {"p1": "intentional"}})
        store.clear()

        for collection in COLLECTIONS:
            assert store.get(collection) == []

    def test_ping(self, store):
        assert store.ping() is True

    def test_json_fields_round_trip(self, store):
        record = store.create("leads", {
            "email": "json@example.com",
            "pillar_scores": {"protection": 9, "alignment": 5, "oversight": 0},
            "form_data": {"topics": ["estate", "insurance"], "consent": True},
        })

        stored = store.get_by_id("leads", record["id"])
        assert stored["pillar_scores"] == {"protection": 9, "alignment": 5, "oversight": 0}
        assert stored["form_data"] == {"topics": ["estate", "insurance"], "consent": True}


class TestLocalStore:
    """Tests specific to the JSON file backend."""

    def test_data_survives_new_instance(self, tmp_path):
        path = tmp_path / "store.json"
        record = LocalStore(path).create("leads", {"email": "keep@example.com"})

        reloaded = LocalStore(path).get_by_id("leads", record["id"])
        assert reloaded == record

    def test_missing_file_is_empty(self, tmp_path):
        assert LocalStore(tmp_path / "nothing.json").get("leads") == []

    def test_corrupt_file_unavailable(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")
        store = LocalStore(path)

        with pytest.raises(StorageUnavailable):
            store.get("leads")
        assert store.ping() is False


class TestSqlStore:
    """Tests specific to the SQL backend."""

    def test_unreachable_database(self, tmp_path):
        engine = create_db_engine(f"sqlite:///{tmp_path}/missing/dir/db.sqlite")
        store = SqlStore(create_session_factory(engine))

        with pytest.raises(StorageUnavailable):
            store.get("leads")
        assert store.ping() is False

    def test_unique_violation_maps_to_conflict(self):
        error = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: leads.email"))
        assert isinstance(integrity_error("leads", error), Conflict)

    def test_not_null_violation_is_not_conflict(self):
        error = IntegrityError("UPDATE", {}, Exception("NOT NULL constraint failed: bookings.status"))
        assert isinstance(integrity_error("bookings", error), ValidationError)
