"""
Tests for lead reconciliation: dedup by email, field merge, status progression.
"""

import pytest

from financekeem.errors import NotFound, StorageUnavailable, ValidationError
from financekeem.schemas import LeadCandidate
from financekeem.services.leads import LeadService, advance, normalize_email


class TestAdvance:
    """Tests for the status progression rule."""

    @pytest.mark.parametrize("current,incoming,expected", [
        ("new", "contacted", "contacted"),
        ("new", "completed", "completed"),
        ("contacted", "scheduled", "scheduled"),
        ("scheduled", "new", "scheduled"),
        ("completed", "contacted", "completed"),
        ("scheduled", "scheduled", "scheduled"),
        (None, None, "new"),
        ("contacted", None, "contacted"),
    ])
    def test_progress_only_moves_forward(self, current, incoming, expected):
        """Test that a lower incoming status never downgrades the lead."""
        assert advance(current, incoming) == expected

    @pytest.mark.parametrize("current", ["new", "contacted", "scheduled", "completed", "cancelled"])
    def test_cancel_always_wins(self, current):
        """Test that an incoming cancel overrides any status."""
        assert advance(current, "cancelled") == "cancelled"

    @pytest.mark.parametrize("incoming", ["new", "contacted", "scheduled", "completed"])
    def test_cancelled_is_absorbing(self, incoming):
        """Test that a cancelled lead stays cancelled."""
        assert advance("cancelled", incoming) == "cancelled"

    def test_unknown_status_rejected(self):
        """Test that an unknown status raises ValidationError."""
        with pytest.raises(ValidationError):
            advance("new", "archived")


class TestNormalizeEmail:
    """Tests for email normalization."""

    def test_trim_and_lowercase(self):
        assert normalize_email("  Jane.Doe@Example.COM ") == "jane.doe@example.com"

    def test_blank_is_none(self):
        assert normalize_email("   ") is None
        assert normalize_email(None) is None


class TestReconcile:
    """Tests for find-or-create-and-merge, run against both stores."""

    def test_creates_new_lead(self, store):
        """Test that an unknown email creates a lead with defaults."""
        lead = LeadService(store).reconcile(LeadCandidate(
            name="Jane Doe",
            email="jane@example.com",
            source="quiz:abc",
        ))

        assert lead["id"]
        assert lead["email"] == "jane@example.com"
        assert lead["status"] == "new"
        assert lead["source"] == "quiz:abc"
        assert lead["created_at"] is not None
        assert len(store.get("leads")) == 1

    def test_email_match_is_case_insensitive(self, store):
        """Test that differently cased emails resolve to one lead."""
        service = LeadService(store)
        first = service.reconcile(LeadCandidate(email="Jane@Example.com", name="Jane"))
        second = service.reconcile(LeadCandidate(email=" jane@example.COM ", phone="555-0100"))

        assert second["id"] == first["id"]
        assert second["email"] == "jane@example.com"
        assert len(store.get("leads")) == 1

    def test_merge_keeps_existing_when_candidate_empty(self, store):
        """Test that empty candidate fields never erase stored values."""
        service = LeadService(store)
        service.reconcile(LeadCandidate(email="a@example.com", name="Alice", phone="555-0101"))
        lead = service.reconcile(LeadCandidate(email="a@example.com", name="", phone=None))

        assert lead["name"] == "Alice"
        assert lead["phone"] == "555-0101"

    def test_merge_candidate_wins_when_present(self, store):
        """Test that non-empty candidate fields replace stored values."""
        service = LeadService(store)
        service.reconcile(LeadCandidate(
            email="a@example.com",
            name="Alice",
            pillar_scores={"protection": 3, "alignment": 4, "oversight": 5},
        ))
        lead = service.reconcile(LeadCandidate(
            email="a@example.com",
            name="Alice Smith",
            pillar_scores={"protection": 10, "alignment": 9, "oversight": 8},
            protection_state="Well Aligned",
        ))

        assert lead["name"] == "Alice Smith"
        assert lead["pillar_scores"] == {"protection": 10, "alignment": 9, "oversight": 8}
        assert lead["protection_state"] == "Well Aligned"

    def test_source_is_first_touch(self, store):
        """Test that the original source survives later captures."""
        service = LeadService(store)
        service.reconcile(LeadCandidate(email="b@example.com", source="protection_assessment"))
        lead = service.reconcile(LeadCandidate(email="b@example.com", source="booking:page-1"))

        assert lead["source"] == "protection_assessment"

    def test_status_not_downgraded_by_later_capture(self, store):
        """Test that a quiz after a booking keeps the lead scheduled."""
        service = LeadService(store)
        service.reconcile(LeadCandidate(email="c@example.com", status="scheduled"))
        lead = service.reconcile(LeadCandidate(email="c@example.com", source="quiz:1"))

        assert lead["status"] == "scheduled"

    def test_reconcile_is_idempotent(self, store):
        """Test that repeating a candidate leaves one unchanged lead."""
        service = LeadService(store)
        candidate = LeadCandidate(
            name="Dana",
            email="dana@example.com",
            phone="555-0102",
            status="contacted",
            source="form:1",
            form_data={"message": "hello"},
        )
        first = service.reconcile(candidate)
        second = service.reconcile(candidate)

        ignored = ("updated_at",)
        assert {k: v for k, v in first.items() if k not in ignored} == \
            {k: v for k, v in second.items() if k not in ignored}
        assert len(store.get("leads")) == 1

    def test_no_email_always_creates(self, store):
        """Test that email-less candidates are never merged."""
        service = LeadService(store)
        first = service.reconcile(LeadCandidate(name="Anon", email=""))
        second = service.reconcile(LeadCandidate(name="Anon"))

        assert first["id"] != second["id"]
        assert first["email"] is None
        assert len(store.get("leads")) == 2

    def test_concurrent_create_merges_into_winner(self, store, monkeypatch):
        """Test that a uniqueness conflict on create falls back to a merge."""
        service = LeadService(store)
        winner = service.reconcile(LeadCandidate(email="race@example.com", name="First", source="quiz:1"))

        real_find = store.find_by_field
        calls = []

        def stale_find(collection, field, value):
            # first lookup misses, as if the other writer had not committed yet
            calls.append(value)
            if len(calls) == 1:
                return None
            return real_find(collection, field, value)

        monkeypatch.setattr(store, "find_by_field", stale_find)

        lead = service.reconcile(LeadCandidate(
            email="race@example.com",
            phone="555-0199",
            status="contacted",
            source="form:2",
        ))

        assert lead["id"] == winner["id"]
        assert lead["name"] == "First"
        assert lead["phone"] == "555-0199"
        assert lead["status"] == "contacted"
        assert lead["source"] == "quiz:1"
        assert len(store.get("leads")) == 1

    def test_lookup_failure_aborts_without_write(self, store, monkeypatch):
        """Test that an unreachable store during lookup propagates and writes nothing."""
        def unavailable(*args, **kwargs):
            raise StorageUnavailable("lookup failed")

        monkeypatch.setattr(store, "find_by_field", unavailable)

        with pytest.raises(StorageUnavailable):
            LeadService(store).reconcile(LeadCandidate(email="down@example.com", name="Down"))

        assert store.get("leads") == []

    def test_create_failure_aborts_without_write(self, store, monkeypatch):
        """Test that a failed insert propagates and is not retried as a merge."""
        def unavailable(*args, **kwargs):
            raise StorageUnavailable("write failed")

        monkeypatch.setattr(store, "create", unavailable)

        with pytest.raises(StorageUnavailable):
            LeadService(store).reconcile(LeadCandidate(email="down@example.com", name="Down"))

        assert store.get("leads") == []


class TestLeadAdmin:
    """Tests for admin list, edit and delete."""

    def test_manual_create_defaults_source(self, store):
        lead = LeadService(store).create_lead(LeadCandidate(name="Walk In", email="walk@example.com"))
        assert lead["source"] == "manual"

    def test_update_sets_status_directly(self, store):
        """Test that an admin edit can move status backwards."""
        service = LeadService(store)
        lead = service.reconcile(LeadCandidate(email="e@example.com", status="completed"))
        updated = service.update_lead(lead["id"], {"status": "contacted", "source": "other"})

        assert updated["status"] == "contacted"
        assert updated["source"] is None

    def test_update_rejects_unknown_status(self, store):
        service = LeadService(store)
        lead = service.reconcile(LeadCandidate(email="f@example.com"))
        with pytest.raises(ValidationError):
            service.update_lead(lead["id"], {"status": "lost"})

    def test_search_and_filter(self, store):
        service = LeadService(store)
        service.reconcile(LeadCandidate(name="Maria Lopez", email="maria@example.com", status="scheduled"))
        service.reconcile(LeadCandidate(name="Tom Reed", email="tom@example.com"))

        assert [l["name"] for l in service.list_leads(search="lopez")] == ["Maria Lopez"]
        assert [l["name"] for l in service.list_leads(search="TOM@")] == ["Tom Reed"]
        assert [l["name"] for l in service.list_leads(status="scheduled")] == ["Maria Lopez"]

    def test_delete_missing_lead(self, store):
        with pytest.raises(NotFound):
            LeadService(store).delete_lead("missing-id")
