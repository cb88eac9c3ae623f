"""
Tests for the fetch / mutate-then-refetch flow
"""
import pytest
from fastapi import HTTPException
from pydantic import BaseModel

from studyhub.core.exceptions import BackendError, ValidationError
from studyhub.core.session import SessionContext
from studyhub.core.sync import EntityListView, GENERIC_ERROR_MESSAGE
from tests.test_session import StubAuthService


class Item(BaseModel):
    id: str
    label: str


class ItemView(EntityListView[Item]):
    name = "items"

    def __init__(self, session, backend):
        super().__init__(session)
        self.backend = backend
        self.fail_next_load = False
        self.during_load = None

    def load(self):
        if self.fail_next_load:
            self.fail_next_load = False
            raise BackendError("timeout", operation="list items")
        if self.during_load:
            hook, self.during_load = self.during_load, None
            hook()
        return [Item(**row) for row in self.backend]


@pytest.fixture
def session():
    session = SessionContext(StubAuthService({"t": {"id": "u1"}}), "t")
    session.resolve()
    return session


@pytest.fixture
def backend():
    return [{"id": "1", "label": "first"}]


@pytest.fixture
def view(session, backend):
    view = ItemView(session, backend)
    view.fetch()
    return view


def test_fetch_materialises_full_result(view):
    assert [item.id for item in view.items] == ["1"]
    assert view.snapshot() == {"items": [{"id": "1", "label": "first"}], "error": None}


def test_mutation_refetches(view, backend):
    assert view.mutate(lambda: backend.append({"id": "2", "label": "second"}), "adding item")
    assert [item.id for item in view.items] == ["1", "2"]


def test_no_optimistic_update_before_refetch(view, backend):
    seen_during_action = []

    def action():
        backend.append({"id": "2", "label": "second"})
        seen_during_action.extend(item.id for item in view.items)

    view.mutate(action, "adding item")
    assert seen_during_action == ["1"]


def test_backend_failure_keeps_prior_state(view):
    def action():
        raise BackendError("connection reset", operation="add item")

    assert not view.mutate(action, "adding item")
    assert [item.id for item in view.items] == ["1"]
    assert view.error == GENERIC_ERROR_MESSAGE


def test_failed_fetch_keeps_prior_state(view, backend):
    backend.clear()
    view.fail_next_load = True
    assert not view.fetch()
    assert [item.id for item in view.items] == ["1"]


def test_validation_failure_reports_fields(view):
    def action():
        raise ValidationError.for_field("label", "Label is taken")

    assert not view.mutate(action, "adding item")
    assert view.field_errors == {"label": "Label is taken"}
    assert view.snapshot()["errors"] == {"label": "Label is taken"}


def test_missing_target_refetches(view, backend):
    def action():
        backend.clear()
        raise HTTPException(status_code=404, detail="Item not found")

    assert not view.mutate(action, "deleting item")
    assert view.items == []


def test_stale_fetch_is_discarded(view, backend):
    backend.append({"id": "2", "label": "second"})
    # A newer fetch starts and commits while the first is still loading
    view.during_load = lambda: view.fetch()

    assert not view.fetch()
    assert [item.id for item in view.items] == ["1", "2"]


def test_closed_view_ignores_results(view, backend):
    view.during_load = view.close
    backend.append({"id": "2", "label": "second"})

    assert not view.fetch()
    assert [item.id for item in view.items] == ["1"]
    assert not view.mutate(lambda: None, "noop")


def test_logout_closes_view(view, session):
    session.logout()
    assert view.closed


def test_listeners_see_each_commit(view, backend):
    commits = []
    view.subscribe(lambda v: commits.append(len(v.items)))
    view.mutate(lambda: backend.append({"id": "2", "label": "second"}), "adding item")
    assert commits == [2]


def test_find(view):
    assert view.find("1").label == "first"
    assert view.find("missing") is None
