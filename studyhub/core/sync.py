"""
Fetch / mutate-then-refetch flow shared by every screen.

A view holds the last committed read of one scoped query. Mutations never touch
that state directly: they call the backend and then re-run the fetch, so after a
mutation resolves the view shows a fresh backend read. Backend failures are
logged and leave the committed state as it was.
"""
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar
import logging

from fastapi import HTTPException

from studyhub.core.exceptions import BackendError, ValidationError
from studyhub.core.session import SessionContext, SessionState

logger = logging.getLogger(__name__)

T = TypeVar("T")

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."

ViewListener = Callable[["SyncedView"], None]


class SyncedView(Generic[T]):
    name = "view"

    def __init__(self, session: SessionContext):
        self.session = session
        self.data: Optional[T] = None
        self.error: Optional[str] = None
        self.field_errors: Dict[str, str] = {}
        self.closed = False
        self._generation = 0
        self._listeners: List[ViewListener] = []
        self._unsubscribe = session.subscribe(self._on_session_change)

    def load(self) -> T:
        raise NotImplementedError

    def subscribe(self, listener: ViewListener) -> None:
        self._listeners.append(listener)

    def fetch(self) -> bool:
        """Re-read the backend. Returns True when the result was committed."""
        self._generation += 1
        generation = self._generation
        try:
            data = self.load()
        except BackendError as e:
            logger.error(f"Error fetching {self.name}: {e}")
            return False
        if self.closed or generation != self._generation:
            logger.debug(f"Discarding stale {self.name} fetch (generation {generation})")
            return False
        self.data = data
        for listener in list(self._listeners):
            listener(self)
        return True

    def mutate(self, action: Callable[[], Any], description: str) -> bool:
        """Run one backend mutation, then refetch. Returns True when the mutation succeeded."""
        if self.closed:
            logger.debug(f"Ignoring {description} on closed {self.name}")
            return False
        self.error = None
        self.field_errors = {}
        try:
            action()
        except ValidationError as e:
            self.field_errors = dict(e.errors)
            return False
        except BackendError as e:
            logger.error(f"Error {description}: {e}")
            self.error = GENERIC_ERROR_MESSAGE
            return False
        except HTTPException as e:
            # Target vanished or is not ours; the list on screen is out of date
            logger.warning(f"Error {description}: {e.detail}")
            self.error = GENERIC_ERROR_MESSAGE
            self.fetch()
            return False
        self.fetch()
        return True

    def close(self) -> None:
        self.closed = True
        self._listeners.clear()
        self._unsubscribe()

    def _on_session_change(self, session: SessionContext) -> None:
        if session.state == SessionState.UNAUTHENTICATED:
            self.close()

    def dump(self) -> Any:
        return self.data

    def snapshot(self) -> Dict[str, Any]:
        state = {"items": self.dump(), "error": self.error}
        if self.field_errors:
            state["errors"] = self.field_errors
        return state


class EntityListView(SyncedView[List[T]]):
    """A view whose data is the full result list of one collection query"""

    def __init__(self, session: SessionContext):
        super().__init__(session)
        self.data = []

    @property
    def items(self) -> List[T]:
        return self.data

    def find(self, item_id: str) -> Optional[T]:
        for item in self.data:
            if getattr(item, "id", None) == item_id:
                return item
        return None

    def dump(self) -> List[Dict[str, Any]]:
        return [item.model_dump(mode="json", by_alias=True) for item in self.data]
