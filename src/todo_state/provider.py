from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from .errors import ProviderMissingError
from .models import Action, TodoItem, TodoList
from .sequence import IdentifierSequence
from .store import Dispatch, Listener, TodoStore

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class TodoProvider:
    """
    Scoped access to a TodoStore.

    The provider is inactive until entered (``with provider:`` or ``open()``)
    and becomes inactive again when the scope ends. Each entry builds a fresh
    store from the seed todos. While inactive every accessor raises
    ProviderMissingError.

    Consumers receive the provider, or one of the narrow handles it returns,
    explicitly:

        with TodoProvider() as todos:
            dispatch = todos.get_dispatcher()
            next_id = todos.get_next_id()
            dispatch({"type": "CREATE", "todo": {"id": next_id.take(), "text": "x"}})
            todos.get_state()
    """

    def __init__(self, initial: Optional[Iterable[TodoItem]] = None) -> None:
        self._initial = None if initial is None else tuple(initial)
        self._store: Optional[TodoStore] = None

    @property
    def active(self) -> bool:
        return self._store is not None

    def open(self) -> "TodoProvider":
        """Enter the store scope. Re-entering an active provider is a no-op."""
        if self._store is None:
            self._store = TodoStore(self._initial)
            logger.info("TodoProvider opened with %d todos", len(self._store.state))
        return self

    def close(self) -> None:
        """Leave the store scope, discarding the list and the id sequence."""
        if self._store is not None:
            logger.info("TodoProvider closed")
        self._store = None

    def __enter__(self) -> "TodoProvider":
        return self.open()

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _require_store(self) -> TodoStore:
        if self._store is None:
            raise ProviderMissingError()
        return self._store

    # PUBLIC_INTERFACE
    def get_state(self) -> TodoList:
        """Return the current todo list snapshot."""
        return self._require_store().state

    # PUBLIC_INTERFACE
    def get_dispatcher(self) -> Dispatch:
        """
        Return a callable applying a command to this provider's store.
        The callable is bound to the current scope and raises
        ProviderMissingError once that scope has ended.
        """
        store = self._require_store()

        def dispatch(action: Union[Action, Mapping[str, Any]]) -> TodoList:
            if self._store is not store:
                raise ProviderMissingError()
            return store.dispatch(action)

        return dispatch

    # PUBLIC_INTERFACE
    def get_next_id(self) -> IdentifierSequence:
        """Return the id sequence used to number new todos."""
        return self._require_store().sequence

    # PUBLIC_INTERFACE
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a state listener on the active store; returns an unsubscribe callable."""
        return self._require_store().subscribe(listener)

    def create_todo(self, text: str) -> TodoItem:
        """
        Create an undone todo with the next id from the sequence.
        Taking the id and dispatching happen under one store lock.
        """
        return self._require_store().create(text)

    def insert_todo(self, todo: TodoItem) -> TodoList:
        """
        Append a todo carrying a caller-chosen id, moving the sequence past it.
        Raises IdConflictError if that id has already been issued.
        """
        return self._require_store().insert(todo)

    def toggle_todo(self, todo_id: int) -> Optional[TodoItem]:
        """Toggle a todo; None if no todo has ``todo_id``."""
        return self._require_store().toggle(todo_id)

    def remove_todo(self, todo_id: int) -> bool:
        return self._require_store().remove(todo_id)
