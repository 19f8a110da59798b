from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Callable, Iterable, List, Mapping, Optional, Union

from .errors import UnhandledActionError
from .models import Action, CreateAction, RemoveAction, TodoItem, TodoList, ToggleAction
from .reducer import todo_reducer
from .sequence import IdentifierSequence

logger = logging.getLogger(__name__)

Listener = Callable[[TodoList], None]
Dispatch = Callable[[Union[Action, Mapping[str, Any]]], TodoList]

INITIAL_TODOS: TodoList = (
    TodoItem(id=1, text="Create the project", done=True),
    TodoItem(id=2, text="Style the components", done=True),
    TodoItem(id=3, text="Build the context", done=False),
    TodoItem(id=4, text="Implement the features", done=False),
)


# PUBLIC_INTERFACE
class TodoStore:
    """
    Owns the current todo list and the id sequence, and applies commands
    through ``todo_reducer``. Dispatch is the only way the list changes.
    """

    def __init__(self, initial: Optional[Iterable[TodoItem]] = None) -> None:
        self._lock = RLock()
        self._state: TodoList = tuple(INITIAL_TODOS if initial is None else initial)
        ids = [t.id for t in self._state]
        if len(ids) != len(set(ids)):
            raise ValueError("seed todos must have distinct ids")
        self._sequence = IdentifierSequence.after(self._state)
        self._listeners: List[Listener] = []

    @property
    def state(self) -> TodoList:
        return self._state

    @property
    def sequence(self) -> IdentifierSequence:
        return self._sequence

    def dispatch(self, action: Union[Action, Mapping[str, Any]]) -> TodoList:
        """
        Apply ``action`` and publish the resulting list to subscribers.
        If the reducer raises, the previous list stays current and no
        listener is called.
        """
        with self._lock:
            try:
                new_state = todo_reducer(self._state, action)
            except UnhandledActionError as exc:
                logger.warning("Rejected todo action: %s", exc)
                raise
            self._state = new_state
            listeners = list(self._listeners)
        logger.debug("Applied %s; %d todos", _action_type(action), len(new_state))
        for listener in listeners:
            listener(new_state)
        return new_state

    def create(self, text: str) -> TodoItem:
        """
        Take the next id and append an undone todo, holding the store lock
        across both steps so list order follows issuance order.
        """
        with self._lock:
            todo = TodoItem(id=self._sequence.take(), text=text, done=False)
            self.dispatch(CreateAction(todo=todo))
        return todo

    def insert(self, todo: TodoItem) -> TodoList:
        """
        Append a todo whose id was chosen by the caller. The id must not have
        been issued yet; the sequence is moved past it.

        Raises:
            IdConflictError: if ``todo.id`` is below the sequence's current value.
        """
        with self._lock:
            self._sequence.claim(todo.id)
            return self.dispatch(CreateAction(todo=todo))

    def toggle(self, todo_id: int) -> Optional[TodoItem]:
        """Toggle a todo and return its new version, or None if it is absent."""
        with self._lock:
            if not any(t.id == todo_id for t in self._state):
                return None
            state = self.dispatch(ToggleAction(id=todo_id))
        return next((t for t in state if t.id == todo_id), None)

    def remove(self, todo_id: int) -> bool:
        """Remove a todo. Return True if it was present, False otherwise."""
        with self._lock:
            if not any(t.id == todo_id for t in self._state):
                return False
            self.dispatch(RemoveAction(id=todo_id))
            return True

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for state changes; returns an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe


def _action_type(action: Union[Action, Mapping[str, Any]]) -> Any:
    if isinstance(action, Mapping):
        return action.get("type")
    return getattr(action, "type", None)
