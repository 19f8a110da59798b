from __future__ import annotations

from typing import Any


# PUBLIC_INTERFACE
class TodoStateError(Exception):
    """Base class for errors raised by the todo state core."""


# PUBLIC_INTERFACE
class ProviderMissingError(TodoStateError):
    """
    Raised when state, dispatch, or the id sequence is accessed while no
    TodoProvider scope is active. Indicates a wiring defect in the consumer.
    """

    def __init__(self, message: str = "Cannot find TodoProvider") -> None:
        super().__init__(message)


# PUBLIC_INTERFACE
class UnhandledActionError(TodoStateError):
    """
    Raised by the reducer for a command whose type tag is not CREATE, TOGGLE
    or REMOVE. The offending tag is kept on ``action_type``.
    """

    def __init__(self, action_type: Any) -> None:
        self.action_type = action_type
        super().__init__(f"Unhandled action type: {action_type}")


# PUBLIC_INTERFACE
class IdConflictError(TodoStateError):
    """
    Raised when a caller-supplied todo id has already been issued by the
    store's sequence. The rejected id is kept on ``todo_id``.
    """

    def __init__(self, todo_id: int) -> None:
        self.todo_id = todo_id
        super().__init__(f"Todo id already issued: {todo_id}")
