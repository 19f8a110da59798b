"""
In-memory todo list state container.

A pure reducer applies CREATE, TOGGLE and REMOVE commands to an ordered list
of todos; TodoProvider gives scoped access to the current list, the
dispatcher and the id sequence.
"""

from .errors import IdConflictError, ProviderMissingError, TodoStateError, UnhandledActionError
from .models import CreateAction, RemoveAction, TodoItem, TodoList, ToggleAction
from .provider import TodoProvider
from .reducer import todo_reducer
from .sequence import IdentifierSequence
from .store import INITIAL_TODOS, TodoStore

__all__ = [
    "CreateAction",
    "IdConflictError",
    "IdentifierSequence",
    "INITIAL_TODOS",
    "ProviderMissingError",
    "RemoveAction",
    "TodoItem",
    "TodoList",
    "TodoProvider",
    "TodoStateError",
    "TodoStore",
    "ToggleAction",
    "UnhandledActionError",
    "todo_reducer",
]
