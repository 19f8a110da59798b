from __future__ import annotations

from typing import Any, Mapping, Union

from .errors import UnhandledActionError
from .models import Action, CreateAction, RemoveAction, ToggleAction, TodoList

_ACTION_TYPES = {
    "CREATE": CreateAction,
    "TOGGLE": ToggleAction,
    "REMOVE": RemoveAction,
}


def _coerce_action(action: Union[Action, Mapping[str, Any]]) -> Action:
    """
    Accept a typed action, a plain mapping such as
    ``{"type": "TOGGLE", "id": 3}``, or any object exposing the same fields
    as attributes, and return the typed action.
    """
    if isinstance(action, (CreateAction, ToggleAction, RemoveAction)):
        return action
    mapping = isinstance(action, Mapping)
    action_type = action.get("type") if mapping else getattr(action, "type", None)
    model = _ACTION_TYPES.get(action_type) if isinstance(action_type, str) else None
    if model is None:
        raise UnhandledActionError(action_type)
    # Attribute-style commands (e.g. namespaces or dataclasses) are read by attribute
    return model.model_validate(action, from_attributes=not mapping)


# PUBLIC_INTERFACE
def todo_reducer(state: TodoList, action: Union[Action, Mapping[str, Any]]) -> TodoList:
    """
    Compute the next todo list from the current one and a command.

    - CREATE appends ``action.todo``
    - TOGGLE replaces the matching item with a copy whose ``done`` is flipped
    - REMOVE drops the matching item

    A TOGGLE or REMOVE naming an unknown id yields a list equal to ``state``.
    The input is never mutated and a new tuple is always returned.

    Raises:
        UnhandledActionError: if the command type is not recognised.
        pydantic.ValidationError: if a mapping command has the wrong shape.
    """
    act = _coerce_action(action)

    if isinstance(act, CreateAction):
        return (*state, act.todo)
    if isinstance(act, ToggleAction):
        return tuple(
            todo.model_copy(update={"done": not todo.done}) if todo.id == act.id else todo
            for todo in state
        )
    if isinstance(act, RemoveAction):
        return tuple(todo for todo in state if todo.id != act.id)
    raise UnhandledActionError(getattr(act, "type", None))
