from __future__ import annotations

from typing import Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


# PUBLIC_INTERFACE
class TodoItem(BaseModel):
    """
    A single todo entry held by the store.

    Fields:
    - id: Unique integer identifier, never reused within a store lifetime
    - text: Human-readable description
    - done: Completion flag, flipped only through a TOGGLE command

    Instances are frozen; toggling produces a new item.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Unique identifier of the todo item")
    text: str = Field(..., description="Description of the todo item")
    done: bool = Field(default=False, description="Completion status flag")


# Ordered, insertion order is display order.
TodoList = Tuple[TodoItem, ...]


# PUBLIC_INTERFACE
class CreateAction(BaseModel):
    """Append a fully formed item (id already assigned) to the list."""

    model_config = ConfigDict(frozen=True)

    type: Literal["CREATE"] = "CREATE"
    todo: TodoItem


# PUBLIC_INTERFACE
class ToggleAction(BaseModel):
    """Flip ``done`` on the item with the given id."""

    model_config = ConfigDict(frozen=True)

    type: Literal["TOGGLE"] = "TOGGLE"
    id: int


# PUBLIC_INTERFACE
class RemoveAction(BaseModel):
    """Drop the item with the given id."""

    model_config = ConfigDict(frozen=True)

    type: Literal["REMOVE"] = "REMOVE"
    id: int


Action = Union[CreateAction, ToggleAction, RemoveAction]
