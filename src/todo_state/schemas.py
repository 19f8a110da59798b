from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import TodoItem


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item. The id is assigned from the store's
    sequence and every new item starts undone.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "text": "Write tests",
            }
        }
    )

    text: str = Field(..., description="Description of the todo item", min_length=1)

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        """
        Strip whitespace and reject blank text.
        """
        s = v.strip()
        if not s:
            raise ValueError("text must not be blank")
        return s


# PUBLIC_INTERFACE
class TodoOut(TodoItem):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": 5,
                "text": "Write tests",
                "done": False,
            }
        },
    )


# PUBLIC_INTERFACE
class TodoListOut(BaseModel):
    """
    Envelope for the list endpoint.
    """

    items: List[TodoOut] = Field(..., description="Todo items in display order")
    total: int = Field(..., description="Number of items returned")


# PUBLIC_INTERFACE
class TodoSummaryOut(BaseModel):
    """
    Header summary: today's date and how many todos are still open.
    """

    date: str = Field(..., description="Today's date, e.g. 'July 10, 2019'")
    weekday: str = Field(..., description="Today's weekday name")
    remaining: int = Field(..., description="Number of todos not yet done")
    total: int = Field(..., description="Number of todos in the list")


# PUBLIC_INTERFACE
class ActionIn(BaseModel):
    """
    Raw command forwarded to the store's dispatcher, e.g.
    {"type": "TOGGLE", "id": 3}. Fields beyond ``type`` are passed through.
    """

    model_config = ConfigDict(extra="allow")

    type: str = Field(..., description="Command type tag: CREATE, TOGGLE or REMOVE")

    def as_mapping(self) -> Dict[str, Any]:
        return self.model_dump()
