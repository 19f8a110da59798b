from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from ..models import CreateAction
from ..provider import TodoProvider
from ..schemas import ActionIn, TodoCreate, TodoListOut, TodoOut, TodoSummaryOut
from ..utils import summarize

router = APIRouter(
    prefix="/api/v1/todos",
    tags=["todos"],
)


def get_provider(request: Request) -> TodoProvider:
    """
    Dependency returning the TodoProvider owned by the application.
    """
    return request.app.state.todo_provider


def _list_envelope(provider: TodoProvider, done: Optional[bool] = None) -> TodoListOut:
    items = [TodoOut(**t.model_dump()) for t in provider.get_state()]
    if done is not None:
        items = [t for t in items if t.done == done]
    return TodoListOut(items=items, total=len(items))


# PUBLIC_INTERFACE
@router.get(
    "/",
    response_model=TodoListOut,
    summary="List Todos",
    description="Return the todo list in display order, optionally filtered by completion status.",
    responses={
        200: {"description": "List retrieved successfully"},
    },
)
def list_todos(
    done: Optional[bool] = Query(None, description="Filter by completion status"),
    provider: TodoProvider = Depends(get_provider),
) -> TodoListOut:
    """
    List todos in insertion order.
    """
    return _list_envelope(provider, done)


# PUBLIC_INTERFACE
@router.get(
    "/summary",
    response_model=TodoSummaryOut,
    summary="Todo Summary",
    description="Today's date and the number of todos that are not done yet.",
)
def get_summary(provider: TodoProvider = Depends(get_provider)) -> TodoSummaryOut:
    """
    Header summary for the todo list.
    """
    return TodoSummaryOut(**summarize(provider.get_state()))


# PUBLIC_INTERFACE
@router.post(
    "/",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new undone Todo item with the next id and return it.",
    responses={
        201: {"description": "Todo created successfully"},
        422: {"description": "Validation error"},
    },
)
def create_todo(payload: TodoCreate, provider: TodoProvider = Depends(get_provider)) -> TodoOut:
    """
    Create a new Todo.
    """
    created = provider.create_todo(payload.text)
    return TodoOut(**created.model_dump())


# PUBLIC_INTERFACE
@router.post(
    "/actions",
    response_model=TodoListOut,
    summary="Dispatch Action",
    description=(
        "Dispatch a raw command to the store and return the resulting list.\n\n"
        "Accepted commands:\n"
        "- {\"type\": \"CREATE\", \"todo\": {\"id\": ..., \"text\": ..., \"done\": ...}}\n"
        "- {\"type\": \"TOGGLE\", \"id\": ...}\n"
        "- {\"type\": \"REMOVE\", \"id\": ...}\n\n"
        "Unknown ids are a no-op. A CREATE must carry an id not yet issued by the store, "
        "otherwise it is rejected with 409. Unknown command types are rejected with 400."
    ),
    responses={
        200: {"description": "Action applied"},
        400: {"description": "Unhandled action type"},
        409: {"description": "Todo id already issued"},
    },
)
def dispatch_action(payload: ActionIn, provider: TodoProvider = Depends(get_provider)) -> TodoListOut:
    """
    Forward a command to the dispatcher. CREATE ids are claimed from the
    store's sequence so later creates cannot reuse them.
    """
    action = payload.as_mapping()
    if payload.type == "CREATE":
        provider.insert_todo(CreateAction.model_validate(action).todo)
    else:
        provider.get_dispatcher()(action)
    return _list_envelope(provider)


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={
        200: {"description": "Todo found"},
        404: {"description": "Todo not found"},
    },
)
def get_todo(todo_id: int, provider: TodoProvider = Depends(get_provider)) -> TodoOut:
    """
    Retrieve a single Todo item by its ID.
    """
    for item in provider.get_state():
        if item.id == todo_id:
            return TodoOut(**item.model_dump())
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Todo not found")


# PUBLIC_INTERFACE
@router.post(
    "/{todo_id}/toggle",
    response_model=TodoOut,
    summary="Toggle Todo",
    description="Flip the completion flag of a Todo item.",
    responses={
        200: {"description": "Todo toggled"},
        404: {"description": "Todo not found"},
    },
)
def toggle_todo(todo_id: int, provider: TodoProvider = Depends(get_provider)) -> TodoOut:
    """
    Toggle a Todo and return its new version.
    """
    toggled = provider.toggle_todo(todo_id)
    if toggled is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Todo not found")
    return TodoOut(**toggled.model_dump())


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Todo",
    description="Remove a Todo item by ID.",
    responses={
        204: {"description": "Todo deleted"},
        404: {"description": "Todo not found"},
    },
)
def delete_todo(todo_id: int, provider: TodoProvider = Depends(get_provider)) -> None:
    """
    Remove a Todo. Returns 204 on success, 404 if not found.
    """
    if not provider.remove_todo(todo_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Todo not found")
    return None
