from __future__ import annotations

from typing import Annotated, List

from fastapi import APIRouter, Depends, Path, Request, status

from ..errors import TaskNotFoundError
from ..models import Task
from ..schemas import ErrorOut, TaskCreateRequest, TaskOut
from ..service import TaskService

router = APIRouter(
    prefix="/api/todos",
    tags=["todos"],
)

# Ids are 64-bit and start at 1; anything else is a 400, not a lookup miss.
TodoId = Annotated[int, Path(ge=1, le=2**63 - 1, description="Id of the todo item")]


def get_task_service(request: Request) -> TaskService:
    """
    Dependency returning the TaskService created with the application.
    """
    return request.app.state.task_service


def _to_out(task: Task) -> TaskOut:
    return TaskOut.model_validate(task)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TaskOut],
    summary="List Todos",
    description="List every todo currently held in memory.",
    responses={
        200: {"description": "List retrieved successfully"},
    },
)
def list_todos(service: TaskService = Depends(get_task_service)) -> List[TaskOut]:
    """
    List all todos.
    """
    return [_to_out(t) for t in service.list_all()]


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TaskOut,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={
        200: {"description": "Todo found"},
        404: {"model": ErrorOut, "description": "Todo not found"},
    },
)
def get_todo(todo_id: TodoId, service: TaskService = Depends(get_task_service)) -> TaskOut:
    """
    Retrieve a single Todo item by its ID.
    """
    return _to_out(service.get_by_id(todo_id))


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TaskOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item. New todos always start with done=false.",
    responses={
        201: {"description": "Todo created successfully"},
        400: {"model": ErrorOut, "description": "Validation error"},
    },
)
def create_todo(
    payload: TaskCreateRequest, service: TaskService = Depends(get_task_service)
) -> TaskOut:
    """
    Create a new Todo.
    """
    return _to_out(service.create(payload.to_task()))


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}/toggle",
    response_model=TaskOut,
    summary="Toggle Todo",
    description="Flip the done flag of a Todo item.",
    responses={
        200: {"description": "Todo toggled"},
        404: {"model": ErrorOut, "description": "Todo not found"},
    },
)
def toggle_todo(todo_id: TodoId, service: TaskService = Depends(get_task_service)) -> TaskOut:
    """
    Toggle a Todo. Returns the updated item, 404 if not found.
    """
    updated = service.toggle(todo_id)
    if updated is None:
        raise TaskNotFoundError(todo_id)
    return _to_out(updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Todo",
    description="Delete a Todo item by ID.",
    responses={
        204: {"description": "Todo deleted"},
        404: {"model": ErrorOut, "description": "Todo not found"},
    },
)
def delete_todo(todo_id: TodoId, service: TaskService = Depends(get_task_service)) -> None:
    """
    Delete a Todo. Returns 204 on success, 404 if not found.
    """
    if not service.delete(todo_id):
        raise TaskNotFoundError(todo_id)
    return None
