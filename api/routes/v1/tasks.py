"""
api/routes/v1/tasks.py -- Task CRUD routes, every one scoped to the caller.

Routes:
  GET    /tasks              -- caller's tasks, newest first
  POST   /tasks              -- create a task owned by the caller
  PATCH  /tasks/{task_id}    -- set completed on one of the caller's tasks
  DELETE /tasks/{task_id}    -- delete one of the caller's tasks (idempotent)

Ownership:
  Handlers never receive a TaskStore. get_owned_tasks() builds an OwnedTasks
  from the verified token identity, and that object is the only handle a
  handler has on the data. No request field can name an owner.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response

from api.models import TaskCreate, TaskPatch, TaskResponse
from auth.dependencies import get_current_identity
from auth.models import Identity
from tasks.store import OwnedTasks, TaskStore

router = APIRouter()


def get_owned_tasks(request: Request, identity: Identity = Depends(get_current_identity)) -> OwnedTasks:
    """FastAPI dependency: the task store narrowed to the authenticated user."""
    task_store: TaskStore = request.app.state.task_store
    return task_store.for_owner(identity.user_id)


@router.get("/tasks", response_model=list[TaskResponse])
def list_tasks(owned: OwnedTasks = Depends(get_owned_tasks)) -> list[TaskResponse]:
    """Return the caller's tasks ordered newest first."""
    return [TaskResponse.from_task(t) for t in owned.list()]


@router.post("/tasks", response_model=TaskResponse, status_code=201)
def create_task(body: TaskCreate, owned: OwnedTasks = Depends(get_owned_tasks)) -> TaskResponse:
    """Create a task with completed=false, owned by the caller."""
    return TaskResponse.from_task(owned.add(body.title))


@router.patch("/tasks/{task_id}", response_model=TaskResponse)
def update_task(task_id: int, body: TaskPatch, owned: OwnedTasks = Depends(get_owned_tasks)) -> TaskResponse:
    """Set completed on one of the caller's tasks.

    404 not_found when the id does not exist or belongs to another user. The
    two cases are indistinguishable and neither modifies any row.
    """
    return TaskResponse.from_task(owned.update(task_id, body.completed))


@router.delete("/tasks/{task_id}", status_code=204)
def delete_task(task_id: int, owned: OwnedTasks = Depends(get_owned_tasks)) -> Response:
    """Delete one of the caller's tasks. Always 204, whether or not a row was removed."""
    owned.remove(task_id)
    return Response(status_code=204)
