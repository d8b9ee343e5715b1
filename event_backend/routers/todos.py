# -*- coding: utf-8 -*-
"""
API роутер задач.

Эндпоинты:
- GET / - Список задач (новые первыми)
- POST / - Создание задачи
- PUT /{todo_id}, PATCH /{todo_id} - Частичное обновление
- DELETE /{todo_id} - Удаление
"""

import logging
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import ValidationError

from event_backend.database import Database
from event_backend.dependencies import get_database
from event_backend.models import Todo, TodoCreate, TodoPatch

router = APIRouter()
logger = logging.getLogger("event_backend.routers.todos")


def todo_not_found(todo_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Задача {todo_id} не найдена",
    )


@router.get("", response_model=List[Todo])
def get_todos(db: Database = Depends(get_database)):
    """Список задач, отсортированный по времени создания (новые первыми)."""
    todos: List[Todo] = []
    for document in db.todos.list(order_by="createdAt", descending=True):
        try:
            todos.append(Todo.from_document(document))
        except ValidationError as e:
            logger.warning(f"Пропущен повреждённый документ задачи {document.id}: {e}")
    return todos


@router.post("", response_model=Todo, status_code=status.HTTP_201_CREATED)
def create_todo(data: TodoCreate, db: Database = Depends(get_database)):
    """Создание задачи. Новая задача всегда не выполнена."""
    now = datetime.now(timezone.utc)
    todo = Todo(
        title=data.title,
        description=data.description,
        completed=False,
        created_at=now,
        updated_at=now,
    )
    todo.id = db.todos.add(todo.to_document())
    logger.info(f"Создана задача {todo.id}")
    return todo


@router.api_route("/{todo_id}", methods=["PUT", "PATCH"], response_model=Todo)
def update_todo(
    todo_id: str,
    data: TodoPatch,
    db: Database = Depends(get_database),
):
    """
    Частичное обновление задачи.

    Меняются только переданные поля; updatedAt обновляется всегда.
    """
    document = db.todos.get(todo_id)
    if document is None:
        raise todo_not_found(todo_id)

    todo = data.apply(Todo.from_document(document), datetime.now(timezone.utc))
    db.todos.set(todo_id, todo.to_document())
    logger.info(f"Обновлена задача {todo_id}: {sorted(data.model_fields_set)}")
    return todo


@router.delete("/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_todo(todo_id: str, db: Database = Depends(get_database)):
    """Удаление задачи."""
    if not db.todos.delete(todo_id):
        raise todo_not_found(todo_id)
    logger.info(f"Удалена задача {todo_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
