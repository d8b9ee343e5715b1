# -*- coding: utf-8 -*-
"""
Pydantic схемы списка задач.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr

from event_backend.models.base import DocumentModel


class Todo(DocumentModel):
    """Задача."""
    title: str = Field("", description="Заголовок")
    description: str = Field("", description="Описание")
    completed: bool = Field(False, description="Выполнена ли задача")
    created_at: Optional[datetime] = Field(None, alias="createdAt", description="Время создания")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt", description="Время изменения")


class TodoCreate(BaseModel):
    """Запрос на создание задачи."""
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=255, description="Заголовок")
    description: str = Field("", description="Описание")


class TodoPatch(BaseModel):
    """
    Частичное обновление задачи.

    Применяются только переданные поля со значением нужного типа;
    остальные поля сохранённой задачи не меняются.
    """
    title: Optional[StrictStr] = Field(None, description="Новый заголовок")
    description: Optional[StrictStr] = Field(None, description="Новое описание")
    completed: Optional[StrictBool] = Field(None, description="Новый статус")

    def apply(self, todo: Todo, now: datetime) -> Todo:
        """
        Возвращает копию задачи с применёнными полями.

        Args:
            todo: Сохранённая задача
            now: Время изменения (обновляется всегда)

        Returns:
            Обновлённая задача
        """
        changes = {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }
        changes["updated_at"] = now
        return todo.model_copy(update=changes)
