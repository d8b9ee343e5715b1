# -*- coding: utf-8 -*-
"""
Базовая модель сущности, хранимой в документной базе.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict

from event_backend.database import Document


class DocumentModel(BaseModel):
    """
    Сущность с идентификатором, выданным базой данных.

    В документе поля хранятся под теми же camelCase именами, что и в JSON API.
    Идентификатор в тело документа не пишется: это id документа.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = ""

    @classmethod
    def from_document(cls, document: Document):
        """Собирает сущность из документа коллекции."""
        return cls.model_validate({**document.data, "id": document.id})

    def to_document(self) -> Dict[str, Any]:
        """Возвращает данные для записи в коллекцию (без id)."""
        return self.model_dump(by_alias=True, exclude={"id"})


def empty_if_none(value: Any) -> Any:
    """JSON null в необязательном строковом поле читается как пустая строка."""
    return "" if value is None else value
