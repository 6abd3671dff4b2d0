from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


T = TypeVar('T')


class CamelModel(BaseModel):
    """Базовая схема: в JSON поля в camelCase, в Python - snake_case."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UpdateModel(CamelModel):
    """
    Частичное обновление: поле можно не передавать, но нельзя передать null,
    все обновляемые колонки NOT NULL.
    """

    @field_validator('*')
    @classmethod
    def reject_null(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            raise ValueError(f'{to_camel(info.field_name)} cannot be null')
        return v


class ApiResponse(BaseModel, Generic[T]):
    """Единый конверт ответа {success, message, data}"""
    success: bool = True
    message: str = Field("Operation successful", description="Человекочитаемое сообщение")
    data: Optional[T] = None


class ErrorResponse(BaseModel):
    """Конверт ошибки {success: false, message, error}"""
    success: bool = False
    message: str
    error: Any = None
