from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, BaseModel
from pydantic.alias_generators import to_camel


def to_naive_utc(value: datetime) -> datetime:
    """Все даты храним и сравниваем как naive UTC"""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(to_naive_utc)]


class CamelModel(BaseModel):
    """Базовая схема: snake_case в Python, camelCase в JSON"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
