from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema exposing camelCase JSON keys to the browser client."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(CamelModel, Generic[T]):
    success: bool = True
    status_code: int = 200
    data: Optional[T] = None
    message: str = ""


class ErrorResponse(CamelModel):
    success: bool = False
    status_code: int
    message: str
    errors: List[str] = []
