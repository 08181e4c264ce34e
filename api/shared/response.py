"""Success envelope wrapped around every feature route's payload."""
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ResponseModel(BaseModel, Generic[T]):
    data: Optional[T] = Field(default=None, description="Route payload")
    message: Optional[str] = Field(default=None, examples=["Message sent"])
    status: str = Field(default="ok")

    @classmethod
    def success(cls, data: Optional[T] = None, message: str = "Success") -> "ResponseModel[T]":
        return cls(data=data, message=message)
