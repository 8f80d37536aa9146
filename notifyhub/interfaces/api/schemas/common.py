"""Response envelopes shared by every endpoint."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class ApiResponse(BaseModel, Generic[DataT]):
    """``{success, data, message}`` envelope."""

    success: bool = True
    data: DataT | None = None
    message: str = ""


class Paginated(BaseModel, Generic[DataT]):
    """One page of results."""

    data: list[DataT]
    current_page: int
    per_page: int
    total: int
    last_page: int


class UnreadCountRead(BaseModel):
    count: int


__all__ = ["ApiResponse", "Paginated", "UnreadCountRead"]
