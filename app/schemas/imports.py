from typing import Literal, Optional

from pydantic import BaseModel


class ImportErrorItem(BaseModel):
    row: int
    email: Optional[str] = None
    name: Optional[str] = None
    error: str


class ImportDetailItem(BaseModel):
    row: int
    email: str
    name: str
    action: Literal["created", "updated"]


class ImportResponse(BaseModel):
    success: bool
    message: str
    success_count: int
    error_count: int
    deleted_count: int = 0
    total_rows: int
    details: list[ImportDetailItem] = []
    errors: list[ImportErrorItem] = []
