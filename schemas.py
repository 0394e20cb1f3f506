from pydantic import BaseModel
from typing import Optional


class Paste(BaseModel):
    id: str
    content: str
    filename: Optional[str] = None
    language: Optional[str] = None
    created_at: int


class PasteCreate(BaseModel):
    content: Optional[str] = None
    filename: Optional[str] = None
    language: Optional[str] = None
    slug: Optional[str] = None


class PasteCreated(BaseModel):
    id: str
    url: str
    raw: str


class DeleteResult(BaseModel):
    deleted: bool
