# backend/models/song.py
from pydantic import BaseModel, field_validator
from typing import Optional

DEFAULT_ARTIST = "Unknown"


class Song(BaseModel):
    id: int  # timestamp en milisegundos
    title: str
    artist: str
    filename: str
    originalname: str
    mimetype: str
    size: int
    uploadedAt: str


class SongUpload(BaseModel):
    """Campos del formulario multipart, validados antes de tocar el disco."""
    originalname: str
    mimetype: Optional[str] = None
    title: Optional[str] = None
    artist: Optional[str] = None

    @field_validator("originalname")
    @classmethod
    def originalname_not_empty(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("originalname must not be empty")
        return value

    @field_validator("title", "artist")
    @classmethod
    def blank_as_missing(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value

    def resolved_title(self) -> str:
        return self.title or self.originalname

    def resolved_artist(self) -> str:
        return self.artist or DEFAULT_ARTIST


class UploadResponse(BaseModel):
    ok: bool = True
    entry: Song


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str
