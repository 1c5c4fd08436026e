# backend/songs/utils.py
import re
import time
from datetime import datetime, timezone
from typing import Optional

ALLOWED_MIMETYPES = {
    "audio/mpeg",
    "audio/mp3",
    "audio/ogg",
    "audio/wav",
    "audio/x-wav",
    "audio/mpeg3",
}
ALLOWED_EXTENSIONS = {".mp3", ".ogg", ".wav"}

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.\-_]")

# =====================================================
# 🔹 Validación de tipo de archivo
# =====================================================
def is_audio_file(filename: Optional[str], mimetype: Optional[str]) -> bool:
    """Acepta si el MIME declarado o la extensión están en la lista permitida."""
    if mimetype:
        base_type = mimetype.split(";", 1)[0].strip().lower()
        if base_type in ALLOWED_MIMETYPES:
            return True
    if filename:
        return filename.lower().endswith(tuple(ALLOWED_EXTENSIONS))
    return False

# =====================================================
# 🔹 Nombres de archivo
# =====================================================
def sanitize_filename(name: str) -> str:
    return _UNSAFE_CHARS.sub("_", name)

def build_stored_filename(originalname: str, timestamp_ms: int) -> str:
    return f"{timestamp_ms}-{sanitize_filename(originalname)}"

# =====================================================
# 🔹 Tiempo
# =====================================================
def now_ms() -> int:
    return int(time.time() * 1000)

def iso_timestamp(dt: Optional[datetime] = None) -> str:
    """ISO-8601 en UTC con milisegundos y sufijo Z (ej. 2024-05-01T10:20:30.123Z)."""
    dt = dt or datetime.now(timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"
