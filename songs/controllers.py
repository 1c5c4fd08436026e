# backend/songs/controllers.py
import logging
from pathlib import Path
from typing import Dict, List, Optional

from starlette.datastructures import UploadFile
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from models.song import Song, SongUpload
from repositories.song_repository import SongRepository
from .utils import build_stored_filename, is_audio_file, iso_timestamp, now_ms

LOG = logging.getLogger("songs.controllers")

CHUNK_SIZE = 1024 * 1024
DEFAULT_MIMETYPE = "application/octet-stream"


class UploadError(Exception):
    """Error de validación del upload; el mensaje se devuelve tal cual al cliente."""


def _remove_quietly(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        LOG.warning(f"⚠️ No se pudo eliminar {path}: {e}")

# =====================================================
# 🔹 Guardar archivo en disco (streaming con límite)
# =====================================================
async def _store_file(track: UploadFile, dest: Path, max_bytes: int) -> int:
    # "xb": nunca pisar (ni borrar después) un archivo de otro upload
    try:
        fh = await run_in_threadpool(dest.open, "xb")
    except FileExistsError as e:
        raise UploadError(f"File already exists: {dest.name}") from e

    bytes_written = 0
    try:
        with fh:
            while True:
                chunk = await track.read(CHUNK_SIZE)
                if not chunk:
                    break
                bytes_written += len(chunk)
                if bytes_written > max_bytes:
                    raise UploadError("File too large")
                await run_in_threadpool(fh.write, chunk)
    except BaseException:
        _remove_quietly(dest)
        raise
    return bytes_written

# =====================================================
# 🔹 Subir canción
# =====================================================
async def upload_song(
    repo: SongRepository,
    upload_dir: Path,
    track: Optional[UploadFile],
    title: Optional[str] = None,
    artist: Optional[str] = None,
    max_bytes: int = 50 * 1024 * 1024,
) -> Dict:
    if track is None or not track.filename:
        raise UploadError("No file uploaded")

    try:
        request = SongUpload(
            originalname=track.filename,
            mimetype=track.content_type,
            title=title,
            artist=artist,
        )
    except ValidationError as e:
        raise UploadError(f"Invalid upload: {e.errors()[0]['msg']}") from e

    if not is_audio_file(request.originalname, request.mimetype):
        LOG.warning(f"⚠️ Tipo rechazado: {request.originalname} ({request.mimetype})")
        raise UploadError("Only audio files are allowed")

    # Si el tamaño ya viene declarado se rechaza sin escribir nada
    if track.size is not None and track.size > max_bytes:
        raise UploadError("File too large")

    filename = build_stored_filename(request.originalname, now_ms())
    dest = Path(upload_dir) / filename
    size = await _store_file(track, dest, max_bytes)

    song = Song(
        id=now_ms(),
        title=request.resolved_title(),
        artist=request.resolved_artist(),
        filename=filename,
        originalname=request.originalname,
        mimetype=request.mimetype or DEFAULT_MIMETYPE,
        size=size,
        uploadedAt=iso_timestamp(),
    )
    entry = song.model_dump()

    try:
        await run_in_threadpool(repo.add_song, entry)
    except BaseException:
        # sin registro no debe quedar archivo huérfano
        _remove_quietly(dest)
        raise

    LOG.info(f"✅ Upload completado: {filename} ({size} bytes)")
    return entry

# =====================================================
# 🔹 Listar canciones
# =====================================================
def list_songs(repo: SongRepository) -> List[Dict]:
    return repo.get_all_songs()
