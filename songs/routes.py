# backend/songs/routes.py
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile
from models.song import ErrorResponse, UploadResponse
from .controllers import UploadError, list_songs, upload_song
import logging

router = APIRouter()
LOG = logging.getLogger("songs.routes")


def _form_text(form, key):
    value = form.get(key)
    return value if isinstance(value, str) else None

# ============================================================
# 🔹 Subir canción
# ============================================================
@router.post(
    "/upload",
    summary="Subir archivo de audio",
    response_model=UploadResponse,
    responses={500: {"model": ErrorResponse}},
)
async def upload_route(request: Request):
    repo = request.app.state.songs
    upload_dir = request.app.state.storage.upload_dir
    track = None
    try:
        # el formulario se lee a mano: un `track` de texto cuenta como archivo ausente
        form = await request.form()
        value = form.get("track")
        track = value if isinstance(value, UploadFile) else None
        LOG.info(f"📥 Upload recibido: {track.filename if track else None}")
        entry = await upload_song(
            repo,
            upload_dir,
            track,
            title=_form_text(form, "title"),
            artist=_form_text(form, "artist"),
            max_bytes=request.app.state.max_upload_bytes,
        )
        return {"ok": True, "entry": entry}
    except UploadError as e:
        LOG.warning(f"⚠️ Upload rechazado: {e}")
        return JSONResponse(status_code=500, content={"ok": False, "error": str(e)})
    except Exception as e:
        LOG.exception("❌ Error al procesar upload")
        return JSONResponse(status_code=500, content={"ok": False, "error": str(e)})
    finally:
        if track is not None:
            await track.close()

# ============================================================
# 🔹 Listar canciones
# ============================================================
@router.get("/songs", summary="Listar canciones subidas")
def songs_route(request: Request):
    return list_songs(request.app.state.songs)
