from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from config import settings
from database.storage import init_storage
from repositories.song_repository import SongRepository
import logging
import uvicorn

# =====================================================
# * Importación de Routers
# =====================================================
from songs.routes import router as songs_router
from ui.routes import router as ui_router, STATIC_DIR

# =====================================================
# * Configuración de Logging global
# =====================================================
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s"
)
logger = logging.getLogger("main")


def create_app() -> FastAPI:
    # =====================================================
    # * Inicialización de la aplicación
    # =====================================================
    app = FastAPI(
        title=f"{settings.PROJECT_NAME} Backend",
        version=settings.VERSION,
        debug=settings.DEBUG
    )

    # =====================================================
    # * Configuración CORS
    # =====================================================
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =====================================================
    # * Inicialización del almacenamiento (uploads + songs.json)
    # =====================================================
    storage = init_storage(settings.UPLOAD_DIR, settings.METADATA_FILE)
    app.state.storage = storage
    app.state.songs = SongRepository(storage.metadata_file)
    app.state.max_upload_bytes = settings.MAX_UPLOAD_BYTES
    app.state.api_url = settings.API_URL

    logger.info(f"✅ Almacenamiento inicializado en {storage.upload_dir}")

    # =====================================================
    # * Registro de Rutas
    # =====================================================
    app.include_router(songs_router, tags=["Songs"])
    app.include_router(ui_router, tags=["UI"])

    app.mount("/uploads", StaticFiles(directory=str(storage.upload_dir)), name="uploads")
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    logger.info("📜 Routers registrados:")
    logger.info(" - POST /upload, GET /songs -> SongsRouter")
    logger.info(" - /uploads -> archivos subidos")
    logger.info(" - / -> UI")

    # =====================================================
    # * Estado del backend
    # =====================================================
    @app.get("/status", summary="Estado del backend")
    def status():
        return {
            "message": f"🚀 {settings.PROJECT_NAME} Backend activo",
            "version": settings.VERSION,
            "env": settings.ENV
        }

    return app


app = create_app()

# =====================================================
# * Mensaje de arranque
# =====================================================
logger.info(f"🌍 {settings.PROJECT_NAME} backend iniciado en modo '{settings.ENV}'.")
logger.info(f"Backend listening on http://localhost:{settings.PORT}")

if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
