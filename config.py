# backend/config.py
import os
from dotenv import load_dotenv
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent

# ============================================================
# 🌍 DETECTAR ENTORNO Y CARGAR .env CORRESPONDIENTE
# ============================================================
ENV = os.getenv("ENV", "production" if "PASSENGER_ENV" in os.environ else "development")

env_file = ".env.production" if ENV == "production" else ".env.development"
dotenv_path = BASE_DIR / env_file
load_dotenv(dotenv_path)

# ============================================================
# ⚙️ CONFIGURACIÓN GENERAL
# ============================================================
class Settings:
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "MusicUploader")
    VERSION: str = os.getenv("VERSION", "1.0")

    # 🔹 Servidor
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "4000"))

    # 🔹 Almacenamiento local (archivos + songs.json)
    DATA_DIR: Path = Path(os.getenv("DATA_DIR", str(BASE_DIR)))
    UPLOAD_DIR: Path = Path(os.getenv("UPLOAD_DIR", str(DATA_DIR / "uploads")))
    METADATA_FILE: Path = Path(os.getenv("METADATA_FILE", str(DATA_DIR / "songs.json")))
    MAX_UPLOAD_BYTES: int = int(os.getenv("MAX_UPLOAD_BYTES", str(50 * 1024 * 1024)))

    # 🔹 URL base que usa el frontend
    API_URL: str = os.getenv("API_URL", f"http://localhost:{PORT}").rstrip("/")

    # 🔹 Otros
    ALLOWED_ORIGINS: list = os.getenv("ALLOWED_ORIGINS", "*").split(",")
    DEBUG: bool = ENV == "development"
    ENV: str = ENV

settings = Settings()
