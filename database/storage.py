# backend/database/storage.py
import json
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger("database.storage")


class StorageInitError(RuntimeError):
    """No se pudo preparar el directorio de uploads o el archivo de metadata."""


@dataclass(frozen=True)
class StoragePaths:
    upload_dir: Path
    metadata_file: Path


# ============================================================
# 🗂️ INICIALIZACIÓN DEL ALMACENAMIENTO LOCAL
# ============================================================
def init_storage(upload_dir, metadata_file) -> StoragePaths:
    """
    Garantiza que existan el directorio de uploads y el archivo de metadata.

    Idempotente: si ya existen se dejan tal cual (los registros de
    songs.json no se tocan). El archivo nuevo se inicializa con `[]`.
    """
    upload_dir = Path(upload_dir)
    metadata_file = Path(metadata_file)

    try:
        upload_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"❌ No se pudo crear el directorio de uploads {upload_dir}: {e}")
        raise StorageInitError(f"Cannot create upload directory {upload_dir}: {e}") from e

    if not metadata_file.exists():
        try:
            metadata_file.parent.mkdir(parents=True, exist_ok=True)
            metadata_file.write_text(json.dumps([]), encoding="utf-8")
            logger.info(f"🆕 Archivo de metadata creado: {metadata_file}")
        except OSError as e:
            logger.error(f"❌ No se pudo crear el archivo de metadata {metadata_file}: {e}")
            raise StorageInitError(f"Cannot create metadata file {metadata_file}: {e}") from e
    elif not metadata_file.is_file():
        raise StorageInitError(f"Metadata path is not a file: {metadata_file}")

    logger.info(f"✅ Almacenamiento listo: uploads={upload_dir} metadata={metadata_file}")
    return StoragePaths(upload_dir=upload_dir, metadata_file=metadata_file)
