# backend/repositories/song_repository.py
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, List

LOG = logging.getLogger("repositories.songs")


class SongRepository:
    """
    Metadata de canciones guardada en un único archivo JSON (songs.json).

    El archivo contiene una lista ordenada de registros, la más reciente
    primero. Todas las escrituras pasan por un lock del repositorio y se
    reemplaza el archivo completo con os.replace, así dos uploads
    simultáneos no se pisan los registros.
    """

    def __init__(self, metadata_file):
        self.metadata_file = Path(metadata_file)
        self._lock = threading.Lock()

    # ------------------------------------------------------------
    # 🔹 Lectura
    # ------------------------------------------------------------
    def _read(self) -> List[Dict]:
        with self.metadata_file.open("r", encoding="utf-8") as fh:
            return json.load(fh)

    def get_all_songs(self) -> List[Dict]:
        """Devuelve la lista completa tal cual está persistida. Un JSON inválido se propaga."""
        return self._read()

    # ------------------------------------------------------------
    # 🔹 Escritura
    # ------------------------------------------------------------
    def _write(self, songs: List[Dict]) -> None:
        fd, tmp_path = tempfile.mkstemp(
            prefix=".songs-", suffix=".json.tmp", dir=str(self.metadata_file.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(songs, fh, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.metadata_file)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def add_song(self, song: Dict) -> Dict:
        """Inserta el registro al inicio de la lista y persiste el archivo completo."""
        with self._lock:
            songs = self._read()
            songs.insert(0, song)
            self._write(songs)
        LOG.info("🎵 Canción registrada %s (%s) total=%d", song.get("id"), song.get("filename"), len(songs))
        return song
