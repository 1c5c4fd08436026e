"""
test_api.py — Prueba integral Music Uploader Backend (servidor en ejecución)
---------------------------------------------------------------------------
Flujo:
1. Subir un archivo de audio (POST /upload)
2. Listar canciones (GET /songs)
3. Descargar el archivo subido (GET /uploads/<filename>) y comparar bytes

Genera logs detallados en test_log.json

Uso:
    python test/test_api.py --file cancion.mp3 --title "A" --artist "B"
"""

import argparse
import requests
import json
import sys
from datetime import datetime, timezone
from pathlib import Path

API_BASE = "http://localhost:4000"
LOG_FILE = "test_log.json"


# =====================================================
# * Guardar log detallado
# =====================================================
def save_log(step: str, response):
    """Guarda en archivo el cuerpo de la respuesta para depuración."""
    data = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "step": step,
        "status_code": response.status_code,
        "url": response.url,
        "response_text": response.text[:2000],
    }
    with open(LOG_FILE, "a", encoding="utf-8") as f:
        f.write(json.dumps(data, ensure_ascii=False, indent=2))
        f.write("\n\n")


# =====================================================
# * UPLOAD
# =====================================================
def upload_track(path: Path, title: str = None, artist: str = None):
    print(f"📤 Subiendo archivo: {path.name}")
    data = {}
    if title:
        data["title"] = title
    if artist:
        data["artist"] = artist

    with path.open("rb") as fh:
        resp = requests.post(f"{API_BASE}/upload", files={"track": (path.name, fh)}, data=data, timeout=120)
    save_log("upload", resp)

    try:
        body = resp.json()
    except ValueError:
        print("❌ La respuesta no es JSON válida.")
        return None

    if resp.status_code != 200 or not body.get("ok"):
        print(f"❌ Error en upload: {resp.status_code} -> {body.get('error')}")
        return None

    entry = body["entry"]
    print(f"✅ Upload exitoso -> {entry['filename']} ({entry['size']} bytes)")
    return entry


# =====================================================
# * LISTAR CANCIONES
# =====================================================
def list_songs():
    print("\n📜 Obteniendo canciones...")
    resp = requests.get(f"{API_BASE}/songs", timeout=30)
    save_log("songs", resp)
    if resp.status_code != 200:
        print(f"❌ Error al listar: {resp.status_code}")
        return []

    songs = resp.json()
    print(f"🎵 {len(songs)} canciones:")
    for i, s in enumerate(songs[:20], 1):
        print(f"  {i:02d}. {s.get('title')} — {s.get('artist')} ({s.get('uploadedAt')})")
    return songs


# =====================================================
# * DESCARGAR Y COMPARAR
# =====================================================
def verify_download(entry: dict, source: Path) -> bool:
    resp = requests.get(f"{API_BASE}/uploads/{entry['filename']}", timeout=120)
    save_log("download", resp)
    if resp.status_code != 200:
        print(f"❌ Archivo no disponible: {resp.status_code}")
        return False
    same = resp.content == source.read_bytes()
    print("✅ Bytes idénticos al original." if same else "❌ Los bytes no coinciden.")
    return same


def main():
    global API_BASE
    parser = argparse.ArgumentParser(description="Smoke test del backend Music Uploader")
    parser.add_argument("--file", required=True, help="Archivo de audio a subir")
    parser.add_argument("--title", default=None)
    parser.add_argument("--artist", default=None)
    parser.add_argument("--api", default=API_BASE, help="URL base del backend")
    args = parser.parse_args()
    API_BASE = args.api.rstrip("/")

    source = Path(args.file)
    entry = upload_track(source, args.title, args.artist)
    if not entry:
        return 1

    songs = list_songs()
    if not songs or songs[0]["id"] != entry["id"]:
        print("⚠️ La canción subida no aparece primera en la lista.")
        return 1

    return 0 if verify_download(entry, source) else 1


if __name__ == "__main__":
    sys.exit(main())
