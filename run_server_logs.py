"""
run_server_logs.py — Ejecuta Uvicorn y guarda logs en archivo
"""

import subprocess
import sys
from datetime import datetime
from config import settings

def main():
    log_file = f"server_logs_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

    print(f"🚀 Iniciando servidor Uvicorn en http://localhost:{settings.PORT} ...")
    print(f"📝 Logs guardados en: {log_file}")

    cmd = [
        sys.executable, "-m", "uvicorn", "main:app",
        "--host", settings.HOST,
        "--port", str(settings.PORT),
    ]
    if settings.DEBUG:
        cmd.append("--reload")

    process = None
    try:
        with open(log_file, "w", encoding="utf-8") as log_file_handle:
            log_file_handle.write(f"=== SERVER LOGS - {datetime.now().isoformat()} ===\n\n")
            log_file_handle.flush()

            process = subprocess.Popen(
                cmd,
                stdout=log_file_handle,
                stderr=subprocess.STDOUT,
                text=True,
                encoding='utf-8'
            )

            print("✅ Servidor iniciado. Presiona Ctrl+C para detener.")
            return process.wait()

    except KeyboardInterrupt:
        print("\n🛑 Deteniendo servidor...")
        if process is not None:
            process.terminate()
        return 0

if __name__ == "__main__":
    sys.exit(main())
