# run_dev.py
import os
import socket

from dotenv import load_dotenv

# .env antes de importar settings (DATA_DIR, STORE_BACKEND, ...)
if os.path.exists(".env"):
    load_dotenv(".env")

APP_MODULE = os.getenv("APP_MODULE", "mytube.main:app")


def _lan_ip() -> str:
    """IP LAN real sin depender de hostname/DNS."""
    try:
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        s.connect(("8.8.8.8", 80))
        ip = s.getsockname()[0]
        s.close()
        return ip
    except OSError:
        return "127.0.0.1"


def main():
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    reload_flag = os.getenv("RELOAD", "1").strip() in ("1", "true", "True", "yes", "on")

    print(f"🔗 API local: http://127.0.0.1:{port}")
    print(f"📱 API LAN:   http://{_lan_ip()}:{port}")
    print(f"🌀 reload={'ON' if reload_flag else 'OFF'}")

    uvicorn.run(
        APP_MODULE,
        host=host,
        port=port,
        reload=reload_flag,
        reload_dirs=["mytube"],
        # los JSON del almacén cambian en cada mutación: no recargar por ellos
        reload_excludes=[".venv", ".git", "__pycache__", "data", "public"],
        log_level=os.getenv("LOG_LEVEL", "info"),
        lifespan="on",
    )


if __name__ == "__main__":
    main()
