# backend/ui/routes.py
from pathlib import Path
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from config import settings

UI_ROOT = Path(__file__).resolve().parent
STATIC_DIR = UI_ROOT / "static"
TEMPLATES = Jinja2Templates(directory=str(UI_ROOT / "templates"))

router = APIRouter()

# ------------------------------------------------------------
# 🔹 Página principal (formulario + lista de canciones)
# ------------------------------------------------------------
@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def index(request: Request):
    return TEMPLATES.TemplateResponse(
        request,
        "index.html",
        {
            "project_name": settings.PROJECT_NAME,
            "api_url": request.app.state.api_url,
        },
    )
