# =============================================================================
# app/templating.py - Jinja2 Templates
# =============================================================================
# Shared Jinja2 environment for the server-rendered pages.
# =============================================================================

from pathlib import Path

from fastapi.templating import Jinja2Templates

from app import __version__

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["version"] = __version__
