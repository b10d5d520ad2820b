"""
Jinja2 template environment shared by all routers.

Templates live in bookbrowser/templates/ and extend default.html.
"""

from pathlib import Path

from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
