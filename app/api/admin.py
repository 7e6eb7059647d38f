"""
Admin area pages.

Jinja2-rendered pages for the browser-facing admin area. Access control happens in
SessionGateMiddleware before these handlers run; the pages themselves only talk to
the JSON API.
"""

from pathlib import Path

from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse
from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.config import settings

router = APIRouter(prefix="/admin", tags=["Admin"], include_in_schema=False)

ADMIN_SECTIONS = {
    "projects": {"label": "Projects", "api": "/projects"},
    "contacts": {"label": "Contacts", "api": "/contacts"},
    "about": {"label": "About", "api": "/about"},
}

templates_path = Path(__file__).resolve().parent.parent / "templates"
jinja_env = Environment(
    loader=FileSystemLoader(templates_path),
    autoescape=select_autoescape(["html"]),
)


def _render_template_sync(template_name: str, context: dict) -> str:
    return jinja_env.get_template(template_name).render(**context)


async def render_page(
    template_name: str, title: str, status_code: int = 200, **context
) -> HTMLResponse:
    """Render an admin template off the event loop."""
    context = {
        "title": title,
        "sections": ADMIN_SECTIONS,
        "show_nav": True,
        "login_path": settings.admin_login_path,
        "home_path": settings.admin_path_prefix,
        **context,
    }
    content = await run_in_threadpool(
        _render_template_sync, f"admin/{template_name}", context
    )
    return HTMLResponse(content, status_code=status_code)


@router.get("/login", response_class=HTMLResponse)
async def login_page():
    return await render_page("login.html", "Sign in", show_nav=False)


@router.get("", response_class=HTMLResponse)
async def dashboard_page():
    return await render_page("dashboard.html", "Dashboard")


@router.get("/{section}", response_class=HTMLResponse)
async def section_page(section: str):
    if section not in ADMIN_SECTIONS:
        return await render_page("not_found.html", "Not found", status_code=404)
    return await render_page(
        f"{section}.html",
        ADMIN_SECTIONS[section]["label"],
        section=ADMIN_SECTIONS[section],
    )
