"""Dashboard route."""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from ...views import DashboardView

router = APIRouter(tags=["dashboard"])


def get_templates(request: Request):
    """Get templates from app state."""
    return request.app.state.templates


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard_page(request: Request):
    """Profile and today's stats."""
    view = DashboardView(request.app.state.core).mount()
    try:
        await view.load()
        if view.redirect_to:
            return RedirectResponse(url=view.redirect_to, status_code=303)
        return get_templates(request).TemplateResponse(request, "dashboard.html", {"view": view})
    finally:
        view.unmount()
