"""Login, registration and logout routes."""

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from ...auth.guard import LOGIN_PATH
from ...models.forms import LoginForm, RegisterForm
from ...views import DashboardView, LoginView, RegisterView

router = APIRouter(tags=["auth"])


def get_templates(request: Request):
    """Get templates from app state."""
    return request.app.state.templates


def get_core(request: Request):
    """Get the client core from app state."""
    return request.app.state.core


@router.get("/login", response_class=HTMLResponse)
async def login_page(request: Request):
    """Login form."""
    view = LoginView(get_core(request)).mount()
    try:
        return get_templates(request).TemplateResponse(request, "login.html", {"view": view})
    finally:
        view.unmount()


@router.post("/login")
async def login(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
):
    """Submit the login form."""
    view = LoginView(get_core(request)).mount()
    try:
        if await view.submit(LoginForm(email=email, password=password)):
            return RedirectResponse(url=view.redirect_to, status_code=303)
        return get_templates(request).TemplateResponse(
            request, "login.html", {"view": view}, status_code=400
        )
    finally:
        view.unmount()


@router.get("/register", response_class=HTMLResponse)
async def register_page(request: Request):
    """Registration form."""
    view = RegisterView(get_core(request)).mount()
    try:
        return get_templates(request).TemplateResponse(request, "register.html", {"view": view})
    finally:
        view.unmount()


@router.post("/register")
async def register(
    request: Request,
    username: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    password_confirm: str = Form(""),
    first_name: str = Form(""),
    last_name: str = Form(""),
):
    """Submit the registration form."""
    form = RegisterForm(
        username=username,
        email=email,
        password=password,
        password_confirm=password_confirm,
        first_name=first_name,
        last_name=last_name,
    )
    view = RegisterView(get_core(request)).mount()
    try:
        if await view.submit(form):
            return RedirectResponse(url=view.redirect_to, status_code=303)
        return get_templates(request).TemplateResponse(
            request, "register.html", {"view": view}, status_code=400
        )
    finally:
        view.unmount()


@router.post("/logout")
async def logout(request: Request):
    """Sign out and return to the login page."""
    view = DashboardView(get_core(request)).mount()
    try:
        target = await view.logout()
    finally:
        view.unmount()
    return RedirectResponse(url=target or LOGIN_PATH, status_code=303)
