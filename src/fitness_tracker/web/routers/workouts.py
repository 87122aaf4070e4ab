"""Workout routes."""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from ...clients.manual import WORKOUT_TYPES
from ...views import WorkoutDetailView, WorkoutFormView, WorkoutListView
from ...views.workouts import LIST_SCOPES

router = APIRouter(prefix="/workouts", tags=["workouts"])


def get_templates(request: Request):
    """Get templates from app state."""
    return request.app.state.templates


def get_core(request: Request):
    """Get the client core from app state."""
    return request.app.state.core


async def read_form(request: Request) -> dict:
    """Get submitted form fields as a plain dict."""
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


@router.get("", response_class=HTMLResponse)
async def workout_list(request: Request, scope: str = "all"):
    """List workouts."""
    if scope not in LIST_SCOPES:
        scope = "all"

    view = WorkoutListView(get_core(request)).mount()
    try:
        await view.load(scope)
        if view.redirect_to:
            return RedirectResponse(url=view.redirect_to, status_code=303)
        return get_templates(request).TemplateResponse(
            request, "workouts/list.html", {"view": view, "scopes": LIST_SCOPES}
        )
    finally:
        view.unmount()


@router.get("/new", response_class=HTMLResponse)
async def new_workout_form(request: Request):
    """Empty workout form."""
    view = WorkoutFormView(get_core(request)).mount()
    try:
        return get_templates(request).TemplateResponse(
            request, "workouts/form.html", {"view": view, "workout_types": WORKOUT_TYPES}
        )
    finally:
        view.unmount()


@router.post("/new")
async def create_workout(request: Request):
    """Create a workout."""
    data = await read_form(request)
    view = WorkoutFormView(get_core(request)).mount()
    try:
        if await view.submit(data) or view.redirect_to:
            return RedirectResponse(url=view.redirect_to, status_code=303)
        return get_templates(request).TemplateResponse(
            request,
            "workouts/form.html",
            {"view": view, "workout_types": WORKOUT_TYPES},
            status_code=400,
        )
    finally:
        view.unmount()


@router.get("/{workout_id}", response_class=HTMLResponse)
async def workout_detail(request: Request, workout_id: str):
    """Show one workout."""
    view = WorkoutDetailView(get_core(request), workout_id).mount()
    try:
        await view.load()
        if view.redirect_to:
            return RedirectResponse(url=view.redirect_to, status_code=303)
        return get_templates(request).TemplateResponse(
            request,
            "workouts/detail.html",
            {"view": view},
            status_code=200 if view.workout is not None else 404,
        )
    finally:
        view.unmount()


@router.post("/{workout_id}/delete")
async def delete_workout(request: Request, workout_id: str):
    """Delete a workout and go back to the list."""
    view = WorkoutDetailView(get_core(request), workout_id).mount()
    try:
        if await view.delete() or view.redirect_to:
            return RedirectResponse(url=view.redirect_to, status_code=303)
        return get_templates(request).TemplateResponse(
            request, "workouts/detail.html", {"view": view}, status_code=400
        )
    finally:
        view.unmount()


@router.get("/{workout_id}/edit", response_class=HTMLResponse)
async def edit_workout_form(request: Request, workout_id: str):
    """Workout form pre-filled with the stored values."""
    view = WorkoutFormView(get_core(request), workout_id).mount()
    try:
        await view.load()
        if view.redirect_to:
            return RedirectResponse(url=view.redirect_to, status_code=303)
        return get_templates(request).TemplateResponse(
            request,
            "workouts/form.html",
            {"view": view, "workout_types": WORKOUT_TYPES},
            status_code=200 if not view.error else 404,
        )
    finally:
        view.unmount()


@router.post("/{workout_id}/edit")
async def update_workout(request: Request, workout_id: str):
    """Save changes to a workout."""
    data = await read_form(request)
    view = WorkoutFormView(get_core(request), workout_id).mount()
    try:
        if await view.submit(data) or view.redirect_to:
            return RedirectResponse(url=view.redirect_to, status_code=303)
        return get_templates(request).TemplateResponse(
            request,
            "workouts/form.html",
            {"view": view, "workout_types": WORKOUT_TYPES},
            status_code=400,
        )
    finally:
        view.unmount()
