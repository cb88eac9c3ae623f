"""
Navigation surface. Each protected route mounts one screen for the signed-in
session (fetch on mount), applies at most one mutation, and returns the
screen state inside the authenticated layout. Unauthenticated sessions are
redirected to /login by require_page_session.
"""
from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, RedirectResponse
from studyhub.config import settings
from studyhub.core.dependencies import get_auth_service, get_session, require_page_session
from studyhub.core.exceptions import AuthError, BackendError
from studyhub.core.session import SessionContext
from studyhub.database.supabase_client import get_supabase
from studyhub.modules.auth.schemas import LoginRequest, RegisterRequest
from studyhub.modules.auth.service import AuthService
from studyhub.modules.dashboard.screen import DashboardScreen
from studyhub.modules.dashboard.service import DashboardService
from studyhub.modules.groups.schemas import GroupCreate, GroupUpdate, GroupInvite
from studyhub.modules.groups.screen import GroupScreen
from studyhub.modules.groups.service import GroupService
from studyhub.modules.pages.layout import render_public, render_screen
from studyhub.modules.resources.schemas import ResourceCreate
from studyhub.modules.resources.screen import ResourceScreen
from studyhub.modules.resources.service import ResourceService
from studyhub.modules.resources.storage import build_storage
from studyhub.modules.tasks.schemas import TaskCreate, TaskUpdate
from studyhub.modules.tasks.screen import TaskScreen
from studyhub.modules.tasks.service import TaskService
from studyhub.modules.users.schemas import UserUpdate
from studyhub.modules.users.screen import ProfileScreen
from studyhub.modules.users.service import UserService
from supabase import Client
from typing import Optional
import logging

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])


def _redirect(path: str) -> RedirectResponse:
    return RedirectResponse(path, status_code=status.HTTP_303_SEE_OTHER)


def _start_session(response: RedirectResponse, access_token: str) -> RedirectResponse:
    response.set_cookie(
        settings.session_cookie_name,
        access_token,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )
    return response


def _mount(screen):
    screen.fetch()
    try:
        yield screen
    finally:
        screen.close()


def get_dashboard_screen(
    session: SessionContext = Depends(require_page_session),
    supabase: Client = Depends(get_supabase)
):
    yield from _mount(DashboardScreen(session, DashboardService(supabase)))


def get_task_screen(
    session: SessionContext = Depends(require_page_session),
    supabase: Client = Depends(get_supabase)
):
    yield from _mount(TaskScreen(session, TaskService(supabase)))


def get_group_screen(
    session: SessionContext = Depends(require_page_session),
    supabase: Client = Depends(get_supabase)
):
    yield from _mount(GroupScreen(session, GroupService(supabase)))


def get_resource_screen(
    session: SessionContext = Depends(require_page_session),
    supabase: Client = Depends(get_supabase)
):
    service = ResourceService(supabase, build_storage(supabase))
    yield from _mount(ResourceScreen(session, service))


def get_profile_screen(
    session: SessionContext = Depends(require_page_session),
    supabase: Client = Depends(get_supabase)
):
    yield from _mount(ProfileScreen(session, UserService(supabase)))


# Public screens

@router.get("/login")
def login_page(session: SessionContext = Depends(get_session)):
    if session.is_authenticated:
        return _redirect("/")
    return render_public("login")


@router.post("/login")
def login_submit(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    try:
        token = service.login(login_data)
    except AuthError as e:
        return JSONResponse(status_code=e.status_code, content=render_public("login", e.message))
    except BackendError as e:
        logger.error(f"Login failed: {e}")
        return JSONResponse(status_code=502, content=render_public("login", "Failed to log in"))
    return _start_session(_redirect("/"), token.access_token)


@router.get("/register")
def register_page(session: SessionContext = Depends(get_session)):
    if session.is_authenticated:
        return _redirect("/")
    return render_public("register")


@router.post("/register")
def register_submit(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    try:
        registered = service.register(register_data)
    except AuthError as e:
        return JSONResponse(status_code=e.status_code, content=render_public("register", e.message))
    except BackendError as e:
        logger.error(f"Registration failed: {e}")
        return JSONResponse(status_code=502, content=render_public("register", "Failed to create an account."))
    if registered.access_token:
        return _start_session(_redirect("/"), registered.access_token)
    # Email confirmation pending: no session yet
    return _redirect("/login")


@router.post("/logout")
def logout_submit(session: SessionContext = Depends(get_session)):
    session.logout()
    response = _redirect("/login")
    response.delete_cookie(settings.session_cookie_name)
    return response


# Dashboard

@router.get("/")
def home_page(screen: DashboardScreen = Depends(get_dashboard_screen)):
    return render_screen("/", screen.session, screen)


# Tasks

@router.get("/tasks")
def tasks_page(screen: TaskScreen = Depends(get_task_screen)):
    return render_screen("/tasks", screen.session, screen)


@router.post("/tasks")
def tasks_add(task_data: TaskCreate, screen: TaskScreen = Depends(get_task_screen)):
    screen.add_task(task_data)
    return render_screen("/tasks", screen.session, screen)


@router.post("/tasks/{task_id}")
def tasks_update(task_id: str, task_data: TaskUpdate, screen: TaskScreen = Depends(get_task_screen)):
    screen.update_task(task_id, task_data)
    return render_screen("/tasks", screen.session, screen)


@router.post("/tasks/{task_id}/toggle")
def tasks_toggle(task_id: str, screen: TaskScreen = Depends(get_task_screen)):
    screen.toggle_complete(task_id)
    return render_screen("/tasks", screen.session, screen)


@router.post("/tasks/{task_id}/delete")
def tasks_delete(task_id: str, screen: TaskScreen = Depends(get_task_screen)):
    screen.delete_task(task_id)
    return render_screen("/tasks", screen.session, screen)


# Groups

@router.get("/groups")
def groups_page(screen: GroupScreen = Depends(get_group_screen)):
    return render_screen("/groups", screen.session, screen)


@router.post("/groups")
def groups_create(group_data: GroupCreate, screen: GroupScreen = Depends(get_group_screen)):
    screen.create_group(group_data)
    return render_screen("/groups", screen.session, screen)


@router.post("/groups/{group_id}")
def groups_update(group_id: str, group_data: GroupUpdate, screen: GroupScreen = Depends(get_group_screen)):
    screen.update_group(group_id, group_data)
    return render_screen("/groups", screen.session, screen)


@router.post("/groups/{group_id}/delete")
def groups_delete(group_id: str, screen: GroupScreen = Depends(get_group_screen)):
    screen.delete_group(group_id)
    return render_screen("/groups", screen.session, screen)


@router.post("/groups/{group_id}/invite")
def groups_invite(group_id: str, invite: GroupInvite, screen: GroupScreen = Depends(get_group_screen)):
    screen.invite_member(group_id, invite.email)
    return render_screen("/groups", screen.session, screen)


@router.post("/groups/{group_id}/members/{member_id}/remove")
def groups_remove_member(group_id: str, member_id: str, screen: GroupScreen = Depends(get_group_screen)):
    screen.remove_member(group_id, member_id)
    return render_screen("/groups", screen.session, screen)


# Resources

@router.get("/resources")
def resources_page(screen: ResourceScreen = Depends(get_resource_screen)):
    return render_screen("/resources", screen.session, screen)


@router.post("/resources")
async def resources_upload(
    file: UploadFile = File(...),
    title: str = Form(..., min_length=1),
    description: Optional[str] = Form(""),
    screen: ResourceScreen = Depends(get_resource_screen)
):
    file_content = await file.read()
    await run_in_threadpool(
        screen.upload,
        ResourceCreate(title=title, description=description),
        file.filename,
        file_content,
        file.content_type
    )
    return render_screen("/resources", screen.session, screen)


@router.post("/resources/{resource_id}/delete")
def resources_delete(resource_id: str, screen: ResourceScreen = Depends(get_resource_screen)):
    screen.delete_resource(resource_id)
    return render_screen("/resources", screen.session, screen)


# Profile

@router.get("/profile")
def profile_page(screen: ProfileScreen = Depends(get_profile_screen)):
    return render_screen("/profile", screen.session, screen)


@router.post("/profile")
def profile_update(user_data: UserUpdate, screen: ProfileScreen = Depends(get_profile_screen)):
    screen.update_profile(user_data)
    return render_screen("/profile", screen.session, screen)
