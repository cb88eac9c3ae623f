"""
Core dependencies for session resolution and route protection
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from studyhub.config import settings
from studyhub.core.session import SessionContext
from studyhub.database.supabase_client import get_supabase, get_service_supabase
from studyhub.modules.auth.service import AuthService
from supabase import Client
from typing import Dict, Iterator, Optional
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


class LoginRequired(Exception):
    """Raised by page routes; answered with a redirect to /login"""


def get_auth_service(
    supabase: Client = Depends(get_supabase),
    admin_client: Optional[Client] = Depends(get_service_supabase)
) -> AuthService:
    return AuthService(supabase, admin_client=admin_client)


def get_request_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> Optional[str]:
    """Bearer header first, then the session cookie set by the login page"""
    if credentials is not None:
        return credentials.credentials
    return request.cookies.get(settings.session_cookie_name)


def get_session(
    token: Optional[str] = Depends(get_request_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> Iterator[SessionContext]:
    session = SessionContext(auth_service, token)
    session.resolve()
    try:
        yield session
    finally:
        session.close()


def require_session(session: SessionContext = Depends(get_session)) -> SessionContext:
    if not session.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session


def require_page_session(session: SessionContext = Depends(get_session)) -> SessionContext:
    if not session.is_authenticated:
        raise LoginRequired()
    return session


def get_current_user_id(session: SessionContext = Depends(require_session)) -> Dict:
    """Identity of the authenticated caller"""
    return session.identity
