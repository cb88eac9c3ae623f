import hashlib
import time
from supabase import Client
from studyhub.modules.auth.schemas import LoginRequest, RegisterRequest, TokenResponse, RegisterResponse
from studyhub.modules.users.service import UserService
from studyhub.core.exceptions import AuthError, BackendError
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def _cache_key(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


class AuthService:
    def __init__(self, supabase: Client, admin_client: Optional[Client] = None):
        self.supabase = supabase
        self.admin_client = admin_client
        self.users = UserService(supabase)

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        """Register a new user with Supabase Auth and write the matching profile row"""
        try:
            auth_response = self.supabase.auth.sign_up({
                "email": register_data.email,
                "password": register_data.password,
                "options": {
                    "data": {"name": register_data.name}
                }
            })
        except Exception as e:
            error_message = str(e)
            if "already registered" in error_message.lower() or "already exists" in error_message.lower():
                raise AuthError("User already exists", status_code=400)
            logger.error(f"Sign up failed for {register_data.email}: {error_message}")
            raise AuthError("Failed to create an account", status_code=400)

        if not auth_response.user:
            raise AuthError("Failed to create an account", status_code=400)

        user_id = auth_response.user.id
        email = auth_response.user.email or register_data.email
        try:
            self.users.create_profile(user_id, email, register_data.name)
        except BackendError as e:
            logger.error(f"Profile write failed for new identity {user_id}: {e}")
            self._remove_identity(user_id)
            raise

        session = getattr(auth_response, "session", None)
        return RegisterResponse(
            user_id=user_id,
            email=email,
            message="User registered successfully",
            access_token=session.access_token if session else None
        )

    def _remove_identity(self, user_id: str) -> None:
        """Compensate a half-finished signup by deleting the auth identity"""
        if self.admin_client is None:
            logger.error(f"No service role client; auth identity {user_id} is left without a profile")
            return
        try:
            self.admin_client.auth.admin.delete_user(user_id)
            logger.info(f"Removed auth identity {user_id} after failed profile write")
        except Exception as e:
            logger.error(f"Failed to remove orphaned auth identity {user_id}: {e}")

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })
        except Exception as e:
            error_message = str(e)
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise AuthError("Invalid email or password")
            raise BackendError(error_message, operation="login")

        if not auth_response.user or not auth_response.session:
            raise AuthError("Invalid email or password")

        return TokenResponse(
            access_token=auth_response.session.access_token,
            token_type="bearer",
            user_id=auth_response.user.id,
            email=auth_response.user.email or login_data.email
        )

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token. Uses short TTL cache to reduce auth API calls."""
        cache_key = _cache_key(token)
        now = time.monotonic()
        if cache_key in _AUTH_USER_CACHE:
            user_data, expiry = _AUTH_USER_CACHE[cache_key]
            if now < expiry:
                return user_data
            del _AUTH_USER_CACHE[cache_key]
        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise AuthError("Invalid or expired token")
            raise AuthError("Authentication failed")

        if not user_response or not user_response.user:
            raise AuthError("Invalid or expired token")
        user = user_response.user
        user_data = {
            "id": user.id,
            "email": user.email,
            "user_metadata": user.user_metadata or {},
            "created_at": user.created_at,
        }
        if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
            _AUTH_USER_CACHE[cache_key] = (user_data, now + _AUTH_CACHE_TTL_SEC)
        return user_data

    def logout(self, token: Optional[str] = None) -> bool:
        """Revoke the session behind this token and forget its cached identity"""
        if not token:
            return False
        _AUTH_USER_CACHE.pop(_cache_key(token), None)
        if self.admin_client is None:
            logger.warning("No service role client; the access token stays valid until it expires")
            return False
        try:
            self.admin_client.auth.admin.sign_out(token, scope="local")
            return True
        except Exception as e:
            logger.warning(f"Sign out failed: {e}")
            return False
