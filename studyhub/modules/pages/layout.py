from typing import Any, Dict, Optional

from studyhub.core.session import SessionContext
from studyhub.core.sync import SyncedView

NAVIGATION = [
    {"name": "Dashboard", "to": "/"},
    {"name": "Tasks", "to": "/tasks"},
    {"name": "Groups", "to": "/groups"},
    {"name": "Resources", "to": "/resources"},
]


def navigation(active_path: str):
    return [{**item, "active": item["to"] == active_path} for item in NAVIGATION]


def render_screen(path: str, session: SessionContext, view: SyncedView) -> Dict[str, Any]:
    """Authenticated layout around one screen's current state"""
    identity = session.identity or {}
    return {
        "screen": view.name,
        "path": path,
        "navigation": navigation(path),
        "user": {
            "id": identity.get("id"),
            "email": identity.get("email"),
            "name": (identity.get("user_metadata") or {}).get("name"),
        },
        **view.snapshot(),
    }


def render_public(screen: str, error: Optional[str] = None) -> Dict[str, Any]:
    return {"screen": screen, "error": error}
