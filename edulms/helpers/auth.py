# helpers/auth.py — 데모 로그인 세션 / 권한 데코레이터 / 워크스페이스 바인딩
from __future__ import annotations
import logging
import uuid
from functools import wraps
from typing import Any, Callable, Dict, Optional

from flask import session, flash, redirect, url_for, request, abort, g, current_app

from edulms.demo_data import DEMO_USERS
from edulms.services.exceptions import AuthError
from edulms.services.workspace import Workspace, WorkspaceRegistry

logger = logging.getLogger(__name__)

REGISTRY_KEY = "edulms_workspaces"


def _user_key() -> str:
    return current_app.config["SESSION_USER_KEY"]


def find_demo_user(user_id: Any) -> Optional[Dict[str, Any]]:
    return next((u for u in DEMO_USERS if u["id"] == user_id), None)


def sign_in(email: str, password: str) -> Dict[str, Any]:
    """
    고정 비밀번호 확인 → 이메일(대소문자 무시)로 데모 사용자 조회 → 세션 저장.
    실패 시 AuthError.
    """
    if password != current_app.config["DEMO_PASSWORD"]:
        logger.warning("sign-in rejected for %r: wrong password", email)
        raise AuthError("Invalid password. Use 'password123' for all demo accounts.")

    email = (email or "").strip().lower()
    user = next((u for u in DEMO_USERS if u["email"].lower() == email), None)
    if not user:
        logger.warning("sign-in rejected for %r: unknown user", email)
        raise AuthError("User not found. Please use one of the demo accounts.")

    session[_user_key()] = dict(user)
    session.permanent = True
    logger.info("user %s signed in (%s)", user["id"], user["role"])
    return dict(user)


def sign_out() -> None:
    """세션 사용자와 그 세션의 데모 데이터 사본을 함께 버린다."""
    stored = session.pop(_user_key(), None)
    ws_id = session.pop(current_app.config["SESSION_WORKSPACE_KEY"], None)
    if ws_id:
        _registry().drop(ws_id)
    if isinstance(stored, dict):
        logger.info("user %s signed out", stored.get("id"))


def load_session_user() -> Optional[Dict[str, Any]]:
    """
    세션에 저장된 사용자를 데모 명단과 대조.
    명단에 없거나 형식이 깨진 값은 세션에서 지운다.
    """
    stored = session.get(_user_key())
    if stored is None:
        return None
    user = find_demo_user(stored.get("id")) if isinstance(stored, dict) else None
    if not user:
        logger.error("discarding invalid stored session user: %r", stored)
        session.pop(_user_key(), None)
        return None
    return dict(user)


def _registry() -> WorkspaceRegistry:
    reg = current_app.extensions.get(REGISTRY_KEY)
    if reg is None:
        reg = WorkspaceRegistry(current_app.config["MAX_WORKSPACES"])
        current_app.extensions[REGISTRY_KEY] = reg
    return reg


def current_workspace() -> Workspace:
    """이 브라우저 세션의 데모 데이터 사본 (없으면 새로 시드)"""
    ws = g.get("workspace")
    if ws is not None:
        return ws
    key = current_app.config["SESSION_WORKSPACE_KEY"]
    ws_id = session.get(key)
    if not isinstance(ws_id, str) or not ws_id:
        ws_id = uuid.uuid4().hex
        session[key] = ws_id
    ws = _registry().get_or_create(ws_id)
    g.workspace = ws
    return ws


def _to_login():
    flash("Please sign in to continue.", "error")
    return redirect(url_for("auth.home", next=request.full_path))


def login_required(view: Callable):
    @wraps(view)
    def _wrapped(*args, **kwargs):
        if not g.get("user"):
            return _to_login()
        return view(*args, **kwargs)
    return _wrapped


def roles_required(*roles: str):
    def deco(view: Callable):
        @wraps(view)
        def _wrapped(*args, **kwargs):
            u = g.get("user")
            if not u:
                return _to_login()
            if u["role"] not in roles:
                abort(403)
            return view(*args, **kwargs)
        return _wrapped
    return deco
