# blueprints/auth/routes.py — 데모 로그인/로그아웃
from __future__ import annotations
from flask import Blueprint, render_template, request, redirect, url_for, flash, g, current_app

from edulms.demo_data import DEMO_LOGIN_SHORTCUTS
from edulms.helpers.auth import sign_in, sign_out
from edulms.services.exceptions import AuthError

bp = Blueprint("auth", __name__)


@bp.get("/login", endpoint="home")
def login():
    if g.get("user"):
        return redirect(url_for("dashboard.home"))
    # 데모 계정 버튼: 이메일과 공용 비밀번호를 미리 채움
    demo_email = (request.args.get("demo") or "").strip()
    return render_template(
        "auth_login.html",
        shortcuts=DEMO_LOGIN_SHORTCUTS,
        email=demo_email,
        password=current_app.config["DEMO_PASSWORD"] if demo_email else "",
        next=request.args.get("next") or "",
    )


@bp.post("/login", endpoint="login_post")
def login_post():
    email = (request.form.get("email") or "").strip()
    password = request.form.get("password") or ""
    nxt = request.form.get("next") or request.args.get("next")

    try:
        sign_in(email, password)
    except AuthError as e:
        flash(e.message, "error")
        return redirect(url_for("auth.home", next=nxt) if nxt else url_for("auth.home"))

    # 간단한 오픈 리다이렉트 방지: 내부 경로만 허용
    if not nxt or not nxt.startswith("/") or nxt.startswith("//"):
        nxt = url_for("dashboard.home")
    return redirect(nxt)


@bp.get("/logout", endpoint="logout_get")
def logout_get():
    sign_out()
    flash("You have been signed out.", "success")
    return redirect(url_for("auth.home"))


@bp.post("/logout", endpoint="logout_post")
def logout_post():
    sign_out()
    flash("You have been signed out.", "success")
    return redirect(url_for("auth.home"))
