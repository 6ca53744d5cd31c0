# helpers/utils.py — 시간/ID/파일 메타데이터/Jinja 필터
from __future__ import annotations
import math
import os
import uuid
from datetime import datetime, timezone
from typing import Optional, Tuple

from flask import Flask, current_app, has_app_context
from werkzeug.utils import secure_filename

FILE_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")
ISO_Z = "%Y-%m-%dT%H:%M:%SZ"


# --------------------------------------------------------------------
# 시간
# --------------------------------------------------------------------
def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def now() -> datetime:
    """현재 시각. 테스트에서는 app.config["CLOCK"] 으로 교체한다."""
    clock = current_app.config.get("CLOCK") if has_app_context() else None
    return clock() if clock else utcnow()


def to_iso(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).strftime(ISO_Z)


def parse_iso(s: Optional[str]) -> Optional[datetime]:
    if not s:
        return None
    try:
        dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


# --------------------------------------------------------------------
# 기본 유틸
# --------------------------------------------------------------------
def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def round_half_up(value: float) -> int:
    # 화면 표시용 반올림 (0.5 는 항상 올림)
    return int(math.floor(value + 0.5))


def percentage(score, total) -> int:
    if not total:
        return 0
    return round_half_up(float(score) / float(total) * 100.0)


def parse_positive_int(raw: Optional[str]) -> Optional[int]:
    raw = (raw or "").strip()
    if not raw.isdigit():
        return None
    value = int(raw)
    return value if value > 0 else None


# --------------------------------------------------------------------
# 파일 메타데이터 (실제 파일은 저장하지 않음)
# --------------------------------------------------------------------
def format_file_size(size: Optional[int]) -> str:
    if not size:
        return "Unknown size"
    i = min(int(math.floor(math.log(size) / math.log(1024))), len(FILE_SIZE_UNITS) - 1)
    value = round_half_up(size / math.pow(1024, i) * 100) / 100
    # 소수점 둘째 자리까지, 뒤의 0 은 뗀다 (1.50 → 1.5, 100.00 → 100)
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {FILE_SIZE_UNITS[i]}"


def file_type_label(file_type: Optional[str]) -> str:
    if not file_type:
        return "Unknown"
    if "pdf" in file_type:
        return "PDF"
    if "presentation" in file_type:
        return "PPT"
    if "video" in file_type:
        return "Video"
    if "audio" in file_type:
        return "Audio"
    parts = file_type.split("/")
    return parts[1].upper() if len(parts) > 1 and parts[1] else "Unknown"


def file_type_badge(file_type: Optional[str]) -> str:
    label = file_type_label(file_type)
    return {
        "PDF": "badge-red",
        "PPT": "badge-orange",
        "Video": "badge-blue",
        "Audio": "badge-green",
    }.get(label, "badge-gray")


def upload_metadata(file_storage) -> Tuple[Optional[str], Optional[str], Optional[int]]:
    """
    file_storage: request.files[...] 객체
    반환: (file_url, file_type, file_size). 파일이 없으면 모두 None
    """
    if not file_storage or not getattr(file_storage, "filename", None):
        return None, None, None

    name = secure_filename(file_storage.filename)
    if not name:
        return None, None, None

    stream = file_storage.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)

    prefix = current_app.config.get("UPLOAD_URL_PREFIX", "/uploads")
    return f"{prefix}/{name}", (file_storage.mimetype or None), (size or None)


def format_time(seconds: int) -> str:
    mins, secs = divmod(max(int(seconds), 0), 60)
    return f"{mins}:{secs:02d}"


# --------------------------------------------------------------------
# Jinja 필터
# --------------------------------------------------------------------
def _as_dt(v):
    if isinstance(v, datetime):
        return v
    return parse_iso(v)


def date_us(v) -> str:
    dt = _as_dt(v)
    if dt is None:
        return ""
    return f"{dt.strftime('%b')} {dt.day}, {dt.year}"


def datetime_us(v) -> str:
    dt = _as_dt(v)
    if dt is None:
        return ""
    return f"{date_us(dt)}, {dt.strftime('%I:%M %p')}"


def register_jinja_filters(app: Flask) -> None:
    app.add_template_filter(date_us, "date_us")
    app.add_template_filter(datetime_us, "datetime_us")
    app.add_template_filter(format_file_size, "file_size")
    app.add_template_filter(file_type_label, "file_label")
    app.add_template_filter(file_type_badge, "file_badge")
    app.add_template_filter(format_time, "mmss")

    @app.template_filter("role_badge")
    def role_badge(role: Optional[str]) -> str:
        return {"admin": "badge-red", "tutor": "badge-blue"}.get(role or "", "badge-green")
