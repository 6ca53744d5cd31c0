# services/forum.py — 게시글 트리 구성 / 표시용 헬퍼
from __future__ import annotations
from typing import Any, Dict, List

from edulms.helpers.utils import parse_iso


def organize_posts(posts: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    최상위 글(parent_id 없음)을 목록 순서대로, 각 글 아래에 답글을 작성 순서대로 붙인다.
    원본 레코드는 건드리지 않는다.
    """
    top_level = [p for p in posts if not p.get("parent_id")]
    return [
        {**p, "replies": [r for r in posts if r.get("parent_id") == p["id"]]}
        for p in top_level
    ]


def initials(name: str) -> str:
    return "".join(part[0] for part in (name or "").split(" ") if part).upper()


def post_date(value: str) -> str:
    # 예: "1/2/2024 at 02:00 PM"
    dt = parse_iso(value)
    if dt is None:
        return ""
    return f"{dt.month}/{dt.day}/{dt.year} at {dt.strftime('%I:%M %p')}"


def reply_label(count: int) -> str:
    return f"{count} {'Reply' if count == 1 else 'Replies'}"
