from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import datetime

from .domain import GroupOnContest, Member, Submission


def total_score(submissions: Iterable[Submission] | None) -> int | float:
    """提出スコアの合計。未提出(None/空)は0点。"""

    if not submissions:
        return 0
    return sum(s.score for s in submissions)


def earliest_submission_at(member: Member) -> datetime | None:
    if not member.submissions:
        return None
    return min(s.created_at for s in member.submissions)


def earliest_submission_key(member: Member) -> float:
    """最初の提出時刻のソートキー。未提出は+inf（提出者の後ろに並ぶ）。"""

    earliest = earliest_submission_at(member)
    if earliest is None:
        return math.inf
    return earliest.timestamp()


def group_score(entry: GroupOnContest) -> int | float:
    # 呼び出し側で確定済みのスコア。メンバー合計から再計算しない。
    return entry.score
