from __future__ import annotations

from collections.abc import Sequence

from .domain import SiteStats, UserRecord


def compute_site_stats(
    users: Sequence[UserRecord], total_groups: int, total_contests: int
) -> SiteStats:
    """ダッシュボード用の集計。ユーザーは個人ポイント降順（同点は入力順）。"""

    ordered = sorted(users, key=lambda u: -u.individual_points)
    return SiteStats(
        total_users=len(ordered),
        total_groups=total_groups,
        total_contests=total_contests,
        users=ordered,
    )
