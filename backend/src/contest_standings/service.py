from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .domain import Contest, ContestStandings, SiteStats, UserRecord
from .formatting import ContestBoard, format_standings
from .ranking import rank_contest
from .settings import Settings, configure_logging
from .stats import compute_site_stats

log = logging.getLogger(__name__)

ContestInput = Contest | Mapping[str, Any]


@dataclass
class StandingsService:
    settings: Settings = field(default_factory=Settings)

    @classmethod
    def from_env(cls, repo_root: Path | None = None) -> "StandingsService":
        settings = Settings.from_env(repo_root)
        configure_logging(settings.log_level)
        return cls(settings=settings)

    def rank(self, contest: ContestInput) -> ContestStandings:
        return rank_contest(contest)

    def board(self, contest: ContestInput) -> ContestBoard:
        return format_standings(self.rank(contest), self.settings)

    def rank_many(self, contests: Sequence[ContestInput]) -> list[ContestStandings]:
        """複数コンテストを並列に計算する。結果は入力順。"""

        if not contests:
            return []
        workers = min(self.settings.max_workers, len(contests))
        log.debug("ranking %d contests with %d workers", len(contests), workers)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="standings") as executor:
            return list(executor.map(rank_contest, contests))

    def site_stats(
        self, users: Sequence[UserRecord], total_groups: int, total_contests: int
    ) -> SiteStats:
        return compute_site_stats(users, total_groups, total_contests)
