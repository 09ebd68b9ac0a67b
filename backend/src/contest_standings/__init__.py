from .domain import (
    CellState,
    Contest,
    ContestStandings,
    ContestStatus,
    Difficulty,
    Eligibility,
    GroupOnContest,
    GroupStanding,
    Member,
    MemberStanding,
    Question,
    QuestionCell,
    SiteStats,
    Submission,
    UserRecord,
)
from .formatting import ContestBoard, format_standings
from .ranking import RankingPreconditionError, rank_contest, rank_groups, rank_members
from .service import StandingsService
from .settings import Settings
from .stats import compute_site_stats

__all__ = [
    "CellState",
    "Contest",
    "ContestBoard",
    "ContestStandings",
    "ContestStatus",
    "Difficulty",
    "Eligibility",
    "GroupOnContest",
    "GroupStanding",
    "Member",
    "MemberStanding",
    "Question",
    "QuestionCell",
    "RankingPreconditionError",
    "Settings",
    "SiteStats",
    "StandingsService",
    "Submission",
    "UserRecord",
    "compute_site_stats",
    "format_standings",
    "rank_contest",
    "rank_groups",
    "rank_members",
]
