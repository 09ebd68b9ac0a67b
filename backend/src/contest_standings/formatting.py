from __future__ import annotations

from string import ascii_uppercase

from .domain import (
    CellState,
    ContestStandings,
    ContestStatus,
    Difficulty,
    Eligibility,
    GroupStanding,
    MemberStanding,
    Model,
    Question,
    QuestionCell,
)
from .settings import Settings

_PODIUM_BADGES = ("gold", "silver", "bronze")


def question_label(index: int) -> str:
    """0 -> A, 25 -> Z, 26 -> AA（表計算ソフトの列名と同じ）。"""

    if index < 0:
        raise ValueError("index must be >= 0")
    label = ""
    n = index + 1
    while n:
        n, rem = divmod(n - 1, 26)
        label = ascii_uppercase[rem] + label
    return label


def rank_badge(rank: int | None, podium_places: int = 3) -> str:
    if rank is None or rank < 1 or rank > min(podium_places, len(_PODIUM_BADGES)):
        return "default"
    return _PODIUM_BADGES[rank - 1]


def difficulty_label(difficulty: Difficulty) -> str:
    return difficulty.value.capitalize()


def status_label(status: ContestStatus) -> str:
    return "Active" if status is ContestStatus.ACTIVE else "Completed"


class BoardQuestion(Model):
    label: str
    slug: str
    link: str
    difficulty: str
    points: int


class BoardCell(Model):
    label: str
    text: str
    time: str | None = None


class BoardMemberRow(Model):
    position: int
    member_id: str
    username: str
    rank_label: str
    badge: str
    not_allowed: bool
    total_label: str
    cells: list[BoardCell]


class BoardGroupRow(Model):
    position: int
    entry_id: str
    group_name: str
    coordinator_username: str | None
    rank_label: str
    badge: str
    score: int | float
    group_total: int | float
    participating_count: int
    not_allowed_count: int
    members: list[BoardMemberRow]


class ContestBoard(Model):
    contest_id: int
    status_label: str
    questions: list[BoardQuestion]
    groups: list[BoardGroupRow]


def format_question(index: int, question: Question) -> BoardQuestion:
    return BoardQuestion(
        label=question_label(index),
        slug=question.slug,
        link=question.link,
        difficulty=difficulty_label(question.difficulty),
        points=question.points,
    )


def format_cell(cell: QuestionCell, settings: Settings) -> BoardCell:
    if cell.state is CellState.UNAVAILABLE:
        return BoardCell(label=cell.label, text=settings.unavailable_label)
    if cell.state is CellState.MISSING:
        return BoardCell(label=cell.label, text="0")
    time = None
    if cell.submitted_at is not None:
        time = cell.submitted_at.astimezone(settings.tzinfo).strftime(settings.time_format)
    return BoardCell(label=cell.label, text=str(cell.score), time=time)


def format_member(position: int, row: MemberStanding, settings: Settings) -> BoardMemberRow:
    not_allowed = row.eligibility is Eligibility.DISQUALIFIED
    return BoardMemberRow(
        position=position,
        member_id=row.member_id,
        username=row.username,
        rank_label=settings.unranked_label if row.rank is None else str(row.rank),
        badge=rank_badge(row.rank, settings.podium_places),
        not_allowed=not_allowed,
        total_label=settings.unavailable_label if not_allowed else str(row.total_score),
        cells=[format_cell(c, settings) for c in row.cells],
    )


def format_group(position: int, row: GroupStanding, settings: Settings) -> BoardGroupRow:
    not_allowed = sum(1 for m in row.members if m.eligibility is Eligibility.DISQUALIFIED)
    return BoardGroupRow(
        position=position,
        entry_id=row.entry_id,
        group_name=row.group_name,
        coordinator_username=row.coordinator_username,
        rank_label=str(row.rank),
        badge=rank_badge(row.rank, settings.podium_places),
        score=row.score,
        group_total=row.group_total,
        participating_count=len(row.members) - not_allowed,
        not_allowed_count=not_allowed,
        members=[format_member(i, m, settings) for i, m in enumerate(row.members)],
    )


def format_standings(standings: ContestStandings, settings: Settings | None = None) -> ContestBoard:
    """順位表を表示用のラベル付き構造に変換する。"""

    settings = settings or Settings()
    return ContestBoard(
        contest_id=standings.contest_id,
        status_label=status_label(standings.status),
        questions=[format_question(i, q) for i, q in enumerate(standings.questions)],
        groups=[format_group(i, g, settings) for i, g in enumerate(standings.groups)],
    )
