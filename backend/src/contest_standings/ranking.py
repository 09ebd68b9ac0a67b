from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from .domain import (
    CellState,
    Contest,
    ContestStandings,
    Eligibility,
    GroupOnContest,
    GroupStanding,
    Member,
    MemberStanding,
    Question,
    QuestionCell,
)
from .formatting import question_label
from .scoring import earliest_submission_at, earliest_submission_key, group_score, total_score

log = logging.getLogger(__name__)


class RankingPreconditionError(ValueError):
    """コンテストのデータ構造が不正（呼び出し側の契約違反）。"""


def member_sort_key(member: Member) -> tuple[int, int | float, float]:
    """メンバー順位のソートキー。

    優先順: 参加資格(失格は後ろ) -> 合計点降順 -> 最初の提出時刻昇順。
    全て同じなら安定ソートで入力順を保つ。
    """

    return (
        0 if member.eligibility is Eligibility.ELIGIBLE else 1,
        -total_score(member.submissions),
        earliest_submission_key(member),
    )


def sort_members(members: Sequence[Member]) -> list[Member]:
    return sorted(members, key=member_sort_key)


def question_cells(member: Member, questions: Sequence[Question]) -> list[QuestionCell]:
    """問題ごとのセル。失格者は提出があっても全て UNAVAILABLE。"""

    cells: list[QuestionCell] = []
    disqualified = member.eligibility is Eligibility.DISQUALIFIED
    for index, question in enumerate(questions):
        label = question_label(index)
        if disqualified:
            cells.append(
                QuestionCell(question_id=question.id, label=label, state=CellState.UNAVAILABLE)
            )
            continue
        submission = next((s for s in member.submissions if s.question.id == question.id), None)
        if submission is None:
            cells.append(
                QuestionCell(question_id=question.id, label=label, state=CellState.MISSING, score=0)
            )
        else:
            cells.append(
                QuestionCell(
                    question_id=question.id,
                    label=label,
                    state=CellState.SUBMITTED,
                    score=submission.score,
                    submitted_at=submission.created_at,
                )
            )
    return cells


def rank_members(members: Sequence[Member], questions: Sequence[Question]) -> list[MemberStanding]:
    """グループ内のメンバー順位。

    参加資格のあるメンバーだけに 1..K の連番を振り、失格者の rank は None。
    """

    known = {q.id for q in questions}
    rows: list[MemberStanding] = []
    next_rank = 1
    for member in sort_members(members):
        dangling = [s.id for s in member.submissions if s.question.id not in known]
        if dangling:
            log.warning(
                "member %s has submissions for questions outside the contest: %s",
                member.id,
                dangling,
            )

        rank: int | None = None
        if member.eligibility is Eligibility.ELIGIBLE:
            rank = next_rank
            next_rank += 1

        rows.append(
            MemberStanding(
                member_id=member.id,
                username=member.username,
                eligibility=member.eligibility,
                total_score=total_score(member.submissions),
                earliest_submission_at=earliest_submission_at(member),
                rank=rank,
                cells=question_cells(member, questions),
            )
        )
    return rows


def sort_groups(entries: Sequence[GroupOnContest]) -> list[GroupOnContest]:
    # 同点は入力順（安定ソート）。グループ単位の追加タイブレークはない。
    return sorted(entries, key=lambda e: -group_score(e))


def rank_groups(entries: Sequence[GroupOnContest]) -> list[tuple[int, GroupOnContest]]:
    return [(i, entry) for i, entry in enumerate(sort_groups(entries), start=1)]


def _require_groups(entries: Sequence[GroupOnContest]) -> None:
    for entry in entries:
        if getattr(entry, "group", None) is None:
            raise RankingPreconditionError(f"group-on-contest {entry.id} has no group")


def load_contest(payload: Contest | Mapping[str, Any]) -> Contest:
    if isinstance(payload, Contest):
        return payload
    try:
        return Contest.model_validate(payload)
    except ValidationError as exc:
        raise RankingPreconditionError(f"malformed contest snapshot: {exc}") from exc


def rank_contest(payload: Contest | Mapping[str, Any]) -> ContestStandings:
    """コンテスト全体の順位表を計算する（入力は変更しない）。"""

    contest = load_contest(payload)
    _require_groups(contest.attempted_groups)

    groups: list[GroupStanding] = []
    for rank, entry in rank_groups(contest.attempted_groups):
        group = entry.group
        groups.append(
            GroupStanding(
                entry_id=entry.id,
                group_id=group.id,
                group_name=group.name,
                coordinator_username=group.coordinator.username if group.coordinator else None,
                score=group_score(entry),
                group_total=group.score,
                rank=rank,
                members=rank_members(group.members, contest.questions),
            )
        )

    log.debug("ranked contest %s: %d groups", contest.id, len(groups))
    return ContestStandings(
        contest_id=contest.id,
        status=contest.status,
        start_time=contest.start_time,
        end_time=contest.end_time,
        questions=list(contest.questions),
        groups=groups,
    )
