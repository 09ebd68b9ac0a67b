from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class Model(BaseModel):
    """camelCase/snake_case どちらのキーも受け付ける不変モデル。"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


def _as_utc(v: datetime) -> datetime:
    if v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v


class Difficulty(str, Enum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


class ContestStatus(str, Enum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


class Eligibility(str, Enum):
    ELIGIBLE = "ELIGIBLE"
    DISQUALIFIED = "DISQUALIFIED"


class CellState(str, Enum):
    SUBMITTED = "SUBMITTED"
    MISSING = "MISSING"
    UNAVAILABLE = "UNAVAILABLE"


class Question(Model):
    id: str
    leetcode_url: str | None = None
    codeforces_url: str | None = None
    difficulty: Difficulty
    points: int = Field(ge=0)
    slug: str

    @field_validator("difficulty", mode="before")
    @classmethod
    def _upper_difficulty(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @model_validator(mode="after")
    def _exactly_one_link(self) -> "Question":
        if (self.leetcode_url is None) == (self.codeforces_url is None):
            raise ValueError("question needs exactly one of leetcodeUrl or codeforcesUrl")
        return self

    @property
    def link(self) -> str:
        return self.leetcode_url or self.codeforces_url or ""


class QuestionRef(Model):
    id: str
    slug: str | None = None
    points: int | None = None


class Submission(Model):
    id: str
    score: int | float = Field(ge=0)
    status: str
    created_at: datetime
    question: QuestionRef

    @field_validator("created_at")
    @classmethod
    def _utc_created_at(cls, v: datetime) -> datetime:
        return _as_utc(v)


class Member(Model):
    id: str
    username: str
    submissions: list[Submission] = Field(default_factory=list)
    is_allowed_to_participate: bool | None = None

    @field_validator("submissions", mode="before")
    @classmethod
    def _none_is_empty(cls, v: object) -> object:
        return [] if v is None else v

    @property
    def eligibility(self) -> Eligibility:
        # 明示的な False のみ失格（未設定は参加可）。
        if self.is_allowed_to_participate is False:
            return Eligibility.DISQUALIFIED
        return Eligibility.ELIGIBLE


class Coordinator(Model):
    username: str


class Group(Model):
    id: str
    name: str
    score: int | float
    coordinator: Coordinator | None = None
    members: list[Member] = Field(default_factory=list)

    @field_validator("members", mode="before")
    @classmethod
    def _none_is_empty(cls, v: object) -> object:
        return [] if v is None else v


class GroupOnContest(Model):
    id: str
    score: int | float
    group: Group


class Contest(Model):
    id: int
    start_time: datetime
    end_time: datetime
    status: ContestStatus
    questions: list[Question] = Field(default_factory=list)
    attempted_groups: list[GroupOnContest] = Field(default_factory=list)

    @field_validator("questions", mode="before")
    @classmethod
    def _unwrap_questions(cls, v: object) -> object:
        if v is None:
            return []
        if not isinstance(v, list):
            raise ValueError("questions must be a list")
        unwrapped: list[object] = []
        for item in v:
            # 中間テーブルの行は {"id", "contestId", "questionId", "question": {...}} の形で来る
            if isinstance(item, Mapping) and isinstance(item.get("question"), Mapping):
                unwrapped.append(item["question"])
            else:
                unwrapped.append(item)
        return unwrapped

    @field_validator("attempted_groups", mode="before")
    @classmethod
    def _none_is_empty(cls, v: object) -> object:
        return [] if v is None else v

    @field_validator("start_time", "end_time")
    @classmethod
    def _utc_times(cls, v: datetime) -> datetime:
        return _as_utc(v)


class QuestionCell(Model):
    question_id: str
    label: str
    state: CellState
    score: int | float | None = None
    submitted_at: datetime | None = None


class MemberStanding(Model):
    member_id: str
    username: str
    eligibility: Eligibility
    total_score: int | float
    earliest_submission_at: datetime | None
    rank: int | None
    cells: list[QuestionCell]


class GroupStanding(Model):
    entry_id: str
    group_id: str
    group_name: str
    coordinator_username: str | None
    score: int | float
    group_total: int | float
    rank: int
    members: list[MemberStanding]


class ContestStandings(Model):
    contest_id: int
    status: ContestStatus
    start_time: datetime
    end_time: datetime
    questions: list[Question]
    groups: list[GroupStanding]


class UserRecord(Model):
    id: str
    username: str
    section: str | None = None
    individual_points: int = 0
    email: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SiteStats(Model):
    total_users: int = Field(ge=0)
    total_groups: int = Field(ge=0)
    total_contests: int = Field(ge=0)
    users: list[UserRecord]
