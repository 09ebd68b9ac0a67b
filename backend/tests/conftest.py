from __future__ import annotations

from typing import Any

import pytest
from builders import group_entry, member, submission


@pytest.fixture
def questions() -> list[dict[str, Any]]:
    return [
        {
            "question": {
                "id": "q1",
                "leetcodeUrl": "https://leetcode.com/problems/two-sum/",
                "difficulty": "EASY",
                "points": 10,
                "slug": "two-sum",
            }
        },
        {
            "question": {
                "id": "q2",
                "codeforcesUrl": "https://codeforces.com/problemset/problem/4/A",
                "difficulty": "HARD",
                "points": 50,
                "slug": "watermelon",
            }
        },
    ]


@pytest.fixture
def contest_payload(questions: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "id": 7,
        "startTime": "2024-05-01T09:00:00Z",
        "endTime": "2024-05-01T12:00:00Z",
        "status": "COMPLETED",
        "questions": questions,
        "attemptedGroups": [
            group_entry(
                "a",
                30,
                [
                    member(
                        "M1",
                        [
                            submission("s1", "q1", 10, "2024-05-01T10:00:00Z"),
                            submission("s2", "q2", 40, "2024-05-01T11:00:00Z"),
                        ],
                    ),
                    member("M2", [submission("s3", "q2", 50, "2024-05-01T09:30:00Z")]),
                    member(
                        "M3",
                        [submission("s4", "q2", 100, "2024-05-01T09:05:00Z")],
                        allowed=False,
                    ),
                ],
            ),
            group_entry("b", 50),
            group_entry("c", 50),
            group_entry("d", 10),
        ],
    }
