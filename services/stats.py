import math
from typing import Dict

from sqlalchemy import Integer, case, func
from sqlalchemy.orm import Session

from models.question import Question, DIFFICULTIES


def completion_rate(completed: int, total: int) -> int:
    """Rounded integer percentage, halves rounding up; 0 when there is nothing."""
    if total <= 0:
        return 0
    return int(math.floor(completed * 100 / total + 0.5))


def question_stats(db: Session, owner_id: int) -> Dict:
    """
    Completion statistics read from the store in a single grouped query.

    Totals are summed from the per-difficulty buckets, so the buckets always
    add up to ``total``.
    """
    rows = (
        db.query(
            Question.difficulty,
            func.count(Question.id),
            func.sum(case((Question.is_completed.is_(True), 1), else_=0), type_=Integer),
        )
        .filter(Question.user_id == owner_id)
        .group_by(Question.difficulty)
        .all()
    )

    by_difficulty = {d: {"total": 0, "completed": 0} for d in DIFFICULTIES}
    for difficulty, count, done in rows:
        done = int(done or 0)
        by_difficulty[difficulty] = {"total": int(count), "completed": min(done, int(count))}

    total = sum(b["total"] for b in by_difficulty.values())
    completed = sum(b["completed"] for b in by_difficulty.values())
    return {
        "total": total,
        "completed": completed,
        "completion_rate": completion_rate(completed, total),
        "by_difficulty": by_difficulty,
    }
