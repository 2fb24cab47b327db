"""
createur/quiz/engine.py

One attempt at a multiple-choice quiz.

    NotStarted ──start()──▶ InProgress ──advance() on last question──▶ Completed

Invalid operations (out-of-range option, skipping an unanswered question,
going back from the first question, touching a finished session) are
returned as a rejected Outcome; session state is left untouched.  A finished
session never changes again; restart() hands back a brand-new one.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Mapping, Optional, Sequence


logger = logging.getLogger(__name__)

DEFAULT_PASSING_SCORE = 70
DEFAULT_XP_REWARD     = 50


class QuizStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED   = "completed"


@dataclass(frozen=True)
class QuizQuestion:
    id: int
    prompt: str
    options: tuple
    correct_option_index: int

    def __post_init__(self):
        object.__setattr__(self, "options", tuple(self.options))
        if len(self.options) < 2:
            raise ValueError(f"Question {self.id} needs at least two options")
        if not 0 <= self.correct_option_index < len(self.options):
            raise ValueError(
                f"Question {self.id}: correct option {self.correct_option_index} "
                f"is outside 0..{len(self.options) - 1}"
            )

    @classmethod
    def from_dict(cls, data: Mapping) -> "QuizQuestion":
        """Build from the stored JSON shape {id, question, options, correct}."""
        return cls(
            id=int(data["id"]),
            prompt=data["question"],
            options=tuple(data["options"]),
            correct_option_index=int(data["correct"]),
        )


@dataclass(frozen=True)
class QuizResult:
    score_percent: int
    correct_count: int
    total_count: int
    passed: bool

    def to_dict(self):
        return {
            "scorePercent": self.score_percent,
            "correctCount": self.correct_count,
            "totalCount":   self.total_count,
            "passed":       self.passed,
        }


@dataclass(frozen=True)
class Outcome:
    ok: bool
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.ok


ACCEPTED = Outcome(True)


def _rejected(message: str) -> Outcome:
    return Outcome(False, message)


# ── Scoring ───────────────────────────────────────────────────────────────────

def score_percent(correct: int, total: int) -> int:
    """Percentage rounded half up, so 1/8 → 13 and 1/2 → 50."""
    return (200 * correct + total) // (2 * total)


def score_answers(questions: Sequence[QuizQuestion], answers: Mapping[int, int],
                  passing_threshold: int = DEFAULT_PASSING_SCORE) -> QuizResult:
    """Unanswered questions simply count as wrong."""
    total = len(questions)
    correct = sum(
        1 for i, q in enumerate(questions)
        if answers.get(i) == q.correct_option_index
    )
    pct = score_percent(correct, total) if total else 0
    return QuizResult(
        score_percent=pct,
        correct_count=correct,
        total_count=total,
        passed=pct >= passing_threshold,
    )


# ── Session ───────────────────────────────────────────────────────────────────

class QuizSession:

    def __init__(self, questions: Sequence[QuizQuestion],
                 passing_threshold: int = DEFAULT_PASSING_SCORE,
                 reward: Optional[Callable[[int], None]] = None,
                 reward_amount: int = DEFAULT_XP_REWARD) -> None:
        self.questions: List[QuizQuestion] = list(questions)
        self.passing_threshold = passing_threshold
        self.reward = reward
        self.reward_amount = reward_amount
        self.current_index = 0
        self.answers: Dict[int, int] = {}
        self.status = QuizStatus.NOT_STARTED
        self.result: Optional[QuizResult] = None

    # ── Transitions ───────────────────────────────────────────────────────────

    def start(self) -> Outcome:
        if self.status is not QuizStatus.NOT_STARTED:
            return _rejected("Quiz already started")
        if not self.questions:
            return _rejected("A quiz needs at least one question")
        self.current_index = 0
        self.answers = {}
        self.status = QuizStatus.IN_PROGRESS
        return ACCEPTED

    def select_answer(self, option_index: int) -> Outcome:
        if self.status is not QuizStatus.IN_PROGRESS:
            return _rejected("Quiz is not in progress")
        options = self.current_question.options
        if isinstance(option_index, bool) or not isinstance(option_index, int) \
                or not 0 <= option_index < len(options):
            return _rejected(f"Option must be between 0 and {len(options) - 1}")
        self.answers[self.current_index] = option_index
        return ACCEPTED

    def advance(self) -> Outcome:
        if self.status is not QuizStatus.IN_PROGRESS:
            return _rejected("Quiz is not in progress")
        if self.current_index not in self.answers:
            return _rejected("Answer the current question first")
        if self.current_index == len(self.questions) - 1:
            self._complete()
        else:
            self.current_index += 1
        return ACCEPTED

    def go_back(self) -> Outcome:
        if self.status is not QuizStatus.IN_PROGRESS:
            return _rejected("Quiz is not in progress")
        if self.current_index == 0:
            return _rejected("Already at the first question")
        self.current_index -= 1
        return ACCEPTED

    def restart(self) -> "QuizSession":
        fresh = QuizSession(
            self.questions,
            passing_threshold=self.passing_threshold,
            reward=self.reward,
            reward_amount=self.reward_amount,
        )
        fresh.start()
        return fresh

    def _complete(self) -> None:
        self.result = score_answers(self.questions, self.answers, self.passing_threshold)
        self.status = QuizStatus.COMPLETED
        if self.result.passed and self.reward is not None:
            try:
                self.reward(self.reward_amount)
            except Exception as exc:
                # Losing a reward notification is acceptable; the attempt stands.
                logger.error("Reward sink failed for %d XP: %s", self.reward_amount, exc)

    # ── Views ─────────────────────────────────────────────────────────────────

    @property
    def current_question(self) -> Optional[QuizQuestion]:
        if self.status is not QuizStatus.IN_PROGRESS:
            return None
        return self.questions[self.current_index]

    @property
    def is_last_question(self) -> bool:
        return self.current_index == len(self.questions) - 1

    @property
    def progress_pct(self) -> int:
        if not self.questions:
            return 0
        return int((self.current_index + 1) / len(self.questions) * 100)

    def to_dict(self) -> dict:
        return {
            "status":        self.status.value,
            "currentIndex":  self.current_index,
            "answers":       {str(k): v for k, v in self.answers.items()},
            "result":        self.result.to_dict() if self.result else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping, questions: Sequence[QuizQuestion],
                  **kwargs) -> "QuizSession":
        """Rebuild a session from to_dict() output and the same question set."""
        session = cls(questions, **kwargs)
        session.status = QuizStatus(data["status"])
        session.current_index = int(data["currentIndex"])
        session.answers = {int(k): int(v) for k, v in data.get("answers", {}).items()}
        result = data.get("result")
        if result:
            session.result = QuizResult(
                score_percent=result["scorePercent"],
                correct_count=result["correctCount"],
                total_count=result["totalCount"],
                passed=result["passed"],
            )
        return session
