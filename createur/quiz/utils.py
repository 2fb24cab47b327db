from flask import current_app
from createur import db
from createur.models import Quiz, QuizAttempt
from createur.quiz.engine import QuizQuestion, QuizSession
from createur.users.xp import XpReward


SESSION_KEY = "quiz_session"


def _questions_for(quiz: Quiz) -> list:
    return [QuizQuestion.from_dict(q) for q in quiz.questions]


def _session_kwargs(quiz: Quiz, user_id: int) -> dict:
    return {
        "passing_threshold": quiz.passing_score,
        "reward":            XpReward(user_id),
        "reward_amount":     quiz.xp_reward,
    }


def _new_session(quiz: Quiz, user_id: int) -> QuizSession:
    return QuizSession(_questions_for(quiz), **_session_kwargs(quiz, user_id))


def _restore_session(quiz: Quiz, user_id: int, state: dict) -> QuizSession:
    return QuizSession.from_dict(state, _questions_for(quiz), **_session_kwargs(quiz, user_id))


def _record_attempt(user_id: int, quiz: Quiz, session: QuizSession):
    """Persist a finished attempt.  XP was already granted by the reward sink."""
    attempt = QuizAttempt(
        user_id=user_id,
        quiz_id=quiz.id,
        score=session.result.score_percent,
        answers={str(k): v for k, v in session.answers.items()},
        passed=session.result.passed,
    )
    db.session.add(attempt)
    try:
        db.session.commit()
    except Exception as exc:
        db.session.rollback()
        current_app.logger.error("Saving quiz attempt for user %s failed: %s", user_id, exc)
        return None
    return attempt
