from flask import request, jsonify, session, abort
from flask_login import login_required, current_user

from createur import db
from createur.models import Quiz, QuizAttempt
from createur.quiz import quiz
from createur.quiz.engine import QuizStatus
from createur.quiz.utils import (
    SESSION_KEY,
    _new_session,
    _restore_session,
    _record_attempt,
)


def _get_quiz_or_404(quiz_id):
    quiz_obj = db.session.get(Quiz, quiz_id)
    if not quiz_obj:
        abort(404)
    return quiz_obj


def _session_payload(quiz_obj, engine):
    payload = {"quizId": quiz_obj.id, **engine.to_dict()}
    question = engine.current_question
    if question is not None:
        payload["question"] = {
            "id":       question.id,
            "question": question.prompt,
            "options":  list(question.options),
            "selected": engine.answers.get(engine.current_index),
            "isLast":   engine.is_last_question,
        }
        payload["progress"] = engine.progress_pct
    return payload


def _save(quiz_obj, engine):
    session[SESSION_KEY] = {"quizId": quiz_obj.id, **engine.to_dict()}


def _active_session():
    """Restore the session stored for the current user, or (None, None)."""
    state = session.get(SESSION_KEY)
    if not state:
        return None, None
    quiz_obj = db.session.get(Quiz, state["quizId"])
    if not quiz_obj:
        session.pop(SESSION_KEY, None)
        return None, None
    return quiz_obj, _restore_session(quiz_obj, current_user.id, state)


# ── Routes ──────────────────────────────────────────────────────────────────

@quiz.route('/api/quizzes/<int:quiz_id>')
@login_required
def get_quiz(quiz_id):
    return jsonify(_get_quiz_or_404(quiz_id).to_dict())


@quiz.route('/api/quizzes/<int:quiz_id>/session', methods=['POST'])
@login_required
def start_session(quiz_id):
    """Open (or restart) an attempt.  Any previous attempt's answers are discarded."""
    quiz_obj = _get_quiz_or_404(quiz_id)
    engine = _new_session(quiz_obj, current_user.id)
    outcome = engine.start()
    if not outcome:
        return jsonify({"error": outcome.error}), 400
    _save(quiz_obj, engine)
    return jsonify(_session_payload(quiz_obj, engine)), 201


@quiz.route('/api/quiz-session/answer', methods=['POST'])
@login_required
def answer():
    quiz_obj, engine = _active_session()
    if engine is None:
        return jsonify({"error": "No quiz in progress"}), 400

    data = request.get_json(silent=True) or {}
    option = data.get("option")
    outcome = engine.select_answer(option)
    if not outcome:
        return jsonify({"error": outcome.error}), 400
    _save(quiz_obj, engine)
    return jsonify(_session_payload(quiz_obj, engine))


@quiz.route('/api/quiz-session/advance', methods=['POST'])
@login_required
def advance():
    quiz_obj, engine = _active_session()
    if engine is None:
        return jsonify({"error": "No quiz in progress"}), 400

    outcome = engine.advance()
    if not outcome:
        return jsonify({"error": outcome.error}), 400

    if engine.status is QuizStatus.COMPLETED:
        _record_attempt(current_user.id, quiz_obj, engine)
        session.pop(SESSION_KEY, None)
        payload = _session_payload(quiz_obj, engine)
        payload["xpEarned"] = engine.reward.granted
        return jsonify(payload)

    _save(quiz_obj, engine)
    return jsonify(_session_payload(quiz_obj, engine))


@quiz.route('/api/quiz-session/back', methods=['POST'])
@login_required
def back():
    quiz_obj, engine = _active_session()
    if engine is None:
        return jsonify({"error": "No quiz in progress"}), 400

    outcome = engine.go_back()
    if not outcome:
        return jsonify({"error": outcome.error}), 400
    _save(quiz_obj, engine)
    return jsonify(_session_payload(quiz_obj, engine))


@quiz.route('/api/quiz-attempts', methods=['POST'])
@login_required
def submit_attempt():
    """
    AJAX: score a whole answer map in one go.
    Body: {"quizId": int, "answers": {"<question index>": <option index>}}
    Every question must be answered, in the same way the step-by-step
    session refuses to move past an unanswered question.
    """
    data = request.get_json(silent=True) or {}
    quiz_obj = db.session.get(Quiz, data.get("quizId") or 0)
    if not quiz_obj:
        return jsonify({"error": "Quiz not found"}), 404

    raw_answers = data.get("answers")
    if not isinstance(raw_answers, dict):
        return jsonify({"error": "answers must be an object"}), 400
    if any(isinstance(v, bool) for v in raw_answers.values()):
        return jsonify({"error": "answers must map question index to option index"}), 400
    try:
        answers = {int(k): int(v) for k, v in raw_answers.items()}
    except (TypeError, ValueError):
        return jsonify({"error": "answers must map question index to option index"}), 400

    engine = _new_session(quiz_obj, current_user.id)
    outcome = engine.start()
    while outcome and engine.status is QuizStatus.IN_PROGRESS:
        outcome = engine.select_answer(answers.get(engine.current_index, -1))
        if outcome:
            outcome = engine.advance()
    if not outcome:
        return jsonify({"error": f"Question {engine.current_index + 1}: {outcome.error}"}), 400

    attempt = _record_attempt(current_user.id, quiz_obj, engine)
    return jsonify({
        "attemptId": attempt.id if attempt else None,
        "xpEarned":  engine.reward.granted,
        **engine.result.to_dict(),
    }), 201


@quiz.route('/api/quiz-attempts')
@login_required
def list_attempts():
    attempts = (
        QuizAttempt.query
        .filter_by(user_id=current_user.id)
        .order_by(QuizAttempt.completed_at.desc())
        .all()
    )
    return jsonify([a.to_dict() for a in attempts])
