from datetime import datetime, timezone
from flask_login import UserMixin
from createur import db, login_manager


@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))


class User(db.Model, UserMixin):
    id         = db.Column(db.Integer, primary_key=True)
    email      = db.Column(db.String(120), unique=True, nullable=False)
    first_name = db.Column(db.String(60), nullable=False)
    last_name  = db.Column(db.String(60), nullable=False, default='')
    password   = db.Column(db.String(60), nullable=False)
    role       = db.Column(db.String(10), nullable=False, default='student')
    xp         = db.Column(db.Integer, nullable=False, default=0)
    level      = db.Column(db.Integer, nullable=False, default=1)
    created_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    quiz_attempts = db.relationship('QuizAttempt', backref='user', lazy=True)
    notifications = db.relationship('Notification', backref='user', lazy=True)

    def to_dict(self):
        return {
            "id":        str(self.id),
            "firstName": self.first_name,
            "lastName":  self.last_name,
            "email":     self.email,
            "xp":        self.xp,
            "level":     self.level,
        }

    def __repr__(self):
        return f"User('{self.first_name} {self.last_name}', '{self.email}', xp={self.xp})"


class Quiz(db.Model):
    """
    questions is a JSON list of
        {"id": int, "question": str, "options": [str, ...], "correct": int}
    """
    __tablename__ = 'quiz'

    id            = db.Column(db.Integer, primary_key=True)
    module_id     = db.Column(db.Integer, nullable=True)
    title         = db.Column(db.String(200), nullable=False)
    questions     = db.Column(db.JSON, nullable=False)
    xp_reward     = db.Column(db.Integer, nullable=False, default=50)
    passing_score = db.Column(db.Integer, nullable=False, default=70)
    attempts      = db.relationship('QuizAttempt', backref='quiz', lazy=True)

    def to_dict(self):
        """Public view, without the answer key."""
        return {
            "id":           self.id,
            "moduleId":     self.module_id,
            "title":        self.title,
            "xpReward":     self.xp_reward,
            "passingScore": self.passing_score,
            "questions": [
                {"id": q["id"], "question": q["question"], "options": q["options"]}
                for q in self.questions
            ],
        }

    def __repr__(self):
        return f"Quiz('{self.title}', {len(self.questions or [])} questions)"


class QuizAttempt(db.Model):
    __tablename__ = 'quiz_attempt'

    id           = db.Column(db.Integer, primary_key=True)
    user_id      = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    quiz_id      = db.Column(db.Integer, db.ForeignKey('quiz.id'), nullable=False)
    score        = db.Column(db.Integer, nullable=False)
    answers      = db.Column(db.JSON, nullable=False)
    passed       = db.Column(db.Boolean, nullable=False)
    completed_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def to_dict(self):
        return {
            "id":          self.id,
            "quizId":      self.quiz_id,
            "score":       self.score,
            "passed":      self.passed,
            "completedAt": self.completed_at.isoformat(),
        }

    def __repr__(self):
        return f"QuizAttempt(user={self.user_id}, quiz={self.quiz_id}, score={self.score})"


# ─────────────────────────────────────────────────────────────────────────────
# FORUM MODELS
# ─────────────────────────────────────────────────────────────────────────────

class ForumTopic(db.Model):
    __tablename__ = 'forum_topic'

    id         = db.Column(db.Integer, primary_key=True)
    author_id  = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    title      = db.Column(db.String(200), nullable=False)
    content    = db.Column(db.Text, nullable=False)
    created_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    author  = db.relationship('User', lazy=True)
    replies = db.relationship(
        'ForumReply', backref='topic', lazy=True,
        order_by='ForumReply.id', cascade='all, delete-orphan'
    )

    def __repr__(self):
        return f"ForumTopic('{self.title}', replies={len(self.replies)})"


class ForumReply(db.Model):
    __tablename__ = 'forum_reply'

    id         = db.Column(db.Integer, primary_key=True)
    topic_id   = db.Column(db.Integer, db.ForeignKey('forum_topic.id'), nullable=False)
    author_id  = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    content    = db.Column(db.Text, nullable=False)
    created_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    author = db.relationship('User', lazy=True)

    def __repr__(self):
        return f"ForumReply(topic={self.topic_id}, author={self.author_id})"


class Notification(db.Model):
    """
    kind: 'mention' | 'forum_reply'
    """
    __tablename__ = 'notification'

    id         = db.Column(db.Integer, primary_key=True)
    user_id    = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    kind       = db.Column(db.String(20), nullable=False)
    message    = db.Column(db.String(255), nullable=False)
    content    = db.Column(db.Text, nullable=True)
    topic_id   = db.Column(db.Integer, db.ForeignKey('forum_topic.id'), nullable=True)
    is_read    = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def to_dict(self):
        return {
            "id":        self.id,
            "type":      self.kind,
            "message":   self.message,
            "content":   self.content,
            "topicId":   self.topic_id,
            "isRead":    self.is_read,
            "createdAt": self.created_at.isoformat(),
        }

    def __repr__(self):
        return f"Notification(user={self.user_id}, kind={self.kind}, read={self.is_read})"
