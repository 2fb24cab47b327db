import os


class Config:
    """
    Application settings, read from the environment.
    Anything quiz- or mention-related falls back to the defaults the
    front end was built against (70 % to pass, +50 XP per passed quiz).
    """
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key')
    SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI', 'sqlite:///site.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # ── Quiz ──────────────────────────────────────────────────────────────────
    QUIZ_PASSING_SCORE = int(os.environ.get('QUIZ_PASSING_SCORE', 70))
    QUIZ_XP_REWARD     = int(os.environ.get('QUIZ_XP_REWARD', 50))

    # ── Mentions ──────────────────────────────────────────────────────────────
    USER_DIRECTORY_URL  = os.environ.get('USER_DIRECTORY_URL', 'http://localhost:5000')
    USER_LOOKUP_TIMEOUT = float(os.environ.get('USER_LOOKUP_TIMEOUT', 3.0))
    USER_SEARCH_LIMIT   = 5
