from flask import Blueprint

forum = Blueprint('forum', __name__)

from createur.forum import routes  # noqa: E402,F401
