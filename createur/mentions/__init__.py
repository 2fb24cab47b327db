from flask import Blueprint

mentions = Blueprint('mentions', __name__)

from createur.mentions import routes  # noqa: E402,F401
