from flask import Blueprint

users = Blueprint('users', __name__)

from createur.users import routes  # noqa: E402,F401
