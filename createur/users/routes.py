from flask import request, jsonify, current_app
from flask_login import login_user, logout_user, login_required, current_user

from createur import db, bcrypt
from createur.models import User
from createur.users import users
from createur.users.xp import level_progress
from createur.mentions.directory import DatabaseUserDirectory


@users.route('/api/auth/register', methods=['POST'])
def register():
    data = request.get_json(silent=True) or {}
    email      = (data.get("email") or "").strip().lower()
    password   = data.get("password") or ""
    first_name = (data.get("firstName") or "").strip()
    last_name  = (data.get("lastName") or "").strip()

    if not email or not password or not first_name:
        return jsonify({"error": "email, password and firstName are required"}), 400
    if User.query.filter_by(email=email).first():
        return jsonify({"error": "That email is already registered"}), 400

    hashed = bcrypt.generate_password_hash(password).decode('utf-8')
    user = User(email=email, password=hashed, first_name=first_name, last_name=last_name)
    db.session.add(user)
    db.session.commit()
    current_app.logger.info("Registered user %s", user.id)
    return jsonify(user.to_dict()), 201


@users.route('/api/auth/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    user = User.query.filter_by(email=(data.get("email") or "").strip().lower()).first()
    if user and bcrypt.check_password_hash(user.password, data.get("password") or ""):
        login_user(user, remember=bool(data.get("remember")))
        return jsonify(user.to_dict())
    return jsonify({"error": "Login unsuccessful. Please check email and password"}), 401


@users.route('/api/auth/logout', methods=['POST'])
def logout():
    logout_user()
    return jsonify({"success": True})


@users.route('/api/auth/user')
@login_required
def me():
    payload = current_user.to_dict()
    payload["progress"] = level_progress(current_user.xp)
    return jsonify(payload)


@users.route('/api/users/search')
@login_required
def search():
    """Mention autocomplete: up to 5 users matching ?q=, never the caller."""
    query = request.args.get("q", "").strip()
    if not query:
        return jsonify([])

    directory = DatabaseUserDirectory(
        exclude_user_id=current_user.id,
        limit=current_app.config.get("USER_SEARCH_LIMIT", 5),
    )
    return jsonify([
        {"id": u.id, "firstName": u.first_name, "lastName": u.last_name}
        for u in directory.search(query)
    ])
