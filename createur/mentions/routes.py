from flask import request, jsonify
from flask_login import login_required

from createur.mentions import mentions
from createur.mentions.directory import DatabaseUserDirectory
from createur.mentions.parser import MentionParser


@mentions.route('/api/mentions/render', methods=['POST'])
@login_required
def render():
    """
    AJAX: split message content into text / mention segments
    resolved against registered users.
    """
    data = request.get_json(silent=True) or {}
    content = data.get("content")
    if not isinstance(content, str):
        return jsonify({"error": "content must be a string"}), 400

    segments = MentionParser(DatabaseUserDirectory()).parse(content)
    return jsonify({"segments": [s.to_dict() for s in segments]})
