from flask import request, jsonify, abort
from flask_login import login_required, current_user

from createur import db
from createur.forum import forum
from createur.forum.utils import _render, _notify_reply
from createur.models import ForumTopic, ForumReply, Notification


def _author_payload(user):
    return {"id": str(user.id), "firstName": user.first_name, "lastName": user.last_name}


@forum.route('/api/forum/topics', methods=['POST'])
@login_required
def create_topic():
    data = request.get_json(silent=True) or {}
    title   = (data.get("title") or "").strip()
    content = (data.get("content") or "").strip()
    if not title or not content:
        return jsonify({"error": "Title and content are required"}), 400

    topic = ForumTopic(title=title, content=content, author_id=current_user.id)
    db.session.add(topic)
    db.session.commit()
    return jsonify({"id": topic.id, "title": topic.title}), 201


@forum.route('/api/forum/topics/<int:topic_id>')
@login_required
def view_topic(topic_id):
    topic = db.session.get(ForumTopic, topic_id)
    if not topic:
        abort(404)
    return jsonify({
        "id":       topic.id,
        "title":    topic.title,
        "author":   _author_payload(topic.author),
        "segments": _render(topic.content),
        "replies": [
            {
                "id":        r.id,
                "author":    _author_payload(r.author),
                "segments":  _render(r.content),
                "createdAt": r.created_at.isoformat(),
            }
            for r in topic.replies
        ],
    })


@forum.route('/api/forum/replies', methods=['POST'])
@login_required
def create_reply():
    data = request.get_json(silent=True) or {}
    content  = (data.get("content") or "").strip()
    topic_id = data.get("topicId")
    if not content or not topic_id:
        return jsonify({"error": "Content and topic are required"}), 400

    try:
        topic = db.session.get(ForumTopic, int(topic_id))
    except (TypeError, ValueError):
        return jsonify({"error": "topicId must be an integer"}), 400
    if not topic:
        return jsonify({"error": "Topic not found"}), 404

    reply = ForumReply(topic_id=topic.id, author_id=current_user.id, content=content)
    db.session.add(reply)
    db.session.commit()

    notified = _notify_reply(topic, current_user, content)
    return jsonify({
        "id":       reply.id,
        "topicId":  topic.id,
        "segments": _render(content),
        "notified": notified,
    }), 201


@forum.route('/api/notifications')
@login_required
def notifications():
    rows = (
        Notification.query
        .filter_by(user_id=current_user.id)
        .order_by(Notification.id.asc())
        .all()
    )
    return jsonify({
        "notifications": [n.to_dict() for n in rows[-10:]],
        "unreadCount":   sum(1 for n in rows if not n.is_read),
    })


@forum.route('/api/notifications/<int:notification_id>/read', methods=['PATCH'])
@login_required
def mark_read(notification_id):
    note = Notification.query.filter_by(id=notification_id, user_id=current_user.id).first()
    if note:
        note.is_read = True
        db.session.commit()
    return jsonify({"success": True})
