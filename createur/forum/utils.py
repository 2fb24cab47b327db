from flask import current_app
from createur import db
from createur.models import Notification, ForumTopic
from createur.mentions.directory import DatabaseUserDirectory
from createur.mentions.parser import MentionParser


def _render(content: str) -> list:
    return [s.to_dict() for s in MentionParser(DatabaseUserDirectory()).parse(content)]


def _notify_reply(topic: ForumTopic, author, content: str) -> int:
    """
    Queue notifications for a new reply:
      – every user @mentioned in it (except the author)
      – the topic author, when someone else replied
    Returns the number of notifications created.
    """
    name = author.first_name or "A member"
    mentioned = MentionParser(DatabaseUserDirectory()).mentioned_users(content)

    created = 0
    for user in mentioned:
        if int(user.id) == author.id:
            continue
        db.session.add(Notification(
            user_id=int(user.id),
            kind='mention',
            message=f"{name} mentioned you in the forum",
            content=content,
            topic_id=topic.id,
        ))
        created += 1

    if topic.author_id != author.id:
        db.session.add(Notification(
            user_id=topic.author_id,
            kind='forum_reply',
            message=f'New reply on your topic "{topic.title}"',
            topic_id=topic.id,
        ))
        created += 1

    try:
        db.session.commit()
    except Exception as exc:
        db.session.rollback()
        current_app.logger.error("Creating notifications for topic %s failed: %s", topic.id, exc)
        return 0
    return created
