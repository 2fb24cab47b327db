import click
from flask import current_app
from flask.cli import with_appcontext

from createur import db
from createur.content import SAMPLE_QUIZZES
from createur.models import Quiz


@click.command("seed")
@with_appcontext
def seed_command():
    """Create missing tables and load the starter quizzes once."""
    db.create_all()

    if Quiz.query.first():
        click.echo("Quizzes already present, nothing to do")
        return

    for data in SAMPLE_QUIZZES:
        db.session.add(Quiz(
            xp_reward=current_app.config["QUIZ_XP_REWARD"],
            passing_score=current_app.config["QUIZ_PASSING_SCORE"],
            **data,
        ))
    db.session.commit()
    click.echo(f"Seeded {len(SAMPLE_QUIZZES)} quizzes")
