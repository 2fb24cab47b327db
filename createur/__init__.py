from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_migrate import Migrate
from createur.config import Config


db = SQLAlchemy()
migrate = Migrate()
bcrypt = Bcrypt()
login_manager = LoginManager()
login_manager.login_message_category = 'info'


@login_manager.unauthorized_handler
def _unauthorized():
    return jsonify({"error": "Authentication required"}), 401


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    db.init_app(app)
    bcrypt.init_app(app)
    login_manager.init_app(app)
    migrate.init_app(app, db)

    from createur.users import users
    from createur.mentions import mentions
    from createur.forum import forum
    from createur.quiz import quiz

    app.register_blueprint(users)
    app.register_blueprint(mentions)
    app.register_blueprint(forum)
    app.register_blueprint(quiz)

    from createur.commands import seed_command
    app.cli.add_command(seed_command)

    return app
