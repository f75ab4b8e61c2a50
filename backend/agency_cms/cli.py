import click
from agency_cms.extensions import db
from agency_cms.models.user import User
from agency_cms.utils.transaction import transactional


def register_commands(app):
    @app.cli.command("create-admin")
    @click.argument("email")
    @click.password_option()
    def create_admin(email, password):
        """Create (or reset the password of) an admin user."""
        user = User.query.filter_by(email=email).first()
        if user is None:
            user = User()
            user.email = email
            user.role = "admin"

        user.set_password(password)

        with transactional():
            db.session.add(user)

        click.echo(f"Admin user {email} is ready.")
