# cli/commands/user.py
import click
from core.auth import SessionAuthenticator
from core.config import get_settings
from core.sa.database import Database
from core.sa.repositories.user import UserRepository

@click.group()
def user():
    """Manage users and their session tokens"""
    pass

@user.command()
@click.argument('name')
@click.argument('email')
def create(name, email):
    """Create a user."""
    db = Database()
    with db.get_db() as session:
        try:
            new_user = UserRepository(session).create_user(name=name, email=email)
        except ValueError as e:
            raise click.ClickException(str(e))
        click.echo(f"Created user {new_user.name} <{new_user.email}> (ID: {new_user.id})")

@user.command()
@click.argument('email')
@click.option('--days', type=int, default=None, help='Token lifetime in days (defaults to SESSION_TTL_DAYS)')
def token(email, days):
    """Issue a session token for a user."""
    settings = get_settings()
    authenticator = SessionAuthenticator(ttl_days=days or settings.session_ttl_days)
    db = Database()
    with db.get_db() as session:
        existing = UserRepository(session).get_by_email(email)
        if not existing:
            raise click.ClickException(f"No user with email '{email}'")
        user_session = authenticator.issue_token(session, existing)
        click.echo(user_session.token)
        click.echo(f"Expires at {user_session.expires_at.isoformat()}", err=True)

@user.command()
@click.argument('token')
def revoke(token):
    """Revoke a session token."""
    db = Database()
    with db.get_db() as session:
        if not UserRepository(session).revoke_session(token):
            raise click.ClickException("Unknown session token")
        click.echo("Session revoked")
