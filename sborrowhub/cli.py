import click
from flask.cli import with_appcontext
from werkzeug.security import generate_password_hash

from sborrowhub.extensions import db
from sborrowhub.models.user import User
from sborrowhub.repositories.user_repo import UserRepo


@click.command("init-db")
@with_appcontext
def init_db():
    """Create all tables (development; use `flask db upgrade` in production)."""
    db.create_all()
    click.echo("Database tables created.")


@click.command("create-staff")
@click.argument("student_id")
@click.argument("email")
@click.argument("password")
@click.option("--role", type=click.Choice(["officer", "admin"]), default="officer")
@click.option("--firstname", default="Staff")
@click.option("--lastname", default="Account")
@with_appcontext
def create_staff(student_id, email, password, role, firstname, lastname):
    """Create an officer or admin account."""
    if UserRepo.exists(student_id, email):
        click.echo("A user with that student id or email already exists.")
        return
    UserRepo.create(User(
        student_id=student_id,
        firstname=firstname,
        lastname=lastname,
        email=email,
        password_hash=generate_password_hash(password),
        role=role,
    ))
    click.echo(f"{role.capitalize()} {email} created.")


@click.command("overdue-sweep")
@with_appcontext
def overdue_sweep():
    """Run the overdue sweep once."""
    from flask import current_app
    from sborrowhub.tasks.overdue_check import run_overdue_sweep

    result = run_overdue_sweep(current_app._get_current_object())
    click.echo(f"marked={result['marked']} reminded={result['reminded']} mailed={result['mailed']}")


def register_cli(app):
    app.cli.add_command(init_db)
    app.cli.add_command(create_staff)
    app.cli.add_command(overdue_sweep)
