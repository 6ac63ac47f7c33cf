import click

from models import db
from models.admin_users import AdminUser, SECTION_ADMIN_ROLES


def register_commands(app):
    """Attach the admin-account management commands to `flask`."""

    @app.cli.command("create-admin")
    @click.argument("email")
    @click.argument("full_name")
    @click.option("--role", type=click.Choice(SECTION_ADMIN_ROLES), default="section_admin", show_default=True)
    @click.option("--department", default=None, help="Section for section admins, e.g. 63_A.")
    @click.password_option()
    def create_admin(email, full_name, role, department, password):
        email = email.strip().lower()
        if AdminUser.query.filter_by(email=email).first():
            raise click.ClickException(f"An account with email {email} already exists")

        admin = AdminUser(email=email, full_name=full_name, role=role, department=department, is_active=True)
        admin.set_password(password)
        db.session.add(admin)
        db.session.commit()
        click.echo(f"Created {role} {email} ({admin.id})")

    @app.cli.command("set-password")
    @click.argument("email")
    @click.argument("password")
    def set_password(email, password):
        admin = AdminUser.query.filter_by(email=email.strip().lower()).first()
        if not admin:
            raise click.ClickException("User not found!")

        admin.set_password(password)
        db.session.commit()
        click.echo("Password updated successfully!")
