# standsite/commands.py
import click

from standsite.extensions import db
from standsite.models.user import User


def register_commands(app):
    @app.cli.command("create-admin")
    @click.argument("email")
    @click.argument("password")
    @click.option("--role", default="admin", type=click.Choice(["admin", "editor"]))
    def create_admin(email, password, role):
        """Create an admin panel account, or reset its password and role."""
        email = email.strip().lower()
        user = User.query.filter_by(email=email).first()
        created = user is None
        if created:
            user = User()
            user.email = email
            db.session.add(user)

        user.role = role
        user.is_active = True
        user.set_password(password)
        db.session.commit()

        click.echo(f"{'Created' if created else 'Updated'} {role} {email}")

    @app.cli.command("seed-sections")
    @click.argument("keys", nargs=-1)
    def seed_sections(keys):
        """Write default content for sections that have no active row."""
        # Imported here: revalidation needs the app context the command runs in
        from standsite.application.sections import seed_section
        from standsite.sections import all_section_specs

        keys = keys or [spec.key for spec in all_section_specs()]
        for key in keys:
            _, created = seed_section(key)
            click.echo(f"{key}: {'seeded' if created else 'already has content'}")

    @app.cli.command("publish-scheduled-posts")
    def publish_scheduled_posts():
        """Publish draft blog posts whose scheduled time has passed."""
        from standsite.application.blog import publish_scheduled_posts as publish_due

        published = publish_due()
        for post in published:
            click.echo(f"Published {post.slug}")
        click.echo(f"{len(published)} post(s) published")
