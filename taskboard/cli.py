# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""Taskboard maintenance commands."""

from typing import Optional

import click

from taskboard.core.logging import setup_logging
from taskboard.db import session as db_session
from taskboard.models.user import UserPlan


@click.group()
def cli():
    """Taskboard backend maintenance.

    \b
    Examples:
      taskboard init-db                        # Create missing tables
      taskboard create-user alice --plan pro   # Add a user
      taskboard trash-cleanup --dry-run        # Show what would be purged
      taskboard trash-cleanup --days 0         # Purge everything in the trash
    """
    setup_logging()


@cli.command("init-db")
def init_db():
    """Create all missing database tables."""
    from taskboard.db.base import Base
    from taskboard.models import Project, Task, TaskList, User  # noqa: F401

    Base.metadata.create_all(bind=db_session.engine)
    click.echo("Database tables are ready.")


@cli.command("create-user")
@click.argument("user_name")
@click.password_option()
@click.option("--email", default=None, help="Email address.")
@click.option(
    "--plan",
    type=click.Choice([plan.value for plan in UserPlan]),
    default=UserPlan.FREE.value,
    show_default=True,
    help="Plan tier, decides how long trashed items are kept.",
)
def create_user(user_name: str, password: str, email: Optional[str], plan: str):
    """Create a user that can log in to the API."""
    from taskboard.services.user import user_service

    db = db_session.SessionLocal()
    try:
        user = user_service.create_user(
            db, user_name=user_name, password=password, email=email, plan=UserPlan(plan)
        )
        click.echo(f"Created user {user.user_name} (id={user.id}, plan={plan})")
    except Exception as e:
        raise click.ClickException(str(getattr(e, "detail", e)))
    finally:
        db.close()


@cli.command("trash-cleanup")
@click.option(
    "--days",
    type=click.IntRange(min=0),
    default=None,
    help="Override retention days for every user (default: per plan).",
)
@click.option(
    "--dry-run", is_flag=True, help="Show what would be deleted without deleting."
)
def trash_cleanup(days: Optional[int], dry_run: bool):
    """Permanently delete trashed items past their retention period."""
    from taskboard.services.trash import retention_reaper

    if dry_run:
        click.echo("DRY RUN - no items will be deleted")

    db = db_session.SessionLocal()
    try:
        report = retention_reaper.reap(db, days=days, dry_run=dry_run)
    finally:
        db.close()

    if report.total == 0 and not report.failed_owners:
        click.echo("No items to purge.")
        return

    verb = "Would purge" if dry_run else "Purged"
    click.echo(f"{verb} {report.projects} project(s)")
    click.echo(f"{verb} {report.lists} list(s)")
    click.echo(f"{verb} {report.tasks} task(s)")
    click.echo(f"Total: {report.total} item(s) across {report.owners} user(s)")

    if report.failed_owners:
        failed = ", ".join(str(user_id) for user_id in report.failed_owners)
        raise click.ClickException(f"Cleanup failed for user(s): {failed}")


if __name__ == "__main__":
    cli()
