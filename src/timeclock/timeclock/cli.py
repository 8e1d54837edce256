from __future__ import annotations

import click
from flask import Flask

from .common.datetime_utils import parse_iso_date
from .container import Container
from .core.exceptions import DomainError
from .database.bootstrap import apply_schema, list_tables


def register(app: Flask, container: Container) -> None:
    @app.cli.command("init-db")
    def init_db():
        """Apply schema.sql to the configured database."""
        if container.conn is None:
            raise click.ClickException("No database configured")
        apply_schema(container.conn)
        click.echo(f"OK: schema applied (tables={len(list_tables(container.conn))})")

    @app.cli.command("seed-admin")
    @click.option("--name", required=True)
    @click.option("--email", required=True)
    @click.option("--password", required=True, prompt=True, hide_input=True, confirmation_prompt=True)
    @click.option("--birth-date", required=True, help="YYYY-MM-DD or DD/MM/YYYY")
    def seed_admin(name: str, email: str, password: str, birth_date: str):
        """Create the first administrator."""
        try:
            employee = container.employee_service.create_employee(
                current_is_admin=True,
                name=name,
                email=email,
                password=password,
                birth_date=birth_date,
                is_admin=True,
            )
        except DomainError as e:
            raise click.ClickException(str(e))
        click.echo(f"OK: admin {employee.email} created (uid={employee.employee_id})")

    @app.cli.command("provision-day-logs")
    @click.option("--date", "work_date", default=None, help="YYYY-MM-DD, defaults to today")
    def provision_day_logs(work_date: str | None):
        """Pre-create empty day logs for every active employee."""
        try:
            day = parse_iso_date(work_date) if work_date else container.clock.now().date()
        except ValueError:
            raise click.BadParameter("expected YYYY-MM-DD", param_hint="--date")
        created = container.attendance_service.provision_day_logs(day)
        click.echo(f"OK: {created} day logs created for {day.isoformat()}")
