"""Development server command that skips migration checks.

The database schema belongs to other services, so the server can start
without a database and report degraded readiness until it appears.
"""

from django.core.management.commands.runserver import Command as RunServer


class Command(RunServer):
    """runserver without the migration check."""

    help = "Start development server without migration checks"

    def check_migrations(self, *_args, **_kwargs):
        """Skip migration checks - this service doesn't own the schema."""
        self.stdout.write(
            self.style.WARNING(
                "Skipping migration checks (social tables are owned externally)"
            )
        )
