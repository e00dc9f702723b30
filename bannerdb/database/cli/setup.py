"""
Setup & Initialization Commands
--------------------------------

Commands:
    - init: Create the banner schema
"""
import click

from bannerdb.core.logging_manager import handle_cli_error
from . import CLI_ERRORS, get_db


@click.command()
@click.pass_context
def init(ctx):
    """Create all tables on a fresh database."""
    try:
        db = get_db(ctx)
        click.echo("🗄️  Initializing database schema...")
        db.initialize_schema()
        click.echo("✅ Database initialized!")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "init")
