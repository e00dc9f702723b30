#!/usr/bin/env python3
"""
Banner Database CLI
-------------------

Command-line interface over the BannerDB operations.

This module provides the main CLI group and shared context setup
for all commands.

Command Structure:
    - Setup (init)
    - Read (content, list)
    - Write (create, update, delete)

Usage:
    # Get general help
    bannerdb --help

    # Use a config file and a two-second deadline per operation
    bannerdb --config config/local.yaml --timeout 2 list --feature-id 1
"""
from typing import Optional

import click

from bannerdb.core.config import load_config
from bannerdb.core.context import RequestContext
from bannerdb.core.exceptions import (
    ConfigError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from bannerdb.database import BannerDB

# Errors reported through handle_cli_error
CLI_ERRORS = (DatabaseError, NotFoundError, ValidationError, ConfigError)


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="YAML config file (default: $BANNERDB_CONFIG)",
)
@click.option("--db-url", default=None, help="SQLAlchemy URL; overrides the config")
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Path to log directory; overrides the config",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Deadline in seconds for each operation",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks",
)
@click.pass_context
def cli(ctx, config_path, db_url, log_dir, timeout, verbose):
    """Banner Database CLI"""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["db_url"] = db_url
    ctx.obj["log_dir"] = log_dir
    ctx.obj["timeout"] = timeout
    ctx.obj["verbose"] = verbose


def get_db(ctx) -> BannerDB:
    """Get or create database instance from context."""
    if "db" not in ctx.obj:
        config = load_config(ctx.obj.get("config_path"))
        if ctx.obj.get("db_url"):
            config.database.database_url = ctx.obj["db_url"]
        if ctx.obj.get("log_dir"):
            config.log_dir = ctx.obj["log_dir"]

        db = BannerDB.from_config(config)
        ctx.obj["db"] = db
        ctx.obj["logger"] = db.logger
        ctx.call_on_close(db.dispose)
    return ctx.obj["db"]


def request_context(ctx) -> Optional[RequestContext]:
    """Build a RequestContext from the --timeout option."""
    timeout = ctx.obj.get("timeout")
    return RequestContext(timeout=timeout) if timeout else None


# Import and register command modules
# These imports must come after CLI group definition
from .setup import init  # noqa: E402
from .query import content, list_banners  # noqa: E402
from .banner import create, update, delete  # noqa: E402

cli.add_command(init)
cli.add_command(content)
cli.add_command(list_banners)
cli.add_command(create)
cli.add_command(update)
cli.add_command(delete)
