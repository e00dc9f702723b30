"""
Banner Commands
---------------

Write-side commands.

Commands:
    - create: Create (or reuse by content) a banner and link it
    - update: Overwrite a banner, its feature and its tags
    - delete: Remove a banner and its links
"""
import click

from bannerdb.core.logging_manager import handle_cli_error
from . import CLI_ERRORS, get_db, request_context


@click.command()
@click.option("--content", required=True, help="Banner content")
@click.option("--feature-id", type=int, required=True, help="Feature id")
@click.option(
    "--tag-id", "tag_ids", type=int, multiple=True, required=True, help="Tag id (repeatable)"
)
@click.option("--inactive", is_flag=True, help="Store the banner as inactive")
@click.pass_context
def create(ctx, content, feature_id, tag_ids, inactive):
    """Create a banner and print its id."""
    try:
        db = get_db(ctx)
        banner_id = db.create_banner(
            {"content": content, "is_active": not inactive},
            feature_id,
            list(tag_ids),
            ctx=request_context(ctx),
        )
        click.echo(f"✅ Banner {banner_id} saved")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "create", {"feature_id": feature_id})


@click.command()
@click.argument("banner_id", type=int)
@click.option("--content", required=True, help="New banner content")
@click.option("--feature-id", type=int, required=True, help="Feature id")
@click.option(
    "--tag-id", "tag_ids", type=int, multiple=True, required=True, help="Tag id (repeatable)"
)
@click.option("--inactive", is_flag=True, help="Mark the banner as inactive")
@click.pass_context
def update(ctx, banner_id, content, feature_id, tag_ids, inactive):
    """Overwrite BANNER_ID with new content, feature and tags."""
    try:
        db = get_db(ctx)
        db.update_banner(
            {"id": banner_id, "content": content, "is_active": not inactive},
            feature_id,
            list(tag_ids),
            ctx=request_context(ctx),
        )
        click.echo(f"✅ Banner {banner_id} updated")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "update", {"banner_id": banner_id})


@click.command()
@click.argument("banner_id", type=int)
@click.pass_context
def delete(ctx, banner_id):
    """Delete BANNER_ID and its feature and tag links."""
    try:
        db = get_db(ctx)
        db.delete_banner(banner_id, ctx=request_context(ctx))
        click.echo(f"🗑️  Banner {banner_id} deleted")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "delete", {"banner_id": banner_id})
