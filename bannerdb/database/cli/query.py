"""
Query Commands
--------------

Read-side commands.

Commands:
    - content: Print the content of the banner for a feature/tag pair
    - list: List banners with their feature and tags
"""
import click

from bannerdb.core.logging_manager import handle_cli_error
from . import CLI_ERRORS, get_db, request_context


@click.command()
@click.argument("feature_id", type=int)
@click.argument("tag_id", type=int)
@click.pass_context
def content(ctx, feature_id, tag_id):
    """Print the content of the banner for FEATURE_ID and TAG_ID."""
    try:
        db = get_db(ctx)
        click.echo(db.resolve_content(feature_id, tag_id, ctx=request_context(ctx)))

    except CLI_ERRORS as e:
        handle_cli_error(
            ctx, e, "content", {"feature_id": feature_id, "tag_id": tag_id}
        )


@click.command("list")
@click.option("--feature-id", type=int, default=0, help="Only banners of this feature")
@click.option("--tag-id", type=int, default=0, help="Only banners with this tag")
@click.option("--limit", type=int, default=0, help="Page size (0 = all)")
@click.option("--offset", type=int, default=0, help="Banners to skip")
@click.pass_context
def list_banners(ctx, feature_id, tag_id, limit, offset):
    """List banners with their feature and tag ids."""
    try:
        db = get_db(ctx)
        banners, tag_ids = db.resolve_banners(
            feature_id, tag_id, limit, offset, ctx=request_context(ctx)
        )

        click.echo(f"\n📋 Banners ({len(banners)}):\n")
        for banner, tags in zip(banners, tag_ids):
            status = "active" if banner.is_active else "inactive"
            click.echo(
                f"  • #{banner.id} [{status}] feature={banner.feature_id} "
                f"tags={','.join(str(t) for t in tags)}: {banner.content}"
            )

    except CLI_ERRORS as e:
        handle_cli_error(
            ctx,
            e,
            "list",
            {"feature_id": feature_id, "tag_id": tag_id, "limit": limit, "offset": offset},
        )
