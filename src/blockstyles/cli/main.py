"""Blockstyles CLI entry point."""
from __future__ import annotations

import logging

import click

from blockstyles.config import BlockStylesConfig


def _open_database(path: str):
    from blockstyles.store.db import Database
    from blockstyles.store.migrations import run_migrations

    database = Database(path)
    database.connect()
    run_migrations(database)
    return database


def _load_blocks(blocks_file: str):
    from blockstyles.registry.blocks import BlockRegistry

    if blocks_file:
        return BlockRegistry.from_file(blocks_file)
    return BlockRegistry.with_core_blocks()


@click.group()
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity (defaults to BLOCKSTYLES_LOG_LEVEL)",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Blockstyles: custom block style variations with your own CSS."""
    config = BlockStylesConfig.from_env()
    logging.basicConfig(
        level=getattr(logging, (log_level or config.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = config


@cli.command()
@click.option("--host", default=None, help="Host to bind to")
@click.option("--port", default=None, type=int, help="Port to bind to")
@click.option("--db", default=None, help="Database path")
@click.option("--blocks-file", default=None, help="JSON file of extra block types")
@click.option("--debug/--no-debug", default=False, help="Enable debug mode")
@click.pass_obj
def serve(
    config: BlockStylesConfig,
    host: str | None,
    port: int | None,
    db: str | None,
    blocks_file: str | None,
    debug: bool,
) -> None:
    """Start the Blockstyles admin server."""
    from blockstyles.web.app import create_app

    host = host or config.host
    port = port or config.port
    database = _open_database(db or config.db_path)
    blocks = _load_blocks(blocks_file or config.blocks_file)

    app = create_app(
        db=database,
        blocks=blocks,
        config={
            "SECRET_KEY": config.secret_key,
            "BLOCKSTYLES_CAPABILITY": config.capability,
            "BLOCKSTYLES_OPERATOR": config.operator,
            "BLOCKSTYLES_OPERATOR_CAPABILITIES": config.operator_capabilities,
        },
    )
    click.echo(f"Starting Blockstyles on {host}:{port}")
    app.run(host=host, port=port, debug=debug)


@cli.command()
@click.option("--db", default=None, help="Database path")
@click.option("--blocks-file", default=None, help="JSON file of extra block types")
@click.pass_obj
def publish(config: BlockStylesConfig, db: str | None, blocks_file: str | None) -> None:
    """List the style variations that would be published."""
    from blockstyles.publisher import StylePublisher
    from blockstyles.store.repositories import StyleRepository

    database = _open_database(db or config.db_path)
    publisher = StylePublisher(StyleRepository(database), _load_blocks(blocks_file or config.blocks_file))
    variations = publisher.publish()
    database.close()

    for v in variations:
        click.echo(f"{v.block_name}\tis-style-{v.name}\t{v.label}")
    click.echo(f"Published {len(variations)} style(s)")


@cli.command("export-css")
@click.option("--db", default=None, help="Database path")
@click.option("--blocks-file", default=None, help="JSON file of extra block types")
@click.option(
    "--output",
    "output",
    default="-",
    type=click.File("w"),
    help="Write the stylesheet here instead of stdout",
)
@click.pass_obj
def export_css(
    config: BlockStylesConfig, db: str | None, blocks_file: str | None, output
) -> None:
    """Write the published styles' CSS as one stylesheet."""
    from blockstyles.publisher import StylePublisher
    from blockstyles.store.repositories import StyleRepository

    database = _open_database(db or config.db_path)
    publisher = StylePublisher(StyleRepository(database), _load_blocks(blocks_file or config.blocks_file))
    publisher.publish()
    database.close()

    output.write(publisher.variations.stylesheet())


@cli.command()
@click.option("--title", required=True, help="Style title")
@click.option("--block", "block_name", default="", help="Target block, e.g. core/paragraph")
@click.option("--slug", default="", help="Explicit slug (defaults to the title)")
@click.option("--css", default="", help="Custom CSS")
@click.option("--publish/--draft", "published", default=False, help="Publish immediately")
@click.option("--db", default=None, help="Database path")
@click.option("--blocks-file", default=None, help="JSON file of extra block types")
@click.pass_obj
def create(
    config: BlockStylesConfig,
    title: str,
    block_name: str,
    slug: str,
    css: str,
    published: bool,
    db: str | None,
    blocks_file: str | None,
) -> None:
    """Create a block style."""
    from blockstyles.auth import Actor, AuthorizationGate
    from blockstyles.errors import AuthorizationError
    from blockstyles.model.style import StyleStatus
    from blockstyles.service import SaveRequest, StyleService
    from blockstyles.store.repositories import StyleRepository

    blocks = _load_blocks(blocks_file or config.blocks_file)
    if block_name and not blocks.is_registered(block_name):
        raise click.BadParameter(f"unknown block {block_name!r}", param_hint="--block")

    database = _open_database(db or config.db_path)
    service = StyleService(
        StyleRepository(database), blocks, AuthorizationGate(config.capability)
    )
    actor = Actor(config.operator, frozenset(config.operator_capabilities))
    try:
        record = service.create_draft(actor, title)
        record = service.save(
            actor,
            record.id,
            SaveRequest(
                title=title,
                slug=slug,
                block_name=block_name,
                custom_css=css,
                status=StyleStatus.PUBLISH if published else StyleStatus.DRAFT,
            ),
        )
    except AuthorizationError as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        database.close()

    click.echo(f"Block style created: {record.id} ({record.css_class or 'no class'})")
