"""Command-line interface for BrewBase.

Admin commands for inspecting and editing the catalog collections. Every
command prints JSON on stdout; logs go to stderr.
"""

import json
import sys
from typing import Any, NoReturn

import click

from brewbase.core.config import Settings, get_settings
from brewbase.core.logging import configure_logging, get_logger
from brewbase.domain.entities.entity_kind import EntityKind
from brewbase.domain.exceptions import SlugConflictError, StructuredInputError
from brewbase.infrastructure.persistence.repositories.document_repository import (
    DocumentRepository,
    create_repository,
)
from brewbase.infrastructure.storage.local_asset_store import LocalAssetStore

ENTITY_CHOICE = click.Choice([kind.value for kind in EntityKind], case_sensitive=False)


def _echo_json(value: Any) -> None:
    click.echo(json.dumps(value, indent=2, ensure_ascii=False))


def _build_payload(
    raw_json: str | None,
    fields: tuple[str, ...],
    images: tuple[str, ...],
) -> dict[str, Any]:
    """Merge a JSON object, key=value pairs and image filenames into a field bag."""
    payload: dict[str, Any] = {}
    if raw_json:
        try:
            parsed = json.loads(raw_json)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"Invalid JSON: {e}", param_hint="--json") from e
        if not isinstance(parsed, dict):
            raise click.BadParameter("Payload must be a JSON object", param_hint="--json")
        payload.update(parsed)

    for item in fields:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"Expected key=value, got {item!r}", param_hint="--field")
        payload[key.strip()] = value

    if images:
        payload["images"] = list(images)
    return payload


def _repository(ctx: click.Context) -> DocumentRepository:
    return ctx.obj["repository"]


def _not_found(entity: str, identifier: str) -> NoReturn:
    click.echo(f"Error: {entity} '{identifier}' not found", err=True)
    raise SystemExit(1)


@click.group()
@click.version_option(version="0.1.0", prog_name="BrewBase")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory holding the collection files (overrides config)",
)
@click.option(
    "--uploads-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory holding uploaded images (overrides config)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default=None,
    help="Set log level (overrides config)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    data_dir: str | None,
    uploads_dir: str | None,
    log_level: str | None,
) -> None:
    """BrewBase - catalog and content store for the coffee shop."""
    overrides: dict[str, Any] = {}
    if data_dir:
        overrides["data_dir"] = data_dir
    if uploads_dir:
        overrides["uploads_dir"] = uploads_dir
    if log_level:
        overrides["log_level"] = log_level

    settings: Settings = get_settings().model_copy(update=overrides)
    configure_logging(settings)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["repository"] = create_repository(settings)
    ctx.obj["assets"] = LocalAssetStore(settings.uploads_path)


@cli.command()
def entities() -> None:
    """List the collections and the fields their schemas coerce."""
    _echo_json(
        [
            {
                "entity": kind.value,
                "product": kind.is_product,
                "variants": kind.has_variants,
                "fields": {name: rule.kind.value for name, rule in kind.schema.fields.items()},
                "suppressed": sorted(kind.schema.suppressed),
            }
            for kind in EntityKind
        ]
    )


@cli.command("list")
@click.argument("entity", type=ENTITY_CHOICE)
@click.pass_context
def list_documents(ctx: click.Context, entity: str) -> None:
    """Print every document of ENTITY."""
    _echo_json(_repository(ctx).get_all(entity))


@cli.command()
@click.argument("entity", type=ENTITY_CHOICE)
@click.argument("identifier")
@click.pass_context
def get(ctx: click.Context, entity: str, identifier: str) -> None:
    """Print one document of ENTITY by id or slug."""
    document = _repository(ctx).get_by_id_or_slug(entity, identifier)
    if document is None:
        _not_found(entity, identifier)
    _echo_json(document)


_payload_options = [
    click.option("--json", "raw_json", default=None, help="Fields as a JSON object"),
    click.option(
        "--field",
        "-f",
        "fields",
        multiple=True,
        help="A field as key=value (repeatable); values are coerced like form input",
    ),
    click.option(
        "--image",
        "images",
        multiple=True,
        help="Filename of an already uploaded image (repeatable)",
    ),
]


def payload_options(func):
    for option in reversed(_payload_options):
        func = option(func)
    return func


@cli.command()
@click.argument("entity", type=ENTITY_CHOICE)
@payload_options
@click.pass_context
def create(
    ctx: click.Context,
    entity: str,
    raw_json: str | None,
    fields: tuple[str, ...],
    images: tuple[str, ...],
) -> None:
    """Create a document in ENTITY."""
    payload = _build_payload(raw_json, fields, images)
    try:
        document = _repository(ctx).create(entity, payload)
    except StructuredInputError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(2)
    except SlugConflictError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    _echo_json(document)


@cli.command()
@click.argument("entity", type=ENTITY_CHOICE)
@click.argument("identifier")
@payload_options
@click.pass_context
def update(
    ctx: click.Context,
    entity: str,
    identifier: str,
    raw_json: str | None,
    fields: tuple[str, ...],
    images: tuple[str, ...],
) -> None:
    """Update fields of a document in ENTITY by id or slug."""
    payload = _build_payload(raw_json, fields, images)
    document = _repository(ctx).update(entity, identifier, payload)
    if document is None:
        _not_found(entity, identifier)
    _echo_json(document)


@cli.command()
@click.argument("entity", type=ENTITY_CHOICE)
@click.argument("identifier")
@click.option(
    "--keep-assets",
    is_flag=True,
    default=False,
    help="Do not erase the document's image files",
)
@click.pass_context
def delete(ctx: click.Context, entity: str, identifier: str, keep_assets: bool) -> None:
    """Delete a document from ENTITY and erase its image files."""
    logger = get_logger(__name__)

    document = _repository(ctx).delete(entity, identifier)
    if document is None:
        _not_found(entity, identifier)

    removed: list[str] = []
    if not keep_assets:
        removed = ctx.obj["assets"].reconcile(document)
        logger.info("Assets reconciled", entity=entity, removed=len(removed))

    _echo_json({"deleted": document, "removed_assets": removed})


def main() -> NoReturn:
    """Main entry point for the CLI.

    Called when the `brewbase` command is run or when using
    `python -m brewbase`.
    """
    sys.exit(cli(obj={}))


if __name__ == "__main__":
    main()
