"""CLI adapter for ``lib_module_config`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators and scripts inspect and edit stored module documents without
writing Python: every command loads a JSON/YAML document, routes one intent
through :mod:`lib_module_config.core` and writes the result back.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command wiring traceback handling into ``lib_cli_exit_tools``.
* :func:`cli_info` – distribution metadata.
* :func:`cli_show` – print one section as JSON.
* :func:`cli_set` / :func:`cli_style` – field and style edits.
* :func:`cli_collection` / :func:`cli_add` – collection operations.
* :func:`cli_settings` – print the resolved editor settings.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
Outermost layer. Edit errors propagate unchanged so ``lib_cli_exit_tools``
renders them and picks the exit code.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from pathlib import Path
from typing import Any, Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.file_loaders.structured import dump_document, load_document
from .application.modules import section_with_defaults
from .config import load_settings
from .core import add_default_item, apply_collection_op, apply_field_update, apply_style_update, get_section_value
from .observability import edit_session

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

OP_CHOICES: Final[tuple[str, ...]] = ("append", "duplicateAt", "deleteAt", "updateAt", "reorder")

_document_argument = click.argument(
    "document",
    type=click.Path(path_type=Path, exists=True, file_okay=True, dir_okay=False, readable=True),
)
_section_option = click.option("--section", required=True, help="Top-level section to edit (e.g. booking)")
_output_option = click.option(
    "--output",
    type=click.Path(path_type=Path, file_okay=True, dir_okay=False),
    default=None,
    help="Write the updated document here instead of rewriting DOCUMENT",
)
_config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, exists=True, file_okay=True, dir_okay=False, readable=True),
    default=None,
    help="Settings file whose [editor] table overrides the defaults",
)


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` when not installed."""

    try:
        return metadata.version("lib_module_config")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Edit booking and e-commerce module documents",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_module_config",
    message="lib_module_config version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command storing the traceback preference for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``. Opens an edit
        session so the log records of one invocation share a session id.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    ctx.obj["session_id"] = ctx.with_resource(edit_session())
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_module_config")
    except metadata.PackageNotFoundError:
        click.echo("lib_module_config (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_module_config')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.11')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("show", context_settings=CLICK_CONTEXT_SETTINGS)
@_document_argument
@_section_option
@click.option(
    "--with-defaults/--stored-only",
    default=False,
    help="Fill in style, display, schedule and form-field defaults",
)
@click.option("--indent", type=int, default=2, show_default=True, help="JSON indent size")
def cli_show(document: Path, section: str, with_defaults: bool, indent: int) -> None:
    """Print one section of DOCUMENT as JSON."""

    value: Any = get_section_value(load_document(document), section)
    if with_defaults:
        value = section_with_defaults(section, value)
    click.echo(json.dumps(value, indent=indent, ensure_ascii=False))


@cli.command("set", context_settings=CLICK_CONTEXT_SETTINGS)
@_document_argument
@_section_option
@click.option("--path", "field_path", required=True, help="Dotted path below the section (e.g. openingHours.monday.start)")
@click.option("--value", required=True, help="New value as JSON (quote strings: '\"Réservez\"')")
@_output_option
def cli_set(document: Path, section: str, field_path: str, value: str, output: Optional[Path]) -> None:
    """Write one field of DOCUMENT."""

    updated = apply_field_update(load_document(document), section, field_path, _parse_json(value, "--value"))
    _write(updated, output or document)


@cli.command("style", context_settings=CLICK_CONTEXT_SETTINGS)
@_document_argument
@_section_option
@click.option("--key", required=True, help="Style key (e.g. background or cardRadius)")
@click.option("--value", required=True, help="JSON object merged into the style, or a scalar that replaces it")
@_output_option
def cli_style(document: Path, section: str, key: str, value: str, output: Optional[Path]) -> None:
    """Merge a style update into ``styles[KEY]`` of a section."""

    updated = apply_style_update(load_document(document), section, key, _parse_json(value, "--value"))
    _write(updated, output or document)


@cli.command("collection", context_settings=CLICK_CONTEXT_SETTINGS)
@_document_argument
@_section_option
@click.option("--path", "collection_path", required=True, help="Collection path below the section (e.g. services)")
@click.option("--op", "op_name", required=True, type=click.Choice(OP_CHOICES, case_sensitive=False), help="Operation")
@click.option("--index", type=int, default=None, help="Item index for duplicateAt/deleteAt/updateAt")
@click.option("--item", "item_json", default=None, help="Item as a JSON object for append/updateAt")
@click.option("--ids", default=None, help="Comma-separated id order for reorder")
@_config_option
@_output_option
def cli_collection(
    document: Path,
    section: str,
    collection_path: str,
    op_name: str,
    index: Optional[int],
    item_json: Optional[str],
    ids: Optional[str],
    config_path: Optional[Path],
    output: Optional[Path],
) -> None:
    """Apply one collection operation (append, duplicateAt, deleteAt, updateAt, reorder)."""

    payload: dict[str, Any] = {"op": op_name}
    if index is not None:
        payload["index"] = index
    if item_json is not None:
        payload["item"] = _parse_json(item_json, "--item")
    if ids is not None:
        payload["ids"] = [part.strip() for part in ids.split(",") if part.strip()]
    updated = apply_collection_op(
        load_document(document),
        section,
        collection_path,
        payload,
        load_settings(config_path),
    )
    _write(updated, output or document)


@cli.command("add", context_settings=CLICK_CONTEXT_SETTINGS)
@_document_argument
@_section_option
@click.option("--collection", required=True, help="Collection receiving a default item (services, products...)")
@_config_option
@_output_option
def cli_add(document: Path, section: str, collection: str, config_path: Optional[Path], output: Optional[Path]) -> None:
    """Append the module's default item (e.g. a new service) to a collection."""

    updated = add_default_item(load_document(document), section, collection, load_settings(config_path))
    _write(updated, output or document)


@cli.command("settings", context_settings=CLICK_CONTEXT_SETTINGS)
@_config_option
def cli_settings(config_path: Optional[Path]) -> None:
    """Print the editor settings after applying file and environment layers."""

    click.echo(json.dumps(load_settings(config_path).as_dict(), indent=2, ensure_ascii=False))


def _parse_json(raw: str, option: str) -> Any:
    """Decode a JSON option value, reporting errors against *option*."""

    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Not valid JSON: {exc.msg}", param_hint=option) from exc


def _write(document: dict[str, Any], target: Path) -> None:
    path = dump_document(document, target)
    click.echo(f"Updated {path}")


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_module_config",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
