"""CLI for kitbag using Click.

Exposes the merge combinator and the formatting helpers as `kitbag`
subcommands.
"""

import json
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from kitbag.config import (
    MERGE_STRATEGIES,
    ConfigError,
    KitbagSettings,
    MergeOptions,
    discover_user_config,
    get_config_home,
    load_all_configs,
    load_config_file,
    merge_config,
    set_config_context,
)
from kitbag.dates import InvalidUnitError, humanize
from kitbag.inliner import escape
from kitbag.number import format_number
from kitbag.text import slugify, slugify_unicode

logger = logging.getLogger(__name__)


def _parse_strategies(
    ctx: click.Context, param: click.Parameter, value: tuple[str, ...]
) -> MergeOptions:
    """Turn repeated PATH=STRATEGY options into a strategy table."""
    strategies: MergeOptions = {}
    for item in value:
        path, sep, strategy = item.partition("=")
        if not sep or not path:
            raise click.BadParameter(f"expected PATH=STRATEGY, got {item!r}")
        if strategy not in MERGE_STRATEGIES:
            raise click.BadParameter(
                f"unknown strategy {strategy!r} for {path!r}, "
                f"expected one of: {', '.join(MERGE_STRATEGIES)}"
            )
        strategies[path] = strategy  # type: ignore[assignment]
    return strategies


@click.group()
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Use specific config file (skips discovery)",
)
@click.option(
    "-d",
    "--dir",
    "project_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project directory (default: current directory)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: Path | None,
    project_dir: Path | None,
    verbose: bool,
) -> None:
    """kitbag - merge configs and format values from the command line."""
    ctx.ensure_object(dict)

    # Skip settings loading for init command (doesn't need existing config)
    if ctx.invoked_subcommand == "init":
        return

    if project_dir is None:
        project_dir = Path.cwd()
    project_dir = project_dir.resolve()

    set_config_context(project_dir, explicit_config=config_file)

    try:
        settings = KitbagSettings()
    except (ConfigError, ValidationError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    ctx.obj["settings"] = settings
    ctx.obj["project_dir"] = project_dir
    ctx.obj["config_file"] = config_file


@cli.command()
@click.argument("base", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument(
    "override", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option(
    "-s",
    "--strategy",
    "strategies",
    multiple=True,
    callback=_parse_strategies,
    metavar="PATH=STRATEGY",
    help="Merge strategy for a dotted path (merge, replace or safe)",
)
@click.option("--indent", type=int, default=2, show_default=True)
def merge(
    base: Path, override: Path, strategies: MergeOptions, indent: int
) -> None:
    """Deep merge OVERRIDE into BASE and print the result as JSON.

    Both files may be TOML or JSON (chosen by suffix). Nested tables are
    merged, arrays are replaced.

    Examples:

        \b
        kitbag merge defaults.toml site.json
        kitbag merge a.toml b.toml -s theme.colors=replace
    """
    try:
        result = merge_config(
            load_config_file(base), load_config_file(override), strategies
        )
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    logger.debug("Merged %s into %s with strategies %s", override, base, strategies)
    click.echo(json.dumps(result, indent=indent, ensure_ascii=False, default=str))


@cli.command()
@click.argument("items", nargs=-1, required=True)
@click.option("-j", "--joiner", default=None, help="Word joiner (default: setting)")
@click.option("--unicode", "keep_unicode", is_flag=True, help="Keep non-ASCII text")
@click.pass_context
def slug(
    ctx: click.Context,
    items: tuple[str, ...],
    joiner: str | None,
    keep_unicode: bool,
) -> None:
    """Print a slug built from ITEMS."""
    settings: KitbagSettings = ctx.obj["settings"]
    joiner = joiner if joiner is not None else settings.slug_joiner
    build = slugify_unicode if keep_unicode else slugify
    click.echo(build(joiner, *items))


@cli.command()
@click.argument("value")
@click.option("--separator", default=None, help="Thousands separator (default: setting)")
@click.pass_context
def number(ctx: click.Context, value: str, separator: str | None) -> None:
    """Print VALUE with thousands separators."""
    settings: KitbagSettings = ctx.obj["settings"]
    separator = separator if separator is not None else settings.number_separator
    formatted = format_number(value, separator)
    if not formatted:
        click.echo(f"Error: not a number: {value}", err=True)
        sys.exit(1)
    click.echo(formatted)


@cli.command()
@click.argument("value", type=float)
@click.option("-u", "--unit", default="milliseconds", show_default=True)
@click.option("--locale", type=click.Choice(["en", "fa"]), default=None)
@click.pass_context
def duration(
    ctx: click.Context, value: float, unit: str, locale: str | None
) -> None:
    """Print a duration in words."""
    settings: KitbagSettings = ctx.obj["settings"]
    try:
        click.echo(humanize(value, unit, locale or settings.locale))  # type: ignore[arg-type]
    except InvalidUnitError as e:
        raise click.BadParameter(str(e), param_hint="--unit") from e


@cli.command(name="escape")
@click.argument("text")
def escape_cmd(text: str) -> None:
    """Print TEXT escaped for inline HTML."""
    click.echo(escape(text))


@cli.command(name="config")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Show the effective settings and the files they were read from."""
    settings: KitbagSettings = ctx.obj["settings"]
    _, loaded_files = load_all_configs(ctx.obj["project_dir"], ctx.obj["config_file"])

    click.echo("Config files:")
    if not loaded_files:
        click.echo("  (none)")
    for path in loaded_files:
        click.echo(f"  {path}")

    click.echo("\nSettings:")
    for key, value in settings.model_dump().items():
        click.echo(f"  {key}: {value}")


@cli.command()
@click.option(
    "-y",
    "--yes",
    is_flag=True,
    help="Accept all defaults without prompting",
)
@click.option(
    "--force",
    is_flag=True,
    help="Overwrite existing config file",
)
def init(yes: bool, force: bool) -> None:
    """Initialize user configuration.

    Creates the user config directory and writes a config.toml with the
    default settings. By default, prompts for each setting.

    Examples:

        \b
        # Interactive setup
        kitbag init

        \b
        # Accept all defaults
        kitbag init -y
    """
    config_home = get_config_home()
    config_file = config_home / "config.toml"

    existing_config = discover_user_config()
    if existing_config and not force:
        click.echo(f"Config file already exists: {existing_config}")
        if not click.confirm("Overwrite?", default=False):
            click.echo("Aborted.")
            sys.exit(0)

    config_home.mkdir(parents=True, exist_ok=True)

    defaults = {
        name: field.default for name, field in KitbagSettings.model_fields.items()
    }

    if yes:
        values = defaults
        click.echo("Using default configuration...")
    else:
        click.echo("Configure kitbag settings (press Enter to accept defaults):\n")
        values = {
            "locale": click.prompt(
                "Locale",
                default=defaults["locale"],
                type=click.Choice(["en", "fa"]),
            ),
            "number_separator": click.prompt(
                "Thousands separator", default=defaults["number_separator"], type=str
            ),
            "slug_joiner": click.prompt(
                "Slug joiner", default=defaults["slug_joiner"], type=str
            ),
            "log_level": click.prompt(
                "Log level",
                default=defaults["log_level"],
                type=click.Choice(
                    ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                    case_sensitive=False,
                ),
            ).upper(),
        }
        click.echo()

    toml_lines = ["# kitbag user configuration", ""]
    toml_lines += [f"{key} = {json.dumps(value)}" for key, value in values.items()]
    toml_lines.append("")
    config_file.write_text("\n".join(toml_lines))

    click.echo(f"Created config file: {config_file}")
    click.echo("\nConfiguration:")
    for key, value in values.items():
        click.echo(f"  {key}: {value}")


if __name__ == "__main__":
    cli()
