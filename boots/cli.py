import click

_common_options = [
    click.option(
        "--base-dir",
        default=None,
        type=click.Path(file_okay=False, path_type=str),
        help="Directory relative identifiers are resolved against (default: BOOTS_BASE_DIR or cwd).",
    ),
    click.option(
        "--export-name",
        default=None,
        help="Module attribute holding the script (default: BOOTS_EXPORT_NAME or 'script').",
    ),
    click.option("--log-level", default=None, help="Log level (default: BOOTS_LOG_LEVEL or INFO)."),
    click.argument("identifiers", nargs=-1, required=True),
]


def _with_common_options(func):
    for option in reversed(_common_options):
        func = option(func)
    return func


def _build_config(identifiers: tuple[str, ...], base_dir: str | None, export_name: str | None, log_level: str | None):
    from boots.execution.session import SessionConfig
    from boots.log import setup_logging
    from boots.settings import get_settings

    settings = get_settings()
    setup_logging(log_level or settings.log_level)
    return SessionConfig.from_settings(
        settings,
        identifiers=list(identifiers),
        base_dir=base_dir,
        export_name=export_name,
    )


@click.group()
def main() -> None:
    """Boots - run ordered bootstrap scripts, stopping at the first failure."""


@main.command()
@_with_common_options
def run(identifiers: tuple[str, ...], base_dir: str | None, export_name: str | None, log_level: str | None) -> None:
    """Resolve and run IDENTIFIERS in order."""
    import asyncio

    from boots.execution.session import go

    config = _build_config(identifiers, base_dir, export_name, log_level)
    session = asyncio.run(go(config))
    if not session.ok:
        raise SystemExit(1)


@main.command()
@_with_common_options
def check(identifiers: tuple[str, ...], base_dir: str | None, export_name: str | None, log_level: str | None) -> None:
    """Resolve IDENTIFIERS without running them."""
    from boots.execution.resolver import resolve_scripts

    config = _build_config(identifiers, base_dir, export_name, log_level)
    report = resolve_scripts(
        list(identifiers),
        base_dir=config.base_dir,
        export_name=config.export_name,
    )
    for resolution in report.resolutions:
        if resolution.ok:
            click.echo(f"ok            {resolution.identifier} ({resolution.script.name})")
        else:
            status = resolution.status.replace("_", " ")
            click.echo(f"{status:<13} {resolution.identifier}: {resolution.reason}")
    if not report.ok:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
