from __future__ import annotations

import logging
import sys
import typing

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from ._exceptions import VersionEyeError
from ._models import OrganisationData
from ._resources import VersionEye
from ._transports import DEFAULT_BASE_URL, HttpTransport


class _Settings(typing.NamedTuple):
    base_url: str
    timeout: float | None
    use_rich: bool


def _open(ctx: click.Context) -> VersionEye:
    settings: _Settings = ctx.obj
    transport = HttpTransport(settings.base_url, timeout=settings.timeout)
    ctx.call_on_close(transport.close)
    return VersionEye(transport)


def _organisation_line(org: OrganisationData) -> str:
    return org.name if org.company is None else f"{org.name}\t{org.company}"


def _fail(settings: _Settings, exc: VersionEyeError) -> typing.NoReturn:
    if settings.use_rich:
        console = Console(stderr=True)
        console.print(
            f"[bold red]{type(exc).__name__}[/bold red]: {escape(str(exc))}"
        )
    else:
        click.echo(f"{type(exc).__name__}: {exc}", err=True)
    sys.exit(1)


@click.group(help="Browse the VersionEye API from the command line.")
@click.option(
    "--base-url",
    envvar="VERSIONEYE_URL",
    default=DEFAULT_BASE_URL,
    show_default=True,
    help="API root URL.",
)
@click.option("--timeout", type=float, default=None, help="Request timeout in seconds.")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log every request.")
@click.option(
    "--no-color", is_flag=True, default=False, help="Disable colored output."
)
@click.pass_context
def main(
    ctx: click.Context,
    base_url: str,
    timeout: float | None,
    verbose: bool,
    no_color: bool,
) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s"
        )
    ctx.obj = _Settings(
        base_url=base_url,
        timeout=timeout,
        use_rich=not no_color and sys.stdout.isatty(),
    )


@main.command(help="Show who a user is.")
@click.argument("name")
@click.pass_context
def user(ctx: click.Context, name: str) -> None:
    settings: _Settings = ctx.obj
    api = _open(ctx)
    try:
        about = api.users().user(name).about()
    except VersionEyeError as exc:
        _fail(settings, exc)

    if settings.use_rich:
        text = Text()
        text.append(about.full_name, style="bold")
        text.append(f" ({about.username})", style="dim cyan")
        Console().print(text)
    else:
        click.echo(f"{about.full_name} ({about.username})")


@main.command(help="List every comment a user has written.")
@click.argument("name")
@click.option(
    "--max-pages", type=int, default=None, help="Stop after this many pages."
)
@click.pass_context
def comments(ctx: click.Context, name: str, max_pages: int | None) -> None:
    settings: _Settings = ctx.obj
    api = _open(ctx)
    console = Console() if settings.use_rich else None

    pages = 0
    total = 0
    try:
        for page in api.users().user(name).comments().paginated(max_pages=max_pages):
            pages += 1
            for comment in page.fetch():
                total += 1
                line = comment.id
                if comment.text is not None:
                    line = f"{line}  {comment.text}"
                if console is not None:
                    text = Text(f"{page.number:>3}", style="dim")
                    text.append(f" {line}")
                    console.print(text)
                else:
                    click.echo(f"{page.number:>3} {line}")
    except VersionEyeError as exc:
        _fail(settings, exc)

    summary = f"{total} comments on {pages} pages"
    if console is not None:
        console.print(f"[green]✓[/green] {summary}")
    else:
        click.echo(summary)


@main.command(help="List the organisations you have access to.")
@click.pass_context
def organisations(ctx: click.Context) -> None:
    settings: _Settings = ctx.obj
    api = _open(ctx)
    try:
        found = api.organisations().about()
    except VersionEyeError as exc:
        _fail(settings, exc)

    if settings.use_rich:
        table = Table("Name", "Company")
        for org in found:
            table.add_row(Text(org.name), Text(org.company or ""))
        Console().print(table)
    else:
        for org in found:
            click.echo(_organisation_line(org))


@main.command(help="Show one organisation.")
@click.argument("name")
@click.pass_context
def organisation(ctx: click.Context, name: str) -> None:
    settings: _Settings = ctx.obj
    api = _open(ctx)
    try:
        about = api.organisations().organisation(name).about()
    except VersionEyeError as exc:
        _fail(settings, exc)

    if settings.use_rich:
        text = Text(about.name, style="bold")
        if about.company is not None:
            text.append(f" {about.company}", style="dim")
        Console().print(text)
    else:
        click.echo(_organisation_line(about))
