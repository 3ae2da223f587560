"""Checks for product updates"""
from typing import Optional

import typer
from rich import print as cp
from typing_extensions import Annotated

from update_check.api import check_for_updates
from update_check.models.update_base import TargetPlatform
from update_check.render import print_results, results_to_html

app = typer.Typer(no_args_is_help=True)

PlatformOption = Annotated[
    Optional[TargetPlatform],
    typer.Option("--platform", "-p", help="Platform to check for, detected if omitted"),
]


@app.command(no_args_is_help=True)
def check(
    current_version: Annotated[str, typer.Argument(help="major.minor.patch.build")],
    latest_release_url: Annotated[
        str, typer.Argument(help="GitHub latest release API url, url or directory")
    ],
    json_filename: Annotated[str, typer.Argument(help="Version file name")],
    platform: PlatformOption = None,
    show_tags: Annotated[bool, typer.Option("--show-tags")] = False,
    html: Annotated[bool, typer.Option("--html", help="Print results as html")] = False,
):
    """Checks for updates"""
    if not html:
        cp("Checking for updates...")

    results = check_for_updates(
        current_version, latest_release_url, json_filename, platform=platform
    )

    if html:
        typer.echo(results_to_html(results, show_tags=show_tags))
    else:
        print_results(results, show_tags=show_tags)

    if not results.was_check_successful:
        raise typer.Exit(1)
