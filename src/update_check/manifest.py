"""Version file tools"""
from typing import Optional

import typer
from rich import print as cp, print_json
from rich.markup import escape
from typing_extensions import Annotated

from update_check.errors import ErrorCollector, FetchError
from update_check.fetch import HTTP_PREFIX, HttpContentFetcher
from update_check.models.settings import EnvSettings
from update_check.models.update_base import TargetPlatform
from update_check.parser import parse_json_string
from update_check.platforms import filter_to_platform

app = typer.Typer(no_args_is_help=True)


@app.command(no_args_is_help=True)
def parse(
    location: Annotated[str, typer.Argument(help="Url or path of a version file")],
    platform: Annotated[
        Optional[TargetPlatform],
        typer.Option("--platform", "-p", help="Only keep releases for this platform"),
    ] = None,
):
    """Parses a version file and prints it in the latest schema"""
    settings = EnvSettings()
    try:
        with HttpContentFetcher(
            timeout=settings.http_timeout, user_agent=settings.user_agent
        ) as fetcher:
            if location.startswith(HTTP_PREFIX):
                content = fetcher.fetch_url(location)
            else:
                content = fetcher.read_file(location)
    except FetchError as e:
        cp(f"❌  Error: {escape(str(e))}")
        raise typer.Exit(1)

    errors = ErrorCollector()
    is_parsed, update_info = parse_json_string(content, errors)
    if not is_parsed:
        cp("❌  Invalid version file:")
        for message in errors.messages:
            cp(f"  - {escape(message.strip())}")
        raise typer.Exit(1)

    if platform is not None:
        filter_to_platform(update_info, platform)

    print_json(update_info.model_dump_json(indent=2, exclude={"is_update_available"}))
