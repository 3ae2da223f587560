import typer
from rich import print as cp
from typing_extensions import Annotated

from update_check import manifest, updates
from update_check.api import get_api_version_info
from update_check.models.settings import EnvSettings
from update_check.utils.logs import setup_logging

app = typer.Typer(no_args_is_help=True)
app.add_typer(updates.app, name="updates")
app.add_typer(manifest.app, name="manifest")


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
):
    """Checks version files for product updates."""
    setup_logging(verbose=verbose or EnvSettings().verbose)


@app.command()
def version():
    """Prints the update check API version."""
    cp(f"UpdateCheckApi {get_api_version_info()}")
