"""Main entry point for the musiccli application.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
defines one CLI command per music API operation, and delegates execution to the
CommandHandler.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

import typer
from typing_extensions import Annotated

# --- Core Layer ---
from musiccli.core.command_handler import CommandHandler

# --- Infrastructure Layer ---
# Config
from musiccli.infrastructure.config.settings import build_client_config, get_config, load_configuration
# UI
from musiccli.infrastructure.cli.display import ConsoleDisplay
# API client
from musiccli.infrastructure.api.music_client import MusicApiClient
# Monitoring
from musiccli.infrastructure.monitoring.logger_setup import DEFAULT_LOG_FORMAT, level_from_name, setup_logging

logger = logging.getLogger(__name__)


# --- Dependency Injection Container (Manual) ---

def create_dependencies(base_url: Optional[str] = None) -> Dict[str, Any]:
    """Creates and wires up all dependencies for one CLI invocation.

    This acts as the Composition Root.

    Args:
        base_url: Optional override of the configured API base URL.
    """
    # 1. Load Configuration First, then logging based on loaded settings
    load_configuration()
    setup_logging(
        log_level=level_from_name(get_config('logging.level', 'INFO')),
        log_format=get_config('logging.format', DEFAULT_LOG_FORMAT),
        log_file=get_config('logging.file'),
    )

    # 2. Build the shared, immutable client configuration
    client_config = build_client_config(base_url=base_url)

    # 3. Instantiate the UI; run_async builds the API client per command
    dependencies: Dict[str, Any] = {}
    dependencies['client_config'] = client_config
    dependencies['ui'] = ConsoleDisplay()
    logger.debug("All dependencies initialized successfully.")
    return dependencies


# --- Typer App Definition ---
app = typer.Typer(
    name="musiccli",
    help="musiccli: query the music service API (playlists, search, songs, singers, lyrics).",
    add_completion=False,
    no_args_is_help=True,
)


# --- Helper for Running Async Commands ---
def run_async(ctx: typer.Context, call: Callable[[CommandHandler], Awaitable[bool]]) -> None:
    """Builds the API client, runs one handler coroutine and closes the client.

    Exits with status 1 when the handler reports a failed call.
    """
    dependencies: Dict[str, Any] = ctx.obj

    async def _run() -> bool:
        async with MusicApiClient(dependencies['client_config']) as music_api:
            handler = CommandHandler(music_api=music_api, ui=dependencies['ui'])
            return await call(handler)

    if not asyncio.run(_run()):
        raise typer.Exit(code=1)


def parse_params(values: Optional[List[str]]) -> Dict[str, str]:
    """Parses repeated --param key=value options."""
    params: Dict[str, str] = {}
    for item in values or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected key=value, got '{item}'", param_hint="--param")
        params[key] = value
    return params


# --- CLI Commands ---

@app.callback()
def main_callback(
    ctx: typer.Context,
    base_url: Annotated[
        Optional[str],
        typer.Option("--base-url", "-u", help="API base URL (overrides api.base_url / MUSICCLI_API_BASE_URL).")
    ] = None,
):
    """Query the music service API and print responses as JSON."""
    ctx.obj = create_dependencies(base_url=base_url)


@app.command()
def playlists(ctx: typer.Context):
    """Show recommended playlists."""
    run_async(ctx, lambda handler: handler.handle_recommend_playlists())


@app.command()
def playlist(
    ctx: typer.Context,
    songlist_id: Annotated[str, typer.Argument(metavar="ID", help="Playlist id.")],
):
    """Show the detail of a playlist."""
    run_async(ctx, lambda handler: handler.handle_songlist_detail(songlist_id))


@app.command()
def banners(ctx: typer.Context):
    """Show home page banners."""
    run_async(ctx, lambda handler: handler.handle_banners())


@app.command()
def search(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Search keyword.")],
    param: Annotated[
        Optional[List[str]],
        typer.Option("--param", "-P", help="Extra query parameter as key=value (repeatable).")
    ] = None,
):
    """Search songs, singers or albums."""
    extra_params = parse_params(param)
    run_async(ctx, lambda handler: handler.handle_search(key, extra_params))


@app.command(name="song-url")
def song_url(
    ctx: typer.Context,
    song_id: Annotated[str, typer.Argument(metavar="ID", help="Song id.")],
):
    """Show the play URL of a song."""
    run_async(ctx, lambda handler: handler.handle_song_url(song_id))


@app.command(name="singer-albums")
def singer_albums(
    ctx: typer.Context,
    singermid: Annotated[str, typer.Argument(help="Singer mid.")],
    page_no: Annotated[int, typer.Option("--page-no", min=1, help="Page number.")] = 1,
    page_size: Annotated[int, typer.Option("--page-size", min=1, help="Albums per page.")] = 20,
):
    """Show a page of a singer's albums."""
    run_async(ctx, lambda handler: handler.handle_singer_albums(singermid, page_no=page_no, page_size=page_size))


@app.command(name="singer-songs")
def singer_songs(
    ctx: typer.Context,
    singermid: Annotated[str, typer.Argument(help="Singer mid.")],
):
    """Show a singer's songs."""
    run_async(ctx, lambda handler: handler.handle_singer_songs(singermid))


@app.command()
def song(
    ctx: typer.Context,
    songmid: Annotated[str, typer.Argument(help="Song mid.")],
):
    """Show the detail of a song."""
    run_async(ctx, lambda handler: handler.handle_song_detail(songmid))


@app.command()
def lyric(
    ctx: typer.Context,
    songmid: Annotated[str, typer.Argument(help="Song mid.")],
):
    """Show the lyrics of a song."""
    run_async(ctx, lambda handler: handler.handle_lyric(songmid))


# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()


if __name__ == "__main__":
    cli_entry_point()
