"""alidrive CLI - Main commands."""
import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn

from ..core.exceptions import AliDriveException

app = typer.Typer(
    name="alidrive",
    help="AliDrive upload CLI",
    add_completion=False
)
console = Console()

TOKEN_ENVVAR = "ALIDRIVE_ACCESS_TOKEN"


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def require_token(token: Optional[str]) -> str:
    if not token:
        console.print(f"[red]No access token. Pass --token or set {TOKEN_ENVVAR}.[/red]")
        raise typer.Exit(1)
    return token


@app.command()
def upload(
    file_path: Path = typer.Argument(..., help="Local file to upload", exists=True, dir_okay=False),
    parent: str = typer.Option("root", "--parent", "-p", help="Parent folder id"),
    name: str = typer.Option(None, "--name", "-n", help="Custom file name"),
    no_rapid: bool = typer.Option(False, "--no-rapid", help="Skip the pre-hash round-trip"),
    temp_dir: Path = typer.Option(None, "--temp-dir", help="Directory for temporary files"),
    token: str = typer.Option(None, "--token", "-t", envvar=TOKEN_ENVVAR, help="Access token"),
    drive_id: str = typer.Option(None, "--drive-id", help="Drive id (default drive if omitted)"),
    proxy: str = typer.Option(None, "--proxy", help="HTTP(S) proxy URL"),
    insecure: bool = typer.Option(False, "--insecure", help="Skip TLS certificate verification"),
):
    """Upload a file to AliDrive."""
    from alidrive import AliDriveClient, APIConfig, UploadConfig

    access_token = require_token(token)
    upload_config = UploadConfig(rapid_upload=not no_rapid, temp_dir=temp_dir)
    api_config = APIConfig.from_options(proxy=proxy, insecure=insecure)

    async def do_upload():
        async with AliDriveClient(
            access_token,
            drive_id=drive_id,
            config=api_config,
            upload_config=upload_config
        ) as drive:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=console
            ) as progress:
                task = progress.add_task(f"Uploading {name or file_path.name}", total=100)

                def on_progress(percent: int):
                    progress.update(task, completed=percent)

                result = await drive.upload(
                    file_path,
                    parent_id=parent,
                    name=name,
                    progress_callback=on_progress
                )
                progress.update(task, completed=100)
            return result

    try:
        result = run_async(do_upload())
    except AliDriveException as e:
        console.print(f"[red]Upload failed: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if result.rapid_upload:
        console.print(f"[green]Rapid upload:[/green] {result.name} -> {result.file_id}")
    else:
        console.print(f"[green]Uploaded:[/green] {result.name} -> {result.file_id} ({result.parts_uploaded} parts)")


@app.command()
def preview(
    kind: str = typer.Argument(..., help="Preview kind: doc or video"),
    file_id: str = typer.Argument(..., help="File id"),
    token: str = typer.Option(None, "--token", "-t", envvar=TOKEN_ENVVAR, help="Access token"),
    drive_id: str = typer.Option(None, "--drive-id", help="Drive id (default drive if omitted)"),
    proxy: str = typer.Option(None, "--proxy", help="HTTP(S) proxy URL"),
    insecure: bool = typer.Option(False, "--insecure", help="Skip TLS certificate verification"),
):
    """Show preview info for a document or video."""
    from alidrive import AliDriveClient, APIConfig

    if kind not in ("doc", "video"):
        console.print(f"[red]Unknown preview kind: {kind}[/red]")
        raise typer.Exit(2)

    access_token = require_token(token)
    api_config = APIConfig.from_options(proxy=proxy, insecure=insecure)

    async def do_preview():
        async with AliDriveClient(access_token, drive_id=drive_id, config=api_config) as drive:
            if kind == "doc":
                return await drive.get_office_preview_url(file_id)
            return await drive.get_video_preview_play_info(file_id)

    try:
        result = run_async(do_preview())
    except AliDriveException as e:
        console.print(f"[red]Preview failed: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print_json(json.dumps(result))


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
