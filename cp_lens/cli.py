import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import httpx
import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown

from cp_lens.analyzers.combined import get_combined_analytics
from cp_lens.config import Settings
from cp_lens.errors import LensError
from cp_lens.formatter import format_platform, format_report
from cp_lens.models import LensModel
from cp_lens.platforms import build_platforms, make_catalog

load_dotenv()
app = typer.Typer(help="LeetCode + Codeforces profile analytics.")
console = Console()

JsonOption = typer.Option(False, "--json", help="Print the JSON report instead of Markdown")
OutputOption = typer.Option(None, "--output", "-o", help="Save report to file instead of printing")
DebugOption = typer.Option(False, "--debug", help="Log upstream fetches")


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


async def _run(task: str, leetcode: Optional[str], codeforces: Optional[str]) -> LensModel:
    settings = Settings.from_env()
    catalog = make_catalog(settings)
    async with httpx.AsyncClient(timeout=settings.request_timeout) as http:
        leetcode_builder, codeforces_builder = build_platforms(http, settings, catalog)
        if task == "leetcode":
            return await leetcode_builder.build(leetcode or "")
        if task == "codeforces":
            return await codeforces_builder.build(codeforces or "")
        return await get_combined_analytics(
            leetcode, codeforces,
            leetcode=leetcode_builder,
            codeforces=codeforces_builder,
            top_skills=settings.top_skills,
        )


def _emit(result: LensModel, markdown: str, as_json: bool, output: Optional[Path]) -> None:
    text = json.dumps(result.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False) if as_json else markdown
    if output:
        output.write_text(text)
        console.print(f"[bold green]✓[/] Report saved to [cyan]{output}[/]")
    elif as_json:
        console.print_json(text)
    else:
        console.print(Markdown(text))


def _execute(task: str, leetcode: Optional[str], codeforces: Optional[str], as_json: bool, output: Optional[Path], debug: bool) -> None:
    _setup_logging(debug)
    try:
        with console.status("[bold green]Fetching profiles..."):
            result = asyncio.run(_run(task, leetcode, codeforces))
    except LensError as exc:
        console.print(f"[bold red]Error:[/] {exc.message}")
        raise typer.Exit(1)
    except ValueError as exc:
        # bad settings in the environment
        console.print(f"[bold red]Error:[/] {exc}")
        raise typer.Exit(1)

    markdown = format_report(result) if task == "combined" else format_platform(result)
    _emit(result, markdown, as_json, output)


@app.command()
def combined(
    leetcode: Optional[str] = typer.Option(None, "--leetcode", "-l", help="LeetCode username"),
    codeforces: Optional[str] = typer.Option(None, "--codeforces", "-c", help="Codeforces handle"),
    as_json: bool = JsonOption,
    output: Optional[Path] = OutputOption,
    debug: bool = DebugOption,
):
    """Merged report across LeetCode and Codeforces."""
    _execute("combined", leetcode, codeforces, as_json, output, debug)


@app.command()
def leetcode(
    username: str = typer.Argument(help="LeetCode username"),
    as_json: bool = JsonOption,
    output: Optional[Path] = OutputOption,
    debug: bool = DebugOption,
):
    """Analytics for a single LeetCode user."""
    _execute("leetcode", username, None, as_json, output, debug)


@app.command()
def codeforces(
    handle: str = typer.Argument(help="Codeforces handle, with or without @"),
    as_json: bool = JsonOption,
    output: Optional[Path] = OutputOption,
    debug: bool = DebugOption,
):
    """Analytics for a single Codeforces handle."""
    _execute("codeforces", None, handle.lstrip("@"), as_json, output, debug)
