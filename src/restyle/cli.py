"""Typer CLI — ``restyle analyze``, ``restyle redesign`` and supporting commands."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from restyle.config import load_config
from restyle.schemas.config import KNOWN_PROVIDERS, AppConfig
from restyle.schemas.website import DesignStyle

# Load .env file from the working directory (if it exists)
load_dotenv()

app = typer.Typer(
    name="restyle",
    help="Restyle — analyze a website's design and redesign it in a new visual style.",
    no_args_is_help=True,
)
keys_app = typer.Typer(help="Manage stored API keys.", no_args_is_help=True)
app.add_typer(keys_app, name="keys")

console = Console()

ConfigOption = typer.Option(None, "--config", "-c", help="Path to restyle.yml (default: ./restyle.yml if present).")
VerboseOption = typer.Option(False, "--verbose", "-v")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )
    # httpx logs every HTTP request at INFO, which is noise for CLI users
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _load_config_or_exit(path: Path | None) -> AppConfig:
    try:
        return load_config(path)
    except Exception as exc:
        console.print(f"[red]Config validation failed:[/] {exc}")
        raise typer.Exit(code=1)


def _check_provider(provider: str | None) -> str | None:
    if provider is None:
        return None
    provider = provider.strip().lower()
    if provider not in KNOWN_PROVIDERS:
        console.print(
            f"[red]Unknown provider:[/] {provider} (expected one of {', '.join(KNOWN_PROVIDERS)})"
        )
        raise typer.Exit(code=1)
    return provider


async def _check_url(url: str) -> bool:
    """Quick HEAD request to see whether ``url`` is reachable.

    Only warns on failure; the analysis itself never fetches the page.
    """
    import httpx

    console.print(f"[dim]Checking URL reachability: {url}[/]")
    try:
        async with httpx.AsyncClient(follow_redirects=True, timeout=15) as http:
            resp = await http.head(url)
    except httpx.ConnectError:
        problem = f"cannot connect to {url}"
    except httpx.TimeoutException:
        problem = f"{url} timed out after 15s"
    except httpx.HTTPError as exc:
        problem = f"could not verify {url}: {exc}"
    else:
        if resp.status_code < 400:
            console.print(f"[green]URL reachable[/] (HTTP {resp.status_code})")
            return True
        problem = f"target URL returned HTTP {resp.status_code}"

    console.print(f"[yellow]Warning:[/] {problem}. Continuing anyway.")
    return False


# ----------------------------------------------------------------------
# analyze / redesign
# ----------------------------------------------------------------------


@app.command()
def analyze(
    url: str = typer.Argument(..., help="Website to analyze, e.g. example.com"),
    provider: str = typer.Option(None, "--provider", "-p", help="openai, anthropic or google (default from config)."),
    model: str = typer.Option(None, "--model", "-m", help="Model id (default: the provider's default)."),
    config: Path = ConfigOption,
    output: Path = typer.Option(None, "--output", "-o", help="Where to write the analysis JSON."),
    check_url: bool = typer.Option(False, "--check-url", help="HEAD the URL first and warn if it is unreachable."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Use canned responses (no API calls)."),
    verbose: bool = VerboseOption,
) -> None:
    """Analyze a website's colors, fonts, layout and elements."""
    _setup_logging(verbose)
    cfg = _load_config_or_exit(config)
    provider = _check_provider(provider)

    if dry_run:
        console.print("[yellow]DRY-RUN mode — no API calls will be made.[/]\n")

    out_path = output or Path(cfg.output_directory) / "analysis.json"
    asyncio.run(_run_analyze(cfg, url, provider, model, out_path, check_url=check_url, dry_run=dry_run))


async def _run_analyze(
    cfg: AppConfig,
    url: str,
    provider: str | None,
    model: str | None,
    out_path: Path,
    *,
    check_url: bool = False,
    dry_run: bool = False,
) -> None:
    from restyle.agents.analyzer.agent import normalize_url
    from restyle.agents.studio import Studio
    from restyle.output.export import write_analysis
    from restyle.shared.errors import CredentialMissing
    from restyle.shared.progress import StepProgress

    try:
        url = normalize_url(url)
    except ValueError as exc:
        console.print(f"[red]Error:[/] {exc}")
        raise typer.Exit(code=1)

    if check_url:
        await _check_url(url)

    studio = Studio.from_config(cfg, dry_run=dry_run)
    provider = provider or cfg.default_provider
    with StepProgress("Website Analyzer") as progress:
        progress.print_phase(f"Analyzing {url}")
        try:
            data = await studio.analyze_website(url, provider, model, on_progress=progress.update)
        except CredentialMissing as exc:
            progress.fail("no API key")
            console.print(f"[red]Error:[/] {exc}")
            console.print(f"Run [bold]restyle keys set {provider}[/] or set the provider's API key environment variable.")
            raise typer.Exit(code=1)
        progress.finish()

    await studio.drain()

    table = Table(title=f"Design analysis: {data.url}", show_lines=False)
    table.add_column("Aspect", style="bold cyan")
    table.add_column("Details")
    table.add_row("Colors", ", ".join(data.colors) or "(none)")
    table.add_row("Fonts", ", ".join(data.font_names()) or "(none)")
    table.add_row("Elements", ", ".join(e.type for e in data.elements) or "(none)")
    if data.content_structure and data.content_structure.main_sections:
        table.add_row("Sections", ", ".join(data.content_structure.main_sections))
    console.print(table)

    write_analysis(data, out_path)
    console.print(f"\n[green]Analysis written to:[/] {out_path}")


@app.command()
def redesign(
    analysis: Path = typer.Option(..., "--analysis", "-a", help="Analysis JSON written by `restyle analyze`."),
    style: DesignStyle = typer.Option(..., "--style", "-s", help="Target design style."),
    provider: str = typer.Option(None, "--provider", "-p", help="openai, anthropic or google (default from config)."),
    model: str = typer.Option(None, "--model", "-m", help="Model id (default: the provider's default)."),
    config: Path = ConfigOption,
    output: Path = typer.Option(None, "--output", "-o", help="Output directory (default: <output_directory>/<style>)."),
    inline: bool = typer.Option(False, "--inline", help="Embed the CSS in index.html instead of styles.css."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Use canned responses (no API calls)."),
    verbose: bool = VerboseOption,
) -> None:
    """Generate a redesigned HTML/CSS page from a saved analysis."""
    _setup_logging(verbose)
    cfg = _load_config_or_exit(config)
    provider = _check_provider(provider)

    if not analysis.exists():
        console.print(f"[red]No analysis found at {analysis}[/]")
        console.print("Run [bold]restyle analyze URL[/] first — it writes analysis.json.")
        raise typer.Exit(code=1)

    if dry_run:
        console.print("[yellow]DRY-RUN mode — no API calls will be made.[/]\n")

    out_dir = output or Path(cfg.output_directory) / style.value
    asyncio.run(_run_redesign(cfg, analysis, style, provider, model, out_dir, inline=inline, dry_run=dry_run))


async def _run_redesign(
    cfg: AppConfig,
    analysis: Path,
    style: DesignStyle,
    provider: str | None,
    model: str | None,
    out_dir: Path,
    *,
    inline: bool = False,
    dry_run: bool = False,
) -> None:
    from pydantic import ValidationError

    from restyle.agents.studio import Studio
    from restyle.output.export import load_analysis, write_redesign
    from restyle.schemas.website import RedesignRequest
    from restyle.shared.progress import StepProgress

    try:
        data = load_analysis(analysis)
    except ValidationError as exc:
        console.print(f"[red]Invalid analysis file {analysis}:[/] {exc}")
        raise typer.Exit(code=1)

    request = RedesignRequest(website_data=data, design_style=style)
    studio = Studio.from_config(cfg, dry_run=dry_run)
    with StepProgress("Website Redesigner") as progress:
        progress.print_phase(f"{style.value.title()} redesign of {data.url}")
        result = await studio.redesign_website(request, provider, model, on_progress=progress.update)
        progress.finish()

    paths = write_redesign(result, out_dir, inline, request=request)
    console.print(f"\n[bold]Preview[/]\n{result.preview}\n")
    for kind, path in paths.items():
        console.print(f"[green]{kind.upper()} written to:[/] {path}")
    if result.id:
        console.print(f"[dim]Saved to history as {result.id}[/]")


# ----------------------------------------------------------------------
# catalogue
# ----------------------------------------------------------------------


@app.command()
def styles() -> None:
    """List the available design styles."""
    from restyle.agents.redesigner.prompts import get_style_guide

    table = Table(title="Design styles")
    table.add_column("Style", style="bold cyan")
    table.add_column("Description")
    for style in DesignStyle:
        guide = get_style_guide(style)
        table.add_row(style.value, guide.description if guide else "")
    console.print(table)


@app.command()
def models(
    provider: str = typer.Option(None, "--provider", "-p", help="Only show this provider."),
    config: Path = ConfigOption,
) -> None:
    """List the selectable models per provider (* marks the default)."""
    from restyle.agents.studio import Studio

    cfg = _load_config_or_exit(config)
    provider = _check_provider(provider)
    studio = Studio.from_config(cfg)

    for name, infos in studio.catalogue().items():
        if provider and name != provider:
            continue
        default = studio.registry.default_model(name)
        table = Table(title=name)
        table.add_column("", width=1)
        table.add_column("Model id", style="bold", no_wrap=True)
        table.add_column("Name")
        table.add_column("Description", style="dim")
        for info in infos:
            table.add_row("*" if info.id == default else "", info.id, info.name, info.description)
        if default and all(info.id != default for info in infos):
            table.add_row("*", default, "(configured)", "")
        console.print(table)


# ----------------------------------------------------------------------
# keys
# ----------------------------------------------------------------------


@keys_app.command("set")
def keys_set(
    provider: str = typer.Argument(..., help="openai, anthropic or google"),
    key: str = typer.Option(None, "--key", "-k", help="API key (prompted for when omitted)."),
    config: Path = ConfigOption,
) -> None:
    """Store an API key for a provider."""
    from restyle.agents.studio import Studio

    cfg = _load_config_or_exit(config)
    provider = _check_provider(provider)
    if key is None:
        key = typer.prompt(f"{provider} API key", hide_input=True)

    studio = Studio.from_config(cfg)
    try:
        asyncio.run(studio.save_credential(provider, key))
    except (ValueError, OSError) as exc:
        console.print(f"[red]Could not save key:[/] {exc}")
        raise typer.Exit(code=1)
    console.print(f"[green]Saved {provider} key[/] to {Path(cfg.credentials_file).expanduser()}")


@keys_app.command("list")
def keys_list(config: Path = ConfigOption) -> None:
    """Show which providers have a key (masked) and where it comes from."""
    cfg = _load_config_or_exit(config)
    asyncio.run(_run_keys_list(cfg))


async def _run_keys_list(cfg: AppConfig) -> None:
    from restyle.shared.credentials import EnvCredentialStore, FileCredentialStore, mask_secret

    file_store = FileCredentialStore(cfg.credentials_file, user=cfg.user)
    env_store = EnvCredentialStore()

    table = Table(title=f"API keys (user: {cfg.user})")
    table.add_column("Provider", style="bold cyan")
    table.add_column("Key")
    table.add_column("Source", style="dim")
    for provider in KNOWN_PROVIDERS:
        if secret := await file_store.get(provider):
            table.add_row(provider, mask_secret(secret), "credentials file")
        elif secret := await env_store.get(provider):
            table.add_row(provider, mask_secret(secret), "environment")
        else:
            table.add_row(provider, "[red](none)[/]", "")
    console.print(table)


@keys_app.command("delete")
def keys_delete(
    provider: str = typer.Argument(..., help="openai, anthropic or google"),
    config: Path = ConfigOption,
) -> None:
    """Remove a stored API key (environment variables are untouched)."""
    from restyle.shared.credentials import FileCredentialStore

    cfg = _load_config_or_exit(config)
    provider = _check_provider(provider)
    store = FileCredentialStore(cfg.credentials_file, user=cfg.user)
    if asyncio.run(store.delete(provider)):
        console.print(f"[green]Deleted {provider} key[/]")
    else:
        console.print(f"[yellow]No stored {provider} key[/]")


# ----------------------------------------------------------------------
# history / validate
# ----------------------------------------------------------------------


@app.command()
def history(
    analysis: str = typer.Option(None, "--analysis", "-a", help="Show the redesigns of one analysis id."),
    config: Path = ConfigOption,
) -> None:
    """List saved analyses, or the redesigns of one analysis."""
    cfg = _load_config_or_exit(config)
    asyncio.run(_run_history(cfg, analysis))


async def _run_history(cfg: AppConfig, analysis_id: str | None) -> None:
    from restyle.shared.errors import PersistenceError
    from restyle.shared.persistence import JsonFilePersistence

    store = JsonFilePersistence(Path(cfg.output_directory) / "history")

    if analysis_id is None:
        records = await store.list_analyses()
        if not records:
            console.print("[dim]No saved analyses.[/]")
            return
        table = Table(title="Saved analyses")
        table.add_column("Id", style="bold")
        table.add_column("Created", style="dim")
        table.add_column("URL")
        for r in records:
            table.add_row(r["id"], r.get("created_at", ""), r.get("url", ""))
        console.print(table)
        return

    try:
        parent = await store.get_analysis(analysis_id)
    except PersistenceError as exc:
        console.print(f"[red]Error:[/] {exc}")
        raise typer.Exit(code=1)

    records = await store.list_redesigns(analysis_id)
    table = Table(title=f"Redesigns of {parent.get('url', analysis_id)}")
    table.add_column("Id", style="bold")
    table.add_column("Created", style="dim")
    table.add_column("Style")
    for r in records:
        table.add_row(r["id"], r.get("created_at", ""), r.get("design_style", ""))
    console.print(table)


@app.command()
def validate(
    config: Path = typer.Option(..., "--config", "-c", help="Path to restyle.yml"),
    verbose: bool = VerboseOption,
) -> None:
    """Validate a configuration file."""
    _setup_logging(verbose)
    cfg = _load_config_or_exit(config)

    console.print("[green]Config is valid![/]\n")
    console.print(f"  Default provider: {cfg.default_provider}")
    for name, model_id in cfg.models.items():
        console.print(f"    {name}: {model_id}")
    console.print(f"  Credentials file: {cfg.credentials_file} (user: {cfg.user})")
    console.print(f"  Output dir:       {cfg.output_directory}")
    console.print(f"  Save history:     {cfg.save_history}")
    console.print(f"  Max tokens:       {cfg.max_tokens}")
