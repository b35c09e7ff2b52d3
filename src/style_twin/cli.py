"""Command-line interface for Style Twin."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from style_twin import __version__

console = Console()


def _build_twin():
    from style_twin.config import get_settings
    from style_twin.llm import LLMClient
    from style_twin.store import JsonProfileStore
    from style_twin.twin import StyleTwin

    settings = get_settings()
    store = JsonProfileStore(settings.profiles_dir)
    return StyleTwin(provider=LLMClient(), store=store, settings=settings)


def _read_text(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def _print_metrics(metrics) -> None:
    table = Table(title="Style Metrics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")

    table.add_row("Formality level", f"{metrics.formality_level:.2f} / 10")
    table.add_row("Avg sentence length", f"{metrics.avg_sentence_length} words")
    table.add_row("Unique words", f"{metrics.unique_words_count:,}")
    table.add_row("Positive tone", f"{metrics.positive_tone_percentage:.0f}%")

    console.print(table)

    if metrics.signature_phrases:
        console.print("\n[bold]Signature phrases:[/bold]")
        for phrase in metrics.signature_phrases:
            console.print(f"  {phrase}")
    else:
        console.print("\n[dim]No signature phrases yet[/dim]")


def _print_drift(result) -> None:
    colors = {"low": "green", "medium": "yellow", "high": "red"}
    color = colors[result.level.value]
    console.print(f"Similarity: [bold]{result.similarity_percentage}%[/bold] (score {result.score:.4f})")
    console.print(f"Drift: [{color}]{result.level.value}[/{color}]")


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logs")
def main(verbose: bool) -> None:
    """Style Twin - learn a writing style and check generated text against it."""
    from style_twin.config import get_settings
    from style_twin.logging_config import configure_logging

    settings = get_settings()
    configure_logging("DEBUG" if verbose else settings.log_level, json=settings.log_json)


@main.command()
def status() -> None:
    """Show configuration and stored profiles."""
    from style_twin.config import get_settings
    from style_twin.store import JsonProfileStore

    settings = get_settings()

    console.print("[bold]Style Twin Status[/bold]\n")
    console.print(f"Provider URL: {settings.openai_base_url}")
    console.print(f"Embedding model: {settings.embedding_model}")
    console.print(f"Generation model: {settings.generation_model}")

    if settings.openai_api_key:
        console.print("[green]OK[/green] API key configured")
    else:
        console.print("[yellow]![/yellow] No API key (set STYLE_TWIN_OPENAI_API_KEY)")

    store = JsonProfileStore(settings.profiles_dir)
    users = store.list_users()
    console.print(f"\nProfiles in {settings.profiles_dir}: {len(users)}")
    for user_id in users:
        console.print(f"  {user_id}")


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--max-length", "-m", type=int, default=None, help="Max characters per chunk")
def chunk(path: str, max_length: int | None) -> None:
    """Show how a text file would be chunked for embedding."""
    from style_twin.config import get_settings
    from style_twin.ingest.chunker import chunk_text

    limit = max_length or get_settings().chunk_max_length
    if limit < 1:
        raise click.BadParameter("must be at least 1", param_hint="--max-length")

    chunks = chunk_text(_read_text(path), limit)
    console.print(f"[green]OK[/green] {len(chunks)} chunks (max {limit} chars)\n")
    for i, piece in enumerate(chunks, start=1):
        console.print(f"[dim]#{i} ({len(piece)} chars)[/dim]")
        console.print(f"  {piece[:100]}{'...' if len(piece) > 100 else ''}")


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print metrics as JSON")
def analyze(path: str, as_json: bool) -> None:
    """Compute style metrics for a text file (no provider needed)."""
    from style_twin.style.metrics import analyze_text_metrics

    metrics = analyze_text_metrics(_read_text(path))
    if as_json:
        click.echo(json.dumps(metrics.to_dict(), indent=2))
        return
    _print_metrics(metrics)


@main.command(name="add-sample")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--user", "-u", "user_id", required=True, help="Profile owner")
def add_sample(path: str, user_id: str) -> None:
    """Embed a writing sample and update the user's profile."""
    from style_twin.errors import StyleTwinError

    twin = _build_twin()
    try:
        with console.status("Embedding sample..."):
            result = twin.process_sample(user_id, _read_text(path))
    except StyleTwinError as e:
        raise click.ClickException(str(e)) from e

    console.print(f"[green]OK[/green] Stored {result.count} chunks for {user_id}")
    console.print(f"[dim]Style vector: {result.style_vector_dimensions} dimensions[/dim]\n")
    _print_metrics(result.metrics)


@main.command()
@click.option("--user", "-u", "user_id", required=True, help="Profile owner")
@click.option("--json", "as_json", is_flag=True, help="Print the stored record as JSON")
def profile(user_id: str, as_json: bool) -> None:
    """Show a user's stored style profile."""
    twin = _build_twin()
    stored = twin.store.get_profile(user_id)
    if stored is None:
        raise click.ClickException(f"No profile for {user_id}")

    if as_json:
        click.echo(json.dumps(stored.to_record(), indent=2))
        return

    samples = twin.store.list_samples(user_id)
    console.print(f"[bold]Profile:[/bold] {user_id}")
    console.print(f"Samples: {len(samples)}")
    if stored.has_style_vector:
        console.print(f"Style vector: {len(stored.style_vector)} dimensions\n")
    else:
        console.print("Style vector: [yellow]not set[/yellow]\n")
    _print_metrics(stored.metrics)


@main.command()
@click.argument("text")
@click.option("--user", "-u", "user_id", required=True, help="Profile owner")
def drift(text: str, user_id: str) -> None:
    """Check how closely TEXT matches the user's style."""
    from style_twin.errors import StyleTwinError

    twin = _build_twin()
    try:
        result = twin.detect_drift(user_id, text)
    except StyleTwinError as e:
        raise click.ClickException(str(e)) from e
    _print_drift(result)


@main.command()
@click.argument("prompt")
@click.option("--user", "-u", "user_id", required=True, help="Profile owner")
@click.option("--check-drift", is_flag=True, help="Score the output against the profile")
def generate(prompt: str, user_id: str, check_drift: bool) -> None:
    """Generate text for PROMPT in the user's style."""
    from style_twin.errors import StyleTwinError

    twin = _build_twin()
    try:
        with console.status("Generating..."):
            result = twin.generate(user_id, prompt, check_drift=check_drift)
    except StyleTwinError as e:
        raise click.ClickException(str(e)) from e

    console.print(result.generated_text)
    if result.drift is not None:
        console.print()
        _print_drift(result.drift)


@main.command()
@click.argument("user_a")
@click.argument("user_b")
def compare(user_a: str, user_b: str) -> None:
    """Compare two users' style vectors."""
    from style_twin.errors import StyleTwinError

    twin = _build_twin()
    try:
        result = twin.compare_profiles(user_a, user_b)
    except StyleTwinError as e:
        raise click.ClickException(str(e)) from e
    _print_drift(result)


if __name__ == "__main__":
    main()
