"""Command-line interface for Terraformer."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import click
import httpx
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .config import get_config
from .models import catalog
from .models.generation import ReferenceSource, StreetViewPov
from .services.gemini_service import NoImageReturnedError
from .services.generation_service import GenerationService
from .services.prompt_service import build_prompt
from .services.reference_image_service import ReferenceImageError
from .session import GenerationSession, SessionError
from .utils.image_utils import load_image_bytes, save_data_url, save_image

console = Console()


def timestamped_filename(base_name: str, extension: str = "png") -> str:
    """Generate a filename with timestamp to avoid overwrites.

    Args:
        base_name: Base name for the file (e.g., 'terraformer-art')
        extension: File extension without dot (default: 'png')

    Returns:
        Filename like 'terraformer-art_20240201_143052.png'
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{base_name}_{timestamp}.{extension}"


def _build_pov(heading: Optional[float], pitch: Optional[float]) -> Optional[StreetViewPov]:
    if heading is None and pitch is None:
        return None
    return StreetViewPov(heading=heading or 0, pitch=pitch or 0)


def _resolve_point(
    location: Optional[str],
    lat: Optional[float],
    lng: Optional[float],
) -> tuple[float, float]:
    if location:
        quick = catalog.find_location(location)
        if quick is None:
            names = ", ".join(loc.name for loc in catalog.QUICK_LOCATIONS)
            raise click.BadParameter(f"Unknown location '{location}'. Choose from: {names}")
        return quick.latitude, quick.longitude

    if (lat is None) != (lng is None):
        raise click.BadParameter("--lat and --lng must be given together")
    if lat is None:
        return catalog.DEFAULT_LOCATION.latitude, catalog.DEFAULT_LOCATION.longitude
    return lat, lng


def _print_error(session: GenerationSession) -> None:
    """Render the error panel for a failed session."""
    body = f"[red]{escape(session.error or '')}[/red]"
    details = session.error_details
    if details is not None and details != "":
        if not isinstance(details, str):
            details = json.dumps(details, indent=2, default=str)
        body += f"\n\n[bold]Technical details:[/bold]\n{escape(details)}"
    console.print(Panel(body, title="API Error Details", border_style="red"))


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(verbose: bool):
    """Terraformer - Reimagine any place on Earth."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@main.command()
@click.option("--location", "-l", help="Quick location name (e.g. 'Eiffel Tower')")
@click.option("--lat", type=click.FloatRange(-90, 90), help="Latitude coordinate")
@click.option("--lng", type=click.FloatRange(-180, 180), help="Longitude coordinate")
@click.option("--style", "-s", default=catalog.DEFAULT_STYLE, show_default=True, help="Visual style")
@click.option("--population", "-p", default=catalog.DEFAULT_POPULATION, show_default=True,
              help="Who inhabits the scene")
@click.option("--time-period", "-t", default=catalog.DEFAULT_TIME_PERIOD, show_default=True,
              help="Era of the scene")
@click.option("--heading", type=click.FloatRange(0, 360), help="Street View heading in degrees")
@click.option("--pitch", type=click.FloatRange(-90, 90), help="Street View pitch in degrees")
@click.option("--output", "-o", type=click.Path(), help="Output image path")
@click.option("--save-reference", type=click.Path(), help="Also save the reference image here")
def generate(
    location: Optional[str],
    lat: Optional[float],
    lng: Optional[float],
    style: str,
    population: str,
    time_period: str,
    heading: Optional[float],
    pitch: Optional[float],
    output: Optional[str],
    save_reference: Optional[str],
):
    """Generate an image of a place in a given style, population and era."""
    config = get_config()
    latitude, longitude = _resolve_point(location, lat, lng)

    try:
        credentials = config.credentials()
    except ValueError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1)

    session = GenerationSession(
        latitude=latitude,
        longitude=longitude,
        style=style,
        population=population,
        time_period=time_period,
        pov=_build_pov(heading, pitch),
        credentials=credentials,
    )

    try:
        request = session.start()
    except (SessionError, ValueError) as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1)

    console.print(f"[bold]Location:[/bold] {latitude:.5f}, {longitude:.5f}")
    console.print(f"[bold]Style:[/bold] {style}  [bold]Population:[/bold] {population}  "
                  f"[bold]Time period:[/bold] {time_period}")

    service = GenerationService(config=config)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("Generating...", total=None)
        try:
            result = service.generate(request)
        except ReferenceImageError as exc:
            session.fail("Failed to fetch reference image", str(exc))
        except NoImageReturnedError as exc:
            session.fail("The API did not return a valid image. It may have responded with text.",
                         exc.text)
        except Exception as exc:
            logging.getLogger(__name__).debug("Generation failed", exc_info=True)
            session.fail(str(exc) or "Unknown error occurred", getattr(exc, "details", None))
        else:
            session.succeed(result)

    if session.result is None:
        _print_error(session)
        raise SystemExit(1)

    output_path = Path(output) if output else config.output_dir / timestamped_filename("terraformer-art")
    try:
        output_path = save_data_url(session.result.image_data, output_path)
    except (OSError, ValueError) as exc:
        console.print(f"[red]Error:[/red] Could not save image to {output_path}: {escape(str(exc))}")
        raise SystemExit(1)
    console.print(f"[green]Saved:[/green] {output_path}")

    source = "Street View" if session.result.reference_source == ReferenceSource.STREET_VIEW else "map"
    console.print(f"[bold]Reference:[/bold] {source} "
                  f"({session.result.generation_time:.1f}s with {session.result.model})")

    if session.result.message:
        console.print(f"[blue]Info:[/blue] {session.result.message}")

    if save_reference:
        _save_reference(session.result.reference_url, Path(save_reference))


def _save_reference(url: str, path: Path) -> None:
    """Download the reference image again and store it."""
    try:
        response = httpx.get(url, timeout=get_config().request_timeout, follow_redirects=True)
        response.raise_for_status()
        save_image(load_image_bytes(response.content), path)
    except (httpx.HTTPError, OSError, ValueError) as exc:
        console.print(f"[yellow]Warning:[/yellow] Could not save reference image: {escape(str(exc))}")
        return
    console.print(f"[green]Saved reference:[/green] {path}")


@main.command()
@click.option("--style", "-s", default=catalog.DEFAULT_STYLE, show_default=True, help="Visual style")
@click.option("--population", "-p", default=catalog.DEFAULT_POPULATION, show_default=True,
              help="Who inhabits the scene")
@click.option("--time-period", "-t", default=catalog.DEFAULT_TIME_PERIOD, show_default=True,
              help="Era of the scene")
@click.option("--source", type=click.Choice([s.value for s in ReferenceSource]),
              default=ReferenceSource.STREET_VIEW.value, show_default=True,
              help="Kind of reference image the prompt describes")
@click.option("--heading", type=click.FloatRange(0, 360), help="Street View heading in degrees")
@click.option("--pitch", type=click.FloatRange(-90, 90), help="Street View pitch in degrees")
def prompt(
    style: str,
    population: str,
    time_period: str,
    source: str,
    heading: Optional[float],
    pitch: Optional[float],
):
    """Preview the prompt without calling any API."""
    text = build_prompt(
        style=style,
        population=population,
        time_period=time_period,
        source=ReferenceSource(source),
        pov=_build_pov(heading, pitch),
    )
    click.echo(text)


@main.command(name="catalog")
def show_catalog():
    """List styles, populations, time periods and quick locations."""
    choices = Table(title="Choices")
    choices.add_column("Style", style="cyan")
    choices.add_column("Population", style="green")
    choices.add_column("Time period", style="magenta")

    rows = max(len(catalog.STYLES), len(catalog.POPULATIONS), len(catalog.TIME_PERIODS))
    for i in range(rows):
        choices.add_row(
            catalog.STYLES[i] if i < len(catalog.STYLES) else "",
            catalog.POPULATIONS[i] if i < len(catalog.POPULATIONS) else "",
            catalog.TIME_PERIODS[i] if i < len(catalog.TIME_PERIODS) else "",
        )
    console.print(choices)

    locations = Table(title="Quick locations")
    locations.add_column("Name", style="cyan")
    locations.add_column("Latitude", justify="right")
    locations.add_column("Longitude", justify="right")
    for location in catalog.QUICK_LOCATIONS:
        locations.add_row(location.name, f"{location.latitude:.5f}", f"{location.longitude:.5f}")
    console.print(locations)


@main.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address")
@click.option("--port", default=8000, show_default=True, help="Port")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: str, port: int, reload: bool):
    """Run the HTTP API."""
    import uvicorn

    console.print(f"[bold]Serving Terraformer API on[/bold] http://{host}:{port}")
    uvicorn.run("terraformer.api.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    main()
