import json
from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer

from .classifier.categorize import classify as classify_labels
from .classifier.labels import JsonLabelSource, LabelSourceError, StaticLabelSource
from .classifier.severity import score_severity
from .config import Settings
from .dedup.hash import DecodeError, compute_fingerprint_file, fingerprint_to_hex
from .dedup.store import JsonCandidateStore, StoreReadError
from .logging import get_logger
from .model import Coordinate
from .pipeline import process_submission

app = typer.Typer(help="civicscan – duplicate detection and triage for civic issue reports", no_args_is_help=True)


def _load_settings(logger, **overrides) -> Settings:
    """Settings from the environment with non-None overrides; exits 1 on bad values."""
    try:
        settings = Settings.from_env()
        overrides = {key: value for key, value in overrides.items() if value is not None}
        return replace(settings, **overrides) if overrides else settings
    except ValueError as exc:
        logger.error(f"Invalid configuration: {exc}")
        raise typer.Exit(code=1) from exc


@app.command()
def fingerprint(
    image_path: Path = typer.Argument(..., exists=True, readable=True, help="Image to fingerprint"),
) -> None:
    """Print the 16-character average-hash fingerprint of an image."""
    logger = get_logger(__name__)

    try:
        typer.echo(fingerprint_to_hex(compute_fingerprint_file(image_path)))
    except DecodeError as exc:
        logger.error(f"Cannot fingerprint {image_path}: {exc}")
        raise typer.Exit(code=1) from exc


@app.command()
def classify(
    labels_path: Path = typer.Argument(..., exists=True, readable=True, help="Label-detection JSON file"),
) -> None:
    """Categorize a set of labels and score their severity."""
    logger = get_logger(__name__)

    try:
        labels = JsonLabelSource(labels_path).detect_labels(b"")
    except LabelSourceError as exc:
        logger.error(f"Cannot read labels: {exc}")
        raise typer.Exit(code=1) from exc

    settings = _load_settings(logger)
    category = classify_labels([label.description for label in labels], settings.keywords)
    severity = score_severity(labels, category)
    typer.echo(f"category: {category.value}")
    typer.echo(f"severity: {severity.value}")


@app.command()
def check(
    image_path: Path = typer.Argument(..., exists=True, readable=True, help="Image of the new report"),
    reports: Path = typer.Option(..., "--reports", "-r", help="JSON export of existing reports"),
    labels: Optional[Path] = typer.Option(None, "--labels", "-l", help="Label-detection JSON for the image"),
    lat: Optional[float] = typer.Option(None, help="Latitude of the new report"),
    lon: Optional[float] = typer.Option(None, help="Longitude of the new report"),
    radius: Optional[float] = typer.Option(None, min=0, help="Location match radius in meters"),
    threshold: Optional[int] = typer.Option(None, min=0, help="Maximum Hamming distance for an image match"),
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON"),
) -> None:
    """
    Check a new report against existing ones and triage it.

    Exits with code 2 when the existing reports cannot be read, since the
    duplicate check result would be meaningless.
    """
    logger = get_logger(__name__)

    if (lat is None) != (lon is None):
        logger.error("--lat and --lon must be given together")
        raise typer.Exit(code=1)

    settings = _load_settings(logger, location_radius_meters=radius, hamming_threshold=threshold)

    coordinate = Coordinate(lat, lon) if lat is not None else None
    label_source = JsonLabelSource(labels) if labels else StaticLabelSource([])

    try:
        result = process_submission(
            image_path.read_bytes(),
            coordinate,
            label_source,
            JsonCandidateStore(reports),
            settings,
        )
    except StoreReadError as exc:
        logger.error(f"Duplicate check failed: {exc}")
        raise typer.Exit(code=2) from exc

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return

    verdict = result.verdict
    typer.echo(f"fingerprint: {result.fingerprint or '-'}")
    if verdict.is_duplicate:
        typer.echo(f"duplicate: yes (of {verdict.duplicate_of_id}, by {verdict.reason.value})")
    else:
        typer.echo("duplicate: no")
    typer.echo(f"category: {result.category.value}")
    typer.echo(f"severity: {result.severity.value}")
    for warning in result.warnings:
        typer.echo(f"warning: {warning}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
