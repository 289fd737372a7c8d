"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import json
from pathlib import Path
from typing import Any, Optional

import typer
from rich import print
from rich.table import Table

from .application.services.crop_service import CropService
from .core.geometry import CropRegion, ImageGeometry, Viewport, compute_transform
from .errors import ICropError, InvalidGeometryError
from .gui.ui.widgets.crop import CropTuning, create_default_region
from .settings.manager import SettingsManager
from .utils.logging import configure_logging

app = typer.Typer(help="Crop-region geometry tools for letterboxed image views")


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except InvalidGeometryError as exc:
            typer.echo(f"Error: invalid geometry: {exc}", err=True)
            raise typer.Exit(1) from exc
        except ICropError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except (OSError, ValueError, KeyError, TypeError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _parse_size(value: str) -> tuple[float, float]:
    try:
        width, height = value.lower().split("x", 1)
        return float(width), float(height)
    except ValueError as exc:
        raise typer.BadParameter(f"expected WIDTHxHEIGHT, got {value!r}") from exc


def _load_tuning(settings: Optional[Path]) -> CropTuning:
    if settings is None:
        return CropTuning()
    manager = SettingsManager(path=settings)
    manager.load()
    return manager.crop_tuning()


def _region_table(region: CropRegion) -> Table:
    table = Table("x", "y", "width", "height")
    table.add_row(*(f"{value:.2f}" for value in region.as_tuple()))
    return table


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose)


@app.command()
@_handle_errors
def fit(image: str, viewport: str) -> None:
    """Print the contain-fit transform of IMAGE (WxH) inside VIEWPORT (WxH)."""

    transform = compute_transform(ImageGeometry(*_parse_size(image)), Viewport(*_parse_size(viewport)))
    print(
        f"scale={transform.scale:g} offset=({transform.offset_x:g}, {transform.offset_y:g}) "
        f"displayed={transform.displayed_width:g}x{transform.displayed_height:g}"
    )


@app.command()
@_handle_errors
def default(
    image: str,
    viewport: str,
    settings: Optional[Path] = typer.Option(None, "--settings", help="Settings file with crop tuning"),
) -> None:
    """Print the default crop region for IMAGE (WxH) shown in VIEWPORT (WxH)."""

    region = create_default_region(
        ImageGeometry(*_parse_size(image)),
        Viewport(*_parse_size(viewport)),
        _load_tuning(settings),
    )
    print(_region_table(region))


def _run_script(service: CropService, events: list[dict[str, Any]]) -> None:
    controller = service.controller
    for index, event in enumerate(events):
        kind = event["type"]
        if kind == "down":
            controller.on_pointer_down((event["x"], event["y"]))
        elif kind == "move":
            controller.on_pointer_move((event["x"], event["y"]))
        elif kind == "up":
            controller.on_pointer_up()
        elif kind == "cancel":
            controller.on_pointer_cancel()
        elif kind == "resize":
            controller.set_viewport(Viewport(float(event["width"]), float(event["height"])))
        else:
            raise ValueError(f"event {index}: unknown type {kind!r}")


@app.command()
@_handle_errors
def replay(
    script: Path = typer.Argument(..., exists=True, dir_okay=False),
    settings: Optional[Path] = typer.Option(None, "--settings", help="Settings file with crop tuning"),
) -> None:
    """Replay a JSON pointer-event script and print the resulting crop."""

    payload = json.loads(script.read_text(encoding="utf-8"))
    service = CropService(tuning=_load_tuning(settings))
    service.load_image(ImageGeometry(*map(float, payload["image"])))
    service.enter_crop_mode(Viewport(*map(float, payload["viewport"])))
    _run_script(service, payload.get("events", []))

    region = service.region()
    box = service.display_box()
    print(_region_table(region))
    if box is not None:
        print(
            f"display box: left={box.left_pct:.2f}% top={box.top_pct:.2f}% "
            f"width={box.width_pct:.2f}% height={box.height_pct:.2f}%"
        )
    request = service.confirm()
    crop = request.normalised
    print(
        f"[green]normalised crop: x={crop.x:.4f} y={crop.y:.4f} "
        f"width={crop.width:.4f} height={crop.height:.4f}"
    )


if __name__ == "__main__":  # pragma: no cover
    app()
