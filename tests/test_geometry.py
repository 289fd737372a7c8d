"""Tests for the contain-fit coordinate transform."""

import math

import pytest
from PySide6.QtCore import QPointF

from iCrop.core.geometry import (
    CropRegion,
    ImageGeometry,
    NormalisedCrop,
    Viewport,
    compute_transform,
    image_to_display_percent,
    image_to_screen,
    screen_to_image,
)
from iCrop.errors import InvalidGeometryError


def test_same_aspect_has_no_letterbox():
    transform = compute_transform(ImageGeometry(800, 600), Viewport(400, 300))
    assert transform.scale == pytest.approx(2.0)
    assert transform.offset_x == pytest.approx(0.0)
    assert transform.offset_y == pytest.approx(0.0)


def test_wide_image_in_square_viewport_fits_width():
    transform = compute_transform(ImageGeometry(1000, 500), Viewport(400, 400))
    assert transform.displayed_width == pytest.approx(400.0)
    assert transform.displayed_height == pytest.approx(200.0)
    assert transform.offset_x == pytest.approx(0.0)
    assert transform.offset_y == pytest.approx(100.0)
    assert transform.scale == pytest.approx(2.5)


def test_tall_image_in_wide_viewport_fits_height():
    transform = compute_transform(ImageGeometry(500, 1000), Viewport(800, 400))
    assert transform.displayed_height == pytest.approx(400.0)
    assert transform.displayed_width == pytest.approx(200.0)
    assert transform.offset_x == pytest.approx(300.0)
    assert transform.offset_y == pytest.approx(0.0)
    assert transform.scale == pytest.approx(2.5)


def test_letterbox_corner_maps_to_image_origin():
    transform = compute_transform(ImageGeometry(1000, 500), Viewport(400, 400))
    origin = screen_to_image(QPointF(0, 100), transform)
    assert origin.x() == pytest.approx(0.0)
    assert origin.y() == pytest.approx(0.0)
    top_centre = screen_to_image((200, 100), transform)
    assert top_centre.x() == pytest.approx(500.0)
    assert top_centre.y() == pytest.approx(0.0)


def test_screen_to_image_does_not_clamp():
    transform = compute_transform(ImageGeometry(1000, 500), Viewport(400, 400))
    point = screen_to_image((-10, 0), transform)
    assert point.x() == pytest.approx(-25.0)
    assert point.y() == pytest.approx(-250.0)


@pytest.mark.parametrize(
    "image, viewport",
    [
        (ImageGeometry(800, 600), Viewport(400, 300)),
        (ImageGeometry(1000, 500), Viewport(400, 400)),
        (ImageGeometry(333, 1024), Viewport(1280, 720)),
        (ImageGeometry(6000, 4000), Viewport(917, 613)),
    ],
)
def test_round_trip_inside_displayed_image(image, viewport):
    transform = compute_transform(image, viewport)
    for fx in (0.01, 0.25, 0.5, 0.9, 0.99):
        for fy in (0.02, 0.4, 0.75, 0.98):
            point = QPointF(
                transform.offset_x + fx * transform.displayed_width,
                transform.offset_y + fy * transform.displayed_height,
            )
            back = image_to_screen(screen_to_image(point, transform), transform)
            assert math.hypot(back.x() - point.x(), back.y() - point.y()) < 1.0


@pytest.mark.parametrize(
    "image, viewport",
    [
        (ImageGeometry(800, 0), Viewport(400, 300)),
        (ImageGeometry(0, 600), Viewport(400, 300)),
        (ImageGeometry(800, 600), Viewport(400, 0)),
        (ImageGeometry(800, 600), Viewport(0, 300)),
        (ImageGeometry(800, 600), Viewport(-1, 300)),
        (ImageGeometry(float("nan"), 600), Viewport(400, 300)),
    ],
)
def test_zero_or_invalid_sizes_raise(image, viewport):
    with pytest.raises(InvalidGeometryError):
        compute_transform(image, viewport)


def test_display_percent_accounts_for_letterbox():
    image = ImageGeometry(1000, 500)
    viewport = Viewport(400, 400)
    transform = compute_transform(image, viewport)
    box = image_to_display_percent(CropRegion(0, 0, 1000, 500), transform, viewport)
    assert box.left_pct == pytest.approx(0.0)
    assert box.top_pct == pytest.approx(25.0)
    assert box.width_pct == pytest.approx(100.0)
    assert box.height_pct == pytest.approx(50.0)


def test_display_percent_is_stable_across_same_aspect_resizes():
    image = ImageGeometry(800, 600)
    region = CropRegion(200, 150, 400, 300)
    small = Viewport(400, 300)
    large = Viewport(1200, 900)
    box_small = image_to_display_percent(region, compute_transform(image, small), small)
    box_large = image_to_display_percent(region, compute_transform(image, large), large)
    assert box_large.left_pct == pytest.approx(box_small.left_pct)
    assert box_large.top_pct == pytest.approx(box_small.top_pct)
    assert box_large.width_pct == pytest.approx(box_small.width_pct)
    assert box_large.height_pct == pytest.approx(box_small.height_pct)


def test_region_normalised_fractions():
    crop = CropRegion(200, 150, 400, 300).normalised(ImageGeometry(800, 600))
    assert crop == NormalisedCrop(0.25, 0.25, 0.5, 0.5)


def test_pixel_box_rounds_half_up_and_stays_inside():
    crop = NormalisedCrop(x=0.5, y=0.0, width=0.5006, height=1.0)
    assert crop.to_pixel_box(1000, 10) == (500, 0, 500, 10)
    assert NormalisedCrop(0.1234, 0.5, 0.25, 0.25).to_pixel_box(1000, 1000) == (123, 500, 250, 250)
