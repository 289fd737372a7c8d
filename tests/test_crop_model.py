"""Tests for the crop region model, clamping and the default-region policy."""

import pytest

from iCrop.core.geometry import CropRegion, ImageGeometry, Viewport
from iCrop.errors import DegenerateDragError, InvalidGeometryError
from iCrop.gui.ui.widgets.crop.model import (
    CropRegionModel,
    clamp_region,
    create_default_region,
)
from iCrop.gui.ui.widgets.crop.utils import CropTuning

IMAGE = ImageGeometry(800, 600)


def test_clamp_keeps_valid_region():
    region = CropRegion(10, 20, 300, 200)
    assert clamp_region(region, IMAGE) == region


def test_clamp_moves_negative_origin_inside():
    clamped = clamp_region(CropRegion(-50, -5, 300, 200), IMAGE)
    assert clamped == CropRegion(0, 0, 300, 200)


def test_clamp_shortens_size_at_far_edges():
    clamped = clamp_region(CropRegion(700, 500, 300, 300), IMAGE)
    assert clamped == CropRegion(700, 500, 100, 100)


def test_clamp_origin_leaves_room_for_minimum_size():
    clamped = clamp_region(CropRegion(799, 599, 50, 50), IMAGE)
    assert clamped == CropRegion(790, 590, 10, 10)


def test_clamp_rejects_below_minimum_and_returns_previous():
    previous = CropRegion(100, 100, 200, 200)
    assert clamp_region(CropRegion(100, 100, 5, 200), IMAGE, previous=previous) == previous
    assert clamp_region(CropRegion(100, 100, 200, 9.99), IMAGE, previous=previous) == previous


def test_clamp_rejects_non_finite_values():
    previous = CropRegion(100, 100, 200, 200)
    candidate = CropRegion(float("nan"), 100, 200, 200)
    assert clamp_region(candidate, IMAGE, previous=previous) == previous


def test_clamp_strict_raises_degenerate_drag():
    with pytest.raises(DegenerateDragError):
        clamp_region(CropRegion(0, 0, 1, 1), IMAGE, strict=True)


def test_clamp_uses_custom_minimum():
    previous = CropRegion(0, 0, 100, 100)
    assert clamp_region(CropRegion(0, 0, 40, 40), IMAGE, previous=previous, min_size=50) == previous
    assert clamp_region(CropRegion(0, 0, 60, 60), IMAGE, min_size=50) == CropRegion(0, 0, 60, 60)


def test_clamp_rejects_invalid_image():
    with pytest.raises(InvalidGeometryError):
        clamp_region(CropRegion(0, 0, 20, 20), ImageGeometry(0, 600))


def test_default_region_same_aspect():
    region = create_default_region(IMAGE, Viewport(400, 300))
    assert region.x == pytest.approx(200.0)
    assert region.y == pytest.approx(150.0)
    assert region.right == pytest.approx(600.0)
    assert region.bottom == pytest.approx(450.0)


def test_default_region_letterboxed_is_centred_in_image():
    region = create_default_region(ImageGeometry(1000, 500), Viewport(400, 400))
    # Displayed 400x200: box bounded by 0.8 * 200 = 160 px wide, 100 px tall.
    assert region.width == pytest.approx(400.0)
    assert region.height == pytest.approx(250.0)
    assert region.x == pytest.approx(300.0)
    assert region.y == pytest.approx(125.0)


def test_default_region_grows_to_minimum_display_size():
    region = create_default_region(ImageGeometry(50, 40), Viewport(400, 400))
    # Displayed 400x320 at scale 0.125; 50% gives 200x160 display pixels.
    assert region.as_tuple() == pytest.approx((12.5, 10.0, 25.0, 20.0))


def test_default_region_capped_by_maximum():
    region = create_default_region(ImageGeometry(8000, 6000), Viewport(4000, 3000))
    # 50% would be 2000x1500 display pixels; the cap is 800.
    assert region.width == pytest.approx(1600.0)
    assert region.height == pytest.approx(1600.0)
    assert region.x + region.width / 2 == pytest.approx(4000.0)
    assert region.y + region.height / 2 == pytest.approx(3000.0)


def test_default_region_for_image_below_minimum_size():
    region = create_default_region(ImageGeometry(5, 5), Viewport(100, 100))
    assert region == CropRegion(0.0, 0.0, 5.0, 5.0)


def test_default_region_follows_tuning():
    tuning = CropTuning(default_fraction=0.25, default_min_px=10.0)
    region = create_default_region(IMAGE, Viewport(400, 300), tuning)
    assert region.as_tuple() == pytest.approx((300.0, 225.0, 200.0, 150.0))


def test_default_region_rejects_zero_viewport():
    with pytest.raises(InvalidGeometryError):
        create_default_region(IMAGE, Viewport(400, 0))


@pytest.fixture
def model():
    model = CropRegionModel()
    model.initialise(IMAGE, Viewport(400, 300))
    return model


def test_model_starts_empty():
    model = CropRegionModel()
    assert model.get_region() is None
    assert not model.apply_candidate(CropRegion(0, 0, 100, 100))


def test_model_apply_candidate_commits_clamped_region(model):
    assert model.apply_candidate(CropRegion(-10, 0, 100, 100))
    assert model.get_region() == CropRegion(0, 0, 100, 100)


def test_model_apply_candidate_rejects_degenerate(model):
    before = model.get_region()
    assert not model.apply_candidate(CropRegion(0, 0, 3, 100))
    assert model.get_region() == before


def test_model_apply_candidate_reports_no_change(model):
    assert not model.apply_candidate(model.get_region())


def test_model_clear(model):
    model.clear()
    assert model.get_region() is None
    assert model.get_image() is None
