from io import BytesIO

import numpy as np
import pytest
from PIL import Image

from creative_kit.layouts import create_default_layout
from creative_kit.services.image_qa import gray_stats, score_reserved_zones


def png(gray):
    buf = BytesIO()
    Image.fromarray(gray.astype(np.uint8), "L").save(buf, format="PNG")
    return buf.getvalue()


def test_flat_background_scores_100():
    report = score_reserved_zones(png(np.full((1080, 1080), 128)), create_default_layout("1:1"))

    assert report.score == 100
    assert (report.width, report.height) == (1080, 1080)
    assert set(report.stats) == {"hero", "logo", "headline", "subtext", "cta"}
    assert report.stats["headline"].mean == pytest.approx(128 / 255)
    assert report.stats["headline"].stdev == 0


def test_busy_zone_is_penalized():
    gray = np.full((1080, 1080), 128)
    ys, xs = np.indices((173, 907))
    gray[367:540, 86:993] = ((xs + ys) % 2) * 255  # subtext box only

    report = score_reserved_zones(png(gray), create_default_layout("1:1"))

    assert report.stats["subtext"].stdev == pytest.approx(0.5, abs=1e-3)
    assert report.stats["headline"].stdev == 0
    assert report.score == 25


def test_everything_busy_floors_at_zero():
    ys, xs = np.indices((1080, 1080))
    assert score_reserved_zones(png(((xs + ys) % 2) * 255), create_default_layout("1:1")).score == 0


def test_zones_follow_image_size():
    report = score_reserved_zones(png(np.full((540, 540), 200)), create_default_layout("1:1"))
    assert (report.width, report.height) == (540, 540)
    assert report.stats["cta"].area_px == 270 * 65
    assert report.to_dict()["stats"]["cta"]["areaPx"] == 270 * 65


def test_empty_region():
    stat = gray_stats(np.zeros((0, 0), dtype=np.uint8))
    assert (stat.mean, stat.stdev, stat.area_px) == (0, 0, 0)
