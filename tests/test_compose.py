from io import BytesIO

import numpy as np
import pytest
from PIL import Image

from creative_kit.errors import InvalidInputError
from creative_kit.layouts import create_default_layout
from creative_kit.models.image import ComposeInput
from creative_kit.services.compose import compose_creative, contrast_ratio, relative_luminance

CTA_FILL = (15, 118, 110, 255)
HEADLINE_REGION = (slice(108, 346), slice(86, 994))  # 1:1 headline box, rows then columns


def png(image):
    buf = BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def solid(color, size=(1080, 1080)):
    return png(Image.new("RGB", size, color))


def checkerboard(size=1080, cell=8):
    ys, xs = np.indices((size, size))
    return png(Image.fromarray((((xs // cell + ys // cell) % 2) * 255).astype(np.uint8), "L"))


def render(content, aspect_ratio="1:1"):
    result = compose_creative(create_default_layout(aspect_ratio), content)
    return np.asarray(Image.open(BytesIO(result.png_bytes)).convert("RGBA"))


def test_luminance_and_contrast():
    assert relative_luminance(np.array([0, 0, 0])) == 0
    assert relative_luminance(np.array([255, 255, 255])) == pytest.approx(1)
    assert contrast_ratio(0.0, 1.0) == pytest.approx(21)


def test_output_matches_canvas():
    pixels = render(ComposeInput(background=solid((30, 30, 30), size=(400, 300))), "9:16")
    assert pixels.shape == (1920, 1080, 4)
    assert tuple(pixels[960, 540]) == (30, 30, 30, 255)


def test_cta_is_drawn_as_filled_button():
    pixels = render(ComposeInput(background=solid((0, 0, 0)), cta_text="Shop now"))
    assert tuple(pixels[870, 356]) == CTA_FILL


def test_light_text_on_dark_background():
    pixels = render(ComposeInput(background=solid((0, 0, 0)), headline="Big Sale Today"))
    region = pixels[HEADLINE_REGION][..., :3]
    assert (region == 255).all(axis=-1).any()


def test_dark_text_on_light_background():
    pixels = render(ComposeInput(background=solid((255, 255, 255)), headline="Big Sale Today"))
    region = pixels[HEADLINE_REGION][..., :3]
    assert (region == (11, 18, 32)).all(axis=-1).any()


def test_busy_background_gets_readability_panel():
    with_panel = render(ComposeInput(background=checkerboard(), headline="Big Sale Today"))
    without = render(ComposeInput(background=checkerboard(), headline="Big Sale Today", auto_readability_panel=False))
    assert with_panel[HEADLINE_REGION].mean() > without[HEADLINE_REGION].mean()


def test_hero_image_is_fit_into_its_slot():
    content = ComposeInput(background=solid((255, 255, 255)), hero_image=solid((255, 0, 0), size=(100, 50)))
    pixels = render(content)
    assert tuple(pixels[680, 540]) == (255, 0, 0, 255)


def test_undecodable_hero_is_skipped():
    pixels = render(ComposeInput(background=solid((255, 255, 255)), hero_image=b"not an image"))
    assert tuple(pixels[680, 540]) == (255, 255, 255, 255)


def test_undecodable_background_is_rejected():
    with pytest.raises(InvalidInputError):
        compose_creative(create_default_layout("1:1"), ComposeInput(background=b"not an image"))
