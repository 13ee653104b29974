"""Lambda handler - finished creative from a background, images and copy."""

import base64
import binascii

from ..errors import InvalidInputError
from ..layouts import create_default_layout, layout_to_dict, parse_layout
from ..models.image import ComposeInput
from ..services.compose import compose_creative
from ..services.image_qa import score_reserved_zones
from .common import error_response, parse_aspect_ratio, parse_body, response


def decode_image_field(body: dict, name: str, required: bool = False) -> bytes | None:
    """Base64 or data-URL image field -> bytes."""
    value = body.get(name)
    if not value:
        if required:
            raise InvalidInputError(f"Missing '{name}' field")
        return None
    if not isinstance(value, str):
        raise InvalidInputError(f"'{name}' must be a base64 string")
    if value.startswith("data:"):
        value = value.split(",", 1)[-1]
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidInputError(f"'{name}' is not valid base64") from e


def handler(event, context):
    """
    Compose a creative and score how calm the background is under each slot.

    Input payload:
    {
        "layout": {...} | "aspectRatio": "4:5",
        "backgroundBase64": "iVBORw0...",          # or a data URL
        "headline": "단 7일, 피부 결이 달라짐",
        "subText": "평점 4.9 (2,312명)",
        "ctaText": "지금 구매",
        "badgeText": "NEW",
        "legalText": "일부 품목 제외",
        "heroImageBase64": "...",
        "logoImageBase64": "...",
        "autoReadabilityPanel": true
    }

    Output: {"mimeType", "imageBase64", "dataUrl", "layout", "qa"}
    """
    try:
        body = parse_body(event)
        if body.get("layout") is not None:
            layout = parse_layout(body["layout"])
        else:
            layout = create_default_layout(parse_aspect_ratio(body))

        background = decode_image_field(body, "backgroundBase64", required=True)
        content = ComposeInput(
            background=background,
            headline=str(body.get("headline") or ""),
            sub_text=str(body.get("subText") or ""),
            cta_text=str(body.get("ctaText") or ""),
            badge_text=str(body.get("badgeText") or ""),
            legal_text=str(body.get("legalText") or ""),
            hero_image=decode_image_field(body, "heroImageBase64"),
            logo_image=decode_image_field(body, "logoImageBase64"),
            auto_readability_panel=body.get("autoReadabilityPanel") is not False,
        )

        print(f"Composing creative {layout.canvas.width}x{layout.canvas.height}", flush=True)
        creative = compose_creative(layout, content)
        qa = score_reserved_zones(background, layout)
        print(f"  Reserved zone score: {qa.score}", flush=True)

        return response(200, {
            "mimeType": creative.mime_type,
            "imageBase64": creative.base64,
            "dataUrl": creative.data_url,
            "layout": layout_to_dict(layout),
            "qa": qa.to_dict(),
        })
    except Exception as e:
        return error_response(e)


# Local testing
if __name__ == "__main__":
    import json
    import sys

    if len(sys.argv) < 3:
        print("Usage: python -m creative_kit.handlers.compose <background.png> <headline> [ctaText] [out.png]")
        sys.exit(1)

    with open(sys.argv[1], "rb") as f:
        background_b64 = base64.b64encode(f.read()).decode("ascii")
    out_path = sys.argv[4] if len(sys.argv) > 4 else "creative.png"

    test_input = {
        "aspectRatio": "1:1",
        "backgroundBase64": background_b64,
        "headline": sys.argv[2],
        "ctaText": sys.argv[3] if len(sys.argv) > 3 else "자세히 보기",
    }
    result = handler({"body": json.dumps(test_input, ensure_ascii=False)}, None)
    print(f"Status: {result['statusCode']}")
    payload = json.loads(result["body"])
    if result["statusCode"] == 200:
        with open(out_path, "wb") as f:
            f.write(base64.b64decode(payload["imageBase64"]))
        print(f"Wrote {out_path} (qa score {payload['qa']['score']})")
    else:
        print(payload)
