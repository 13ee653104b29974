"""Lambda handler - guide overlay PNG for a layout."""

from ..layouts import create_default_layout, layout_to_dict, parse_layout
from ..services.overlay import render_guide_overlay
from .common import error_response, parse_aspect_ratio, parse_body, response


def handler(event, context):
    """
    Render the slot guide overlay.

    Input payload (either a full layout or just an aspect ratio):
    {
        "layout": {"version": 2, "canvas": {...}, "hero": {...}, ...},
        "aspectRatio": "4:5",
        "showSafeZone": true
    }

    Output: {"mimeType", "imageBase64", "dataUrl", "layout"}
    """
    try:
        body = parse_body(event)
        if body.get("layout") is not None:
            layout = parse_layout(body["layout"])
        else:
            layout = create_default_layout(parse_aspect_ratio(body))

        print(f"Rendering overlay {layout.canvas.width}x{layout.canvas.height}", flush=True)
        overlay = render_guide_overlay(layout, show_safe_zone=bool(body.get("showSafeZone")))

        return response(200, {
            "mimeType": overlay.mime_type,
            "imageBase64": overlay.base64,
            "dataUrl": overlay.data_url,
            "layout": layout_to_dict(layout),
        })
    except Exception as e:
        return error_response(e)


# Local testing
if __name__ == "__main__":
    import base64
    import json
    import sys

    aspect_ratio = sys.argv[1] if len(sys.argv) > 1 else "1:1"
    out_path = sys.argv[2] if len(sys.argv) > 2 else "overlay.png"

    result = handler({"body": json.dumps({"aspectRatio": aspect_ratio, "showSafeZone": True})}, None)
    print(f"Status: {result['statusCode']}")
    payload = json.loads(result["body"])
    if result["statusCode"] == 200:
        with open(out_path, "wb") as f:
            f.write(base64.b64decode(payload["imageBase64"]))
        print(f"Wrote {out_path}")
    else:
        print(payload)
