"""Lambda handler - copy variants, brief report and autofit preview."""

from ..layouts import create_default_layout
from ..models.copy import CopyInput
from ..services.autofit import autofit_layout
from ..services.copy import constraints_for_aspect_ratio, generate_copy_variants
from .common import error_response, parse_aspect_ratio, parse_body, parse_string_list, response


def handler(event, context):
    """
    Generate ad copy for a layout.

    Input payload:
    {
        "aspectRatio": "1:1",
        "objective": "구매 전환",
        "audience": "민감성 피부",
        "usp": "단 7일, 피부 결이 달라짐",
        "offer": "첫 구매 10% 할인",
        "proof": "평점 4.9 (2,312명)",
        "preferredCta": "지금 구매하기",
        "brandVoiceKeywords": ["미니멀", "직설"]
    }

    Output: variants, constraints, brief report and the autofit of the
    first variant into the default layout.
    """
    try:
        body = parse_body(event)
        aspect_ratio = parse_aspect_ratio(body)
        copy_input = CopyInput(
            aspect_ratio=aspect_ratio,
            objective=str(body.get("objective") or ""),
            audience=str(body.get("audience") or ""),
            usp=str(body.get("usp") or ""),
            offer=str(body.get("offer") or ""),
            proof=str(body.get("proof") or ""),
            preferred_cta=str(body.get("preferredCta") or body.get("cta") or ""),
            brand_voice_keywords=parse_string_list(body.get("brandVoiceKeywords"), "brandVoiceKeywords"),
        )

        constraints = constraints_for_aspect_ratio(aspect_ratio)
        variants = generate_copy_variants(copy_input)
        brief = variants.brief
        print(f"Generated copy ({aspect_ratio}), brief score {brief.score}", flush=True)

        fits = autofit_layout(
            create_default_layout(aspect_ratio),
            {"headline": variants.headlines[0], "subtext": variants.subs[0], "cta": variants.ctas[0]},
        )

        return response(200, {
            "headlines": variants.headlines,
            "subs": variants.subs,
            "ctas": variants.ctas,
            "confidence": variants.confidence,
            "warnings": variants.warnings,
            "constraints": {
                "headlineMaxChars": constraints.headline_max_chars,
                "subMaxChars": constraints.sub_max_chars,
                "ctaMaxChars": constraints.cta_max_chars,
            },
            "brief": {
                "score": brief.score,
                "warnings": brief.warnings,
                "questionsToAsk": brief.questions_to_ask,
                "suggestedImprovements": brief.suggested_improvements,
            },
            "autofit": {
                name: {
                    "lines": fit.lines,
                    "fontSizePx": fit.font_size_px,
                    "lineHeightPx": fit.line_height_px,
                    "belowMin": fit.below_min,
                    "fits": fit.fits,
                }
                for name, fit in fits.items()
            },
        })
    except Exception as e:
        return error_response(e)


# Local testing
if __name__ == "__main__":
    import json
    import sys

    if len(sys.argv) < 2:
        print("Usage: python -m creative_kit.handlers.copy '<json payload>'")
        print()
        print("Example:")
        print('  python -m creative_kit.handlers.copy \'{"aspectRatio": "4:5", "objective": "무료 상담 신청", "usp": "10분 내 상담 확정"}\'')
        sys.exit(1)

    result = handler({"body": sys.argv[1]}, None)
    print(f"Status: {result['statusCode']}")
    print(json.dumps(json.loads(result["body"]), indent=2, ensure_ascii=False))
