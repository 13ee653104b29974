"""Business logic services."""

from .autofit import FitResult, autofit_layout, autofit_text_to_box, pillow_measure_for_font, wrap_text
from .brief_doctor import run_brief_doctor
from .compose import compose_creative
from .copy import constraints_for_aspect_ratio, generate_copy_variants
from .image_qa import ZoneQaReport, score_reserved_zones
from .intent import classify_intent
from .keyword_cache import CachedKeywordNet, KeywordNetCache
from .keyword_clusters import cluster_keyword_net_rows
from .keyword_net import (
    build_keyword_net,
    classify_bucket,
    compute_keyword_net_inputs,
    extract_place_id_from_url,
)
from .overlay import render_guide_overlay
from .palette import extract_dominant_colors, extract_dominant_colors_from_image
from .rate_limit import RateLimitResult, consume_rate_limit

__all__ = [
    "CachedKeywordNet",
    "FitResult",
    "KeywordNetCache",
    "RateLimitResult",
    "ZoneQaReport",
    "autofit_layout",
    "autofit_text_to_box",
    "build_keyword_net",
    "classify_bucket",
    "classify_intent",
    "cluster_keyword_net_rows",
    "compose_creative",
    "compute_keyword_net_inputs",
    "constraints_for_aspect_ratio",
    "consume_rate_limit",
    "extract_dominant_colors",
    "extract_dominant_colors_from_image",
    "extract_place_id_from_url",
    "generate_copy_variants",
    "pillow_measure_for_font",
    "render_guide_overlay",
    "run_brief_doctor",
    "score_reserved_zones",
    "wrap_text",
]
