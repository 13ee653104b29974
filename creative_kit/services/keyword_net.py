"""Keyword net - the search keywords a local store should bid on, with demand, CTR and bid cost."""

import hashlib
import json
import logging
import math
import re
import statistics
import time

from ..errors import CreativeKitError, InvalidInputError
from ..models.keyword import (
    KeywordNetInputs,
    KeywordNetParams,
    KeywordNetResult,
    KeywordNetRow,
    KeywordNetSummary,
    PlaceCandidate,
)
from ..utils import clamp, compact, round_half_up, uniq_keep_order

logger = logging.getLogger(__name__)

CACHE_KEY_VERSION = 3
MAX_HINT_KEYWORDS = 5
MAX_EXTRA_HINT_SEEDS = 8
DEFAULT_MAX_KEYWORDS = 40
DEFAULT_CTR = 0.35
BID_POSITIONS = (1, 2, 3, 4, 5)
BID_CHUNK_SIZE = 100

_PLACE_URL = re.compile(r"(?:m\.)?place\.naver\.com/[^/]+/(\d{5,})", re.IGNORECASE)
_LONG_NUMBER = re.compile(r"\b(\d{7,})\b", re.ASCII)
_AREA_SPLIT = re.compile(r"[\\/|,]")
_AREA_TOKEN_PATTERNS = [
    re.compile(r"([가-힣]{2,}구)"),
    re.compile(r"([가-힣]{2,}동)"),
    re.compile(r"([가-힣]{2,}역)"),
]
_CONTEXT = re.compile(r"(혼밥|데이트|회식|단체|가족|야식|모임|주차|포토존)")
DELIVERY_TOKENS = ("배달", "포장", "배민", "쿠팡", "요기요")
CONTEXT_SUFFIXES = ("혼밥", "데이트", "회식", "가족", "단체", "야식")

BIZ_TYPE_SEEDS = {
    "cafe": ["카페", "디저트", "커피", "브런치"],
    "bar": ["술집", "이자카야", "맛집"],
    "delivery": ["배달", "포장", "배달맛집"],
}
DEFAULT_BIZ_SEEDS = ["맛집", "식당"]

BIZ_TYPE_INTENT_TOKENS = {
    "cafe": ["카페", "커피", "디저트", "브런치", "베이커리"],
    "bar": ["술집", "이자카야", "호프", "포차", "와인", "맥주", "칵테일", "위스키", "안주"],
    "delivery": ["배달", "포장", "배민", "쿠팡", "요기요"],
}
DEFAULT_INTENT_TOKENS = ["맛집", "식당", "밥", "점심", "저녁", "예약", "포장", "배달", "메뉴", "코스", "런치", "디너"]


def extract_place_id_from_url(url: str | None) -> str | None:
    """
    Pull the numeric place id out of a Naver place URL.

    Example: "https://m.place.naver.com/restaurant/987654321/home" -> "987654321"

    Falls back to any standalone run of 7+ digits; None when nothing matches.
    """
    text = str(url or "").strip()
    if not text:
        return None
    match = _PLACE_URL.search(text)
    if match:
        return match.group(1)
    match = _LONG_NUMBER.search(text)
    return match.group(1) if match else None


def normalize_device(device: str | None) -> str:
    """None/"" -> PC; M, MO, MOBILE (any case) -> MOBILE."""
    value = str(device or "").strip().upper()
    if not value or value == "PC":
        return "PC"
    if value in ("M", "MO", "MOBILE"):
        return "MOBILE"
    raise InvalidInputError(f"Unsupported device: {device!r} (expected PC or MOBILE)")


def pick_area_seed(area: str) -> str:
    """First segment of the area text (split on / | , \\), at most 18 chars."""
    cleaned = str(area or "").strip()
    if not cleaned:
        return ""
    first = _AREA_SPLIT.split(cleaned)[0].strip()
    if not first:
        return cleaned
    return first[:18]


def extract_category_seeds(category: str) -> list[str]:
    """'음식점>멕시코,남미음식' -> ['멕시코', '남미음식']"""
    raw = str(category or "").strip()
    if not raw:
        return []
    tokens = [t for t in re.split(r"[,\s/]+", raw.replace(">", ",")) if t and t not in ("음식점", "기관")]
    return uniq_keep_order(tokens)[:3]


def extract_area_tokens(place: PlaceCandidate | None) -> list[str]:
    """District / neighborhood / station names found in the place address."""
    if place is None:
        return []
    text = f"{place.road_address} {place.address}".strip()
    if not text:
        return []
    tokens = []
    for pattern in _AREA_TOKEN_PATTERNS:
        tokens.extend(m.group(1) for m in pattern.finditer(text))
    return uniq_keep_order(tokens)[:6]


def build_seed_keywords(
    store_name: str,
    area: str,
    biz_type: str,
    category_seeds: list[str] | None = None,
    extra_hint_seeds: list[str] | None = None,
) -> dict[str, list[str]]:
    """
    Build seed keywords from store identity.

    Returns:
        {"hint": [...], "core": [...], "context": [...], "delivery": [...], "brand": [...]};
        "hint" holds at most 5 keywords, user-provided seeds first
    """
    store = compact(store_name)
    area_seed = compact(pick_area_seed(area))
    biz_seeds = BIZ_TYPE_SEEDS.get(biz_type, DEFAULT_BIZ_SEEDS)
    categories = [c for c in (compact(s) for s in category_seeds or []) if c]
    extra = uniq_keep_order([compact(s) for s in extra_hint_seeds or []])[:MAX_EXTRA_HINT_SEEDS]

    core, context, delivery = [], [], []
    if area_seed:
        core.append(f"{area_seed}맛집")
        core.extend(f"{area_seed}{c}" for c in categories[:2])
        core.append(f"{area_seed}{biz_seeds[0]}")
        context = [f"{area_seed}{suffix}" for suffix in CONTEXT_SUFFIXES]
        delivery = [f"{area_seed}배달", f"{area_seed}포장", f"{area_seed}{biz_seeds[0]}배달"]

    brand = [store] if store else []
    if area_seed and store:
        brand.append(f"{area_seed}{store}")

    def nth(seq, i):
        return seq[i] if len(seq) > i else ""

    base = uniq_keep_order([
        nth(core, 0),
        nth(core, 1),
        nth(core, 2),
        nth(brand, 1),
        nth(delivery, 0),
        nth(brand, 0),
        nth(context, 0),
    ])
    hint = uniq_keep_order(extra + base)[:MAX_HINT_KEYWORDS]

    return {"hint": hint, "core": core, "context": context, "delivery": delivery, "brand": brand}


def compute_keyword_net_cache_key(
    store_name: str,
    area: str,
    biz_type: str,
    place_id: str | None,
    device: str,
    hint_keywords: str,
) -> str:
    """SHA-256 hex of the canonical JSON of everything that shapes the result."""
    document = {
        "v": CACHE_KEY_VERSION,
        "storeName": store_name.strip(),
        "area": area.strip(),
        "bizType": biz_type.strip(),
        "placeId": place_id,
        "device": device,
        "hintKeywords": hint_keywords.strip(),
    }
    raw = json.dumps(document, ensure_ascii=False, separators=(",", ":"))
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def compute_keyword_net_inputs(params: KeywordNetParams) -> KeywordNetInputs:
    """Normalized inputs and cache key, without any network call."""
    store_name = params.store_name.strip()
    area = params.area.strip()
    biz_type = params.biz_type.strip()
    device = normalize_device(params.device)
    place_id = extract_place_id_from_url(params.selected_place_link) or extract_place_id_from_url(params.place_url)
    seeds = build_seed_keywords(store_name, area, biz_type, extra_hint_seeds=params.extra_hint_seeds)
    hint_keywords = ",".join(seeds["hint"])
    return KeywordNetInputs(
        place_query=f"{area} {store_name}".strip(),
        place_id=place_id,
        hint_keywords=hint_keywords,
        device=device,
        cache_key=compute_keyword_net_cache_key(store_name, area, biz_type, place_id, device, hint_keywords),
    )


def parse_maybe_number(value) -> float | None:
    """Provider numbers come as numbers or strings like "1,234", "0.52" or "< 10"."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    if not isinstance(value, str):
        return None
    normalized = re.sub(r"[^\d.<>]", "", value.strip())
    if not normalized or normalized.startswith("<"):
        return None
    try:
        number = float(normalized)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_volume(value, mode: str = "lo") -> int:
    """Monthly query count. "< 10" means 0 (lo) or 5 (hi)."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return max(0, round_half_up(value)) if math.isfinite(value) else 0
    if not isinstance(value, str):
        return 0
    text = value.strip()
    if not text:
        return 0
    if text.startswith("<"):
        return 5 if mode == "hi" else 0
    digits = re.sub(r"[^\d]", "", text)
    return int(digits) if digits else 0


def parse_ctr(value) -> float | None:
    number = parse_maybe_number(value)
    return None if number is None else max(0, number)


def _avg(values) -> float | None:
    xs = [v for v in values if v is not None]
    return sum(xs) / len(xs) if xs else None


def classify_bucket(keyword: str, store_name: str) -> str:
    """brand -> delivery -> context -> core, first match wins."""
    store = store_name.strip().lower()
    lowered = keyword.lower()
    if store and (store in lowered or compact(store) in compact(lowered)):
        return "brand"
    if any(token in keyword for token in DELIVERY_TOKENS):
        return "delivery"
    if _CONTEXT.search(keyword):
        return "context"
    return "core"


def keyword_score(volume_total_lo: int, ctr_avg: float | None, bid_pos3: float | None) -> int:
    """round(log10(demand + 10) * 100 * (ctr or 0.35) - bid3 / 1000)"""
    demand_score = math.log10(volume_total_lo + 10) * 100
    efficiency = ctr_avg if ctr_avg is not None else DEFAULT_CTR
    penalty = (bid_pos3 or 0) / 1000
    return round_half_up(demand_score * efficiency - penalty)


def _select_place(candidates: list[PlaceCandidate], selected_link: str | None, place_id: str | None):
    if selected_link:
        for candidate in candidates:
            if candidate.link == selected_link:
                return candidate
    if place_id:
        for candidate in candidates:
            if extract_place_id_from_url(candidate.link) == place_id:
                return candidate
    return candidates[0] if candidates else None


def _rank_keywords(
    tool_items: dict[str, dict],
    store_name: str,
    area: str,
    biz_type: str,
    category_seeds: list[str],
    selected: PlaceCandidate | None,
    always_keep: set[str],
    max_keywords: int,
) -> list[str]:
    """Keep keywords about this store / this area and rank them by relevance then demand."""
    store = compact(store_name)
    area_tokens = uniq_keep_order([compact(pick_area_seed(area))] + extract_area_tokens(selected))
    relevance_tokens = [
        t for t in uniq_keep_order([compact(t) for t in [store, *area_tokens, *category_seeds]])
        if len(t) >= 2 and t not in ("맛집", "식당")
    ]
    intent_tokens = [compact(t) for t in BIZ_TYPE_INTENT_TOKENS.get(biz_type, DEFAULT_INTENT_TOKENS)]

    ranked = []
    for keyword, item in tool_items.items():
        kc = compact(keyword)
        if not kc:
            continue
        volume = parse_volume(item.get("monthlyPcQcCnt")) + parse_volume(item.get("monthlyMobileQcCnt"))
        hits = sum(1 for t in relevance_tokens if t in kc)
        has_store = bool(store and store in kc)
        has_category = any(t and compact(t) in kc for t in category_seeds)
        has_area = any(t and t in kc for t in area_tokens)
        has_intent = any(t and t in kc for t in intent_tokens)
        has_category_food = has_category and has_intent

        keep = has_store or (has_area and has_intent) or has_category_food or kc in always_keep
        if not keep:
            continue

        rank = (
            (80 if has_area and has_intent else 0)
            + (70 if has_store and has_area else 20 if has_store else 0)
            + (30 if has_category_food else 0)
            + (10 if has_area else 0)
            + hits
        )
        ranked.append((rank, volume, keyword))

    ranked.sort(key=lambda r: (-r[0], -r[1]))
    return [keyword for _, _, keyword in ranked[:max_keywords]]


def _summarize(rows: list[KeywordNetRow], device: str) -> KeywordNetSummary:
    top10 = sorted(rows, key=lambda r: -r.volume_total_lo)[:10]
    bids = [r.bid_pos3 for r in top10 if r.bid_pos3 is not None]
    return KeywordNetSummary(
        device=device,
        demand_top10=sum(r.volume_total_lo for r in top10),
        avg_ctr_top10=_avg(r.ctr_avg for r in top10),
        median_bid_pos3_top10=statistics.median(bids) if bids else None,
        fetched_at=int(time.time() * 1000),
    )


def build_keyword_net(params: KeywordNetParams, searchad, local=None) -> KeywordNetResult:
    """
    Build the keyword net for a store.

    Args:
        params: Store identity and options
        searchad: SearchAdClient (or anything with get_keyword_tool / get_average_position_bids)
        local: Optional LocalSearchClient for place candidates

    Returns:
        KeywordNetResult, rows sorted by score descending

    Raises:
        InvalidInputError: missing store name / area, unsupported device
        ProviderError: keyword tool or bid estimate call failed
    """
    store_name = params.store_name.strip()
    area = params.area.strip()
    biz_type = params.biz_type.strip()
    if not store_name:
        raise InvalidInputError("storeName is required")
    if not area:
        raise InvalidInputError("area is required")

    device = normalize_device(params.device)
    place_id = extract_place_id_from_url(params.selected_place_link) or extract_place_id_from_url(params.place_url)
    place_query = f"{area} {store_name}".strip()

    candidates: list[PlaceCandidate] = []
    if local is not None:
        try:
            candidates = local.search(place_query, display=5, sort="comment")
        except CreativeKitError as e:
            logger.warning(f"Place search failed for {place_query!r}, continuing without candidates: {e}")

    selected = _select_place(candidates, params.selected_place_link, place_id)
    category_seeds = extract_category_seeds(selected.category if selected else "")
    seeds = build_seed_keywords(store_name, area, biz_type, category_seeds, params.extra_hint_seeds)
    hint_keywords = ",".join(seeds["hint"])

    print(f"  Keyword tool: {hint_keywords}", flush=True)
    tool_items: dict[str, dict] = {}
    for item in searchad.get_keyword_tool(hint_keywords):
        keyword = str(item.get("relKeyword") or "").strip()
        if keyword:
            tool_items[keyword] = item
    for keyword in seeds["hint"] + seeds["brand"]:
        tool_items.setdefault(keyword, {"relKeyword": keyword})

    always_keep = set(uniq_keep_order([compact(k) for k in seeds["hint"] + seeds["brand"]]))
    max_keywords = int(clamp(params.max_keywords or DEFAULT_MAX_KEYWORDS, 10, 80))
    keywords = _rank_keywords(
        tool_items, store_name, area, biz_type, category_seeds, selected, always_keep, max_keywords
    )

    print(f"  Bid estimates: {len(keywords)} keywords ({device})", flush=True)
    bid_map: dict[str, dict[int, float]] = {}
    for bid in searchad.get_average_position_bids(device, keywords, BID_POSITIONS, BID_CHUNK_SIZE):
        bid_map.setdefault(bid["key"], {})[bid["position"]] = bid["bid"]

    rows = []
    for keyword in keywords:
        item = tool_items[keyword]
        bids = bid_map.get(keyword, {})
        pc_lo = parse_volume(item.get("monthlyPcQcCnt"), "lo")
        mo_lo = parse_volume(item.get("monthlyMobileQcCnt"), "lo")
        ctr_pc = parse_ctr(item.get("monthlyAvePcCtr"))
        ctr_mobile = parse_ctr(item.get("monthlyAveMobileCtr"))
        ctr_avg = _avg([ctr_pc, ctr_mobile])
        rows.append(KeywordNetRow(
            keyword=keyword,
            bucket=classify_bucket(keyword, store_name),
            volume_pc_lo=pc_lo,
            volume_mobile_lo=mo_lo,
            volume_pc_hi=parse_volume(item.get("monthlyPcQcCnt"), "hi"),
            volume_mobile_hi=parse_volume(item.get("monthlyMobileQcCnt"), "hi"),
            ctr_pc=ctr_pc,
            ctr_mobile=ctr_mobile,
            ctr_avg=ctr_avg,
            bid_pos1=bids.get(1),
            bid_pos2=bids.get(2),
            bid_pos3=bids.get(3),
            bid_pos4=bids.get(4),
            bid_pos5=bids.get(5),
            comp_idx=str(item["compIdx"]) if item.get("compIdx") else None,
            pl_avg_depth=parse_maybe_number(item.get("plAvgDepth")),
            score=keyword_score(pc_lo + mo_lo, ctr_avg, bids.get(3)),
        ))

    summary = _summarize(rows, device)
    rows.sort(key=lambda r: -r.score)

    return KeywordNetResult(
        place_query=place_query,
        place_id=place_id,
        place_candidates=candidates,
        selected_place=selected,
        keyword_net=rows,
        summary=summary,
        cache_key=compute_keyword_net_cache_key(store_name, area, biz_type, place_id, device, hint_keywords),
    )
