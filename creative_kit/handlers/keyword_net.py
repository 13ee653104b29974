"""Lambda handler - keyword net for a local store (cached, rate limited)."""

from ..clients import LocalSearchClient, SearchAdClient
from ..config import KEYWORD_NET_RATE_LIMIT, KEYWORD_NET_RATE_WINDOW_SECONDS
from ..errors import ConfigurationError, InvalidInputError
from ..models.keyword import KeywordNetParams
from ..services.keyword_cache import KeywordNetCache
from ..services.keyword_clusters import cluster_keyword_net_rows
from ..services.rate_limit import consume_rate_limit
from .common import error_response, parse_body, parse_string_list, response


def _caller_key(event: dict) -> str:
    headers = {str(k).lower(): v for k, v in (event.get("headers") or {}).items()}
    forwarded = str(headers.get("x-forwarded-for") or "").split(",")[0].strip()
    source_ip = ((event.get("requestContext") or {}).get("identity") or {}).get("sourceIp")
    return forwarded or source_ip or "anonymous"


def _required(body: dict, name: str) -> str:
    value = str(body.get(name) or "").strip()
    if not value:
        raise InvalidInputError(f"Missing '{name}' field")
    return value


def handler(event, context):
    """
    Build (or load from cache) the keyword net for a store.

    Input payload:
    {
        "storeName": "테스트매장",
        "area": "성수동",
        "bizType": "restaurant",
        "placeUrl": "https://place.naver.com/restaurant/1234567890/home",
        "selectedPlaceLink": "...",
        "device": "PC",
        "extraHintSeeds": ["성수라멘"]
    }

    Output: {ok, fromCache, cacheKey, placeQuery, placeId, placeCandidates,
             selectedPlace, keywordNet, clusters, summary}
    """
    caller = _caller_key(event)
    limit = consume_rate_limit(f"keyword-net:{caller}", KEYWORD_NET_RATE_LIMIT, KEYWORD_NET_RATE_WINDOW_SECONDS)
    if not limit.allowed:
        return response(429, {"error": "Too many requests", "resetAt": int(limit.reset_at * 1000)})

    try:
        body = parse_body(event)
        params = KeywordNetParams(
            store_name=_required(body, "storeName"),
            area=_required(body, "area"),
            biz_type=_required(body, "bizType"),
            place_url=body.get("placeUrl"),
            selected_place_link=body.get("selectedPlaceLink"),
            device=body.get("device"),
            extra_hint_seeds=parse_string_list(body.get("extraHintSeeds"), "extraHintSeeds"),
        )

        searchad = SearchAdClient.from_env()
        try:
            local = LocalSearchClient.from_env()
        except ConfigurationError as e:
            print(f"  Place search disabled: {e}", flush=True)
            local = None

        print(f"Keyword net: {params.area} {params.store_name} ({params.biz_type})", flush=True)
        cached = KeywordNetCache().get_or_build(params, searchad, local)
        result = cached.result

        payload = {
            "ok": True,
            "fromCache": cached.from_cache,
            **result.to_dict(),
            "clusters": [row.to_dict() for row in cluster_keyword_net_rows(result.keyword_net, params.store_name)],
        }
        if cached.cached_at is not None:
            payload["cachedAt"] = int(cached.cached_at.timestamp() * 1000)
            payload["ageMinutes"] = cached.age_minutes

        print(f"  {len(result.keyword_net)} keywords (fromCache={cached.from_cache})", flush=True)
        return response(200, payload)
    except Exception as e:
        return error_response(e)


# Local testing
if __name__ == "__main__":
    import json
    import sys

    if len(sys.argv) < 4:
        print("Usage: python -m creative_kit.handlers.keyword_net <storeName> <area> <bizType> [placeUrl] [device]")
        print()
        print("Example:")
        print('  python -m creative_kit.handlers.keyword_net "테스트매장" "성수동" restaurant')
        sys.exit(1)

    test_input = {
        "storeName": sys.argv[1],
        "area": sys.argv[2],
        "bizType": sys.argv[3],
    }
    if len(sys.argv) > 4:
        test_input["placeUrl"] = sys.argv[4]
    if len(sys.argv) > 5:
        test_input["device"] = sys.argv[5]

    result = handler({"body": json.dumps(test_input, ensure_ascii=False)}, None)
    print(f"Status: {result['statusCode']}")
    print(json.dumps(json.loads(result["body"]), indent=2, ensure_ascii=False))
