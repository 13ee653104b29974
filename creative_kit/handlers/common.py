"""Request/response helpers shared by the Lambda handlers."""

import json

from ..errors import ConfigurationError, InvalidInputError


def parse_body(event: dict) -> dict:
    """Body from an SQS record or an HTTP event. Raises InvalidInputError on bad JSON."""
    if "Records" in event:
        raw = event["Records"][0]["body"]
    else:
        raw = event.get("body") or "{}"
    if isinstance(raw, dict):
        return raw
    try:
        body = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidInputError(f"Invalid JSON body: {e}") from e
    if not isinstance(body, dict):
        raise InvalidInputError("Request body must be a JSON object")
    return body


def response(status_code: int, payload: dict) -> dict:
    return {
        "statusCode": status_code,
        "body": json.dumps(payload, ensure_ascii=False),
    }


def error_response(error: Exception) -> dict:
    """Map an exception to a 400 / 501 / 500 response."""
    if isinstance(error, InvalidInputError):
        payload = {"error": str(error)}
        problems = getattr(error, "problems", None)
        if problems:
            payload["problems"] = problems
        return response(400, payload)
    if isinstance(error, ConfigurationError):
        return response(501, {"error": str(error)})
    print(f"ERROR: {error}", flush=True)
    return response(500, {"error": str(error)})


def parse_string_list(value, name: str) -> list[str]:
    """A JSON list of strings, or one comma-separated string. Empty items are dropped."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple)):
        raise InvalidInputError(f"'{name}' must be a list of strings")
    return [str(v).strip() for v in value if str(v).strip()]


def parse_aspect_ratio(body: dict, default: str = "1:1") -> str:
    value = body.get("aspectRatio")
    return default if value is None else str(value).strip()
