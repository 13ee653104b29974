"""Conversion-intent classification shared by the copy generator and brief doctor."""

import re

# first match wins
INTENT_PATTERNS = [
    ("app_install", re.compile(r"(설치|다운로드|앱|app|install|download)")),
    ("buy", re.compile(r"(구매|주문|결제|장바구니|buy|purchase|order)")),
    ("lead", re.compile(r"(상담|문의|예약|견적|리드|lead|consult)")),
    ("traffic", re.compile(r"(유입|방문|노출|조회|트래픽|traffic|visit|click)")),
]


def classify_intent(text: str) -> str:
    """Return buy | lead | traffic | app_install | unknown."""
    lowered = str(text or "").lower()
    for intent, pattern in INTENT_PATTERNS:
        if pattern.search(lowered):
            return intent
    return "unknown"
