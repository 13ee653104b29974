import os
from dotenv import load_dotenv

load_dotenv()

# Supabase - keyword net cache storage
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY") or os.getenv("SUPABASE_SECRET_KEY")

# Naver SearchAd API (keyword tool + bid estimates)
NAVER_SEARCHAD_ACCESS_LICENSE = os.getenv("NAVER_SEARCHAD_ACCESS_LICENSE")
NAVER_SEARCHAD_SECRET_KEY = os.getenv("NAVER_SEARCHAD_SECRET_KEY")
NAVER_SEARCHAD_CUSTOMER_ID = os.getenv("NAVER_SEARCHAD_CUSTOMER_ID")
NAVER_SEARCHAD_TIMEOUT_MS = int(os.getenv("NAVER_SEARCHAD_TIMEOUT_MS", "12000") or 12000)

# Naver Local Search API (place candidates)
NAVER_CLIENT_ID = os.getenv("NAVER_CLIENT_ID")
NAVER_CLIENT_SECRET = os.getenv("NAVER_CLIENT_SECRET")

# Keyword net cache
KEYWORD_NET_CACHE_TABLE = os.getenv("KEYWORD_NET_CACHE_TABLE", "keyword_net_cache")
KEYWORD_NET_CACHE_TTL_HOURS = float(os.getenv("KEYWORD_NET_CACHE_TTL_HOURS", "24") or 24)

# Optional TrueType font for overlay labels and Pillow text measurement
OVERLAY_FONT_PATH = os.getenv("OVERLAY_FONT_PATH")

# Place resolve / keyword net handler rate limit (per caller, fixed window)
KEYWORD_NET_RATE_LIMIT = 20
KEYWORD_NET_RATE_WINDOW_SECONDS = 60
