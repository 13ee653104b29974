"""Keyword net models - rows, summary and the cacheable result payload."""

from dataclasses import dataclass, field
from typing import Any

BUCKETS = ("core", "context", "delivery", "brand")
DEVICES = ("PC", "MOBILE")


@dataclass
class KeywordNetParams:
    """Store identity the keyword net is built for."""
    store_name: str
    area: str
    biz_type: str
    place_url: str | None = None
    selected_place_link: str | None = None
    device: str | None = None                 # "PC" | "MOBILE", default PC
    extra_hint_seeds: list[str] = field(default_factory=list)
    max_keywords: int = 40


@dataclass(frozen=True)
class KeywordNetInputs:
    """Normalized params plus the deterministic cache key."""
    place_query: str
    place_id: str | None
    hint_keywords: str
    device: str
    cache_key: str


@dataclass
class PlaceCandidate:
    """A place returned by local search."""
    title: str
    link: str
    category: str = ""
    description: str = ""
    telephone: str = ""
    address: str = ""
    road_address: str = ""
    mapx: str = ""
    mapy: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "link": self.link,
            "category": self.category,
            "description": self.description,
            "telephone": self.telephone,
            "address": self.address,
            "roadAddress": self.road_address,
            "mapx": self.mapx,
            "mapy": self.mapy,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlaceCandidate":
        return cls(
            title=str(data.get("title") or ""),
            link=str(data.get("link") or ""),
            category=str(data.get("category") or ""),
            description=str(data.get("description") or ""),
            telephone=str(data.get("telephone") or ""),
            address=str(data.get("address") or ""),
            road_address=str(data.get("roadAddress") or ""),
            mapx=str(data.get("mapx") or ""),
            mapy=str(data.get("mapy") or ""),
        )


@dataclass(frozen=True)
class KeywordNetRow:
    """One keyword with provider metrics and its composite score."""
    keyword: str
    bucket: str                               # one of BUCKETS
    volume_pc_lo: int = 0
    volume_mobile_lo: int = 0
    volume_pc_hi: int = 0
    volume_mobile_hi: int = 0
    ctr_pc: float | None = None
    ctr_mobile: float | None = None
    ctr_avg: float | None = None
    bid_pos1: float | None = None
    bid_pos2: float | None = None
    bid_pos3: float | None = None
    bid_pos4: float | None = None
    bid_pos5: float | None = None
    comp_idx: str | None = None
    pl_avg_depth: float | None = None
    score: float = 0

    @property
    def volume_total_lo(self) -> int:
        return self.volume_pc_lo + self.volume_mobile_lo

    @property
    def volume_total_hi(self) -> int:
        return self.volume_pc_hi + self.volume_mobile_hi

    def to_dict(self) -> dict[str, Any]:
        return {
            "keyword": self.keyword,
            "bucket": self.bucket,
            "volume_pc_lo": self.volume_pc_lo,
            "volume_mobile_lo": self.volume_mobile_lo,
            "volume_total_lo": self.volume_total_lo,
            "volume_pc_hi": self.volume_pc_hi,
            "volume_mobile_hi": self.volume_mobile_hi,
            "volume_total_hi": self.volume_total_hi,
            "ctr_pc": self.ctr_pc,
            "ctr_mobile": self.ctr_mobile,
            "ctr_avg": self.ctr_avg,
            "bid_pos1": self.bid_pos1,
            "bid_pos2": self.bid_pos2,
            "bid_pos3": self.bid_pos3,
            "bid_pos4": self.bid_pos4,
            "bid_pos5": self.bid_pos5,
            "compIdx": self.comp_idx,
            "plAvgDepth": self.pl_avg_depth,
            "score": self.score,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "KeywordNetRow":
        return cls(
            keyword=str(data["keyword"]),
            bucket=str(data.get("bucket") or "core"),
            volume_pc_lo=int(data.get("volume_pc_lo") or 0),
            volume_mobile_lo=int(data.get("volume_mobile_lo") or 0),
            volume_pc_hi=int(data.get("volume_pc_hi") or 0),
            volume_mobile_hi=int(data.get("volume_mobile_hi") or 0),
            ctr_pc=data.get("ctr_pc"),
            ctr_mobile=data.get("ctr_mobile"),
            ctr_avg=data.get("ctr_avg"),
            bid_pos1=data.get("bid_pos1"),
            bid_pos2=data.get("bid_pos2"),
            bid_pos3=data.get("bid_pos3"),
            bid_pos4=data.get("bid_pos4"),
            bid_pos5=data.get("bid_pos5"),
            comp_idx=data.get("compIdx"),
            pl_avg_depth=data.get("plAvgDepth"),
            score=data.get("score", 0),
        )


@dataclass(frozen=True)
class KeywordNetSummary:
    """Top-10-by-demand summary."""
    device: str
    demand_top10: int
    avg_ctr_top10: float | None
    median_bid_pos3_top10: float | None
    fetched_at: int                           # epoch milliseconds

    def to_dict(self) -> dict[str, Any]:
        return {
            "device": self.device,
            "demand_top10": self.demand_top10,
            "avg_ctr_top10": self.avg_ctr_top10,
            "median_bid_pos3_top10": self.median_bid_pos3_top10,
            "fetchedAt": self.fetched_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "KeywordNetSummary":
        return cls(
            device=str(data.get("device") or "PC"),
            demand_top10=int(data.get("demand_top10") or 0),
            avg_ctr_top10=data.get("avg_ctr_top10"),
            median_bid_pos3_top10=data.get("median_bid_pos3_top10"),
            fetched_at=int(data.get("fetchedAt") or 0),
        )


@dataclass
class KeywordNetResult:
    """Complete keyword net for one store. This is the cached payload."""
    place_query: str
    place_id: str | None
    place_candidates: list[PlaceCandidate]
    selected_place: PlaceCandidate | None
    keyword_net: list[KeywordNetRow]
    summary: KeywordNetSummary
    cache_key: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "placeQuery": self.place_query,
            "placeId": self.place_id,
            "placeCandidates": [c.to_dict() for c in self.place_candidates],
            "selectedPlace": self.selected_place.to_dict() if self.selected_place else None,
            "keywordNet": [r.to_dict() for r in self.keyword_net],
            "summary": self.summary.to_dict(),
            "cacheKey": self.cache_key,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "KeywordNetResult":
        selected = data.get("selectedPlace")
        return cls(
            place_query=str(data.get("placeQuery") or ""),
            place_id=data.get("placeId"),
            place_candidates=[PlaceCandidate.from_dict(c) for c in data.get("placeCandidates") or []],
            selected_place=PlaceCandidate.from_dict(selected) if selected else None,
            keyword_net=[KeywordNetRow.from_dict(r) for r in data.get("keywordNet") or []],
            summary=KeywordNetSummary.from_dict(data.get("summary") or {}),
            cache_key=str(data.get("cacheKey") or ""),
        )


@dataclass(frozen=True)
class KeywordClusteredRow:
    """KeywordNetRow with a human-readable cluster label, for the report UI."""
    keyword: str
    cluster_name: str
    intent: str
    pc_volume: int
    m_volume: int
    pc_ctr: float | None
    m_ctr: float | None
    comp_idx: str | None
    est_bid_p1: float | None
    est_bid_p2: float | None
    est_bid_p3: float | None
    est_bid_p4: float | None
    est_bid_p5: float | None
    priority_score: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "keyword": self.keyword,
            "clusterName": self.cluster_name,
            "intent": self.intent,
            "pcVolume": self.pc_volume,
            "mVolume": self.m_volume,
            "pcCtr": self.pc_ctr,
            "mCtr": self.m_ctr,
            "compIdx": self.comp_idx,
            "estBidP1": self.est_bid_p1,
            "estBidP2": self.est_bid_p2,
            "estBidP3": self.est_bid_p3,
            "estBidP4": self.est_bid_p4,
            "estBidP5": self.est_bid_p5,
            "priorityScore": self.priority_score,
        }
