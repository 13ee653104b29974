"""Human-readable cluster labels for keyword net rows (report tables)."""

import math
import re

from ..models.keyword import KeywordClusteredRow, KeywordNetRow

# first match wins
CONTEXT_CLUSTERS = [
    (re.compile(r"혼밥"), "혼밥"),
    (re.compile(r"데이트"), "데이트"),
    (re.compile(r"(회식|모임)"), "회식/모임"),
    (re.compile(r"단체"), "단체"),
    (re.compile(r"가족"), "가족"),
    (re.compile(r"야식"), "야식"),
    (re.compile(r"주차"), "주차"),
    (re.compile(r"포토존"), "포토존"),
]
CORE_CLUSTERS = [
    (re.compile(r"라멘"), "라멘"),
    (re.compile(r"(고기|고깃집|삼겹살)"), "고기"),
    (re.compile(r"(카페|디저트|커피)"), "카페/디저트"),
    (re.compile(r"(술집|이자카야|호프)"), "주점"),
    (re.compile(r"(한식|백반|국밥)"), "한식"),
    (re.compile(r"맛집"), "맛집"),
]


def _first_label(keyword: str, rules, default: str) -> str:
    for pattern, label in rules:
        if pattern.search(keyword):
            return label
    return default


def cluster_name(row: KeywordNetRow, store_name: str | None = None) -> str:
    if row.bucket == "brand":
        store = (store_name or "").strip()
        return f"{store} 브랜드" if store else "브랜드"
    if row.bucket == "delivery":
        return "배달/포장"
    if row.bucket == "context":
        return _first_label(row.keyword, CONTEXT_CLUSTERS, "상황")
    return _first_label(row.keyword, CORE_CLUSTERS, "핵심")


def cluster_keyword_net_rows(rows: list[KeywordNetRow], store_name: str | None = None) -> list[KeywordClusteredRow]:
    """Label each row with its cluster; order is preserved."""
    clustered = []
    for row in rows:
        score = row.score
        clustered.append(KeywordClusteredRow(
            keyword=row.keyword,
            cluster_name=cluster_name(row, store_name),
            intent=row.bucket,
            pc_volume=row.volume_pc_lo,
            m_volume=row.volume_mobile_lo,
            pc_ctr=row.ctr_pc,
            m_ctr=row.ctr_mobile,
            comp_idx=row.comp_idx,
            est_bid_p1=row.bid_pos1,
            est_bid_p2=row.bid_pos2,
            est_bid_p3=row.bid_pos3,
            est_bid_p4=row.bid_pos4,
            est_bid_p5=row.bid_pos5,
            priority_score=score if isinstance(score, (int, float)) and math.isfinite(score) else 0,
        ))
    return clustered
