import math

from creative_kit.models.keyword import KeywordNetRow
from creative_kit.services.keyword_clusters import cluster_keyword_net_rows, cluster_name


def row(keyword, bucket, **kwargs):
    return KeywordNetRow(keyword=keyword, bucket=bucket, **kwargs)


def test_context_clusters():
    assert cluster_name(row("성수동혼밥", "context")) == "혼밥"
    assert cluster_name(row("성수 회식장소", "context")) == "회식/모임"
    assert cluster_name(row("성수 모임", "context")) == "회식/모임"
    assert cluster_name(row("성수 분위기좋은", "context")) == "상황"


def test_core_clusters():
    assert cluster_name(row("성수동라멘", "core")) == "라멘"
    assert cluster_name(row("성수 삼겹살", "core")) == "고기"
    assert cluster_name(row("성수동맛집", "core")) == "맛집"
    assert cluster_name(row("성수동", "core")) == "핵심"


def test_brand_and_delivery_clusters():
    assert cluster_name(row("테스트매장 예약", "brand"), "테스트매장") == "테스트매장 브랜드"
    assert cluster_name(row("테스트매장 예약", "brand")) == "브랜드"
    assert cluster_name(row("성수동배달", "delivery")) == "배달/포장"


def test_rows_keep_order_and_metrics():
    rows = [
        row("성수동맛집", "core", volume_pc_lo=1000, volume_mobile_lo=9000, ctr_pc=1.2, bid_pos3=5000.0, score=395),
        row("성수동배달", "delivery", score=math.nan),
    ]
    clustered = cluster_keyword_net_rows(rows, "테스트매장")

    assert [c.keyword for c in clustered] == ["성수동맛집", "성수동배달"]
    first = clustered[0].to_dict()
    assert first["clusterName"] == "맛집"
    assert first["intent"] == "core"
    assert first["pcVolume"] == 1000
    assert first["mVolume"] == 9000
    assert first["pcCtr"] == 1.2
    assert first["estBidP3"] == 5000.0
    assert first["priorityScore"] == 395
    assert clustered[1].priority_score == 0


def test_first_matching_rule_wins():
    assert cluster_name(row("성수 데이트 혼밥", "context")) == "혼밥"
    assert cluster_name(row("성수 회식 가족", "context")) == "회식/모임"
    assert cluster_name(row("라멘 고기 맛집", "core")) == "라멘"
    assert cluster_name(row("삼겹살 맛집", "core")) == "고기"
