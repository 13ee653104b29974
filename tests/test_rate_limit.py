from creative_kit.services import rate_limit
from creative_kit.services.rate_limit import consume_rate_limit


def test_fixed_window():
    first = consume_rate_limit("ip:1", 2, 60, now=1000)
    second = consume_rate_limit("ip:1", 2, 60, now=1010)
    third = consume_rate_limit("ip:1", 2, 60, now=1020)

    assert (first.allowed, first.remaining, first.reset_at) == (True, 1, 1060)
    assert (second.allowed, second.remaining) == (True, 0)
    assert (third.allowed, third.remaining, third.reset_at) == (False, 0, 1060)

    after = consume_rate_limit("ip:1", 2, 60, now=1061)
    assert (after.allowed, after.remaining, after.reset_at) == (True, 1, 1121)


def test_keys_are_independent():
    consume_rate_limit("ip:1", 1, 60, now=1000)
    assert consume_rate_limit("ip:1", 1, 60, now=1001).allowed is False
    assert consume_rate_limit("ip:2", 1, 60, now=1001).allowed is True


def test_expired_windows_are_dropped():
    for i in range(1000):
        consume_rate_limit(f"ip:{i}", 5, 60, now=0)
    assert len(rate_limit._buckets) == 1000

    consume_rate_limit("ip:new", 5, 60, now=10_000)
    assert list(rate_limit._buckets) == ["ip:new"]
