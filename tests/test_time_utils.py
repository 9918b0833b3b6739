from datetime import UTC

from backend.app.core.time import utc_now, utc_today


def test_utc_now_is_timezone_aware_utc():
    value = utc_now()
    assert value.tzinfo is UTC


def test_utc_today_matches_utc_now():
    assert utc_today() == utc_now().date()
