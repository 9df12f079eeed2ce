"""Unit tests for the content access gate, no database required."""

from datetime import date, datetime

from screentime.schemas.screen_time import ScreenTimeSettings, UsageData
from screentime.services.access_gate import check_access
from screentime.services.policy_evaluator import evaluate
from screentime.services.settings_service import DEFAULT_SETTINGS

TUESDAY_AFTERNOON = datetime(2026, 10, 13, 15, 0)
TUESDAY_NIGHT = datetime(2026, 10, 13, 22, 0)


def _decide(content_type, category=None, now=TUESDAY_AFTERNOON, **usage_and_settings):
    settings_fields = {k: v for k, v in usage_and_settings.items() if k in ScreenTimeSettings.model_fields}
    usage_fields = {k: v for k, v in usage_and_settings.items() if k not in settings_fields}
    settings = DEFAULT_SETTINGS.model_copy(update=settings_fields)
    usage = UsageData(date=date(2026, 10, 13), **usage_fields)
    return check_access(settings, usage, evaluate(settings, usage, now), content_type, category)


class TestCheckAccess:
    def test_fresh_day_allows_content(self):
        decision = _decide("video", "Science")
        assert decision.allowed is True
        assert decision.reason == "ok"
        assert decision.status == "within-limits"

    def test_disabled_policy_allows_everything(self):
        decision = _decide("video", "Games", now=TUESDAY_NIGHT, enabled=False, total_minutes=500, video_minutes=500)
        assert decision.allowed is True
        assert decision.reason == "policy-disabled"

    def test_bedtime_blocks(self):
        decision = _decide("book", now=TUESDAY_NIGHT)
        assert decision.allowed is False
        assert decision.reason == "bedtime"

    def test_daily_limit_blocks_all_content(self):
        decision = _decide("book", total_minutes=120)
        assert decision.allowed is False
        assert decision.reason == "daily-limit-reached"

    def test_video_sub_allowance(self):
        decision = _decide("video", total_minutes=60, video_minutes=60)
        assert decision.allowed is False
        assert decision.reason == "video-limit-reached"

        # Books are still fine with the video allowance used up
        assert _decide("book", total_minutes=60, video_minutes=60).allowed is True

    def test_zero_book_limit_means_unlimited(self):
        assert _decide("book", total_minutes=90, book_minutes=90).allowed is True

    def test_book_sub_allowance(self):
        decision = _decide("book", book_limit=30, total_minutes=30, book_minutes=30)
        assert decision.reason == "book-limit-reached"

    def test_zero_video_limit_means_unlimited(self):
        assert _decide("video", video_limit=0, total_minutes=90, video_minutes=90).allowed is True

    def test_category_outside_allow_list(self):
        decision = _decide("video", "Games")
        assert decision.allowed is False
        assert decision.reason == "category-not-allowed"

    def test_empty_allow_list_allows_any_category(self):
        assert _decide("video", "Games", allowed_categories=[]).allowed is True

    def test_other_content_ignores_sub_allowances(self):
        assert _decide("other", total_minutes=70, video_minutes=70).allowed is True
