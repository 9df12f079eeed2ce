"""Content access gate.

Decides whether a child may start a piece of content right now, on top of
an evaluation from ``policy_evaluator``. First match wins:

1. Policy disabled             -> allowed
2. Bedtime                     -> denied
3. Daily limit used up         -> denied
4. Video sub-allowance used up -> denied (0 = unlimited)
5. Book sub-allowance used up  -> denied (0 = unlimited)
6. Category not allowed        -> denied (empty list = all allowed)
"""

from screentime.schemas.screen_time import (
    AccessDecision,
    ContentType,
    PolicyEvaluation,
    ScreenTimeSettings,
    ScreenTimeStatus,
    UsageData,
)


def check_access(
    settings: ScreenTimeSettings,
    usage: UsageData,
    evaluation: PolicyEvaluation,
    content_type: ContentType,
    category: str | None = None,
) -> AccessDecision:
    def decide(allowed: bool, reason: str) -> AccessDecision:
        return AccessDecision(allowed=allowed, reason=reason, status=evaluation.status)

    if not settings.enabled:
        return decide(True, "policy-disabled")

    if evaluation.status == ScreenTimeStatus.BEDTIME:
        return decide(False, "bedtime")

    if evaluation.status == ScreenTimeStatus.LIMIT_EXCEEDED:
        return decide(False, "daily-limit-reached")

    if content_type == "video" and 0 < settings.video_limit <= usage.video_minutes:
        return decide(False, "video-limit-reached")

    if content_type == "book" and 0 < settings.book_limit <= usage.book_minutes:
        return decide(False, "book-limit-reached")

    if category and settings.allowed_categories and category not in settings.allowed_categories:
        return decide(False, "category-not-allowed")

    return decide(True, "ok")
