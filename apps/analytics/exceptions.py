"""
Domain exceptions for analytics app.

Raised by the reporting layer for invalid report requests, separate from
HTTP concerns.

Exception Hierarchy:
    AnalyticsServiceError (base)
    └── InvalidDateRangeError

Usage:
    from apps.analytics.exceptions import InvalidDateRangeError

    if start_date > end_date:
        raise InvalidDateRangeError("Start date must be before end date")
"""


class AnalyticsServiceError(Exception):
    """
    Base exception for all analytics service errors.

    Views catch it to answer with a 400:

        try:
            data = RevenueQueries.period_summary(shop.id, start, end)
        except AnalyticsServiceError as e:
            return Response({'error': str(e)}, status=400)
    """

    pass


class InvalidDateRangeError(AnalyticsServiceError):
    """
    Raised when date range is invalid.

    Typically when start_date is after end_date.
    """

    pass
