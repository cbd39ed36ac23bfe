"""
Reservation query predicates.

The dashboard filters (search, status, date range, table) and the public
"upcoming" list are expressed as queryset methods so they run in the
database.
"""

from datetime import date
from decimal import Decimal

from django.db import models
from django.db.models import Count, Q, Sum

SEARCH_FIELDS = ["name", "email", "phone", "message", "notes", "invoice_no"]


class ReservationQuerySet(models.QuerySet):  # type: ignore[type-arg]
    def search(self, query: str) -> "ReservationQuerySet":
        query = query.strip()
        if not query:
            return self
        condition = Q()
        for field in SEARCH_FIELDS:
            condition |= Q(**{f"{field}__icontains": query})
        return self.filter(condition)

    def with_status(self, status: str) -> "ReservationQuerySet":
        return self.filter(status=status) if status else self

    def between(
        self, start: date | None = None, end: date | None = None
    ) -> "ReservationQuerySet":
        qs = self
        if start:
            qs = qs.filter(date__gte=start)
        if end:
            qs = qs.filter(date__lte=end)
        return qs

    def at_table(self, table_number: str) -> "ReservationQuerySet":
        return self.filter(table_number=table_number) if table_number else self

    def upcoming_confirmed(self, today: date) -> "ReservationQuerySet":
        """Confirmed bookings from today on, soonest first."""
        return self.filter(status="Confirmed", date__gte=today).order_by(
            "date", "time"
        )

    def revenue(self) -> Decimal:
        """Total bill of confirmed and arrived bookings."""
        return self.filter(status__in=["Confirmed", "Arrived"]).aggregate(
            total=Sum("total_bill")
        )["total"] or Decimal("0")

    def daily_counts(self, start: date, end: date) -> dict[date, int]:
        """Number of reservations per booking date in [start, end]."""
        rows = (
            self.between(start, end)
            .values("date")
            .annotate(count=Count("id"))
            .order_by("date")
        )
        return {row["date"]: row["count"] for row in rows}
