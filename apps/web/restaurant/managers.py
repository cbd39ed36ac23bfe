"""
Query helpers for content collections.

Filtering the dashboard and public lists happens in the database rather than
over fully fetched collections.
"""

import re
from decimal import Decimal

from django.db import models
from django.db.models import Q


def parse_price(value: str | None) -> Decimal | None:
    """
    Read a price typed by a user, keeping digits only.

    "Rp 50.000" -> Decimal("50000"); returns None when no digits are present.
    """
    if not value:
        return None
    digits = re.sub(r"\D", "", value)
    return Decimal(digits) if digits else None


class MenuItemQuerySet(models.QuerySet):  # type: ignore[type-arg]
    def search(self, query: str) -> "MenuItemQuerySet":
        query = query.strip()
        if not query:
            return self
        return self.filter(Q(name__icontains=query) | Q(description__icontains=query))

    def in_category(self, category: str) -> "MenuItemQuerySet":
        return self.filter(category=category) if category else self

    def of_cuisine(self, cuisine_type: str) -> "MenuItemQuerySet":
        return self.filter(cuisine_type=cuisine_type) if cuisine_type else self

    def priced_between(
        self, min_price: Decimal | None, max_price: Decimal | None
    ) -> "MenuItemQuerySet":
        qs = self
        if min_price is not None:
            qs = qs.filter(price__gte=min_price)
        if max_price is not None:
            qs = qs.filter(price__lte=max_price)
        return qs

    def filtered(
        self,
        *,
        query: str = "",
        category: str = "",
        cuisine_type: str = "",
        min_price: str = "",
        max_price: str = "",
    ) -> "MenuItemQuerySet":
        """Apply every menu filter the dashboard and public API accept."""
        return (
            self.search(query)
            .in_category(category)
            .of_cuisine(cuisine_type)
            .priced_between(parse_price(min_price), parse_price(max_price))
        )


class SpecialOfferQuerySet(models.QuerySet):  # type: ignore[type-arg]
    def search(self, query: str) -> "SpecialOfferQuerySet":
        query = query.strip()
        if not query:
            return self
        return self.filter(
            Q(title__icontains=query) | Q(description__icontains=query)
        )


class ReviewQuerySet(models.QuerySet):  # type: ignore[type-arg]
    PUBLIC_LIMIT = 9

    def approved(self) -> "ReviewQuerySet":
        return self.filter(is_approved=True)

    def pending(self) -> "ReviewQuerySet":
        return self.filter(is_approved=False)

    def public(self) -> "ReviewQuerySet":
        """Approved reviews shown on the site, newest first."""
        return self.approved().order_by("-created_at")[: self.PUBLIC_LIMIT]
