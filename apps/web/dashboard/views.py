"""
Dashboard views - Authentication and main shell.
"""

from datetime import date

from django.contrib.auth import authenticate, login, logout
from django.contrib.auth.decorators import login_required
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import redirect, render
from django.utils import timezone
from django.utils.dateparse import parse_date
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_GET, require_http_methods

from . import stats


@require_http_methods(["GET", "POST"])
def login_view(request: HttpRequest) -> HttpResponse:
    """
    GET/POST /dashboard/login/

    Login page with username/password form.
    """
    if request.user.is_authenticated:
        return redirect("dashboard:home")

    error = None

    if request.method == "POST":
        username = request.POST.get("username", "").strip()
        password = request.POST.get("password", "")

        user = authenticate(request, username=username, password=password)
        if user is not None:
            login(request, user)
            next_url = request.GET.get("next", "")
            # Prevent open redirect
            if not next_url or not url_has_allowed_host_and_scheme(
                next_url, allowed_hosts={request.get_host()}
            ):
                next_url = "dashboard:home"
            return redirect(next_url)
        else:
            error = "Invalid username or password"

    return render(request, "dashboard/login.html", {"error": error})


@require_GET
def logout_view(request: HttpRequest) -> HttpResponse:
    """
    GET /dashboard/logout/

    Logout and redirect to login page.
    """
    logout(request)
    return redirect("dashboard:login")


def _date_param(request: HttpRequest, key: str) -> date | None:
    try:
        return parse_date(request.GET.get(key, ""))
    except ValueError:
        return None


def _chart_dates(request: HttpRequest) -> tuple[date, date]:
    return stats.chart_range(
        timezone.localdate(),
        _date_param(request, "start"),
        _date_param(request, "end"),
    )


@login_required
@require_GET
def home(request: HttpRequest) -> HttpResponse:
    """
    GET /dashboard/

    Dashboard home page - today's numbers, latest bookings, reviews waiting
    for approval and the reservations chart.
    """
    today = timezone.localdate()
    start, end = _chart_dates(request)

    return render(
        request,
        "dashboard/home.html",
        {
            "section": "dashboard",
            "stats": stats.collect_stats(today),
            "latest_reservations": stats.latest_reservations(),
            "pending_reviews": stats.pending_reviews(),
            "chart": stats.reservations_chart(start, end),
            "chart_start": start,
            "chart_end": end,
        },
    )


@login_required
@require_GET
def reservations_chart(request: HttpRequest) -> JsonResponse:
    """
    GET /dashboard/chart/?start=YYYY-MM-DD&end=YYYY-MM-DD

    Chart series for a custom date range.
    """
    start, end = _chart_dates(request)
    return JsonResponse(stats.reservations_chart(start, end))
