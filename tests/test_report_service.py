import httpx
import pytest

from services.report_service import UNKNOWN_ORIGIN, ReportService, group_by_origin


def _handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path.endswith("/reports/funnel"):
        return httpx.Response(
            200,
            json={
                "counts": {"lead_created": 40, "appointment_booked": 12, "payment_confirmed": 8},
                "conversionRate": 0.2,
            },
        )
    if path.endswith("/reports/revenue"):
        return httpx.Response(
            200, json={"total": 1500.5, "series": [{"label": "2024-01", "total": 1500.5}]}
        )
    if path.endswith("/reports/appointments"):
        return httpx.Response(
            200,
            json={"byStatus": {"BOOKED": 3}, "byWeek": [{"label": "2024-W01", "total": 3}]},
        )
    if path.endswith("/leads"):
        return httpx.Response(
            200,
            json={"data": [{"source": "Instagram"}, {"source": None}, {"source": "Instagram"}]},
        )
    return httpx.Response(404)


def test_group_by_origin_orders_by_count():
    items = group_by_origin([{"source": "Site"}, {"source": "Instagram"}, {"source": "Instagram"}, {}])
    assert [(i.label, i.total) for i in items] == [
        ("Instagram", 2.0),
        (UNKNOWN_ORIGIN, 1.0),
        ("Site", 1.0),
    ]


def test_revenue_passes_period_and_dates(make_api_client):
    from datetime import date

    client = make_api_client(_handler)
    report = ReportService(client).revenue("month", date(2024, 1, 1), None)

    assert dict(client.requests[0].url.params) == {"period": "month", "start": "2024-01-01"}
    assert report.total == 1500.5
    assert report.series[0].label == "2024-01"


def test_revenue_rejects_unknown_period(make_api_client):
    with pytest.raises(ValueError):
        ReportService(make_api_client(_handler)).revenue("year")


def test_dashboard_summary(make_api_client):
    summary = ReportService(make_api_client(_handler)).dashboard()

    assert summary.leads_count == 40
    assert summary.appointments_count == 12
    assert summary.payments_count == 8
    assert summary.funnel.conversion_rate == 0.2
    assert summary.appointments.by_status == {"BOOKED": 3}
    assert summary.top_origins(1)[0].label == "Instagram"
