from datetime import datetime, timezone
from decimal import Decimal

import httpx

from services.payment_service import PaymentService, PaypalTransactionService


def test_payment_page_flattens_appointment(make_api_client):
    body = {
        "data": [
            {
                "id": "p1",
                "appointmentId": "a1",
                "value": "350.00",
                "method": "PIX",
                "status": "PENDING",
                "appointment": {"procedure": "Botox", "client": {"name": "Maria"}},
            }
        ],
        "total": 1,
    }
    client = make_api_client(lambda request: httpx.Response(200, json=body))
    payment = PaymentService(client).get_page(1, 20, status="PENDING").items[0]

    assert payment.value == Decimal("350.00")
    assert payment.procedure == "Botox"
    assert payment.client_name == "Maria"
    assert client.requests[0].url.params["status"] == "PENDING"


def test_confirm_patches_status(make_api_client, json_body):
    client = make_api_client(lambda request: httpx.Response(200, json={}))
    PaymentService(client).confirm("p1")
    request = client.requests[0]
    assert (request.method, request.url.path) == ("PATCH", "/api/payments/p1")
    assert json_body(request) == {"status": "CONFIRMED"}


def test_paypal_page_uses_pagination_envelope(make_api_client):
    body = {
        "items": [
            {
                "id": "t1",
                "transactionId": "PP-1",
                "grossAmount": "100.00",
                "currency": "USD",
                "clientId": None,
            }
        ],
        "pagination": {"page": 2, "pageSize": 20, "totalItems": 27, "totalPages": 2},
    }
    client = make_api_client(lambda request: httpx.Response(200, json=body))
    result = PaypalTransactionService(client).get_page(2)

    assert dict(client.requests[0].url.params) == {"page": "2", "pageSize": "20"}
    assert result.total == 27
    assert result.page == 2
    assert result.items[0].transaction_id == "PP-1"
    assert result.items[0].client_id is None


def test_paypal_not_found_is_empty(make_api_client):
    client = make_api_client(lambda request: httpx.Response(404))
    assert PaypalTransactionService(client).get_page(1).total == 0


def test_sync_sends_seven_day_window(make_api_client, json_body):
    client = make_api_client(
        lambda request: httpx.Response(
            200, json={"imported": 5, "created": 3, "updated": 2, "processedPages": 1}
        )
    )
    now = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)
    result = PaypalTransactionService(client).sync(now)

    assert json_body(client.requests[0]) == {
        "startDate": "2024-03-08T12:00:00.000Z",
        "endDate": "2024-03-15T12:00:00.000Z",
        "pageSize": 200,
        "maxPages": 5,
    }
    assert (result.created, result.updated, result.imported) == (3, 2, 5)


def test_link_and_unlink_client(make_api_client, json_body):
    client = make_api_client(lambda request: httpx.Response(200, json={}))
    service = PaypalTransactionService(client)
    service.link_client("t1", "c9")
    service.link_client("t1", None)

    assert client.requests[0].url.path == "/api/payments/paypal/transactions/t1"
    assert json_body(client.requests[0]) == {"clientId": "c9"}
    assert json_body(client.requests[1]) == {"clientId": None}
