"""Пакет прикладных сервисов клиента REST API.

Подмодули не импортируются на уровне пакета, чтобы ``import services``
не тянул ``httpx`` и Qt. Импортируйте нужное напрямую, например:
    from services.resource_service import ResourceService
    from services.payment_service import PaymentService
"""

__all__: list[str] = []
