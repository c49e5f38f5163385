"""DTO сущностей REST API клиники.

API отдаёт поля в camelCase; DTO хранят их в snake_case и умеют собираться
из JSON через ``from_api``. Даты приходят строками ISO-8601 и превращаются в
``datetime`` с часовым поясом.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from dateutil.parser import isoparse

logger = logging.getLogger(__name__)

USER_ROLES = ("ADMIN", "USER")
LEAD_STAGES = ("NEW", "CONTACTED", "QUALIFIED", "PROPOSAL", "WON", "LOST")
APPOINTMENT_STATUSES = ("BOOKED", "COMPLETED", "CANCELLED", "NO_SHOW")
APPOINTMENT_TYPES = ("IN_PERSON", "ONLINE")
CALENDAR_TYPES = ("AVAILABLE", "TRAVEL", "BLOCKED")
KNOWLEDGE_STATUSES = ("DRAFT", "PUBLISHED", "ARCHIVED")


def parse_datetime(value: Any) -> datetime | None:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value
    try:
        return isoparse(str(value))
    except (ValueError, OverflowError):
        logger.warning("⚠️ Некорректная дата из API: %r", value)
        return None


def parse_decimal(value: Any) -> Decimal | None:
    if value in (None, ""):
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        logger.warning("⚠️ Некорректное число из API: %r", value)
        return None


def _str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    return None if value is None else str(value)


@dataclass
class UserDTO:
    id: str
    name: str
    email: str
    role: str = "USER"
    api_key: str | None = None
    created_at: datetime | None = None

    @property
    def is_admin(self) -> bool:
        return (self.role or "").upper() == "ADMIN"

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "UserDTO":
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            email=data.get("email") or "",
            role=(data.get("role") or "USER").upper(),
            api_key=data.get("apiKey"),
            created_at=parse_datetime(data.get("createdAt")),
        )

    def to_storage(self) -> dict:
        stored = {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
        }
        if self.api_key:
            stored["apiKey"] = self.api_key
        return stored


@dataclass
class TreatmentImage:
    id: str
    url: str
    uploaded_at: datetime | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "TreatmentImage":
        return cls(
            id=str(data.get("id", "")),
            url=data.get("url") or "",
            uploaded_at=parse_datetime(data.get("uploadedAt")),
        )


@dataclass
class ClientDTO:
    id: str
    name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    source: str | None = None
    tags: list[str] = field(default_factory=list)
    score: int = 0
    status: str = ""
    created_at: datetime | None = None
    notes: str | None = None
    age: int | None = None
    country: str | None = None
    birth_date: str | None = None
    language: str | None = None
    anamnesis_responses: dict[str, Any] = field(default_factory=dict)
    before_after_photos: list[TreatmentImage] = field(default_factory=list)

    @classmethod
    def _kwargs(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        return dict(
            id=str(data["id"]),
            name=data.get("name") or "",
            email=data.get("email"),
            phone=data.get("phone"),
            address=data.get("address"),
            source=data.get("source"),
            tags=list(data.get("tags") or []),
            score=int(data.get("score") or 0),
            status=data.get("status") or "",
            created_at=parse_datetime(data.get("createdAt")),
            notes=data.get("notes"),
            age=data.get("age"),
            country=data.get("country"),
            birth_date=data.get("birthDate"),
            language=data.get("language"),
            anamnesis_responses=dict(data.get("anamnesisResponses") or {}),
            before_after_photos=[
                TreatmentImage.from_api(item)
                for item in data.get("beforeAfterPhotos") or []
            ],
        )

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "ClientDTO":
        return cls(**cls._kwargs(data))


@dataclass
class LeadSummary:
    id: str
    stage: str
    source: str | None = None
    notes: str | None = None
    created_at: datetime | None = None


@dataclass
class AppointmentSummary:
    id: str
    procedure: str
    status: str
    start: datetime | None = None
    end: datetime | None = None


@dataclass
class PaymentSummary:
    id: str
    value: Decimal | None
    method: str
    status: str
    created_at: datetime | None = None


@dataclass
class ClientDetailsDTO(ClientDTO):
    leads: list[LeadSummary] = field(default_factory=list)
    appointments: list[AppointmentSummary] = field(default_factory=list)
    payments: list[PaymentSummary] = field(default_factory=list)
    intimate_assessment_photos: list[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "ClientDetailsDTO":
        kwargs = cls._kwargs(data)
        kwargs["leads"] = [
            LeadSummary(
                id=str(item["id"]),
                stage=item.get("stage") or "",
                source=item.get("source"),
                notes=item.get("notes"),
                created_at=parse_datetime(item.get("createdAt")),
            )
            for item in data.get("leads") or []
        ]
        kwargs["appointments"] = [
            AppointmentSummary(
                id=str(item["id"]),
                procedure=item.get("procedure") or "",
                status=item.get("status") or "",
                start=parse_datetime(item.get("start")),
                end=parse_datetime(item.get("end")),
            )
            for item in data.get("appointments") or []
        ]
        kwargs["payments"] = [
            PaymentSummary(
                id=str(item["id"]),
                value=parse_decimal(item.get("value")),
                method=item.get("method") or "",
                status=item.get("status") or "",
                created_at=parse_datetime(item.get("createdAt")),
            )
            for item in data.get("payments") or []
        ]
        kwargs["intimate_assessment_photos"] = list(
            data.get("intimateAssessmentPhotos") or []
        )
        return cls(**kwargs)


@dataclass
class StudentDTO:
    """Ученик курса (``/alunos``)."""

    id: str
    full_name: str
    phone: str | None = None
    country: str | None = None
    email: str | None = None
    profession: str | None = None
    course: str | None = None
    payment_ok: bool = False
    created_at: datetime | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "StudentDTO":
        return cls(
            id=str(data["id"]),
            full_name=data.get("nomeCompleto") or "",
            phone=data.get("telefone"),
            country=data.get("pais"),
            email=data.get("email"),
            profession=data.get("profissao"),
            course=data.get("curso"),
            payment_ok=bool(data.get("pagamentoOk")),
            created_at=parse_datetime(data.get("createdAt")),
        )


@dataclass
class CourseLeadDTO:
    id: str
    full_name: str
    origin: str = ""
    phone: str | None = None
    country: str | None = None
    email: str | None = None
    note: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "CourseLeadDTO":
        return cls(
            id=str(data["id"]),
            full_name=data.get("nomeCompleto") or "",
            origin=data.get("origem") or "",
            phone=data.get("telefone"),
            country=data.get("pais"),
            email=data.get("email"),
            note=data.get("nota"),
            created_at=parse_datetime(data.get("createdAt")),
        )


@dataclass
class LeadDTO:
    id: str
    stage: str
    client_id: str | None = None
    client_name: str | None = None
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    source: str | None = None
    notes: str | None = None
    score: int = 0
    created_at: datetime | None = None

    @property
    def display_name(self) -> str:
        return self.client_name or self.name or "-"

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "LeadDTO":
        client = data.get("client") or {}
        return cls(
            id=str(data["id"]),
            stage=data.get("stage") or "NEW",
            client_id=_str(data, "clientId") or _str(client, "id"),
            client_name=client.get("name"),
            name=data.get("name"),
            email=data.get("email"),
            phone=data.get("phone"),
            source=data.get("source"),
            notes=data.get("notes"),
            score=int(data.get("score") or 0),
            created_at=parse_datetime(data.get("createdAt")),
        )


@dataclass
class AppointmentDTO:
    id: str
    client_id: str
    procedure: str
    type: str = "IN_PERSON"
    status: str = "BOOKED"
    start: datetime | None = None
    end: datetime | None = None
    country: str | None = None
    meeting_link: str | None = None
    client_name: str | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "AppointmentDTO":
        client = data.get("client") or {}
        return cls(
            id=str(data["id"]),
            client_id=_str(data, "clientId") or _str(client, "id") or "",
            procedure=data.get("procedure") or "",
            type=data.get("type") or "IN_PERSON",
            status=data.get("status") or "BOOKED",
            start=parse_datetime(data.get("start")),
            end=parse_datetime(data.get("end")),
            country=data.get("country"),
            meeting_link=data.get("meetingLink"),
            client_name=client.get("name"),
        )


@dataclass
class PaymentDTO:
    id: str
    appointment_id: str
    value: Decimal | None
    method: str
    status: str = "PENDING"
    pix_txid: str | None = None
    receipt_url: str | None = None
    created_at: datetime | None = None
    procedure: str | None = None
    client_name: str | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "PaymentDTO":
        appointment = data.get("appointment") or {}
        client = appointment.get("client") or {}
        return cls(
            id=str(data["id"]),
            appointment_id=_str(data, "appointmentId") or "",
            value=parse_decimal(data.get("value")),
            method=data.get("method") or "",
            status=data.get("status") or "PENDING",
            pix_txid=data.get("pixTxid"),
            receipt_url=data.get("comprovanteUrl"),
            created_at=parse_datetime(data.get("createdAt")),
            procedure=appointment.get("procedure"),
            client_name=client.get("name"),
        )


@dataclass
class PaypalTransactionDTO:
    id: str
    transaction_id: str
    client_id: str | None = None
    status: str | None = None
    event_code: str | None = None
    transaction_date: datetime | None = None
    currency: str | None = None
    gross_amount: str | None = None
    fee_amount: str | None = None
    net_amount: str | None = None
    payer_email: str | None = None
    payer_name: str | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "PaypalTransactionDTO":
        return cls(
            id=str(data["id"]),
            transaction_id=data.get("transactionId") or "",
            client_id=_str(data, "clientId"),
            status=data.get("status"),
            event_code=data.get("eventCode"),
            transaction_date=parse_datetime(data.get("transactionDate")),
            currency=data.get("currency"),
            gross_amount=data.get("grossAmount"),
            fee_amount=data.get("feeAmount"),
            net_amount=data.get("netAmount"),
            payer_email=data.get("payerEmail"),
            payer_name=data.get("payerName"),
        )


@dataclass
class CalendarEntryDTO:
    id: str
    title: str
    type: str = "AVAILABLE"
    start: datetime | None = None
    end: datetime | None = None
    all_day: bool = False
    description: str | None = None
    timezone: str | None = None
    country: str | None = None
    city: str | None = None
    location: str | None = None
    notes: str | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "CalendarEntryDTO":
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            type=data.get("type") or "AVAILABLE",
            start=parse_datetime(data.get("start")),
            end=parse_datetime(data.get("end")),
            all_day=bool(data.get("allDay")),
            description=data.get("description"),
            timezone=data.get("timezone"),
            country=data.get("country"),
            city=data.get("city"),
            location=data.get("location"),
            notes=data.get("notes"),
        )


@dataclass
class KnowledgeEntryDTO:
    id: str
    title: str
    content: str
    status: str = "DRAFT"
    priority: int = 0
    tags: list[str] = field(default_factory=list)
    slug: str | None = None
    summary: str | None = None
    category: str | None = None
    audience: str | None = None
    language: str | None = None
    source_url: str | None = None
    published_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "KnowledgeEntryDTO":
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            content=data.get("content") or "",
            status=data.get("status") or "DRAFT",
            priority=int(data.get("priority") or 0),
            tags=list(data.get("tags") or []),
            slug=data.get("slug"),
            summary=data.get("summary"),
            category=data.get("category"),
            audience=data.get("audience"),
            language=data.get("language"),
            source_url=data.get("sourceUrl"),
            published_at=parse_datetime(data.get("publishedAt")),
            updated_at=parse_datetime(data.get("updatedAt")),
        )


@dataclass
class ServiceOfferingDTO:
    id: str
    name: str
    currency: str
    price: Decimal | None
    active: bool = True
    description: str | None = None
    category: str | None = None
    country: str | None = None
    duration_minutes: int | None = None
    notes: str | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "ServiceOfferingDTO":
        duration = data.get("durationMinutes")
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            currency=data.get("currency") or "USD",
            price=parse_decimal(data.get("price")),
            active=bool(data.get("active", True)),
            description=data.get("description"),
            category=data.get("category"),
            country=data.get("country"),
            duration_minutes=int(duration) if duration else None,
            notes=data.get("notes"),
        )


@dataclass
class WaitlistEntryDTO:
    id: str
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    desired_course: str | None = None
    country: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "WaitlistEntryDTO":
        return cls(
            id=str(data["id"]),
            name=data.get("name"),
            email=data.get("email"),
            phone=data.get("phone"),
            desired_course=data.get("desiredCourse"),
            country=data.get("country"),
            created_at=parse_datetime(data.get("createdAt")),
        )


@dataclass
class CampaignLogDTO:
    id: str
    message: str
    created_at: datetime | None = None


@dataclass
class CampaignDTO:
    id: str
    name: str
    channel: str
    message: str
    status: str = "DRAFT"
    image_url: str | None = None
    scheduled_at: datetime | None = None
    logs: list[CampaignLogDTO] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "CampaignDTO":
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            channel=data.get("channel") or "",
            message=data.get("message") or "",
            status=data.get("status") or "DRAFT",
            image_url=data.get("imageUrl"),
            scheduled_at=parse_datetime(data.get("scheduledAt")),
            logs=[
                CampaignLogDTO(
                    id=str(log.get("id", "")),
                    message=log.get("message") or "",
                    created_at=parse_datetime(log.get("createdAt")),
                )
                for log in data.get("logs") or []
            ],
        )


# ───────────── отчёты ─────────────


@dataclass
class SeriesItem:
    label: str
    total: float


def _series(items: Any) -> list[SeriesItem]:
    return [
        SeriesItem(label=str(item.get("label", "")), total=float(item.get("total") or 0))
        for item in items or []
    ]


@dataclass
class FunnelReport:
    counts: dict[str, int] = field(default_factory=dict)
    conversion_rate: float = 0.0

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "FunnelReport":
        return cls(
            counts={k: int(v or 0) for k, v in (data.get("counts") or {}).items()},
            conversion_rate=float(data.get("conversionRate") or 0),
        )


@dataclass
class RevenueReport:
    total: float = 0.0
    series: list[SeriesItem] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "RevenueReport":
        return cls(total=float(data.get("total") or 0), series=_series(data.get("series")))


@dataclass
class AppointmentsReport:
    by_status: dict[str, int] = field(default_factory=dict)
    by_week: list[SeriesItem] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "AppointmentsReport":
        return cls(
            by_status={k: int(v or 0) for k, v in (data.get("byStatus") or {}).items()},
            by_week=_series(data.get("byWeek")),
        )
