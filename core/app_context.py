"""Контекст приложения и управление зависимостями."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar

from config import Settings, get_settings
from core.session import SessionStore
from infrastructure.api_client import ApiClient
from services.anamnesis_service import AnamnesisService
from services.auth_service import AuthService
from services.campaign_service import CampaignService
from services.dto import (
    AppointmentDTO,
    CalendarEntryDTO,
    ClientDetailsDTO,
    ClientDTO,
    CourseLeadDTO,
    KnowledgeEntryDTO,
    LeadDTO,
    ServiceOfferingDTO,
    StudentDTO,
    UserDTO,
    WaitlistEntryDTO,
)
from services.payment_service import PaymentService, PaypalTransactionService
from services.report_service import ReportService
from services.resource_service import ResourceService

DependencyName = str

# имя зависимости → (коллекция API, DTO)
RESOURCES: dict[str, tuple[str, type]] = {
    "client_service": ("clients", ClientDTO),
    "student_service": ("alunos", StudentDTO),
    "course_lead_service": ("course-leads", CourseLeadDTO),
    "lead_service": ("leads", LeadDTO),
    "appointment_service": ("appointments", AppointmentDTO),
    "calendar_service": ("calendar", CalendarEntryDTO),
    "knowledge_service": ("knowledge", KnowledgeEntryDTO),
    "offering_service": ("services", ServiceOfferingDTO),
    "waitlist_service": ("waitlist", WaitlistEntryDTO),
    "user_service": ("users", UserDTO),
}

# расширенный DTO для GET /<endpoint>/:id
DETAIL_CLASSES: dict[str, type] = {"client_service": ClientDetailsDTO}


class AppContext:
    """Контекст приложения с ленивым созданием зависимостей."""

    _DEPENDENCY_NAMES: ClassVar[set[str]] = {
        "session",
        "api_client",
        "auth_service",
        "report_service",
        "payment_service",
        "paypal_service",
        "campaign_service",
        "anamnesis_service",
        *RESOURCES,
    }

    def __init__(
        self,
        settings: Settings,
        *,
        session_factory: Callable[[], SessionStore],
        api_client_factory: Callable[[Settings, SessionStore], ApiClient],
        overrides: dict[str, Any] | None = None,
        instances: dict[str, Any] | None = None,
    ) -> None:
        self._settings = settings
        self._session_factory = session_factory
        self._api_client_factory = api_client_factory
        self._overrides: dict[str, Any] = dict(overrides or {})
        self._instances: dict[str, Any] = dict(instances or {})

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def session(self) -> SessionStore:
        return self._get_dependency("session", self._session_factory)

    @property
    def api_client(self) -> ApiClient:
        return self._get_dependency(
            "api_client",
            lambda: self._api_client_factory(self._settings, self.session),
        )

    @property
    def auth_service(self) -> AuthService:
        return self._get_dependency(
            "auth_service", lambda: AuthService(self.api_client, self.session)
        )

    @property
    def report_service(self) -> ReportService:
        return self._get_dependency("report_service", lambda: ReportService(self.api_client))

    @property
    def payment_service(self) -> PaymentService:
        return self._get_dependency("payment_service", lambda: PaymentService(self.api_client))

    @property
    def paypal_service(self) -> PaypalTransactionService:
        return self._get_dependency(
            "paypal_service", lambda: PaypalTransactionService(self.api_client)
        )

    @property
    def campaign_service(self) -> CampaignService:
        return self._get_dependency("campaign_service", lambda: CampaignService(self.api_client))

    @property
    def anamnesis_service(self) -> AnamnesisService:
        return self._get_dependency(
            "anamnesis_service", lambda: AnamnesisService(self.api_client)
        )

    def resource(self, name: DependencyName) -> ResourceService:
        """Сервис простой CRUD-коллекции по имени из ``RESOURCES``."""
        if name not in RESOURCES:
            raise KeyError(f"Неизвестная коллекция: {name}")
        endpoint, dto_class = RESOURCES[name]
        return self._get_dependency(
            name, lambda: ResourceService(
                self.api_client, endpoint, dto_class, detail_class=DETAIL_CLASSES.get(name)
            )
        )

    def override(self, **deps: Any) -> "AppContext":
        """Создать новый контекст с переопределёнными зависимостями."""

        override_args = dict(deps)
        new_settings = override_args.pop("settings", self._settings)

        unknown = set(override_args) - self._DEPENDENCY_NAMES
        if unknown:
            names = ", ".join(sorted(unknown))
            raise ValueError(f"Неизвестные зависимости для переопределения: {names}")

        overrides = dict(self._overrides)
        overrides.update(override_args)
        if new_settings is self._settings:
            instances = {
                key: value
                for key, value in self._instances.items()
                if key not in override_args
            }
        else:
            instances = {}
        return AppContext(
            settings=new_settings,
            session_factory=self._session_factory,
            api_client_factory=self._api_client_factory,
            overrides=overrides,
            instances=instances,
        )

    def _get_dependency(
        self, name: DependencyName, factory: Callable[[], Any]
    ) -> Any:
        if name in self._overrides:
            return self._overrides[name]
        if name not in self._instances:
            self._instances[name] = factory()
        return self._instances[name]


_app_context: AppContext | None = None


def _build_default_context() -> AppContext:
    return AppContext(
        settings=get_settings(),
        session_factory=SessionStore,
        api_client_factory=ApiClient.from_settings,
    )


def get_app_context() -> AppContext:
    """Получить (или создать) синглтон контекста приложения."""

    global _app_context
    if _app_context is None:
        _app_context = _build_default_context()
    return _app_context


def set_app_context(context: AppContext | None) -> None:
    """Подменить синглтон (используется при старте и в тестах)."""

    global _app_context
    _app_context = context


__all__ = ["AppContext", "RESOURCES", "get_app_context", "set_app_context"]
