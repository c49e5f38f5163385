"""Анкета «Anamnese Geral»: создаёт клиента с ответами анамнеза."""

from __future__ import annotations

import logging

from PySide6.QtCore import QDate
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDateEdit,
    QDialog,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLineEdit,
    QScrollArea,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from services.anamnesis_service import (
    HABITS_ADDITIONAL,
    HABITS_QUESTIONS,
    HOW_DID_YOU_KNOW,
    MEDICAL_ADDITIONAL,
    MEDICAL_QUESTIONS,
    NO,
    YES_NO,
    AnamnesisForm,
    build_payload,
)
from services.validators import ValidationError
from ui.common.date_utils import get_date_or_none, make_optional_date_edit
from ui.common.message_boxes import error_text, show_info
from ui.common.styled_widgets import header_label, set_status, status_label, styled_button
from ui.common.workers import Executor, default_executor
from ui.i18n import tr, tr_validation

logger = logging.getLogger(__name__)


def _yes_no_combo() -> QComboBox:
    combo = QComboBox()
    for answer in YES_NO:
        combo.addItem(answer, answer)
    combo.setCurrentIndex(combo.findData(NO))
    return combo


class AnamnesisDialog(QDialog):
    def __init__(self, service, *, executor: Executor | None = None, parent=None):
        super().__init__(parent)
        self.service = service
        self.executor = executor or default_executor()
        self._busy = False
        self.setWindowTitle(tr("anamnesis.title"))
        self.setMinimumSize(640, 720)

        outer = QVBoxLayout(self)
        outer.addWidget(header_label(tr("anamnesis.title")))
        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        outer.addWidget(scroll)
        body = QWidget()
        scroll.setWidget(body)
        layout = QVBoxLayout(body)

        # --- личные данные ---
        personal = QGroupBox(tr("anamnesis.personal"))
        form = QFormLayout(personal)
        self.name_edit = QLineEdit()
        self.email_edit = QLineEdit()
        self.contact_edit = QLineEdit()
        self.age_edit = QLineEdit()
        self.country_edit = QLineEdit()
        self.birth_date_edit = make_optional_date_edit()
        self.language_edit = QLineEdit()
        self.how_combo = QComboBox()
        for option in HOW_DID_YOU_KNOW:
            self.how_combo.addItem(option, option)
        self.referred_edit = QLineEdit()
        self.self_esteem_spin = QSpinBox()
        self.self_esteem_spin.setRange(0, 10)
        self.self_esteem_spin.setValue(5)
        for label, widget in (
            (tr("field.name"), self.name_edit),
            (tr("field.email"), self.email_edit),
            (tr("field.phone"), self.contact_edit),
            (tr("field.age"), self.age_edit),
            (tr("field.country"), self.country_edit),
            (tr("field.birth_date"), self.birth_date_edit),
            (tr("field.language"), self.language_edit),
            (tr("anamnesis.how_did_you_know"), self.how_combo),
            (tr("anamnesis.referred_by"), self.referred_edit),
            (tr("field.self_esteem"), self.self_esteem_spin),
        ):
            form.addRow(label + ":", widget)
        layout.addWidget(personal)

        # --- привычки и медицинская история ---
        self.habit_combos, self.habit_extra = self._add_questions(
            layout, tr("anamnesis.habits"), HABITS_QUESTIONS, HABITS_ADDITIONAL
        )
        self.medical_combos, self.medical_extra = self._add_questions(
            layout, tr("anamnesis.medical"), MEDICAL_QUESTIONS, MEDICAL_ADDITIONAL
        )

        # --- подпись ---
        closing = QFormLayout()
        self.form_date_edit = QDateEdit(QDate.currentDate())
        self.form_date_edit.setCalendarPopup(True)
        self.signature_edit = QLineEdit()
        self.consent_checkbox = QCheckBox(tr("anamnesis.consent"))
        closing.addRow(tr("anamnesis.form_date") + ":", self.form_date_edit)
        closing.addRow(tr("anamnesis.signature") + ":", self.signature_edit)
        closing.addRow(self.consent_checkbox)
        layout.addLayout(closing)

        self.error_label = status_label("error")
        outer.addWidget(self.error_label)
        btns = QHBoxLayout()
        btns.addStretch()
        self.submit_btn = styled_button(tr("anamnesis.submit"), icon="📨", role="primary")
        self.submit_btn.clicked.connect(self.submit)
        cancel = styled_button(tr("common.cancel"))
        cancel.clicked.connect(self.reject)
        btns.addWidget(self.submit_btn)
        btns.addWidget(cancel)
        outer.addLayout(btns)

    @staticmethod
    def _add_questions(layout, title, questions, additional):
        box = QGroupBox(title)
        form = QFormLayout(box)
        combos = {}
        for question in questions:
            combos[question] = _yes_no_combo()
            form.addRow(question, combos[question])
        extra = {}
        for question in additional:
            extra[question] = QLineEdit()
            form.addRow(question, extra[question])
        layout.addWidget(box)
        return combos, extra

    def collect_form(self) -> AnamnesisForm:
        return AnamnesisForm(
            name=self.name_edit.text(),
            email=self.email_edit.text(),
            contact=self.contact_edit.text(),
            age=self.age_edit.text(),
            country=self.country_edit.text(),
            birth_date=get_date_or_none(self.birth_date_edit),
            language=self.language_edit.text(),
            how_did_you_know=self.how_combo.currentData(),
            referred_by=self.referred_edit.text().strip(),
            self_esteem=self.self_esteem_spin.value(),
            consent=self.consent_checkbox.isChecked(),
            form_date=self.form_date_edit.date().toPython(),
            signature=self.signature_edit.text().strip(),
            habits={q: c.currentData() for q, c in self.habit_combos.items()},
            habits_additional={q: e.text().strip() for q, e in self.habit_extra.items()},
            medical={q: c.currentData() for q, c in self.medical_combos.items()},
            medical_additional={q: e.text().strip() for q, e in self.medical_extra.items()},
        )

    def submit(self) -> None:
        if self._busy:
            return
        form = self.collect_form()
        try:
            build_payload(form)
        except ValidationError as exc:
            set_status(self.error_label, tr_validation(exc.code, exc.field))
            return
        self._busy = True
        self.submit_btn.setEnabled(False)
        set_status(self.error_label, None)
        self.executor.submit(lambda: self.service.submit(form), self._on_sent, self._on_failed)

    def _on_sent(self, _result) -> None:
        self._busy = False
        self.submit_btn.setEnabled(True)
        show_info(tr("anamnesis.sent"), parent=self)
        self.accept()

    def _on_failed(self, exc: BaseException) -> None:
        self._busy = False
        self.submit_btn.setEnabled(True)
        logger.error("❌ Ошибка при отправке анамнеза", exc_info=exc)
        set_status(self.error_label, error_text(exc, "error.save"))

    def reject(self):
        if self._busy:
            return
        super().reject()
