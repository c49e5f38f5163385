from PySide6.QtWidgets import QLineEdit

from services.dto import USER_ROLES
from services.validators import ValidationError, normalize_email, require
from ui.base.base_edit_form import BaseEditForm
from ui.common.combo_helpers import create_enum_combo


class UserForm(BaseEditForm):
    """Пользователь CRM. Пароль обязателен только при создании."""

    ENTITY_KEY = "nav.users"

    def __init__(self, service, instance=None, *, current_user_id=None, executor=None, parent=None):
        self.current_user_id = current_user_id
        super().__init__(service, instance, executor=executor, parent=parent)

    @property
    def is_self(self) -> bool:
        return self.instance is not None and self.instance.id == self.current_user_id

    def build_form(self):
        self.add_field("name", QLineEdit())
        self.add_field("email", QLineEdit())
        self.role_combo = self.add_field("role", create_enum_combo(USER_ROLES[::-1]))
        password = QLineEdit()
        password.setEchoMode(QLineEdit.Password)
        self.add_field("password", password)

    def fill_from_obj(self, obj):
        super().fill_from_obj(obj)
        self.fields["password"].clear()
        self.role_combo.setEnabled(not self.is_self)

    def build_payload(self, data: dict) -> dict:
        payload = {
            "name": require(data["name"], "name"),
            "email": normalize_email(require(data["email"], "email")),
            "role": "ADMIN" if data["role"] == "ADMIN" else "USER",
        }
        if self.is_self and payload["role"] != self.instance.role:
            raise ValidationError("self_role", "role")
        password = data["password"]
        if self.instance is None:
            payload["password"] = require(password, "password")
        elif password:
            payload["password"] = password
        return payload
