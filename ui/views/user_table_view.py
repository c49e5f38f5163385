from ui.base.base_table_model import Column
from ui.base.base_table_view import BaseTableView
from ui.forms.user_form import UserForm
from ui.i18n import tr, tr_enum


class UserTableView(BaseTableView):
    """Пользователи арендатора, доступно только администратору."""

    TITLE_KEY = "nav.users"
    SERVICE = "user_service"
    FORM_CLASS = UserForm
    DEBOUNCE_MS = 400
    COLUMNS = (
        Column("name", "field.name"),
        Column("email", "field.email"),
        Column("role", "field.role", formatter=tr_enum),
        Column("created_at", "field.created_at"),
    )

    @property
    def current_user_id(self) -> str | None:
        user = self.context.session.user
        return user.id if user else None

    def create_form(self, instance=None):
        return UserForm(
            self.service,
            instance,
            current_user_id=self.current_user_id,
            executor=self.executor,
            parent=self,
        )

    def check_can_delete(self, obj) -> str | None:
        if obj.id == self.current_user_id:
            return tr("error.self_delete")
        return None
