from ui.base.base_table_model import Column
from ui.base.base_table_view import BaseTableView
from ui.forms.knowledge_form import KnowledgeEntryForm
from ui.i18n import tr_enum


class KnowledgeTableView(BaseTableView):
    TITLE_KEY = "nav.knowledge"
    SERVICE = "knowledge_service"
    FORM_CLASS = KnowledgeEntryForm
    COLUMNS = (
        Column("title", "field.title"),
        Column("status", "field.status", formatter=tr_enum),
        Column("priority", "field.priority"),
        Column("category", "field.category"),
        Column("language", "field.language"),
        Column("tags", "field.tags"),
        Column("updated_at", "field.updated_at"),
    )
