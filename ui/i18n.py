"""Переводы интерфейса (pt-BR и es).

Строки, которых нет в испанском словаре, берутся из португальского,
а при полном отсутствии возвращается сам ключ.
"""

from __future__ import annotations

import logging

from ui import settings as ui_settings

logger = logging.getLogger(__name__)

LANGUAGES = ("pt-BR", "es")
DEFAULT_LANGUAGE = "pt-BR"

_PT = {
    # навигация
    "nav.dashboard": "Dashboard",
    "nav.clients": "Clientes",
    "nav.students": "Alunos",
    "nav.leads": "Leads",
    "nav.course_leads": "Leads Curso",
    "nav.waitlist": "Lista de espera",
    "nav.appointments": "Consultas",
    "nav.calendar": "Calendário",
    "nav.knowledge": "Base de conhecimento",
    "nav.services": "Tabela de preços",
    "nav.payments": "Pagamentos",
    "nav.campaigns": "Campanhas",
    "nav.users": "Usuários",
    "nav.reports": "Relatórios",
    "nav.anamnesis": "Anamnese",
    "action.configure": "Configurações",
    "action.logout": "Sair",
    "action.refresh": "Atualizar",
    "action.exit": "Fechar",
    "action.about": "Sobre",
    "menu.file": "Arquivo",
    "menu.help": "Ajuda",
    "app.title": "CRM Clínica",
    "app.about": "CRM da clínica de estética: clientes, consultas, pagamentos e campanhas.",
    "app.records": "Registros: {count}",
    "app.signed_in": "Conectado como {name}",
    # общие
    "common.add": "Adicionar",
    "common.edit": "Editar",
    "common.delete": "Excluir",
    "common.save": "Salvar",
    "common.cancel": "Cancelar",
    "common.close": "Fechar",
    "common.refresh": "Atualizar",
    "common.clear_filters": "Limpar filtros",
    "common.search": "Buscar...",
    "common.all": "Todos",
    "common.yes": "Sim",
    "common.no": "Não",
    "common.previous": "Anterior",
    "common.next": "Próxima",
    "common.page": "Página {page} de {pages}",
    "common.showing": "Exibindo {start}-{end} de {total}",
    "common.loading": "Carregando...",
    "common.saving": "Salvando...",
    "common.deleting": "Excluindo...",
    "common.empty": "Nenhum registro encontrado.",
    "common.select_row": "Selecione um registro.",
    "common.error": "Erro",
    "common.info": "Informação",
    "common.confirm": "Confirmação",
    "common.details": "Detalhes",
    "confirm.delete_title": "Confirmar exclusão",
    "confirm.delete_text": "Deseja realmente excluir \"{name}\"? Esta ação não pode ser desfeita.",
    # ошибки
    "error.load": "Não foi possível carregar os dados.",
    "error.save": "Não foi possível salvar. Tente novamente.",
    "error.delete": "Não foi possível excluir. Tente novamente.",
    "error.network": "Falha de conexão com o servidor.",
    "error.unauthorized": "Sessão expirada. Faça login novamente.",
    "error.forbidden": "Acesso restrito a administradores.",
    "error.self_delete": "Você não pode excluir a sua própria conta.",
    "validation.required": "Preencha o campo \"{field}\".",
    "validation.invalid_number": "O campo \"{field}\" deve ser um número.",
    "validation.invalid_integer": "O campo \"{field}\" deve ser um número inteiro.",
    "validation.password_mismatch": "As senhas não conferem.",
    "validation.meeting_link_required": "Informe o link da reunião para consultas online.",
    "validation.end_before_start": "O término deve ser posterior ao início.",
    "validation.self_role": "Você não pode alterar o seu próprio perfil de acesso.",
    # поля
    "field.name": "Nome",
    "field.full_name": "Nome completo",
    "field.email": "E-mail",
    "field.phone": "Telefone",
    "field.address": "Endereço",
    "field.source": "Origem",
    "field.tags": "Tags (separadas por vírgula)",
    "field.score": "Score",
    "field.status": "Status",
    "field.notes": "Observações",
    "field.age": "Idade",
    "field.country": "País",
    "field.city": "Cidade",
    "field.birth_date": "Data de nascimento",
    "field.language": "Idioma",
    "field.created_at": "Criado em",
    "field.profession": "Profissão",
    "field.course": "Curso",
    "field.payment_ok": "Pagamento",
    "field.note": "Nota",
    "field.client": "Cliente",
    "field.stage": "Etapa",
    "field.procedure": "Procedimento",
    "field.type": "Tipo",
    "field.meeting_link": "Link da reunião",
    "field.start": "Início",
    "field.end": "Término",
    "field.appointment": "Consulta",
    "field.value": "Valor",
    "field.method": "Método",
    "field.pix_txid": "PIX txid",
    "field.receipt_url": "URL do comprovante",
    "field.title": "Título",
    "field.description": "Descrição",
    "field.all_day": "Dia inteiro",
    "field.timezone": "Fuso horário",
    "field.location": "Local",
    "field.slug": "Slug",
    "field.summary": "Resumo",
    "field.content": "Conteúdo",
    "field.category": "Categoria",
    "field.audience": "Público",
    "field.priority": "Prioridade",
    "field.source_url": "URL de origem",
    "field.updated_at": "Atualizado em",
    "field.currency": "Moeda",
    "field.price": "Preço",
    "field.duration": "Duração (min)",
    "field.active": "Ativo",
    "field.desired_course": "Curso desejado",
    "field.channel": "Canal",
    "field.message": "Mensagem",
    "field.scheduled_at": "Agendada para",
    "field.role": "Perfil",
    "field.password": "Senha",
    "field.confirm_password": "Confirmar senha",
    "field.token": "Código",
    "field.date": "Data",
    "field.payer": "Pagador",
    "field.gross": "Bruto",
    "field.fee": "Taxa",
    "field.net": "Líquido",
    "field.transaction": "Transação",
    "field.self_esteem": "Autoestima (0-10)",
    "field.period": "Período",
    # фильтры
    "filter.only_active": "Somente ativos",
    "filter.only_future": "Somente futuros",
    "filter.min_price": "Preço mínimo",
    "filter.max_price": "Preço máximo",
    "filter.contact": "Contato",
    "filter.paid": "Pagos",
    "filter.open": "Em aberto",
    # значения перечислений
    "enum.ADMIN": "Administrador",
    "enum.USER": "Usuário",
    "enum.NEW": "Novo",
    "enum.CONTACTED": "Contatado",
    "enum.QUALIFIED": "Qualificado",
    "enum.PROPOSAL": "Proposta",
    "enum.WON": "Ganho",
    "enum.LOST": "Perdido",
    "enum.BOOKED": "Agendada",
    "enum.COMPLETED": "Concluída",
    "enum.CANCELLED": "Cancelada",
    "enum.NO_SHOW": "Não compareceu",
    "enum.IN_PERSON": "Presencial",
    "enum.ONLINE": "Online",
    "enum.PENDING": "Pendente",
    "enum.CONFIRMED": "Confirmado",
    "enum.FAILED": "Falhou",
    "enum.REFUNDED": "Reembolsado",
    "enum.AVAILABLE": "Disponível",
    "enum.TRAVEL": "Viagem",
    "enum.BLOCKED": "Bloqueado",
    "enum.DRAFT": "Rascunho",
    "enum.PUBLISHED": "Publicado",
    "enum.ARCHIVED": "Arquivado",
    "enum.SCHEDULED": "Agendada",
    "enum.ACTIVE": "Ativa",
    # страницы
    "payments.confirm": "Confirmar pagamento",
    "payments.manual_tab": "Pagamentos manuais",
    "payments.paypal_tab": "PayPal",
    "paypal.sync": "Sincronizar PayPal",
    "paypal.sync_done": "Sincronização concluída. Novos registros: {created}. Atualizados: {updated}.",
    "paypal.sync_failed": "Não foi possível sincronizar com o PayPal. Tente novamente.",
    "paypal.link": "Vincular cliente",
    "paypal.link_done": "Cliente vinculado com sucesso.",
    "paypal.link_failed": "Não foi possível vincular o cliente. Tente novamente.",
    "paypal.no_client": "Sem vínculo",
    "campaigns.send": "Enviar",
    "campaigns.send_confirm": "Enviar a campanha \"{name}\" agora?",
    "campaigns.sent": "Campanha enviada.",
    "campaigns.logs": "Histórico",
    "clients.open_detail": "Abrir ficha",
    "clients.detail_title": "Ficha do cliente",
    "clients.anamnesis": "Anamnese",
    "clients.photos": "Fotos antes/depois",
    "clients.select": "Selecione um cliente",
    "dashboard.title": "Visão Geral",
    "dashboard.leads": "Leads Totais",
    "dashboard.appointments": "Consultas agendadas",
    "dashboard.payments": "Pagamentos confirmados",
    "dashboard.conversion": "Taxa de conversão",
    "dashboard.revenue_monthly": "Faturamento confirmado (mensal)",
    "dashboard.origins": "Leads por origem",
    "dashboard.load_failed": "Não foi possível carregar os dados do dashboard.",
    "reports.title": "Relatórios e métricas",
    "reports.revenue": "Faturamento",
    "reports.by_status": "Consultas por status",
    "reports.by_week": "Consultas por semana",
    "reports.period_day": "Por dia",
    "reports.period_month": "Por mês",
    "reports.apply": "Aplicar",
    "reports.load_failed": "Não foi possível carregar os relatórios.",
    # авторизация
    "auth.title": "Clínica CRM",
    "auth.login": "Entrar",
    "auth.login_failed": "Credenciais inválidas. Verifique e tente novamente.",
    "auth.register": "Criar conta",
    "auth.forgot": "Esqueci minha senha",
    "auth.forgot_sent": "Se o e-mail existir, você receberá as instruções de recuperação.",
    "auth.reset": "Redefinir senha",
    "auth.reset_done": "Senha redefinida. Faça login com a nova senha.",
    "auth.new_password": "Nova senha",
    # анамнез
    "anamnesis.title": "Anamnese Geral",
    "anamnesis.personal": "Dados pessoais",
    "anamnesis.habits": "Hábitos",
    "anamnesis.medical": "Histórico médico",
    "anamnesis.how_did_you_know": "Como nos conheceu?",
    "anamnesis.referred_by": "Recomendação de",
    "anamnesis.consent": "Concordo com o uso dos meus dados",
    "anamnesis.form_date": "Data do preenchimento",
    "anamnesis.signature": "Assinatura",
    "anamnesis.sent": "Formulário enviado com sucesso.",
    "anamnesis.submit": "Enviar",
    # настройки
    "settings.title": "Configurações do CRM",
    "settings.language": "Idioma da plataforma",
    "settings.language_hint": "Altere entre Português (Brasil) e Espanhol. Os próximos acessos utilizarão esta preferência.",
    "settings.theme": "Modo escuro",
    "settings.theme_hint": "Inverte as cores do CRM para trabalhar em ambientes pouco iluminados.",
    "settings.restart_hint": "Algumas traduções serão aplicadas ao reabrir as abas.",
    "language.pt-BR": "Português (Brasil)",
    "language.es": "Español",
}

_ES = {
    "nav.dashboard": "Panel",
    "nav.clients": "Pacientes",
    "nav.students": "Alumnos",
    "nav.leads": "Leads",
    "nav.course_leads": "Leads Curso",
    "nav.waitlist": "Lista de espera",
    "nav.appointments": "Consultas",
    "nav.calendar": "Calendario",
    "nav.knowledge": "Base de conocimiento",
    "nav.services": "Tabla de precios",
    "nav.payments": "Pagos",
    "nav.campaigns": "Campañas",
    "nav.users": "Usuarios",
    "nav.reports": "Reportes",
    "nav.anamnesis": "Anamnesis",
    "action.configure": "Configuraciones",
    "action.logout": "Salir",
    "action.refresh": "Actualizar",
    "action.exit": "Cerrar",
    "action.about": "Acerca de",
    "menu.file": "Archivo",
    "menu.help": "Ayuda",
    "app.title": "CRM Clínica",
    "app.about": "CRM de la clínica estética: pacientes, consultas, pagos y campañas.",
    "app.records": "Registros: {count}",
    "app.signed_in": "Conectado como {name}",
    "common.add": "Agregar",
    "common.edit": "Editar",
    "common.delete": "Eliminar",
    "common.save": "Guardar",
    "common.cancel": "Cancelar",
    "common.close": "Cerrar",
    "common.refresh": "Actualizar",
    "common.clear_filters": "Limpiar filtros",
    "common.search": "Buscar...",
    "common.all": "Todos",
    "common.yes": "Sí",
    "common.no": "No",
    "common.previous": "Anterior",
    "common.next": "Siguiente",
    "common.page": "Página {page} de {pages}",
    "common.showing": "Mostrando {start}-{end} de {total}",
    "common.loading": "Cargando...",
    "common.saving": "Guardando...",
    "common.deleting": "Eliminando...",
    "common.empty": "No se encontraron registros.",
    "common.select_row": "Seleccione un registro.",
    "common.error": "Error",
    "common.info": "Información",
    "common.confirm": "Confirmación",
    "common.details": "Detalles",
    "confirm.delete_title": "Confirmar eliminación",
    "confirm.delete_text": "¿Desea eliminar \"{name}\"? Esta acción no se puede deshacer.",
    "error.load": "No fue posible cargar los datos.",
    "error.save": "No fue posible guardar. Intente nuevamente.",
    "error.delete": "No fue posible eliminar. Intente nuevamente.",
    "error.network": "Falla de conexión con el servidor.",
    "error.unauthorized": "Sesión expirada. Inicie sesión nuevamente.",
    "error.forbidden": "Acceso restringido a administradores.",
    "error.self_delete": "No puede eliminar su propia cuenta.",
    "validation.required": "Complete el campo \"{field}\".",
    "validation.invalid_number": "El campo \"{field}\" debe ser un número.",
    "validation.invalid_integer": "El campo \"{field}\" debe ser un número entero.",
    "validation.password_mismatch": "Las contraseñas no coinciden.",
    "validation.meeting_link_required": "Informe el enlace de la reunión para consultas en línea.",
    "validation.end_before_start": "El término debe ser posterior al inicio.",
    "validation.self_role": "No puede cambiar su propio perfil de acceso.",
    "auth.login": "Ingresar",
    "auth.login_failed": "Credenciales inválidas. Verifique e intente nuevamente.",
    "auth.register": "Crear cuenta",
    "auth.forgot": "Olvidé mi contraseña",
    "auth.reset": "Restablecer contraseña",
    "settings.title": "Configuraciones del CRM",
    "settings.language": "Idioma de la plataforma",
    "settings.language_hint": "Cambie entre Portugués (Brasil) y Español. Los próximos accesos utilizarán esta preferencia.",
    "settings.theme": "Modo oscuro",
    "settings.theme_hint": "Invierte los colores del CRM para trabajar en ambientes con poca luz.",
    "settings.restart_hint": "Algunas traducciones se aplicarán al reabrir las pestañas.",
    "language.pt-BR": "Portugués (Brasil)",
    "language.es": "Español",
}

_CATALOGS = {"pt-BR": _PT, "es": _ES}

_current_language: str | None = None


def normalize_language(value: str | None) -> str:
    return "es" if value == "es" else DEFAULT_LANGUAGE


def current_language() -> str:
    global _current_language
    if _current_language is None:
        stored = ui_settings.get_app_settings().get("language")
        if stored is None:
            from config import get_settings

            stored = get_settings().default_language
        _current_language = normalize_language(stored)
    return _current_language


def set_language(language: str, *, persist: bool = True) -> str:
    global _current_language
    _current_language = normalize_language(language)
    if persist:
        app_settings = ui_settings.get_app_settings()
        app_settings["language"] = _current_language
        ui_settings.set_app_settings(app_settings)
    logger.info("🌐 Язык интерфейса: %s", _current_language)
    return _current_language


def tr(key: str, **params) -> str:
    """Перевод строки ``key`` на текущий язык с подстановкой ``params``."""
    text = _CATALOGS[current_language()].get(key) or _PT.get(key) or key
    if params:
        try:
            return text.format(**params)
        except (KeyError, IndexError):
            logger.warning("Не хватает параметров для перевода %s: %s", key, params)
    return text


def tr_enum(value: str | None) -> str:
    if not value:
        return ""
    key = f"enum.{value}"
    text = tr(key)
    return value if text == key else text


def tr_validation(code: str, field: str | None = None) -> str:
    """Сообщение для ``ValidationError`` с переведённым названием поля."""
    label = tr(f"field.{field}") if field else ""
    if label.startswith("field."):
        label = field or ""
    return tr(f"validation.{code}", field=label)
