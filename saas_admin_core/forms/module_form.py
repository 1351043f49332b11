"""
SaaS module form.
"""

import copy
import re
from typing import Any, Dict, List, Optional

from ..constants import MODULE_CODE_PATTERN
from ..enums import FormMode
from ..exceptions import BaseError
from ..utils.icon_registry import DEFAULT_ICON, IconHandle, resolve_icon, search_icons
from .field_walker import is_absent, parse_number
from .form_state import FormWorkflow

_CODE_RE = re.compile(MODULE_CODE_PATTERN)


class ModuleForm(FormWorkflow):
    """Create or edit a module of the SaaS catalog."""

    DEFAULTS: Dict[str, Any] = {
        "name": "",
        "code": "",
        "description": "",
        "icon": DEFAULT_ICON,
        "isCore": False,
        "price": 0,
        "isActive": True,
    }
    RESOURCE_LABEL = "o módulo"
    CONFLICT_MESSAGES = {
        "code": (
            "Código já em uso",
            "Já existe um módulo com este código. Por favor, escolha outro código.",
        ),
    }

    def __init__(self, gateway, mode: FormMode = FormMode.CREATE, record_id: Optional[str] = None):
        super().__init__(gateway, mode=mode, record_id=record_id)
        self.icon_search = ""

    def load(self, module_id: str) -> bool:
        try:
            record = self.gateway.get_module(module_id)
        except BaseError as e:
            self._handle_store_error(e)
            return False
        self._populate(record)
        return True

    def reset(self) -> None:
        """Back to an empty create form."""
        self.values = copy.deepcopy(self.DEFAULTS)
        self.errors = {}
        self.mode = FormMode.CREATE
        self.record_id = None
        self.icon_search = ""

    def submit(self):
        """Submit; a successful create clears the form for the next module."""
        creating = self.mode == FormMode.CREATE
        result = super().submit()
        if result.success and creating:
            self.reset()
        return result

    # Icons

    def select_icon(self, name: Optional[str]) -> IconHandle:
        handle = resolve_icon(name)
        self.values["icon"] = handle.name
        return handle

    @property
    def icon(self) -> IconHandle:
        return resolve_icon(self.values.get("icon"))

    def icon_choices(self, term: Optional[str] = None) -> List[str]:
        if term is not None:
            self.icon_search = term
        return search_icons(self.icon_search)

    # Validation and payload

    def _collect_errors(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}

        if is_absent((self.values.get("name") or "").strip()):
            errors["name"] = "Nome é obrigatório"

        code = (self.values.get("code") or "").strip()
        if not code:
            errors["code"] = "Código é obrigatório"
        elif not _CODE_RE.match(code):
            errors["code"] = "Código deve conter apenas letras minúsculas, números e underscores"

        price = self.values.get("price")
        number = 0.0 if is_absent(price) else parse_number(price)
        if number is None:
            errors["price"] = "Preço inválido"
        elif number < 0:
            errors["price"] = "Preço não pode ser negativo"

        return errors

    def payload(self) -> Dict[str, Any]:
        values = copy.deepcopy(self.values)
        values["name"] = values["name"].strip()
        values["code"] = values["code"].strip()
        values["description"] = values.get("description") or None
        values["icon"] = resolve_icon(values.get("icon")).name
        price = values.get("price")
        values["price"] = 0.0 if is_absent(price) else parse_number(price)
        return values

    def _persist(self):
        if self.mode == FormMode.EDIT:
            return self.gateway.update_module(self.record_id, self.payload())
        return self.gateway.create_module(self.payload())
