"""
Base type for GuestLine request bodies
Request rules are pydantic validators that only fire during pre-flight validation
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import Field, ValidationError, ValidationInfo, computed_field, field_validator

from .models import WireModel

# Validation context key enabling the request rules
PREFLIGHT = "preflight"


def is_preflight(info: ValidationInfo) -> bool:
    return bool(info.context and info.context.get(PREFLIGHT))


def has_value(value: Any) -> bool:
    """False for None, blank text or an empty collection"""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) > 0
    return True


def require_value(value: Any, message: str, info: ValidationInfo) -> Any:
    """Reject an empty value with `message` during pre-flight validation"""
    if is_preflight(info) and not has_value(value):
        raise ValueError(message)
    return value


def failure_message(error: Dict[str, Any]) -> str:
    """Rule message of a pydantic error, without the "Value error, " prefix"""
    raised = error.get("ctx", {}).get("error")
    if isinstance(raised, Exception):
        return str(raised)
    return error["msg"]


def group_failures(failures: List[Tuple[str, str]]) -> Dict[str, List[str]]:
    """Group failure messages by field, keeping rule order"""
    grouped: Dict[str, List[str]] = {}
    for field, message in failures:
        grouped.setdefault(field, []).append(message)
    return grouped


class GuestLineRequestBase(WireModel):
    """
    Shared shape of every GuestLine request body.

    `apikey` and `version` may be left unset by callers; the operations fill
    them from the client settings before validation.
    """

    api_key: Optional[str] = Field(default=None, alias="apikey")
    version: Optional[str] = Field(default=None, alias="version")

    @computed_field(alias="action")
    @property
    def action(self) -> str:
        return self.get_action()

    def get_action(self) -> str:
        raise NotImplementedError

    @field_validator("api_key")
    @classmethod
    def api_key_required(cls, v, info: ValidationInfo):
        return require_value(v, "API key must be provided.", info)

    @field_validator("version")
    @classmethod
    def version_required(cls, v, info: ValidationInfo):
        return require_value(v, "API version must be provided.", info)

    def validate_request(self) -> List[Tuple[str, str]]:
        """
        Re-validate this request with the pre-flight rules enabled.

        Returns (field, message) for every violation, in field order.
        """
        try:
            # dict() keeps fields that are excluded from the wire body
            type(self).model_validate(dict(self), context={PREFLIGHT: True})
        except ValidationError as e:
            return [(self._field_name(error["loc"]), failure_message(error)) for error in e.errors()]
        return []

    @classmethod
    def _field_name(cls, loc: Tuple[Any, ...]) -> str:
        if not loc:
            return ""
        key = str(loc[0])
        for name, field in cls.model_fields.items():
            if key == name or key == field.alias:
                return name
        return key
