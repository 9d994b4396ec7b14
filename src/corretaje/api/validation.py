"""
Request Payload Validation

Checks raw JSON bodies before they reach the pydantic models so clients
get the documented 400 responses (required-field list, offering type,
email format) instead of generic validation output.
"""
import re
from typing import Any, Dict, List, Mapping, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

from src.corretaje.api.errors import BadRequestError, format_validation_errors
from src.corretaje.models.inquiry import InquiryCreate, InquiryUpdate
from src.corretaje.models.property import OFFERING_TYPES, PropertyCreate, PropertyUpdate

REQUIRED_PROPERTY_FIELDS = ("titulo", "precio", "tipo", "estado")
REQUIRED_INQUIRY_FIELDS = ("nombre", "apellido", "email", "telefono", "tipoServicio")

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

M = TypeVar("M", bound=BaseModel)


def missing_fields(payload: Mapping[str, Any], required: Sequence[str]) -> List[str]:
    """
    Required fields that are absent or empty.

    Empty means null, "", 0 or false, the same values the public
    contact form treats as not filled in.
    """
    return [field for field in required if not payload.get(field)]


def _parse(model: Type[M], payload: Mapping[str, Any], error: str) -> M:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise BadRequestError(error, details=format_validation_errors(exc.errors())) from exc


def _check_estado(payload: Mapping[str, Any]) -> None:
    if payload["estado"] not in OFFERING_TYPES:
        raise BadRequestError('Estado debe ser "venta" o "arriendo"', allowed=list(OFFERING_TYPES))


def _check_email(email: Any) -> None:
    if not isinstance(email, str) or not EMAIL_PATTERN.fullmatch(email):
        raise BadRequestError("Formato de email inválido")


def _reject_cleared(payload: Mapping[str, Any], required: Sequence[str]) -> None:
    cleared = [field for field in required if field in payload and not payload[field]]
    if cleared:
        raise BadRequestError("Campos requeridos no pueden quedar vacíos", fields=cleared)


def validate_property_create(payload: Dict[str, Any]) -> PropertyCreate:
    """
    Validate a property creation body.

    Raises:
        BadRequestError: Missing required fields, estado outside
            venta/arriendo, or malformed field values
    """
    missing = missing_fields(payload, REQUIRED_PROPERTY_FIELDS)
    if missing:
        raise BadRequestError(
            "Faltan campos requeridos",
            required=list(REQUIRED_PROPERTY_FIELDS),
            missing=missing,
        )
    _check_estado(payload)
    return _parse(PropertyCreate, payload, "Datos de propiedad inválidos")


def validate_property_update(payload: Dict[str, Any]) -> PropertyUpdate:
    """
    Validate a partial property update.

    Required fields may be omitted but not cleared, and estado keeps its
    two allowed values.
    """
    _reject_cleared(payload, REQUIRED_PROPERTY_FIELDS)
    if "estado" in payload:
        _check_estado(payload)
    return _parse(PropertyUpdate, payload, "Datos de propiedad inválidos")


def validate_inquiry_create(payload: Dict[str, Any]) -> InquiryCreate:
    """
    Validate a contact form submission.

    Raises:
        BadRequestError: Missing required fields or malformed email
    """
    missing = missing_fields(payload, REQUIRED_INQUIRY_FIELDS)
    if missing:
        raise BadRequestError(
            "Faltan campos requeridos",
            required=list(REQUIRED_INQUIRY_FIELDS),
            missing=missing,
        )
    _check_email(payload["email"])
    return _parse(InquiryCreate, payload, "Datos de consulta inválidos")


def validate_inquiry_update(payload: Dict[str, Any]) -> InquiryUpdate:
    """Validate a partial inquiry update."""
    _reject_cleared(payload, REQUIRED_INQUIRY_FIELDS + ("estado",))
    if "email" in payload:
        _check_email(payload["email"])
    return _parse(InquiryUpdate, payload, "Datos de consulta inválidos")
