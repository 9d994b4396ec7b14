"""
Shape Translator

Maps records between the external API shape (nested objects, camelCase
keys) and the flat snake_case column layout of the relational tables.

Both directions work on plain mappings so they stay pure: callers dump
pydantic models with ``model_dump(by_alias=True, exclude_unset=True)``
before calling ``*_to_storage`` and validate the output of
``*_to_external`` back into models.
"""
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Tuple

from src.corretaje.models.base import utc_now

FieldPath = Tuple[str, ...]

# External path -> storage column. Timestamps are read-only: they are
# produced by the server and never taken from a client payload.
PROPERTY_FIELD_MAP: Dict[FieldPath, str] = {
    ("id",): "id",
    ("titulo",): "titulo",
    ("descripcion",): "descripcion",
    ("precio",): "precio",
    ("tipo",): "tipo",
    ("estado",): "estado",
    ("ubicacion", "direccion"): "direccion",
    ("ubicacion", "comuna"): "comuna",
    ("ubicacion", "ciudad"): "ciudad",
    ("ubicacion", "region"): "region",
    ("caracteristicas", "dormitorios"): "dormitorios",
    ("caracteristicas", "banos"): "banos",
    ("caracteristicas", "metrosCuadrados"): "metros_cuadrados",
    ("caracteristicas", "estacionamientos"): "estacionamientos",
    ("caracteristicas", "amoblado"): "amoblado",
    ("amenidades",): "amenidades",
    ("imagenes",): "imagenes",
    ("fechaDisponible",): "fecha_disponible",
    ("garantia",): "garantia",
    ("agente", "nombre"): "agente_nombre",
    ("agente", "telefono"): "agente_telefono",
    ("agente", "email"): "agente_email",
}

INQUIRY_FIELD_MAP: Dict[FieldPath, str] = {
    ("id",): "id",
    ("nombre",): "nombre",
    ("apellido",): "apellido",
    ("email",): "email",
    ("telefono",): "telefono",
    ("tipoServicio",): "tipo_servicio",
    ("tipoPropiedad",): "tipo_propiedad",
    ("ubicacionPreferida",): "ubicacion_preferida",
    ("presupuestoMaximo",): "presupuesto_maximo",
    ("dormitorios",): "dormitorios",
    ("banos",): "banos",
    ("estacionamientos",): "estacionamientos",
    ("amenidadesDeseadas",): "amenidades_deseadas",
    ("creditoPreAprobado",): "credito_pre_aprobado",
    ("montoPreAprobado",): "monto_pre_aprobado",
    ("plazoBusqueda",): "plazo_busqueda",
    ("fechaMudanza",): "fecha_mudanza",
    ("comentarios",): "comentarios",
    ("estado",): "estado",
    ("prioridad",): "prioridad",
}

TIMESTAMP_FIELDS: Dict[str, str] = {
    "fechaCreacion": "fecha_creacion",
    "fechaActualizacion": "fecha_actualizacion",
}

PROPERTY_DEFAULTS: Dict[str, Any] = {
    "amoblado": False,
    "amenidades": [],
    "imagenes": [],
}

INQUIRY_DEFAULTS: Dict[str, Any] = {
    "amenidades_deseadas": [],
}

# Columns holding sequences; NULL reads back as an empty list
PROPERTY_LIST_COLUMNS = ("amenidades", "imagenes")
INQUIRY_LIST_COLUMNS = ("amenidades_deseadas",)

_MISSING = object()


def _lookup(record: Mapping[str, Any], path: FieldPath) -> Any:
    """
    Resolve a field path, returning _MISSING when any step is absent.

    An explicit None for a nested object counts as present: every column
    below it resolves to None.
    """
    current: Any = record
    for key in path:
        if current is None:
            return None
        if not isinstance(current, Mapping) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _to_storage(
    external: Mapping[str, Any],
    field_map: Dict[FieldPath, str],
    defaults: Dict[str, Any],
    partial: bool,
    now: Optional[datetime],
) -> Dict[str, Any]:
    stored: Dict[str, Any] = {}
    for path, column in field_map.items():
        value = _lookup(external, path)
        if value is _MISSING:
            if partial:
                continue
            value = None
        if value is None and column in defaults:
            default = defaults[column]
            # Sequence columns are never NULL, even when a patch clears them
            if isinstance(default, list):
                value = []
            elif not partial:
                value = default
        stored[column] = list(value) if isinstance(value, (list, tuple)) else value

    stored["fecha_actualizacion"] = now or utc_now()
    return stored


def _to_external(
    stored: Mapping[str, Any],
    field_map: Dict[FieldPath, str],
    list_columns: Tuple[str, ...],
) -> Dict[str, Any]:
    external: Dict[str, Any] = {}
    for path, column in field_map.items():
        value = stored.get(column)
        if column in list_columns:
            value = list(value) if value else []
        target = external
        for key in path[:-1]:
            target = target.setdefault(key, {})
        target[path[-1]] = value

    for field, column in TIMESTAMP_FIELDS.items():
        external[field] = stored.get(column)
    return external


def property_to_storage(
    external: Mapping[str, Any],
    partial: bool = False,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Flatten an external property into storage columns.

    Args:
        external: Property in API shape (camelCase keys, nested
            ubicacion/caracteristicas/agente)
        partial: True for update patches. Absent fields are then left out
            entirely so the backend keeps the current column values, and no
            defaults are applied.
        now: Timestamp stamped into fecha_actualizacion (defaults to now)

    Returns:
        Column mapping. Unknown keys and client timestamps are dropped.
    """
    return _to_storage(external, PROPERTY_FIELD_MAP, PROPERTY_DEFAULTS, partial, now)


def property_to_external(stored: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Rebuild the API shape of a property from its storage columns.

    Nested objects are always present; sequences default to empty lists;
    timestamps pass through unchanged.
    """
    return _to_external(stored, PROPERTY_FIELD_MAP, PROPERTY_LIST_COLUMNS)


def inquiry_to_storage(
    external: Mapping[str, Any],
    partial: bool = False,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Rename an external inquiry to storage columns (flat mapping)."""
    return _to_storage(external, INQUIRY_FIELD_MAP, INQUIRY_DEFAULTS, partial, now)


def inquiry_to_external(stored: Mapping[str, Any]) -> Dict[str, Any]:
    """Rename inquiry storage columns back to the API shape."""
    return _to_external(stored, INQUIRY_FIELD_MAP, INQUIRY_LIST_COLUMNS)
