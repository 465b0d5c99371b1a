"""Reconcile raw backend records into canonical view models.

Backend versions disagree on field names, nesting and types. Every
reconciliation rule lives here as an ordered alias table; the first
present, non-empty alternative wins and anything missing falls back to the
field's documented default. Record-level normalization never fails. Only
the envelope functions can raise, and they do so for the whole payload.
"""

import math
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..retrieval.profile_models import UserProfile
from ..reviews.review_models import AuthorSummary, CanonicalComment, VehicleSummary
from ..utils.logging import get_logger
from ..utils.time import EPOCH, parse_timestamp
from ..vehicles.vehicle_models import (
    AvailabilityState,
    CanonicalVehicle,
    VehicleAddress,
    VehicleFleet,
    VehicleImage,
)

logger = get_logger(__name__)


class MalformedRecordError(ValueError):
    """A fetched payload does not have the list/envelope shape we rely on."""


VEHICLE_FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "id": ("id",),
    "vin": ("vim", "vin"),
    "year": ("anio", "año"),
    "brand": ("marca",),
    "model": ("modelo",),
    "plate": ("placa",),
    "seats": ("asientos",),
    "doors": ("puertas",),
    "insured": ("soat",),
    "daily_price": ("precio_por_dia",),
    "maintenance_count": ("num_mantenimientos",),
    "transmission": ("transmision", "transmicion"),
    "availability": ("estado",),
}

COMMENT_FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "id": ("id",),
    "vehicle_id": ("id_carro",),
    "user_id": ("id_usuario",),
    "body": ("comentario",),
    "rating": ("calificacion",),
    "created_at": ("fecha_creacion",),
    "updated_at": ("fecha_actualizacion",),
    "author": ("usuario",),
    "vehicle": ("carro",),
}

VEHICLE_SUMMARY_ALIASES: Dict[str, Tuple[str, ...]] = {
    "id": ("id",),
    "brand": ("marca",),
    "model": ("modelo",),
    "year": ("anio", "año"),
    "owner_role_id": ("id_usuario_rol",),
}

# (list field, path to the value inside each entry)
FUEL_TYPE_SOURCES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("combustibles", ("tipoDeCombustible",)),
    ("combustiblesporCarro", ("combustible", "tipoDeCombustible")),
)
FEATURE_SOURCES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("caracteristicas", ("nombre",)),
    ("caracteristicasAdicionalesCarro", ("carasteristicasAdicionales", "nombre")),
)

IMAGE_CONTENT_ALIASES: Tuple[str, ...] = ("url", "data")
IMAGE_ID_ALIASES: Tuple[str, ...] = ("public_id",)

AVAILABILITY_ALIASES: Dict[str, AvailabilityState] = {
    "disponible": AvailabilityState.AVAILABLE,
    "available": AvailabilityState.AVAILABLE,
    "reservado": AvailabilityState.RESERVED,
    "reserved": AvailabilityState.RESERVED,
    "mantenimiento": AvailabilityState.MAINTENANCE,
    "maintenance": AvailabilityState.MAINTENANCE,
}


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def resolve_alias(raw: Mapping, names: Iterable[str]) -> Any:
    """Return the first present, non-empty value among ``names`` (or None)."""
    for name in names:
        value = raw.get(name)
        if not _is_empty(value):
            return value
    return None


def _as_int(value: Any, default: int = 0) -> int:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return default
        return int(number) if math.isfinite(number) else default
    return default


def _as_float(value: Any, default: float = 0.0) -> float:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return default
    else:
        return default
    return number if math.isfinite(number) else default


def _as_str(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "si", "sí", "yes", "vigente")
    return False


def _as_mapping(value: Any) -> Dict:
    return value if isinstance(value, dict) else {}


def _name_of(value: Any) -> str:
    """Province/city may arrive as a bare string or as ``{"nombre": ...}``."""
    if isinstance(value, dict):
        return _as_str(value.get("nombre"))
    return _as_str(value)


def _dig(entry: Any, path: Sequence[str]) -> Any:
    current = entry
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def _remap_nested(raw: Mapping, sources: Sequence[Tuple[str, Sequence[str]]]) -> List[str]:
    """Flatten the first non-empty relational list into an ordered list of names."""
    for list_field, path in sources:
        entries = raw.get(list_field)
        if not isinstance(entries, list) or not entries:
            continue
        names = []
        for entry in entries:
            value = entry if isinstance(entry, str) else _dig(entry, path)
            if not _is_empty(value):
                names.append(_as_str(value))
        return names
    return []


def normalize_image(raw: Any) -> Optional[VehicleImage]:
    """Map ``{url|data, public_id}`` (or a bare string) to a VehicleImage."""
    if isinstance(raw, str):
        return VehicleImage(content=raw) if raw.strip() else None
    if not isinstance(raw, dict):
        return None
    content = _as_str(resolve_alias(raw, IMAGE_CONTENT_ALIASES))
    if not content:
        return None
    content_id = resolve_alias(raw, IMAGE_ID_ALIASES)
    return VehicleImage(content=content, content_id=_as_str(content_id) or None)


def _normalize_images(value: Any) -> List[VehicleImage]:
    if not isinstance(value, list):
        return []
    images = []
    for entry in value:
        image = normalize_image(entry)
        if image is not None:
            images.append(image)
    return images


def normalize_availability(value: Any) -> AvailabilityState:
    """Map a backend status string onto the three canonical states."""
    if isinstance(value, AvailabilityState):
        return value
    key = _as_str(value).strip().lower()
    return AVAILABILITY_ALIASES.get(key, AvailabilityState.MAINTENANCE)


def normalize_address(raw: Mapping) -> VehicleAddress:
    """Build the address from flat fields or from a nested ``direccion`` object."""
    direccion = raw.get("direccion")
    if isinstance(direccion, dict):
        provincia = direccion.get("provincia")
        city = _name_of(_dig(provincia, ("ciudad",))) or _name_of(raw.get("ciudad"))
        return VehicleAddress(
            street=_as_str(direccion.get("calle")),
            house_number=_as_str(direccion.get("num_casa")) or _as_str(raw.get("num_casa")),
            province=_name_of(provincia) or _name_of(raw.get("provincia")),
            city=city,
        )
    return VehicleAddress(
        street=_as_str(direccion),
        house_number=_as_str(raw.get("num_casa")),
        province=_name_of(raw.get("provincia")),
        city=_name_of(raw.get("ciudad")),
    )


def normalize_vehicle(raw: Any) -> CanonicalVehicle:
    """
    Turn one raw vehicle record into a CanonicalVehicle.

    Never raises: absent, null or wrongly-typed fields get their defaults.

    Args:
        raw: Raw vehicle dict as returned by ``/api/carros/{hostId}``

    Returns:
        CanonicalVehicle with every field populated
    """
    raw = _as_mapping(raw)
    field = {name: resolve_alias(raw, names) for name, names in VEHICLE_FIELD_ALIASES.items()}

    return CanonicalVehicle(
        id=_as_int(field["id"]),
        vin=_as_str(field["vin"]),
        brand=_as_str(field["brand"]),
        model=_as_str(field["model"]),
        year=_as_int(field["year"]),
        plate=_as_str(field["plate"]),
        seats=max(_as_int(field["seats"]), 0),
        doors=max(_as_int(field["doors"]), 0),
        insured=_as_bool(field["insured"]),
        daily_price=max(_as_float(field["daily_price"]), 0.0),
        maintenance_count=max(_as_int(field["maintenance_count"]), 0),
        transmission=_as_str(field["transmission"]),
        availability=normalize_availability(field["availability"]),
        address=normalize_address(raw),
        fuel_types=_remap_nested(raw, FUEL_TYPE_SOURCES),
        features=_remap_nested(raw, FEATURE_SOURCES),
        images=_normalize_images(raw.get("imagenes")),
    )


def normalize_vehicle_summary(raw: Any) -> Optional[VehicleSummary]:
    """Embedded ``carro`` relation of a comment; None when it was not joined."""
    if not isinstance(raw, dict):
        return None
    field = {name: resolve_alias(raw, names) for name, names in VEHICLE_SUMMARY_ALIASES.items()}
    return VehicleSummary(
        id=_as_int(field["id"]),
        brand=_as_str(field["brand"]),
        model=_as_str(field["model"]),
        year=_as_int(field["year"]),
        images=_normalize_images(raw.get("imagenes")),
        owner_role_id=_as_int(field["owner_role_id"]),
    )


def normalize_author(raw: Any) -> AuthorSummary:
    raw = _as_mapping(raw)
    photo = raw.get("foto")
    return AuthorSummary(
        id=_as_int(raw.get("id")),
        name=_as_str(raw.get("nombre")),
        photo=photo if isinstance(photo, str) and photo.strip() else None,
    )


def normalize_comment(raw: Any) -> CanonicalComment:
    """
    Turn one raw comment record into a CanonicalComment.

    Timestamps are parsed here (unparseable creation time falls back to the
    Unix epoch, unparseable update time to the creation time) and the rating
    is clamped to [0, 5].

    Args:
        raw: Raw comment dict as returned by ``/api/comentarios-carro``

    Returns:
        CanonicalComment with every field populated
    """
    raw = _as_mapping(raw)
    field = {name: resolve_alias(raw, names) for name, names in COMMENT_FIELD_ALIASES.items()}

    created_at = parse_timestamp(field["created_at"]) or EPOCH
    updated_at = parse_timestamp(field["updated_at"]) or created_at
    rating = min(max(_as_float(field["rating"]), 0.0), 5.0)

    return CanonicalComment(
        id=_as_int(field["id"]),
        vehicle_id=_as_int(field["vehicle_id"]),
        user_id=_as_int(field["user_id"]),
        body=_as_str(field["body"]),
        rating=rating,
        created_at=created_at,
        updated_at=updated_at,
        author=normalize_author(field["author"]),
        vehicle=normalize_vehicle_summary(field["vehicle"]),
    )


def _require_records(records: Any, what: str) -> List[Dict]:
    if not isinstance(records, list):
        raise MalformedRecordError(f"Invalid response format: {what} is not a list")
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise MalformedRecordError(f"Invalid response format: {what}[{index}] is not an object")
    return records


def normalize_vehicle_envelope(payload: Any) -> VehicleFleet:
    """
    Normalize the ``{autos, total, autos_con_placa}`` envelope.

    All-or-nothing: a missing or non-list ``autos`` (or a non-object entry)
    fails the whole payload.

    Raises:
        MalformedRecordError: If the envelope shape is not usable
    """
    if not isinstance(payload, dict):
        raise MalformedRecordError("Invalid response format: vehicle envelope is not an object")
    if "autos" not in payload:
        raise MalformedRecordError('Invalid response format: "autos" array not found')
    records = _require_records(payload["autos"], "autos")

    fleet = VehicleFleet(
        vehicles=[normalize_vehicle(record) for record in records],
        reported_total=max(_as_int(payload.get("total")), 0),
        reported_with_plate=max(_as_int(payload.get("autos_con_placa")), 0),
    )
    logger.debug("Normalized %d vehicles", len(fleet.vehicles))
    return fleet


def normalize_comment_list(payload: Any) -> List[CanonicalComment]:
    """
    Normalize a bare list of raw comments.

    Raises:
        MalformedRecordError: If the payload is not a list of objects
    """
    records = _require_records(payload, "comments")
    comments = [normalize_comment(record) for record in records]
    logger.debug("Normalized %d comments", len(comments))
    return comments


def normalize_profile(payload: Any) -> UserProfile:
    """
    Normalize the ``/api/perfil`` response.

    The profile id is what every host-scoped fetch is keyed on, so a missing
    id fails the fetch instead of defaulting.

    Raises:
        MalformedRecordError: If the payload is not an object or has no id
    """
    if not isinstance(payload, dict) or _is_empty(payload.get("id")):
        raise MalformedRecordError("Could not read the user session: profile has no id")
    roles = payload.get("roles")
    return UserProfile(
        id=_as_int(payload["id"]),
        name=_as_str(payload.get("nombre")),
        email=_as_str(payload.get("correo")),
        city=_name_of(payload.get("ciudad")),
        roles=[_as_str(role) for role in roles if _as_str(role)] if isinstance(roles, list) else [],
    )
