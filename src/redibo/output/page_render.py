"""Render derived views as markdown or JSON for the CLI."""

import json
from typing import Dict, List, Optional

from ..query.paginator import PageLinks, PageWindow
from ..query.query_spec import QuerySpec
from ..reviews.review_models import CanonicalComment
from ..utils.time import to_utc_z, utc_now_z
from ..vehicles.vehicle_models import CanonicalVehicle
from ..views.derived import (
    FleetStats,
    availability_label,
    city_label,
    comment_body,
    cover_image,
    format_comment_date,
    format_range_bound,
    primary_fuel,
    star_breakdown,
    vehicle_title,
)


def comment_card(comment: CanonicalComment) -> Dict:
    """Presentation-ready dict for one comment."""
    stars = star_breakdown(comment.rating)
    return {
        "id": comment.id,
        "title": vehicle_title(comment.vehicle),
        "image": cover_image(comment.vehicle),
        "date": format_comment_date(comment.created_at),
        "created_at_utc": to_utc_z(comment.created_at),
        "rating": comment.rating,
        "stars": {"full": stars.full, "half": stars.has_half, "empty": stars.empty},
        "body": comment_body(comment),
        "author": comment.author.name,
    }


def _pagination_line(links: PageLinks) -> str:
    numbers = " ".join(f"[{n}]" if n == links.current else str(n) for n in links.numbers)
    if links.show_ellipsis:
        numbers += " …"
    prev_marker = "«" if links.has_previous else " "
    next_marker = "»" if links.has_next else " "
    return f"{prev_marker} {numbers} {next_marker}".strip()


def render_comments_markdown(
    window: PageWindow[CanonicalComment],
    links: PageLinks,
    spec: QuerySpec,
    error: Optional[str] = None,
) -> str:
    lines: List[str] = ["# Comentarios sobre mis vehículos", ""]

    filters = []
    if spec.has_search:
        filters.append(f'búsqueda "{spec.search_term}"')
    if spec.has_date_range:
        filters.append(f"{format_range_bound(spec.date_from)} - {format_range_bound(spec.date_to)}")
    filters.append(f"orden {spec.sort_key.value} {spec.sort_direction.value}")
    lines.append(f"_{'; '.join(filters)}_")
    lines.append("")

    if error:
        lines.append("No se pudieron cargar los comentarios.")
        return "\n".join(lines)

    if not window.items:
        lines.append("No se encontraron comentarios con los filtros aplicados.")
        return "\n".join(lines)

    for comment in window.items:
        card = comment_card(comment)
        stars = star_breakdown(comment.rating)
        lines.append(f"## {card['title']}")
        lines.append(f"{card['date']} · {stars.render()} {comment.rating:g}")
        lines.append("")
        lines.append(card["body"])
        lines.append("")
        lines.append(f"Por: {card['author']}")
        lines.append("")

    if links.visible:
        lines.append(_pagination_line(links))
        lines.append("")
    lines.append(f"Página {window.page} de {window.total_pages} ({window.total_items} comentarios)")
    return "\n".join(lines)


def render_comments_json(
    window: PageWindow[CanonicalComment],
    links: PageLinks,
    spec: QuerySpec,
    error: Optional[str] = None,
) -> str:
    data = {
        "rendered_at_utc": utc_now_z(),
        "query": spec.model_dump(mode="json"),
        "error": error,
        "page": window.page,
        "total_pages": window.total_pages,
        "total_items": window.total_items,
        "links": {
            "numbers": links.numbers,
            "show_ellipsis": links.show_ellipsis,
            "has_previous": links.has_previous,
            "has_next": links.has_next,
            "visible": links.visible,
        },
        "items": [comment_card(comment) for comment in window.items],
    }
    return json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False)


def vehicle_detail(vehicle: CanonicalVehicle) -> Dict:
    data = vehicle.model_dump(mode="json")
    data["availability_label"] = availability_label(vehicle.availability)
    data["primary_fuel"] = primary_fuel(vehicle)
    return data


def render_vehicles_markdown(
    vehicles: List[CanonicalVehicle],
    stats: FleetStats,
    selected: Optional[CanonicalVehicle] = None,
    error: Optional[str] = None,
) -> str:
    lines: List[str] = ["# Tablero de Estado de Automóviles", ""]
    if error:
        lines.append(error)
        return "\n".join(lines)
    if not vehicles:
        lines.append("No tienes autos registrados")
        return "\n".join(lines)

    lines.append(f"Total: {stats.total} · Con placa: {stats.with_plate}")
    lines.append("")
    for vehicle in vehicles:
        marker = "→ " if selected is not None and selected.id == vehicle.id else ""
        lines.append(
            f"- {marker}**{vehicle.brand} {vehicle.model}** ({vehicle.year} • {vehicle.plate}) "
            f"[{availability_label(vehicle.availability)}] "
            f"{vehicle.transmission} · ${vehicle.daily_price:g}/día · {primary_fuel(vehicle)} · {city_label(vehicle)}"
        )
    lines.append("")

    if selected is None:
        lines.append("Seleccione un vehículo para ver detalles completos")
        return "\n".join(lines)

    lines.append(f"## {selected.brand} {selected.model} ({selected.year})")
    lines.append("")
    lines.append(f"- VIM: {selected.vin}")
    lines.append(f"- Placa: {selected.plate or 'No registrada'}")
    lines.append(f"- Asientos/Puertas: {selected.seats} / {selected.doors}")
    lines.append(f"- SOAT: {'Vigente' if selected.insured else 'No vigente'}")
    lines.append(f"- Mantenimientos: {selected.maintenance_count}")
    street = selected.address.street
    if selected.address.house_number:
        street = f"{street} #{selected.address.house_number}"
    lines.append(f"- Ubicación: {street.strip()} {city_label(selected)}".rstrip())
    features = ", ".join(selected.features) if selected.features else "No hay características registradas"
    lines.append(f"- Características: {features}")
    return "\n".join(lines)


def render_vehicles_json(
    vehicles: List[CanonicalVehicle],
    stats: FleetStats,
    selected: Optional[CanonicalVehicle] = None,
    error: Optional[str] = None,
) -> str:
    data = {
        "rendered_at_utc": utc_now_z(),
        "error": error,
        "stats": {"total": stats.total, "with_plate": stats.with_plate},
        "vehicles": [vehicle_detail(vehicle) for vehicle in vehicles],
        "selected_id": selected.id if selected is not None else None,
    }
    return json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False)
