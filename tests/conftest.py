"""Pytest configuration and fixtures."""

import pytest

from redibo.parsing.normalizer import normalize_comment


def make_raw_comment(
    comment_id,
    brand="Toyota",
    model="Corolla",
    rating=4,
    created="2025-05-01T10:00:00Z",
    with_vehicle=True,
    body="Muy buen auto",
):
    raw = {
        "id": comment_id,
        "id_carro": 100 + comment_id,
        "id_usuario": 7,
        "comentario": body,
        "calificacion": rating,
        "fecha_creacion": created,
        "fecha_actualizacion": created,
        "usuario": {"id": 7, "nombre": "Ana Pérez", "foto": None},
    }
    if with_vehicle:
        raw["carro"] = {
            "id": 100 + comment_id,
            "marca": brand,
            "modelo": model,
            "anio": 2020,
            "imagenes": [{"data": f"https://img.example/{comment_id}.jpg", "public_id": f"img-{comment_id}"}],
            "id_usuario_rol": 3,
        }
    return raw


def make_comment(comment_id, **kwargs):
    return normalize_comment(make_raw_comment(comment_id, **kwargs))


@pytest.fixture
def raw_vehicle():
    """A vehicle record in the current backend shape."""
    return {
        "id": 12,
        "vim": "VIM-0012",
        "anio": 2019,
        "marca": "Nissan",
        "modelo": "Sentra",
        "placa": "2345-ABC",
        "asientos": 5,
        "puertas": 4,
        "soat": True,
        "precio_por_dia": 180.5,
        "num_mantenimientos": 2,
        "transmision": "Automática",
        "estado": "Disponible",
        "direccion": "Av. América",
        "num_casa": "742",
        "provincia": "Cercado",
        "ciudad": "Cochabamba",
        "combustibles": [{"tipoDeCombustible": "Gasolina"}, {"tipoDeCombustible": "GNV"}],
        "caracteristicas": [{"nombre": "Aire acondicionado"}, {"nombre": "Bluetooth"}],
        "imagenes": [{"url": "https://img.example/12.jpg", "public_id": "car-12"}],
    }


@pytest.fixture
def six_comments():
    """Six comments, two of them on Toyotas."""
    return [
        make_comment(1, brand="Toyota", model="Corolla", rating=4.5, created="2025-01-10T09:00:00Z"),
        make_comment(2, brand="Nissan", model="Sentra", rating=3, created="2025-02-11T09:00:00Z"),
        make_comment(3, brand="Suzuki", model="Swift", rating=5, created="2025-03-12T09:00:00Z"),
        make_comment(4, brand="TOYOTA", model="Hilux", rating=2, created="2025-04-13T09:00:00Z"),
        make_comment(5, brand="Kia", model="Rio", rating=1, created="2025-05-14T09:00:00Z"),
        make_comment(6, brand="Hyundai", model="Accent", rating=3.5, created="2025-06-15T09:00:00Z"),
    ]
