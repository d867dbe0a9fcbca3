from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from placemap.app import app
from placemap.places.models import Place
from placemap.recommendations.data_store import set_places
from placemap.user_status.session_store import clear_status_maps


def make_place(place_id: str, name: str | None = None, **fields) -> Place:
    return Place(place_id=place_id, name=name or f"Place {place_id}", **fields)


@pytest.fixture
def catalog() -> list[Place]:
    return [
        make_place("c1", "Morning Roast", category="Coffee", city="Taipei", recent_visitors="u1,u2,u3"),
        make_place("c2", "Bean There", category="Coffee", city="Taipei", recent_visitors="u4"),
        make_place("c3", "Harbour Coffee", category="Coffee", city="Keelung"),
        make_place("b1", "Crumbs", category="Bakery", city="Taipei", recent_visitors="u1,u2"),
        make_place("b2", "Loaf", category="Bakery", city="Tainan"),
        make_place("k1", "Paper Trail", category="Books", city="Tainan", recent_visitors="u9"),
    ]


@pytest.fixture
def client(catalog):
    set_places(catalog)
    with TestClient(app) as c:
        yield c
    set_places(None)
    clear_status_maps()
