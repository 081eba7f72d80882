import math

import pytest

from modelrocket.engine.units import (
    cm3_to_m3,
    cm_to_m,
    convert_display_payload,
    deg_to_rad,
    g_to_kg,
    kg_to_g,
    m_to_cm,
    mm_to_m,
)


def test_length_and_mass_helpers():
    assert cm_to_m(2.5) == pytest.approx(0.025)
    assert m_to_cm(0.33) == pytest.approx(33.0)
    assert mm_to_m(18.0) == pytest.approx(0.018)
    assert g_to_kg(12.0) == pytest.approx(0.012)
    assert kg_to_g(0.0231) == pytest.approx(23.1)
    assert cm3_to_m3(1.0) == pytest.approx(1e-6)
    assert deg_to_rad(90.0) == pytest.approx(math.pi / 2)


def test_convert_display_payload():
    payload = {
        "name": "Sparrow",
        "nose": {"length_cm": 8.0, "diameter_cm": 2.5},
        "payload_g": 10,
        "fins": [{"height_cm": 4}],
        "count": 3,
        "enabled_g": True,
    }
    converted = convert_display_payload(payload)
    assert converted["nose"] == {"length_m": pytest.approx(0.08), "diameter_m": pytest.approx(0.025)}
    assert converted["payload_kg"] == pytest.approx(0.01)
    assert converted["fins"][0]["height_m"] == pytest.approx(0.04)
    assert converted["count"] == 3
    assert converted["enabled_g"] is True
    assert converted["name"] == "Sparrow"
