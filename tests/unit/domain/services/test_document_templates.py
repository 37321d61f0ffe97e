"""Unit tests for document templates."""

import pytest

from fleetgrid.domain.services import TEMPLATES, get_template


def test_vehicle_template():
    template = get_template("vehicle")
    assert template.name == "Vehicle Register"
    assert template.headers == (
        "Vehicle ID",
        "Make",
        "Model",
        "Year",
        "Registration",
        "Status",
        "Last Service",
    )


@pytest.mark.parametrize("key", ["unknown", "", None, "VEHICLE"])
def test_unknown_key_falls_back_to_blank(key):
    template = get_template(key)
    assert template.key == "blank"
    assert template.headers == ("Column 1", "Column 2", "Column 3")


def test_all_templates_have_headers():
    assert set(TEMPLATES) == {"vehicle", "driver", "expense", "blank"}
    assert all(template.headers for template in TEMPLATES.values())
