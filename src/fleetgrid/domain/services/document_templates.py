"""Starter templates for new tabular documents."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DocumentTemplate:
    """A named starter header list."""

    key: str
    name: str
    headers: tuple[str, ...]


BLANK_TEMPLATE_KEY = "blank"

TEMPLATES: dict[str, DocumentTemplate] = {
    template.key: template
    for template in (
        DocumentTemplate(
            key="vehicle",
            name="Vehicle Register",
            headers=(
                "Vehicle ID",
                "Make",
                "Model",
                "Year",
                "Registration",
                "Status",
                "Last Service",
            ),
        ),
        DocumentTemplate(
            key="driver",
            name="Driver Log",
            headers=("Driver ID", "Name", "License Number", "Phone", "Email", "Status"),
        ),
        DocumentTemplate(
            key="expense",
            name="Expense Tracker",
            headers=(
                "Date",
                "Category",
                "Description",
                "Amount",
                "Vehicle ID",
                "Payment Method",
            ),
        ),
        DocumentTemplate(
            key=BLANK_TEMPLATE_KEY,
            name="Blank Spreadsheet",
            headers=("Column 1", "Column 2", "Column 3"),
        ),
    )
}


def is_known_template(key: str | None) -> bool:
    return key is not None and key in TEMPLATES


def get_template(key: str | None) -> DocumentTemplate:
    """Look up a template, falling back to the blank one for unknown keys."""
    if key is not None and key in TEMPLATES:
        return TEMPLATES[key]
    return TEMPLATES[BLANK_TEMPLATE_KEY]
