"""FleetGrid - role-gated fleet-management backend.

Managers own editable spreadsheet documents; admins provision accounts and
review documents across the fleet.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
