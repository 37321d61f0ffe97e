"""Domain layer: entities, access rules and business services."""
