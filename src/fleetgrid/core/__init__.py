"""Core configuration and logging for FleetGrid."""
