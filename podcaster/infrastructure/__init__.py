"""Infrastructure layer: persistence adapters and security services."""
