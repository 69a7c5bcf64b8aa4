"""Application layer: services that orchestrate domain operations."""
