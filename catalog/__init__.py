"""Read-only racing and sports catalog services."""
