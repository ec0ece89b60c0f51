"""Infrastructure layer: persistence, cache, external APIs, security."""
