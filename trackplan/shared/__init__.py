"""Shared cross-cutting helpers: request context, telemetry, utilities."""
