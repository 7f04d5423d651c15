"""Observability – logging, telemetry and metrics."""
