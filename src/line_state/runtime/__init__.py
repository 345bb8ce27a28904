"""Telemetry, settings, and the render hand-off loop."""
