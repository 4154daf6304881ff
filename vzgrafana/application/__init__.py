"""
Application Layer Package

Use cases orchestrating the middleware gateway, the entity name cache and the
Grafana DTOs.
"""
