"""
Domain Layer Package

Entities, errors, gateway interfaces and the pure services (entity
flattening, timestamp bucketing) the bridge is built around. Nothing in here
performs I/O.
"""
