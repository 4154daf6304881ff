"""
Infrastructure Layer Package

Implementations of the domain interfaces that talk to the outside world:
the volkszaehler middleware over HTTP.
"""
