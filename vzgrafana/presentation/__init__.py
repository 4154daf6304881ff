"""
Presentation Layer Package

HTTP routers, request logging middleware and error handlers.
"""
