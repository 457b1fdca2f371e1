"""
models/ - Domain Models
=======================
Domain dataclasses returned by the repositories and the request/response
schemas validated at the HTTP boundary.
"""
