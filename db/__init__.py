"""
db/ - Database Layer
====================
Owns the connection pool, the schema and its provisioning.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
