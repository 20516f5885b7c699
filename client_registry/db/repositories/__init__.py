"""
Per-domain repository modules for database access.

The store classes implement the engine's persistence protocols on top of a
shared `Session`; none of them commit. Module-level functions cover plain
read queries used by the service and API layers.
"""
