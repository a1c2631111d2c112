"""
Core module - Entities, ports and pure functions.

Nothing in this package performs I/O; adapters implement the ports.
"""
