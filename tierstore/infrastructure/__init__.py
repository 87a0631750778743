"""Infrastructure Layer: Contains concrete implementations and adapters.

Connects the domain contracts to the outside world (memory, disk, Redis,
configuration files, the console).
"""
