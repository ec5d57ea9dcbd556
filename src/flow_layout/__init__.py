"""flow-layout: layered node placement for API-test flow graphs."""

__version__ = "0.1.0"
