"""statepermit - hierarchical permission authorization for navigation states."""

__version__ = "0.1.0"
