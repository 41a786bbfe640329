"""tanstack-starter -- interactive scaffolder for TanStack Start projects."""

__version__ = "0.1.0"
