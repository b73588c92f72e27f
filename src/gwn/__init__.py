"""gwn: scanner, parser and AST for the gwn expression language."""

__version__ = "0.1.0"
