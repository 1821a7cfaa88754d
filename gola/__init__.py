"""Transaction helpers and generated-code file handling for table-oriented database access."""

__version__ = "0.1.1"

__all__ = ["codegen", "tx", "types"]