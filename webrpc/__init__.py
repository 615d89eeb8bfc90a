"""Schema model, type expressions, RIDL lexer and code-generation helpers for webrpc."""

__version__ = "0.6.0"