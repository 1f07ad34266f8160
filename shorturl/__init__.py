"""URL shortener service: short-code generation, mapping storage and redirection."""

__version__ = "0.1.0"
