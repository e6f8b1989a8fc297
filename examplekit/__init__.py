"""Small example programs and library modules, each showing one idea."""

__version__ = "0.1.0"