"""Emulator, errors and command line for a TIS-100 style single-node assembly language."""

__version__ = "1.0"
__all__ = ["cli", "emulator", "errors"]