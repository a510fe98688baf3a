"""Frontend interfaces for the universe.

The Tkinter GUI lives in :mod:`conways.frontends.tkinter_gui` and is imported
on demand, so the CLI works on interpreters built without Tk.
"""

from .cli import CLIGameOfLife

__all__ = ["CLIGameOfLife"]
