"""uiquery command-line tool."""

from uiquery import __version__

__all__ = ["__version__"]
