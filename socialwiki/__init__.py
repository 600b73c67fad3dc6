"""SocialWiki — collaborative wiki backend."""

from socialwiki._version import __version__

__all__ = ["__version__"]
