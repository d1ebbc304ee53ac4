"""autoprops — inject configured frontmatter properties into markdown notes."""

__version__ = "0.1.0"
