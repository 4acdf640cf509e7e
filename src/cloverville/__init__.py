"""cloverville — village page hydration from a static JSON document."""

__version__ = "0.1.0"
