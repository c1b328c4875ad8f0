from .core import CMSModel

__all__ = ["CMSModel"]
