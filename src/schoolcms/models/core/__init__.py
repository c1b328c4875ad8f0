from .core_model import CMSModel

__all__ = ["CMSModel"]
