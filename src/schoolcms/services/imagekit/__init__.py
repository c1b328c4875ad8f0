from .client import AssetStore, ImageKitClient

__all__ = ["AssetStore", "ImageKitClient"]
