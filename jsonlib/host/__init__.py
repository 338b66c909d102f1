from .content import Content, ContentLoader
from .mods import ModManifest, ModRegistry
from .parser import ContentParser, ModNotLoadingError

__all__ = [
    "Content",
    "ContentLoader",
    "ContentParser",
    "ModManifest",
    "ModNotLoadingError",
    "ModRegistry",
]
