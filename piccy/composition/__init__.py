"""
Composition - Multi-image operations
"""

from .merge import ImageMerger
from .mirage import MirageComposer

__all__ = ['ImageMerger', 'MirageComposer']
