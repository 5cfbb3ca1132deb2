"""
Animation - Frame-level operations on animated images
"""

from .pipeline import AnimationPipeline

__all__ = ['AnimationPipeline']
