"""PDF profile checkers."""

from .base import PdfProfile
from .level_a import AProfileLevelA
from .level_b import AProfileLevelB
from .registry import PROFILE_ORDER, PROFILE_TEXTS, build_profiles
from .tagged import TaggedProfile

__all__ = [
    "AProfileLevelA",
    "AProfileLevelB",
    "PROFILE_ORDER",
    "PROFILE_TEXTS",
    "PdfProfile",
    "TaggedProfile",
    "build_profiles",
]
