"""
Profile Registry
================
Builds fresh profile sets in dependency order, with dependency edges wired
at construction time.

Usage:
    profiles = build_profiles([ProfileKind.PDFA1_A])
    # [TaggedProfile, AProfileLevelB, AProfileLevelA], ready to evaluate in order
"""

from __future__ import annotations

from typing import Iterable, Optional

from ..models import ProfileKind
from .base import PdfProfile
from .level_a import AProfileLevelA
from .level_b import AProfileLevelB
from .tagged import TaggedProfile

# Evaluation order: every profile after the profiles it depends on
PROFILE_ORDER = [
    ProfileKind.TAGGED,
    ProfileKind.PDFA1_B,
    ProfileKind.PDFA1_A,
]

DEPENDENCIES: dict[ProfileKind, tuple[ProfileKind, ...]] = {
    ProfileKind.TAGGED: (),
    ProfileKind.PDFA1_B: (),
    ProfileKind.PDFA1_A: (ProfileKind.PDFA1_B, ProfileKind.TAGGED),
}

PROFILE_TEXTS = {
    ProfileKind.TAGGED: TaggedProfile.profile_text,
    ProfileKind.PDFA1_B: AProfileLevelB.profile_text,
    ProfileKind.PDFA1_A: AProfileLevelA.profile_text,
}


def _with_dependencies(kinds: Iterable[ProfileKind]) -> set[ProfileKind]:
    wanted: set[ProfileKind] = set()
    pending = list(kinds)
    while pending:
        kind = pending.pop()
        if kind not in wanted:
            wanted.add(kind)
            pending.extend(DEPENDENCIES[kind])
    return wanted


def build_profiles(
    kinds: Optional[Iterable[ProfileKind]] = None,
) -> list[PdfProfile]:
    """
    Construct the requested profiles plus everything they depend on.

    Args:
        kinds: Profiles to build. Defaults to all known profiles.

    Returns:
        New profile instances in evaluation order. Instances keep
        per-document state, so build a new set for each document.
    """
    wanted = _with_dependencies(kinds if kinds is not None else PROFILE_ORDER)
    built: dict[ProfileKind, PdfProfile] = {}

    for kind in PROFILE_ORDER:
        if kind not in wanted:
            continue
        if kind == ProfileKind.TAGGED:
            built[kind] = TaggedProfile()
        elif kind == ProfileKind.PDFA1_B:
            built[kind] = AProfileLevelB()
        elif kind == ProfileKind.PDFA1_A:
            built[kind] = AProfileLevelA(
                level_b=built[ProfileKind.PDFA1_B],
                tagged=built[ProfileKind.TAGGED],
            )

    return list(built.values())
