"""Time intervals that are blocked for synchronising a single DoF."""

from __future__ import annotations

import copy
import sys
from dataclasses import dataclass, field
from typing import Optional, Sequence

from .profile import Profile

__all__ = ["Interval", "Block", "calculate_block"]

_EPS = sys.float_info.epsilon


def _total_duration(profile: Profile) -> float:
    return profile.t_sum[-1] + profile.brake.duration + profile.accel.duration


@dataclass
class Interval:
    """An open time interval; ``profile`` belongs to its right (end) time."""

    left: float
    right: float
    profile: Profile = field(default_factory=Profile)

    @classmethod
    def from_profiles(cls, profile_left: Profile, profile_right: Profile) -> Interval:
        """Interval spanned by the durations of two profiles, ordered by duration."""
        left_duration = _total_duration(profile_left)
        right_duration = _total_duration(profile_right)
        if left_duration < right_duration:
            return cls(left_duration, right_duration, copy.deepcopy(profile_right))
        return cls(right_duration, left_duration, copy.deepcopy(profile_left))


@dataclass
class Block:
    """The fastest profile of a DoF and up to two blocked intervals after it."""

    p_min: Profile = field(default_factory=Profile)
    t_min: float = 0.0
    a: Optional[Interval] = None
    b: Optional[Interval] = None

    def set_min_profile(self, profile: Profile) -> None:
        """Use ``profile`` as the fastest profile and clear both intervals."""
        self.p_min = copy.deepcopy(profile)
        self.t_min = _total_duration(self.p_min)
        self.a = None
        self.b = None

    def is_blocked(self, t: float) -> bool:
        """Whether duration ``t`` cannot be reached by this DoF."""
        if t < self.t_min:
            return True
        return any(
            interval is not None and interval.left < t < interval.right
            for interval in (self.a, self.b)
        )

    def get_profile(self, t: float) -> Profile:
        """The extremal profile that belongs to duration ``t``."""
        if self.b is not None and t >= self.b.right:
            return self.b.profile
        if self.a is not None and t >= self.a.right:
            return self.a.profile
        return self.p_min

    def to_string(self) -> str:
        """Readable summary of the minimum duration and the blocked intervals."""
        result = f"[{self.t_min:.6f} "
        for interval in (self.a, self.b):
            if interval is not None:
                result += f"{interval.left:.6f}] [{interval.right:.6f} "
        return result + "-"


def calculate_block(valid_profiles: Sequence[Profile], numerical_robust: bool = True) -> Optional[Block]:
    """Build the block for a DoF from its valid extremal profiles.

    Returns None when the profiles do not form a consistent block.
    """
    profiles = list(valid_profiles)
    count = len(profiles)
    block = Block()

    def duration(index: int) -> float:
        return profiles[index].t_sum[-1]

    if count == 1:
        block.set_min_profile(profiles[0])
        return block

    if count == 2:
        if abs(duration(0) - duration(1)) < 8 * _EPS:
            block.set_min_profile(profiles[0])
            return block

        if numerical_robust:
            idx_min = 0 if duration(0) < duration(1) else 1
            idx_other = (idx_min + 1) % 2
            block.set_min_profile(profiles[idx_min])
            block.a = Interval.from_profiles(profiles[idx_min], profiles[idx_other])
            return block

    elif count == 4:
        # Only happens due to numerical issues: drop one of two "identical" profiles
        if abs(duration(0) - duration(1)) < 32 * _EPS and profiles[0].direction != profiles[1].direction:
            del profiles[1]
        elif abs(duration(2) - duration(3)) < 256 * _EPS and profiles[2].direction != profiles[3].direction:
            del profiles[3]
        elif abs(duration(0) - duration(3)) < 256 * _EPS and profiles[0].direction != profiles[3].direction:
            del profiles[3]
        else:
            return None

    elif count % 2 == 0:
        return None

    count = len(profiles)
    if count == 0:
        return None

    idx_min = min(range(count), key=duration)
    block.set_min_profile(profiles[idx_min])

    if count == 3:
        first = profiles[(idx_min + 1) % 3]
        second = profiles[(idx_min + 2) % 3]
        block.a = Interval.from_profiles(first, second)
        return block

    if count == 5:
        others = [profiles[(idx_min + k) % 5] for k in range(1, 5)]
        if others[0].direction == others[1].direction:
            block.a = Interval.from_profiles(others[0], others[1])
            block.b = Interval.from_profiles(others[2], others[3])
        else:
            block.a = Interval.from_profiles(others[0], others[3])
            block.b = Interval.from_profiles(others[1], others[2])
        return block

    return None