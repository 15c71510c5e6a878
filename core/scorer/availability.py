#!/usr/bin/env python3
"""
Availability Scoring - Weekly time-slot overlap between learner and mentor.

Slots are compared pairwise on the same day of week; the summed overlap
is bucketed against a four-hour reference window.
"""

from typing import Sequence, TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from core.matcher.models import AvailabilitySlot

logger = logging.getLogger(__name__)

REFERENCE_WINDOW_MINUTES = 240

NO_OVERLAP_SAME_DAY_SCORE = 0.5
NO_OVERLAP_DIFFERENT_DAYS_SCORE = 0.2

# (minimum overlap ratio, score), checked top-down
OVERLAP_BANDS = (
    (0.75, 1.0),
    (0.4, 0.8),
    (0.15, 0.6),
)
MINIMAL_OVERLAP_SCORE = 0.4


def time_to_minutes(value: str) -> int:
    """Convert "HH:MM" to minutes after midnight; malformed parts count as 0."""
    parts = str(value or "0:0").split(":")
    try:
        hours = int(parts[0]) if parts[0] else 0
    except ValueError:
        hours = 0
    try:
        minutes = int(parts[1]) if len(parts) > 1 and parts[1] else 0
    except ValueError:
        minutes = 0
    return hours * 60 + minutes


def availability_overlap_minutes(
    requester_slots: Sequence['AvailabilitySlot'],
    mentor_slots: Sequence['AvailabilitySlot']
) -> int:
    """Total minutes where requester and mentor slots coincide on the same day."""
    if not requester_slots or not mentor_slots:
        return 0

    total = 0
    for requested in requester_slots:
        for offered in mentor_slots:
            if requested.day_of_week != offered.day_of_week:
                continue

            start = max(time_to_minutes(requested.start), time_to_minutes(offered.start))
            end = min(time_to_minutes(requested.end), time_to_minutes(offered.end))
            total += max(0, end - start)

    return total


def availability_score(
    requester_slots: Sequence['AvailabilitySlot'],
    mentor_slots: Sequence['AvailabilitySlot']
) -> float:
    """
    Score how well a mentor's weekly availability fits the requester's.

    Returns:
        0.0 if either side has no slots; 0.5 / 0.2 when there is no overlap
        but a shared / no shared day; otherwise a banded score of the
        overlap against REFERENCE_WINDOW_MINUTES.
    """
    if not requester_slots or not mentor_slots:
        return 0.0

    overlap = availability_overlap_minutes(requester_slots, mentor_slots)

    if overlap <= 0:
        mentor_days = {slot.day_of_week for slot in mentor_slots}
        same_day = any(slot.day_of_week in mentor_days for slot in requester_slots)
        return NO_OVERLAP_SAME_DAY_SCORE if same_day else NO_OVERLAP_DIFFERENT_DAYS_SCORE

    ratio = min(overlap / REFERENCE_WINDOW_MINUTES, 1.0)
    for threshold, score in OVERLAP_BANDS:
        if ratio >= threshold:
            return score
    return MINIMAL_OVERLAP_SCORE
