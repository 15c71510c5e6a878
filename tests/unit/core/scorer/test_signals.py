"""
Tests for level compatibility, profile quality and multi-skill bonus.
"""
import pytest

from core.matcher.models import AvailabilitySlot, Candidate, TaughtSkill
from core.scorer.signals import level_compatibility, level_to_rank, multi_skill_bonus, profile_quality


class TestLevelCompatibility:

    @pytest.mark.parametrize("level, rank", [
        ("Beginner", 1),
        ("intermediate", 2),
        ("ADVANCED", 3),
        ("Upper advanced", 3),
        ("Not specified", 2),
        ("", 2),
    ])
    def test_level_to_rank(self, level, rank):
        assert level_to_rank(level) == rank

    @pytest.mark.parametrize("desired, offered, expected", [
        ("Beginner", "Beginner", 1.0),
        ("Beginner", "Intermediate", 0.9),
        ("Beginner", "Advanced", 0.8),
        ("Intermediate", "Beginner", 0.5),
        ("Advanced", "Beginner", 0.2),
        ("Beginner", "Not specified", 0.9),
    ])
    def test_scores(self, desired, offered, expected):
        assert level_compatibility(desired, offered) == expected

    def test_meeting_level_beats_below_level(self):
        for desired in ["Beginner", "Intermediate", "Advanced"]:
            at_or_above = [level_compatibility(desired, o) for o in ["Beginner", "Intermediate", "Advanced"]
                           if level_to_rank(o) >= level_to_rank(desired)]
            below = [level_compatibility(desired, o) for o in ["Beginner", "Intermediate", "Advanced"]
                     if level_to_rank(o) < level_to_rank(desired)]
            if below:
                assert min(at_or_above) > max(below)


class TestProfileQuality:

    def test_empty_profile(self):
        assert profile_quality(Candidate(id="1", display_name="")) == 0.0

    def test_full_profile(self):
        candidate = Candidate(
            id="1",
            display_name="Ada",
            taught_skills=[TaughtSkill("A"), TaughtSkill("B"), TaughtSkill("C")],
            availability=[AvailabilitySlot(1, "09:00", "10:00")],
            avg_rating=5.0,
            rating_count=25,
            points=10,
            xp=100,
            languages=["English"],
        )
        assert profile_quality(candidate) == pytest.approx(0.95)

    def test_rating_ignored_without_count(self):
        with_rating = Candidate(id="1", display_name="Ada", avg_rating=5.0, rating_count=0)
        without = Candidate(id="2", display_name="Ada")
        assert profile_quality(with_rating) == profile_quality(without)

    def test_partial_profile(self):
        candidate = Candidate(
            id="1",
            display_name="Ada",
            taught_skills=[TaughtSkill("Python")],
            avg_rating=4.0,
            rating_count=5,
        )
        # 0.05 name + 0.2 rating + 0.05 volume + 0.1 one skill
        assert profile_quality(candidate) == pytest.approx(0.4)


class TestMultiSkillBonus:

    def test_counts_shared_goals(self):
        skills = [TaughtSkill("Python"), TaughtSkill("SQL"), TaughtSkill("Go")]
        assert multi_skill_bonus(["python", "sql "], skills) == pytest.approx(0.1)

    def test_goal_synonyms_match(self):
        assert multi_skill_bonus(["JS"], [TaughtSkill("JavaScript")]) == pytest.approx(0.05)

    def test_capped(self):
        names = ["A", "B", "C", "D", "E", "F"]
        assert multi_skill_bonus(names, [TaughtSkill(n) for n in names]) == pytest.approx(0.2)

    def test_empty_sides(self):
        assert multi_skill_bonus([], [TaughtSkill("Python")]) == 0.0
        assert multi_skill_bonus(["Python"], []) == 0.0
        assert multi_skill_bonus(["", None], [TaughtSkill("Python")]) == 0.0
