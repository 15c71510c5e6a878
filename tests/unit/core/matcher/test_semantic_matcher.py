"""
Tests for the semantic (embedding) matcher and its embedding write-back.
"""
import asyncio
import threading
from typing import List

import pytest

from core.matcher.candidate_store import InMemoryCandidateRepository
from core.matcher.errors import QueryEmbeddingError
from core.matcher.models import MatchRequest, RequesterProfile, TaughtSkill
from core.matcher.semantic_matcher import SemanticMatcher
from tests.mocks.matcher_mocks import MockEmbeddingProvider, make_candidate, unit_vector


VECTORS = {
    "React": [1.0, 0.0],
    "React Native": unit_vector(0.9, 0.1),
    "Python": [0.0, 1.0],
    "Italian Cooking": unit_vector(-1.0, 0.2),
    "Vue": unit_vector(0.7, 0.7),
}


def request(skill="React", level="Beginner"):
    return MatchRequest(requester_id="learner", skill_query=skill, desired_level=level)


@pytest.fixture
def provider():
    return MockEmbeddingProvider(vectors=VECTORS)


@pytest.fixture
def matcher(provider, repository):
    return SemanticMatcher(provider=provider, repository=repository)


async def run(matcher, repository, skill="React"):
    candidates = repository.list_candidates_with_teachable_skills("learner")
    return await matcher.match(request(skill), candidates, ["Python", "SQL"])


class TestSemanticMatcher:

    @pytest.mark.asyncio
    async def test_ranks_by_embedding_similarity(self, matcher, repository):
        results = await run(matcher, repository)

        assert [r.mentor_id for r in results] == ["m-react"]
        assert results[0].matched_skill.name == "React Native"
        assert results[0].matched_skill.similarity_score > 0.99

    @pytest.mark.asyncio
    async def test_unconfigured_provider_returns_empty(self, repository):
        provider = MockEmbeddingProvider(vectors=VECTORS, configured=False)
        matcher = SemanticMatcher(provider=provider, repository=repository)

        assert await run(matcher, repository) == []
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_blank_query_returns_empty(self, matcher, provider, repository):
        assert await run(matcher, repository, skill="  ") == []
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_query_failure_raises(self, repository):
        provider = MockEmbeddingProvider(vectors=VECTORS, fail_on=["React"])
        matcher = SemanticMatcher(provider=provider, repository=repository)

        with pytest.raises(QueryEmbeddingError):
            await run(matcher, repository)
        assert repository.save_calls == []

    @pytest.mark.asyncio
    async def test_missing_embeddings_saved_once_per_candidate(self, matcher, repository):
        await run(matcher, repository)

        assert sorted(repository.save_calls) == ["m-cooking", "m-python", "m-react"]
        stored = repository.get_candidate("m-react").taught_skills
        assert [s.name for s in stored] == ["React Native", "Python"]
        assert stored[0].embedding == VECTORS["React Native"]
        assert stored[1].embedding == VECTORS["Python"]

    @pytest.mark.asyncio
    async def test_second_run_reuses_persisted_embeddings(self, matcher, provider, repository):
        first = await run(matcher, repository)
        repository.save_calls.clear()
        second = await run(matcher, repository)

        assert [r.mentor_id for r in first] == [r.mentor_id for r in second]
        for skill in ["React Native", "Python", "Italian Cooking"]:
            assert provider.call_count(skill) == 1
        assert provider.call_count("React") == 2
        assert repository.save_calls == []

    @pytest.mark.asyncio
    async def test_skill_failure_skips_only_that_skill(self, repository):
        provider = MockEmbeddingProvider(vectors=VECTORS, fail_on=["Python"])
        matcher = SemanticMatcher(provider=provider, repository=repository)

        results = await run(matcher, repository)

        assert [r.mentor_id for r in results] == ["m-react"]
        stored = repository.get_candidate("m-react").taught_skills
        assert stored[0].embedding == VECTORS["React Native"]
        assert stored[1].embedding is None
        # m-python had nothing new to persist
        assert "m-python" not in repository.save_calls

    @pytest.mark.asyncio
    async def test_below_semantic_floor_is_dropped(self, provider):
        repo = InMemoryCandidateRepository([make_candidate("vue", [("Vue", "Beginner")])])
        repo.add_profile("learner", RequesterProfile())
        matcher = SemanticMatcher(provider=provider, repository=repo)

        # cosine(React, Vue) ~= 0.707
        assert await run(matcher, repo) == []

    @pytest.mark.asyncio
    async def test_cached_embeddings_not_recomputed(self, provider):
        cached = TaughtSkill("React Native", "Advanced", embedding=VECTORS["React Native"])
        repo = InMemoryCandidateRepository([make_candidate("m1", [cached])])
        matcher = SemanticMatcher(provider=provider, repository=repo)

        results = await run(matcher, repo)

        assert [r.mentor_id for r in results] == ["m1"]
        assert provider.calls == ["React"]
        assert repo.save_calls == []

    @pytest.mark.asyncio
    async def test_save_failure_does_not_fail_match(self, provider, repository, monkeypatch, caplog):
        def broken_save(candidate_id, taught_skills):
            raise RuntimeError("database is read-only")

        monkeypatch.setattr(repository, "save_candidate_skills", broken_save)
        matcher = SemanticMatcher(provider=provider, repository=repository)

        results = await run(matcher, repository)

        assert [r.mentor_id for r in results] == ["m-react"]
        assert "Failed to persist skill embeddings" in caplog.text

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(self):
        class SlowProvider(MockEmbeddingProvider):
            def __init__(self):
                super().__init__()
                self.active = 0
                self.peak = 0

            async def embed(self, text: str) -> List[float]:
                self.active += 1
                self.peak = max(self.peak, self.active)
                await asyncio.sleep(0.01)
                self.active -= 1
                return await super().embed(text)

        provider = SlowProvider()
        repo = InMemoryCandidateRepository([
            make_candidate(f"m{i}", [(f"Skill {i}-{j}", "Beginner") for j in range(3)])
            for i in range(6)
        ])
        matcher = SemanticMatcher(provider=provider, repository=repo, max_concurrent_embeddings=2)

        await run(matcher, repo, skill="Skill")

        assert provider.peak == 2
        assert len(provider.calls) == 1 + 18

    @pytest.mark.asyncio
    async def test_cancellation_writes_nothing(self):
        class HangingProvider(MockEmbeddingProvider):
            async def embed(self, text: str) -> List[float]:
                if text != "React":
                    await asyncio.Event().wait()
                return await super().embed(text)

        provider = HangingProvider(vectors=VECTORS)
        repo = InMemoryCandidateRepository([make_candidate("m1", [("React Native", "Beginner")])])
        matcher = SemanticMatcher(provider=provider, repository=repo)

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(run(matcher, repo), timeout=0.05)

        assert repo.save_calls == []
        assert repo.get_candidate("m1").taught_skills[0].embedding is None

    @pytest.mark.asyncio
    async def test_saves_run_in_worker_thread_one_at_a_time(self, provider, repository, monkeypatch):
        loop_thread = threading.get_ident()
        save_threads = []
        state = {"active": 0, "peak": 0}
        original_save = repository.save_candidate_skills

        def tracking_save(candidate_id, taught_skills):
            state["active"] += 1
            state["peak"] = max(state["peak"], state["active"])
            save_threads.append(threading.get_ident())
            try:
                original_save(candidate_id, taught_skills)
            finally:
                state["active"] -= 1

        monkeypatch.setattr(repository, "save_candidate_skills", tracking_save)
        matcher = SemanticMatcher(provider=provider, repository=repository)

        await run(matcher, repository)

        assert len(save_threads) == 3
        assert loop_thread not in save_threads
        assert state["peak"] == 1
