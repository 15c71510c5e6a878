"""Matcher Module - Lexical and semantic mentor matching."""
from core.matcher.models import (
    AvailabilitySlot, TaughtSkill, Candidate, RequesterProfile, MatchRequest,
    MatchedSkill, MatchResult, MatchMode, OutcomeReason, MatchOutcome,
    MatchResponse, MatchingStatus
)
from core.matcher.errors import MatcherError, QueryEmbeddingError
from core.matcher.candidate_store import CandidateRepository, InMemoryCandidateRepository
from core.matcher.lexical_matcher import LexicalMatcher
from core.matcher.semantic_matcher import SemanticMatcher
from core.matcher.service import MatcherService
from core.matcher.similarity import SimilarityCalculator

__all__ = [
    'MatcherService', 'LexicalMatcher', 'SemanticMatcher', 'SimilarityCalculator',
    'CandidateRepository', 'InMemoryCandidateRepository',
    'MatcherError', 'QueryEmbeddingError',
    'AvailabilitySlot', 'TaughtSkill', 'Candidate', 'RequesterProfile', 'MatchRequest',
    'MatchedSkill', 'MatchResult', 'MatchMode', 'OutcomeReason', 'MatchOutcome',
    'MatchResponse', 'MatchingStatus'
]
