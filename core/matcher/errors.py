"""Matcher exceptions."""


class MatcherError(Exception):
    """Base exception for matching failures"""
    pass


class QueryEmbeddingError(MatcherError):
    """The skill query could not be embedded; the semantic pass is aborted"""
    pass
