"""
Mentor Match test suite.

    # Run all tests
    python -m pytest tests/ -v

    # Skip tests that need a SQL database
    python -m pytest tests/ -v -m "not db"

Database tests use an in-memory SQLite engine; no external services are needed.
"""
