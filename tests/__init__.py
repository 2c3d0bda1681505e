# rrsa Test Suite
"""
Test suite including:
- Unit tests (math, keys, key format, key files, codec)
- Integration tests (CLI, end-to-end file workflow)
- Invalid input tests (malformed keys, wrong key variants, bad sizes)

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""
