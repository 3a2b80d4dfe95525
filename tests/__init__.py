# HashVault Test Suite
"""
Test suite including:
- Unit tests (word operations, context, padding, streaming)
- Integration tests (self test, event log, console entry)
- Security tests (invalid inputs, residual state, isolation)

Run with: pytest
"""
