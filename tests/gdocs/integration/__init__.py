"""
Integration tests for Google Docs tools.

These tests use real Google Docs API calls to verify end-to-end functionality.
Each test creates a fresh document and trashes it after completion.

To run these tests:
    python main.py --authenticate
    export GOOGLE_TEST_TOKEN_PATH="token.json"
    pytest tests/gdocs/integration/ -v

Note: These tests are slower than unit tests but provide better coverage of
actual API behavior, including index arithmetic that mocks might miss.
"""
