"""Integration tests for the HTTP API and the real search sites.

Live-site tests are marked with @pytest.mark.integration and skip unless
PRINT_FINDER_LIVE=1 is set.

Run integration tests:
    PRINT_FINDER_LIVE=1 pytest tests/integration/ -v -s -m integration

Skip them during regular testing:
    pytest tests/ -m "not integration"
"""
