# =============================================================================
# tests/ - Test Suite
# =============================================================================
# - test_routing.py: route template matching
# - test_registry.py: protected-route table lookups
# - test_gate.py: authorization gate decisions
# - test_verifier.py: bearer JWT verification
# - test_exceptions.py: error envelope
# - test_app.py: end-to-end through the FastAPI app
#
# Run tests with: pytest
# =============================================================================
