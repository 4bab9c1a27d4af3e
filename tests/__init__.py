# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Noire server:
# - test_model_list.py, test_admin.py: Admin list helpers and pages
# - test_server.py, test_monitor.py, test_docs.py: Server events and plugins
# - test_routes.py, test_auth.py, test_management_api.py: REST API
# - test_services.py, test_supabase_client.py: Business logic and data access
# - test_config.py, test_manager.py: Settings, utilities and composition
# - test_models.py: Pydantic schema validation
#
# Run tests with: pytest
# =============================================================================
