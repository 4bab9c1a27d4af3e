# =============================================================================
# core/ - Domain Models and Services
# =============================================================================
# - models/: Pydantic request/response schemas
# - services/: Business logic over the Supabase tables
# =============================================================================
