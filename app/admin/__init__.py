# =============================================================================
# app/admin/__init__.py - Admin Pages Module
# =============================================================================
# - routes.py: Dashboard and list pages
# - partial.py: Partial name -> template resolution
# - model_list.py: Pagination, sort and limit helpers for list pages
# =============================================================================
