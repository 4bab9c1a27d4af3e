# =============================================================================
# app/admin/partial.py - Admin Partial Resolver
# =============================================================================
# Maps the partial requested in the admin URL to the template rendered
# inside pages/admin.html.
# =============================================================================

MAIN_PARTIAL = "admin/main"

PARTIALS = {
    "users": "admin/user-list",
    "roles": "admin/role-list",
    "resources": "admin/resource-list",
}


def get_partial(name: str | None) -> str:
    """Template name of an admin partial; unknown names get the dashboard."""
    return PARTIALS.get(name or "", MAIN_PARTIAL)
