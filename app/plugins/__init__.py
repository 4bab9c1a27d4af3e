# =============================================================================
# app/plugins/ - Server Plugins
# =============================================================================
# Each plugin is a module with a `name` and a `register(server, options)`
# function, registered through Server.register():
# - monitor.py: Re-emits route and request events as server logs
# - reporter.py: Writes selected server events to the console
# - docs.py: OpenAPI / Swagger UI / ReDoc pages outside production
# =============================================================================
