# =============================================================================
# cms/__init__.py
# =============================================================================
# This package contains everything the tool server knows about the remote
# content API (Directus): the tool catalog, the typed request models, the
# HTTP client and the dispatcher that maps one onto the other.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports the MCP SDK.  The transport binding lives in
#   tools/mcp_server.py and only calls Dispatcher.call() and list_tools().
#   Every module here can be exercised with a substitute client and no
#   network access.
# =============================================================================
