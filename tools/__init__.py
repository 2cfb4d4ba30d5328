# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the MCP protocol binding of the Directus tools.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between the MCP protocol and the cms/
#   package.  mcp_server.py:
#     1. Serves the registry descriptors as the tool list
#     2. Logs each call and its response to stderr
#     3. Hands every tool call to cms.dispatcher.Dispatcher
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT talk HTTP (that's cms/directus.py)
#   - They do NOT build queries or render errors (that's cms/dispatcher.py)
# =============================================================================
