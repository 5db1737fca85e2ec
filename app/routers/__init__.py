"""
Routers module - API endpoint handlers organized by feature.

Each router handles a specific domain of the API:
- gsc: Search Console OAuth, queries and logout
- ga4: Analytics OAuth callback, reports and logout
- auth_complete: Popup page that finishes the Search Console flow
- debug: Redirect-URI diagnostics page
- draft: Not-yet-implemented draft endpoint
"""
