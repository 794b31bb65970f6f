"""FastAPI routes and endpoints.

Endpoints:
- GET /health: Service health status
- GET /ready: Readiness probe (search engine built)
- POST /v1/search: Context-window search, flat records
- POST /v1/search/grouped: Context-window search, grouped by file and page
"""
