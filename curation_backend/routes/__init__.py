"""
FastAPI routers for all API endpoints.

Routes parse the request, call the service layer, and map service errors to
HTTP status codes. No curation logic lives here.
"""
