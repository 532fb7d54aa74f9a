"""
FastAPI routers grouped by domain (auth, profile, users).

Each module exposes an APIRouter included by the app factory. Routers only
parse requests and shape responses; the rules live in socialnet.services.
"""
