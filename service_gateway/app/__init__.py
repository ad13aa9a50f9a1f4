"""
API Gateway Service package for the AciTracker backend.

The gateway fronts a single upstream service, enforcing:
- Request guarding: GET only, bounded header size
- Allowlist routing: a fixed table of forwardable paths
- Authentication: a static bearer token
- Caching: short-lived in-memory response cache

Structure:
- app.main: FastAPI app, routes, and middleware wiring.
- app.routes: The allowlisted route table.
- app.adapters: HTTP client for the upstream service.
- app.auth: Bearer token authentication.
- app.caching: TTL response cache.
- app.domain: Request guard and per-request orchestration.
"""
