"""
Fetch Cache Service package.

Serves upstream HTTP resources through a memoizing cache and bundles the
small private-state examples the cache is modelled on.

Structure:
- app.main: FastAPI app and routes.
- app.caching: MemoizedFetch, the per-instance memoizing wrapper.
- app.adapters: Upstream retrieval operations (HTTP, simulated).
- app.closures: Secret keeper, counter, login tracker, pricing closures.
- app.demo: Walkthrough scenarios used by scripts/run_closure_demo.py.
"""
