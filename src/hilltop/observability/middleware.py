import time

from fastapi import FastAPI, Request


def register_metrics_middleware(app: FastAPI):
    """Record request count, latency and in-flight requests on ``app.state.metrics``."""

    @app.middleware("http")
    async def track_requests(request: Request, call_next):
        metrics = request.app.state.metrics
        metrics.active_http_connections.inc()
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            # The matched route template keeps label cardinality bounded.
            route = getattr(request.scope.get("route"), "path", "unknown")
            metrics.observe_request(
                request.method, status_code, route, time.perf_counter() - start
            )
            metrics.active_http_connections.dec()
