from prometheus_fastapi_instrumentator import Instrumentator

def instrument_app(app):
    """
    Instruments the FastAPI application with Prometheus metrics and exposes them on /metrics.
    Health checks and the metrics endpoint itself are left out of the request counters.
    """
    Instrumentator(
        should_group_status_codes=False,
        excluded_handlers=["/metrics", "/api/v1/health"],
    ).instrument(app).expose(app, include_in_schema=False)
