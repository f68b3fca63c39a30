from starlette.requests import Request


def query_value(request: Request, name: str, default: str | None = None) -> str | None:
    """First value of a query parameter; absent or empty falls back to ``default``."""
    values = request.query_params.getlist(name)
    if not values or not values[0]:
        return default
    return values[0]
