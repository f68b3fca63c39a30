from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import Response


class PreflightCORSMiddleware(CORSMiddleware):
    """CORSMiddleware that answers every preflight with 204 and an empty body.

    Rejected origins or headers are not signalled by status: the computed
    Access-Control-Allow-* headers are kept, and a disallowed origin simply
    gets no Access-Control-Allow-Origin, so the browser blocks the call.
    """

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        headers = {
            k: v
            for k, v in response.headers.items()
            if k not in ("content-length", "content-type")
        }
        return Response(status_code=204, headers=headers)
