"""Request context for services that record console activity."""

import threading

_local = threading.local()


def get_current_request():
    return getattr(_local, "request", None)


def get_client_ip(request=None):
    """Client address of ``request``, or of the request being served.

    The first hop of X-Forwarded-For wins over REMOTE_ADDR.
    """
    request = request or get_current_request()
    if request is None:
        return None

    forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
    first_hop = forwarded.split(",")[0].strip()
    return first_hop or request.META.get("REMOTE_ADDR")


class RequestContextMiddleware:
    """Expose the request being served to code without a request argument."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        _local.request = request
        try:
            return self.get_response(request)
        finally:
            _local.request = None
