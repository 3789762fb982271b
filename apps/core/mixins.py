"""Reusable mixins for views."""

from django.http import Http404

from .container import get_container


class ServicesMixin:
    """Gives views access to the service container and per-kind services."""

    @property
    def services(self):
        return get_container()

    def get_registry(self, kind: str):
        try:
            return self.services.registry(kind)
        except KeyError:
            raise Http404(f"Unknown registration type: {kind}")


class ConfirmationRequiredMixin:
    """Mixin for destructive actions that need an explicit confirmation step.

    GET renders the confirmation page; only a POST carrying ``confirm=yes``
    counts as confirmed.
    """

    confirm_field = "confirm"

    def is_confirmed(self, request) -> bool:
        return request.method == "POST" and request.POST.get(self.confirm_field) == "yes"
