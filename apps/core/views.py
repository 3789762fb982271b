"""Core views."""

from concurrent.futures import ThreadPoolExecutor

from django.views.generic import TemplateView

from .mixins import ServicesMixin


class DashboardView(ServicesMixin, TemplateView):
    """Dashboard with approved/pending counts for every registration type."""

    template_name = "core/dashboard.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        registries = list(self.services.registries.values())

        # One fetch per collection, issued together.
        with ThreadPoolExecutor(max_workers=len(registries)) as pool:
            list(pool.map(lambda registry: registry.fetch_all(), registries))

        context["summaries"] = [
            {"variant": registry.variant, "counts": registry.counts()} for registry in registries
        ]
        return context
