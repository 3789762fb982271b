"""Context processors for core app."""

from django.conf import settings

from apps.registrations.variants import VARIANTS

from .container import get_container


def branding(request):
    """Add branding settings to template context."""
    return {
        "brand_name": settings.CONSOLE_BRAND_NAME,
        "registration_kinds": list(VARIANTS.values()),
    }


def reference_data(request):
    """Expose whether states and districts are still loading."""
    return {"locations_loading": get_container().resolver.loading}
