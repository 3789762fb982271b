"""Views for locations app."""

from django.http import JsonResponse
from django.views import View

from apps.core.mixins import ServicesMixin


class DistrictOptionsView(ServicesMixin, View):
    """District options for the selected state, used by the cascading selector."""

    def get(self, request):
        resolver = self.services.resolver
        if resolver.loading:
            return JsonResponse({"loading": True, "districts": []})

        districts = resolver.districts_for(request.GET.get("state"))
        return JsonResponse({
            "loading": False,
            "districts": [{"id": d.id, "name": d.name} for d in districts],
        })
