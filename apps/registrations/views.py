"""Views for registrations app."""

import logging

from django.contrib import messages
from django.http import Http404, HttpResponse, HttpResponseNotAllowed, JsonResponse
from django.shortcuts import redirect, render
from django.views import View

from apps.core.mixins import ConfirmationRequiredMixin, ServicesMixin
from apps.core.remote import RemoteError
from apps.core.services import ActivityService

from .forms import CertificateUploadForm, RegistrationForm
from .services import (
    ApprovalError,
    ApprovalService,
    FormSessionError,
    ViewState,
    export_filename,
    export_records,
    recompute,
)
from .services.approval import ACTION_DELETE, ACTION_REJECT
from .services.exports import XLSX_CONTENT_TYPE
from .services.sessions import MODE_CREATE, MODE_EDIT, MODE_VIEW

logger = logging.getLogger(__name__)

VIEW_STATE_SESSION_KEY = "registration_view_state"


def load_view_state(request, kind: str) -> ViewState:
    return ViewState.from_dict(request.session.get(VIEW_STATE_SESSION_KEY, {}).get(kind))


def save_view_state(request, kind: str, state: ViewState) -> None:
    stored = dict(request.session.get(VIEW_STATE_SESSION_KEY, {}))
    stored[kind] = state.to_dict()
    request.session[VIEW_STATE_SESSION_KEY] = stored


class RegistrationListView(ServicesMixin, View):
    """
    List of one registration type with status filter, search and sort.

    ``status``, ``q`` and ``sort`` query parameters update the stored view
    state and redirect back, so reloading the page never toggles the sort
    a second time. Search only changes when the search form is submitted.
    """

    template_name = "registrations/list.html"

    def get(self, request, kind):
        registry = self.get_registry(kind)
        variant = registry.variant
        state = load_view_state(request, kind)

        if {"status", "q", "sort"} & set(request.GET):
            if "status" in request.GET:
                state = state.with_status(request.GET["status"])
            if "q" in request.GET:
                state = state.with_search(request.GET["q"])
            sort_key = request.GET.get("sort")
            if sort_key in variant.sortable:
                state = state.toggle_sort(sort_key)
            save_view_state(request, kind, state)
            return redirect("registrations:list", kind=kind)

        registry.fetch_all()
        records = recompute(registry.records, state, variant.search_fields)

        context = {
            "variant": variant,
            "view_state": state,
            "counts": registry.counts(),
            "columns": variant.columns,
            "sortable": variant.sortable,
            "rows": [
                {"record": record, "actions": ApprovalService.available_actions(record)}
                for record in records
            ],
        }
        return render(request, self.template_name, context)


class RegistrationFormView(ServicesMixin, View):
    """Create, edit or view one registration through a form session."""

    template_name = "registrations/form.html"
    mode = MODE_CREATE

    def open_session(self, kind, entity_id=None):
        registry = self.get_registry(kind)
        entity = None
        if self.mode != MODE_CREATE:
            entity = registry.get(entity_id)
            if entity is None:
                registry.fetch_all()
                entity = registry.get(entity_id)
            if entity is None:
                raise Http404(f"No {registry.variant.label.lower()} with id {entity_id}")
        return self.services.form_session(kind).open(self.mode, entity)

    def get_form(self, session, data=None):
        return RegistrationForm(
            data,
            initial=session.fields,
            variant=session.variant,
            resolver=self.services.resolver,
            mode=session.mode,
        )

    def render_form(self, request, session, form):
        context = {
            "variant": session.variant,
            "mode": session.mode,
            "session": session,
            "form": form,
            "upload_form": CertificateUploadForm(),
        }
        return render(request, self.template_name, context)

    def get(self, request, kind, entity_id=None):
        session = self.open_session(kind, entity_id)
        return self.render_form(request, session, self.get_form(session))

    def post(self, request, kind, entity_id=None):
        if self.mode == MODE_VIEW:
            return HttpResponseNotAllowed(["GET"])

        session = self.open_session(kind, entity_id)
        form = self.get_form(session, request.POST)
        if not form.is_valid():
            return self.render_form(request, session, form)

        session.update(form.cleaned_data)
        try:
            session.submit()
        except FormSessionError as e:
            messages.error(request, f"Save failed: {e}")
            return self.render_form(request, session, form)

        variant = session.variant
        if self.mode == MODE_CREATE:
            ActivityService.log_create(variant, session.submitted)
            messages.success(request, f"{variant.label} registered.")
        else:
            ActivityService.log_update(variant, entity_id, session.submitted)
            messages.success(request, f"{variant.label} updated.")
        return redirect("registrations:list", kind=kind)


class ApproveView(ServicesMixin, View):
    """Approve a pending registration."""

    def post(self, request, kind, entity_id):
        registry = self.get_registry(kind)
        try:
            self.services.approvals(kind).approve(entity_id)
        except ApprovalError as e:
            messages.error(request, str(e))
        else:
            ActivityService.log_transition(registry.variant, entity_id, "approved")
            messages.success(request, f"{registry.variant.label} approved.")
        return redirect("registrations:list", kind=kind)


class ConfirmTransitionView(ServicesMixin, ConfirmationRequiredMixin, View):
    """Reject or delete a registration after an explicit confirmation."""

    template_name = "registrations/confirm.html"
    action = ACTION_DELETE

    def get(self, request, kind, entity_id):
        registry = self.get_registry(kind)
        record = registry.get(entity_id)
        if record is None:
            registry.fetch_all()
            record = registry.get(entity_id)
        if record is None:
            raise Http404(f"No {registry.variant.label.lower()} with id {entity_id}")

        verb = "reject this registration" if self.action == ACTION_REJECT else "delete this record"
        context = {
            "variant": registry.variant,
            "record": record,
            "action": self.action,
            "question": f"Are you sure you want to {verb}?",
        }
        return render(request, self.template_name, context)

    def post(self, request, kind, entity_id):
        registry = self.get_registry(kind)
        if not self.is_confirmed(request):
            messages.info(request, "Nothing was changed.")
            return redirect("registrations:list", kind=kind)

        approvals = self.services.approvals(kind)
        try:
            if self.action == ACTION_REJECT:
                approvals.reject(entity_id, confirmed=True)
            else:
                approvals.delete(entity_id, confirmed=True)
        except ApprovalError as e:
            messages.error(request, str(e))
        else:
            past = "rejected" if self.action == ACTION_REJECT else "deleted"
            ActivityService.log_transition(registry.variant, entity_id, past)
            messages.success(request, f"{registry.variant.label} {past}.")
        return redirect("registrations:list", kind=kind)


class ExportView(ServicesMixin, View):
    """Download the full, unfiltered list as a spreadsheet."""

    def get(self, request, kind):
        registry = self.get_registry(kind)
        registry.fetch_all()
        content = export_records(registry.records, registry.variant)

        response = HttpResponse(content, content_type=XLSX_CONTENT_TYPE)
        filename = export_filename(registry.variant.collection)
        response["Content-Disposition"] = f'attachment; filename="{filename}"'
        return response


class CertificateUploadView(ServicesMixin, View):
    """Upload a certificate image and return the URL it is hosted at."""

    def post(self, request):
        form = CertificateUploadForm(request.POST, request.FILES)
        if not form.is_valid():
            return JsonResponse({"error": form.errors["file"][0]}, status=400)

        try:
            url = self.services.uploader.upload(form.cleaned_data["file"])
        except RemoteError as e:
            logger.error(f"Upload failed: {e}")
            return JsonResponse({"error": "Image upload failed. Try again."}, status=502)
        return JsonResponse({"url": url})


registration_create = RegistrationFormView.as_view(mode=MODE_CREATE)
registration_edit = RegistrationFormView.as_view(mode=MODE_EDIT)
registration_detail = RegistrationFormView.as_view(mode=MODE_VIEW)
registration_reject = ConfirmTransitionView.as_view(action=ACTION_REJECT)
registration_delete = ConfirmTransitionView.as_view(action=ACTION_DELETE)
