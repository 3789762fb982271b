"""Forms for registration management."""

from django import forms
from django.core.exceptions import ValidationError

from apps.registrations.services.sessions import MODE_CREATE, MODE_VIEW
from apps.registrations.variants import EntityVariant, FieldSpec


class RegistrationForm(forms.Form):
    """
    Create/edit/view form for any registration variant.

    Fields come from the variant's field table. The district choices are
    the districts of the selected state; a submitted district that does not
    belong to the submitted state is cleared rather than rejected. While
    reference data is loading both selectors are disabled.
    """

    def __init__(self, *args, variant: EntityVariant, resolver, mode: str = MODE_CREATE, **kwargs):
        super().__init__(*args, **kwargs)
        self.variant = variant
        self.resolver = resolver
        self.mode = mode

        # 0 is the "unset" location id on the wire; the selectors use None.
        for name in ("stateId", "districtId"):
            if name in self.initial and not self.initial[name]:
                self.initial = {**self.initial, name: None}

        if self.is_bound and variant.has_district:
            self._clear_stale_district()

        for spec in variant.form_fields:
            self.fields[spec.name] = self._build_field(spec)

        if mode == MODE_VIEW:
            for field in self.fields.values():
                field.disabled = True

    def selected_state(self):
        if self.is_bound:
            return self.data.get("stateId")
        return self.initial.get("stateId")

    def _clear_stale_district(self):
        if self.resolver.loading:
            return
        state = self.data.get("stateId")
        district = self.data.get("districtId")
        if district and not self.resolver.is_valid_pair(state, district):
            self.data = self.data.copy()
            self.data["districtId"] = ""

        # A disabled district cleans from initial, which must follow the new state too.
        initial_district = self.initial.get("districtId")
        if initial_district and not self.resolver.is_valid_pair(state, initial_district):
            self.initial = {**self.initial, "districtId": None}

    def _build_field(self, spec: FieldSpec) -> forms.Field:
        attrs = {"class": "input", "placeholder": f"Enter {spec.label.lower()}"}

        if spec.widget == "state":
            return forms.TypedChoiceField(
                label=spec.label,
                choices=[("", "Select state")] + self.resolver.state_choices(),
                coerce=int,
                empty_value=None,
                required=spec.required,
                disabled=self.resolver.loading,
                widget=forms.Select(attrs={"class": "input", "data-cascade": "state"}),
            )

        if spec.widget == "district":
            choices = self.resolver.district_choices(self.selected_state())
            return forms.TypedChoiceField(
                label=spec.label,
                choices=[("", "Select district")] + choices,
                coerce=int,
                empty_value=None,
                # A state with no districts leaves the field unset.
                required=spec.required and bool(choices),
                disabled=self.resolver.loading or not choices,
                widget=forms.Select(attrs={"class": "input", "data-cascade": "district"}),
            )

        if spec.widget == "email":
            return forms.EmailField(label=spec.label, required=spec.required, widget=forms.EmailInput(attrs=attrs))

        if spec.widget == "password":
            return forms.CharField(
                label=spec.label,
                required=spec.required and self.mode == MODE_CREATE,
                widget=forms.PasswordInput(attrs=attrs, render_value=False),
            )

        if spec.widget == "url":
            return forms.URLField(
                label=spec.label,
                required=spec.required,
                widget=forms.URLInput(attrs={"class": "input", "data-upload-target": "certificate"}),
            )

        if spec.widget == "textarea":
            return forms.CharField(
                label=spec.label,
                required=spec.required,
                widget=forms.Textarea(attrs={**attrs, "rows": 3}),
            )

        return forms.CharField(label=spec.label, required=spec.required, max_length=200, widget=forms.TextInput(attrs=attrs))


class CertificateUploadForm(forms.Form):
    """Form for uploading a society certificate image."""

    file = forms.FileField(widget=forms.FileInput(attrs={"class": "input", "accept": "image/*"}))

    def clean_file(self):
        file = self.cleaned_data.get("file")
        if not file:
            raise ValidationError("File is required.")

        content_type = getattr(file, "content_type", "") or ""
        if not content_type.startswith("image/"):
            raise ValidationError("Only image files can be uploaded.")
        return file
