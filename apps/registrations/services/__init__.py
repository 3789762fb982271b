"""Services package for registration lists, approvals and form sessions."""

from apps.registrations.services.approval import ApprovalError, ApprovalService
from apps.registrations.services.exports import export_filename, export_records
from apps.registrations.services.filtering import ViewState, recompute
from apps.registrations.services.normalization import normalize, normalize_all
from apps.registrations.services.registry import EntityRegistry, RegistryError
from apps.registrations.services.sessions import FormSession, FormSessionError
from apps.registrations.services.uploads import CertificateUploader

__all__ = [
    "ApprovalError",
    "ApprovalService",
    "CertificateUploader",
    "EntityRegistry",
    "FormSession",
    "FormSessionError",
    "RegistryError",
    "ViewState",
    "export_filename",
    "export_records",
    "normalize",
    "normalize_all",
    "recompute",
]
