"""Certificate upload: exchange an uploaded file for a hosted URL."""

import logging

logger = logging.getLogger(__name__)


class CertificateUploader:
    """Posts a file to the upload endpoint and returns the URL it is served from.

    Only the URL is kept on the registration, never the file itself.
    """

    def __init__(self, remote, upload_url: str):
        self.remote = remote
        self.upload_url = upload_url

    def upload(self, uploaded_file) -> str:
        """Upload a Django ``UploadedFile``. Raises RemoteError on failure."""
        content_type = getattr(uploaded_file, "content_type", None) or "application/octet-stream"
        response = self.remote.upload(self.upload_url, uploaded_file.name, uploaded_file, content_type)
        if not isinstance(response, dict):
            logger.warning(f"Upload of {uploaded_file.name} returned no body")
            return ""
        return response.get("url") or response.get("image") or ""
