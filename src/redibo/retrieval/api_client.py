"""HTTP client for the booking API.

Fetches raw payloads, attaches the stored bearer token and hands the
payloads to the normalizer. No retries and no caching: one call, one
request.
"""

from typing import Any, Dict, List, Optional

import requests

from ..parsing.normalizer import (
    MalformedRecordError,
    normalize_comment_list,
    normalize_profile,
    normalize_vehicle_envelope,
)
from ..reports.outcome import classify_submission
from ..reports.report_models import ReportDraft, ReportSubmission
from ..reviews.review_models import CanonicalComment
from ..utils.logging import get_logger
from ..vehicles.vehicle_models import VehicleFleet
from .credentials import CredentialStore
from .profile_models import UserProfile

logger = get_logger(__name__)

USER_AGENT = "redibo-client/0.1"


class MissingCredentialsError(RuntimeError):
    """No auth token is stored; the user has to log in first."""


class RediboClient:
    """Thin wrapper around ``requests.Session`` for the ``/api`` endpoints."""

    def __init__(
        self,
        base_url: str,
        credentials: CredentialStore,
        *,
        timeout: float = 20,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.credentials = credentials
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: Dict, credentials: CredentialStore) -> "RediboClient":
        api = config["api"]
        return cls(api["base_url"], credentials, timeout=api["timeout_seconds"])

    def _get_headers(self) -> Dict[str, str]:
        token = self.credentials.load_token()
        if not token:
            raise MissingCredentialsError("No authentication token found; run `redibo login` first")
        return {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = self._url(path)
        headers = self._get_headers()
        logger.debug(f"GET {url} params={params}")
        response = self.session.get(url, headers=headers, params=params, timeout=self.timeout)
        if not response.ok:
            logger.error("API error %s for %s: %s", response.status_code, url, response.text[:200])
        response.raise_for_status()
        try:
            return response.json()
        except ValueError as e:
            raise MalformedRecordError(f"Response from {path} is not valid JSON") from e

    def get_profile(self) -> UserProfile:
        return normalize_profile(self._get_json("/api/perfil"))

    def fetch_host_vehicles(self, host_id: int | str) -> VehicleFleet:
        """
        Fetch and normalize the host's vehicles.

        Raises:
            MissingCredentialsError: If no token is stored
            requests.HTTPError: On a non-2xx response
            MalformedRecordError: If the envelope has no ``autos`` list
        """
        logger.info(f"Fetching vehicles for host {host_id}")
        payload = self._get_json(f"/api/carros/{host_id}")
        return normalize_vehicle_envelope(payload)

    def fetch_host_comments(self, host_id: int | str) -> List[CanonicalComment]:
        """
        Fetch and normalize comments left on the host's vehicles.

        Raises:
            MissingCredentialsError: If no token is stored
            requests.HTTPError: On a non-2xx response
            MalformedRecordError: If the response is not a list
        """
        logger.info(f"Fetching comments for host {host_id}")
        payload = self._get_json("/api/comentarios-carro", params={"hostId": host_id})
        return normalize_comment_list(payload)

    def fetch_raw_comments(self, host_id: int | str) -> Any:
        """Raw comment payload, for callers that normalize through a listing."""
        return self._get_json("/api/comentarios-carro", params={"hostId": host_id})

    def fetch_raw_vehicles(self, host_id: int | str) -> Any:
        return self._get_json(f"/api/carros/{host_id}")

    def fetch_reports(self, reported_id: int | str) -> List[Dict]:
        payload = self._get_json("/api/reportes", params={"reportadoId": reported_id})
        if not isinstance(payload, list):
            raise MalformedRecordError("Invalid response format: reports is not a list")
        return payload

    def submit_report(self, draft: ReportDraft) -> ReportSubmission:
        """
        POST a report and classify the server's answer.

        Error responses are not raised: the daily-limit and duplicate-report
        refusals come back as outcomes.
        """
        url = self._url("/api/reportes")
        headers = {**self._get_headers(), "Content-Type": "application/json"}
        response = self.session.post(url, headers=headers, json=draft.to_payload(), timeout=self.timeout)
        try:
            body = response.json()
        except ValueError:
            body = None
        submission = classify_submission(response.status_code, body)
        logger.info(f"Report for {draft.reported_id}: {submission.outcome.value}")
        return submission
