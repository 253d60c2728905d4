"""
Remote Data Source - HTTP client for the survey backend

Wraps the backend's admin and submission endpoints:
- Session check, login and logout (ambient cookie credential)
- Paged, searchable survey listing
- Detail fetch by identity
- Survey submission

Every transport or status error is logged and converted into the
console's error taxonomy so callers never see raw httpx exceptions.
"""

from typing import Any, Dict, Optional
import logging

import httpx
from pydantic import ValidationError

from survey_admin.config.settings import settings
from survey_admin.models.browser import ResultPage
from survey_admin.models.survey import SurveyRecord, SurveySubmission
from survey_admin.services.errors import AuthCheckFailure, AuthFailure, NetworkFailure

logger = logging.getLogger(__name__)

UNAUTHORIZED_STATUSES = (401, 403)


class RemoteDataSource:
    """
    Async client for the survey backend.

    The session credential lives in the client's cookie jar; the
    console only observes it through check_auth, login and logout.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Backend API root (default: settings.API_URL)
            timeout: Request timeout in seconds (default: settings.REQUEST_TIMEOUT)
            transport: Optional transport override, used by tests
        """
        self.base_url = base_url or settings.API_URL
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.REQUEST_TIMEOUT,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> "RemoteDataSource":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = await self.client.request(method, path, **kwargs)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(f"API Error: {method} {path} returned {status_code}")
            raise NetworkFailure(f"{method} {path} failed with status {status_code}", status_code) from e
        except httpx.HTTPError as e:
            logger.error(f"API Error: {method} {path}: {e!r}")
            raise NetworkFailure(f"{method} {path} failed: {e}") from e

    @staticmethod
    def _json(response: httpx.Response) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise NetworkFailure("Malformed response body", response.status_code) from e
        if not isinstance(data, dict):
            raise NetworkFailure("Unexpected response shape", response.status_code)
        return data

    async def check_auth(self) -> bool:
        """
        Check whether the ambient session credential is valid.

        Returns:
            True iff the backend reports an authenticated session

        Raises:
            AuthCheckFailure: transport error or unexpected response
        """
        try:
            response = await self._request("GET", "/admin/check-auth")
        except NetworkFailure as e:
            if e.status_code in UNAUTHORIZED_STATUSES:
                return False
            raise AuthCheckFailure(str(e)) from e

        try:
            data = self._json(response)
        except NetworkFailure as e:
            raise AuthCheckFailure(str(e)) from e
        return bool(data.get("success"))

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        """
        Establish the session credential.

        Raises:
            AuthFailure: credentials rejected
            NetworkFailure: transport error
        """
        try:
            response = await self._request(
                "POST", "/admin/login", json={"email": email, "password": password}
            )
        except NetworkFailure as e:
            if e.status_code in (400, *UNAUTHORIZED_STATUSES):
                raise AuthFailure("Invalid email or password") from e
            raise

        data = self._json(response)
        if data.get("success") is False:
            raise AuthFailure(data.get("message") or "Invalid email or password")
        logger.info("Admin login accepted")
        return data

    async def logout(self) -> Dict[str, Any]:
        """Invalidate the session credential."""
        response = await self._request("POST", "/admin/logout")
        return self._json(response)

    async def list_records(self, page: int, page_size: int, search: str = "") -> ResultPage:
        """
        Fetch one page of survey records.

        Args:
            page: 1-based page number
            page_size: Records per page
            search: Search term (name or email)

        Returns:
            ResultPage with the page's records and the total match count
        """
        response = await self._request(
            "GET",
            "/admin/surveys",
            params={"page": page, "limit": page_size, "search": search},
        )
        data = self._json(response)
        if not data.get("success"):
            raise NetworkFailure("Backend reported an unsuccessful listing", response.status_code)

        try:
            records = tuple(SurveyRecord.model_validate(item) for item in data.get("surveys", []))
            return ResultPage(records=records, total=int(data.get("total", 0)))
        except (ValidationError, TypeError, ValueError) as e:
            logger.error(f"API Error: malformed survey listing: {e}")
            raise NetworkFailure("Malformed survey listing") from e

    async def get_record_by_id(self, record_id: str) -> SurveyRecord:
        """Fetch a single survey record by identity."""
        response = await self._request("GET", f"/admin/surveys/{record_id}")
        data = self._json(response)
        try:
            return SurveyRecord.model_validate(data.get("survey"))
        except ValidationError as e:
            logger.error(f"API Error: malformed survey {record_id}: {e}")
            raise NetworkFailure(f"Malformed survey {record_id}") from e

    async def create_record(self, submission: SurveySubmission) -> Dict[str, Any]:
        """Submit a survey response."""
        response = await self._request("POST", "/survey", json=submission.to_payload())
        return self._json(response)
