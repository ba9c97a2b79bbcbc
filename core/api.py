"""HTTP client for the case service.

Every call is tenant-scoped and carries the tenant/user identity headers.
Responses are unwrapped with ``core.normalize`` so envelope changes on the
service side do not reach the views; a detail response without a case
record raises ``ShapeError``.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from core.config import Settings, get_settings
from core.models import Case, Outcome
from core.normalize import extract_case_list, extract_case_record

logger = logging.getLogger(__name__)

HTML_MARKERS = ("<!doctype html", "<html")


class ApiError(RuntimeError):
    """The case service could not be reached or answered with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ApiConfigError(ApiError):
    """Requests are not reaching the case service (usually a wrong base URL)."""


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()[:200] or response.reason_phrase
    if isinstance(body, Mapping) and body.get("detail"):
        return str(body["detail"])
    return response.reason_phrase


def _read_case(record: Dict[str, Any]) -> Case:
    try:
        return Case.from_payload(record)
    except ValidationError as exc:
        logger.warning("Unreadable case %r: %s", record.get("case_id"), exc)
        raise ApiError(f"Case service returned an unreadable case ({exc.error_count()} invalid fields)") from exc


class CasesClient:
    """Thin wrapper over ``httpx.Client`` for one tenant/user identity."""

    def __init__(
        self,
        tenant_id: str,
        user_id: str,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        settings = settings or get_settings()
        self.tenant_id = tenant_id
        self.user_id = user_id
        self.base_url = settings.api_base_url
        self._client = httpx.Client(
            base_url=self.base_url or "",
            timeout=settings.REQUEST_TIMEOUT,
            transport=transport,
            event_hooks={"request": [self._add_identity], "response": [self._reject_html]},
        )

    def __enter__(self) -> "CasesClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _add_identity(self, request: httpx.Request) -> None:
        request.headers["x-tenant-id"] = self.tenant_id
        request.headers["x-user-id"] = self.user_id

    def _reject_html(self, response: httpx.Response) -> None:
        content_type = response.headers.get("content-type", "")
        response.read()
        head = response.text[:2048].lower()
        if "text/html" in content_type or any(m in head for m in HTML_MARKERS):
            raise ApiConfigError(
                f"API base URL misconfigured: API_BASE_URL is set to {self.base_url!r} "
                "but the response looks like HTML. Point it at the case service "
                "(e.g. http://localhost:8080) and restart."
            )

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        if not self.base_url:
            raise ApiConfigError(
                "API base URL is not set. Set API_BASE_URL (e.g. http://localhost:8080) and restart."
            )
        url = f"/tenants/{quote(self.tenant_id, safe='')}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            detail = _error_detail(exc.response)
            logger.warning("Case service answered %s to %s %s: %s", status, method, url, detail)
            raise ApiError(f"{status}: {detail}", status_code=status) from exc
        except httpx.HTTPError as exc:
            logger.warning("Case service request %s %s failed: %s", method, url, exc)
            raise ApiError(f"Could not reach the case service: {exc}") from exc
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(f"Case service returned invalid JSON for {method} {url}") from exc

    @staticmethod
    def _case_path(case_id: str, suffix: str = "") -> str:
        return f"/cases/{quote(case_id, safe='')}{suffix}"

    # -- Cases --

    def list_cases(self, status: Optional[str] = None) -> List[Case]:
        data = self._request("GET", "/cases", params={"status": status} if status else None)
        cases = []
        for item in extract_case_list(data):
            if not isinstance(item, Mapping):
                continue
            try:
                cases.append(Case.from_payload(dict(item)))
            except ValidationError as exc:
                logger.warning("Skipping unreadable case %r: %s", item.get("case_id"), exc)
        return cases

    def create_case(self, case: Case) -> Case:
        data = self._request("POST", "/cases", json=case.to_payload(include_identity=False))
        return _read_case(extract_case_record(data))

    def get_case(self, case_id: str) -> Case:
        data = self._request("GET", self._case_path(case_id))
        return _read_case(extract_case_record(data))

    def patch_case(self, case_id: str, case: Case) -> Case:
        data = self._request("PATCH", self._case_path(case_id), json=case.to_payload())
        return _read_case(extract_case_record(data))

    # -- Copilot --

    def calculate(self, case_id: str) -> Any:
        return self._request("POST", self._case_path(case_id, "/calculate"))

    def snapshot(self, case_id: str) -> Any:
        return self._request("POST", self._case_path(case_id, "/snapshot"))

    def guidelines_query(
        self,
        case_id: str,
        question: str,
        backend: str = "auto",
        filters: Optional[Dict[str, Any]] = None,
    ) -> Any:
        body: Dict[str, Any] = {"question": question, "backend": backend}
        if filters:
            body["filters"] = filters
        return self._request("POST", self._case_path(case_id, "/guidelines/query"), json=body)

    def update_outcome(self, case_id: str, outcome: Outcome) -> Any:
        return self._request(
            "POST", self._case_path(case_id, "/outcome"), json=outcome.model_dump(mode="json")
        )
