"""
ServiceNow Table API client.

Every call is a single synchronous attempt over the host-supplied
``httpx.Client``. Failures surface immediately as ``ServiceNowAPIError``;
retry policy belongs to the host.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from snowflow.config.settings import get_settings
from snowflow.core.component import IntegrationContext
from snowflow.core.errors import ClientConstructionError
from snowflow.servicenow.models import IncidentRecord, ResourceInfo

logger = structlog.get_logger()

AUTH_TYPE_OAUTH = "oauth"
AUTH_TYPE_BASIC = "basic"

TABLE_INCIDENT = "incident"
TABLE_USER_GROUP = "sys_user_group"
TABLE_USER = "sys_user"


class ServiceNowAPIError(RuntimeError):
    """Raised when a ServiceNow call fails or returns a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ServiceNowClient:
    """Thin client over the ServiceNow Table API."""

    def __init__(
        self,
        http: httpx.Client,
        instance_url: str,
        *,
        headers: dict[str, str] | None = None,
        auth: httpx.Auth | tuple[str, str] | None = None,
        timeout: float | None = None,
    ) -> None:
        self._http = http
        self.instance_url = instance_url.rstrip("/")
        self._headers = {"Accept": "application/json", **(headers or {})}
        self._auth = auth
        self._timeout = timeout

    @classmethod
    def from_integration(cls, http: httpx.Client, integration: IntegrationContext) -> ServiceNowClient:
        """Build a client bound to the host-managed connection."""
        if http is None:
            raise ClientConstructionError("HTTP client is required")

        instance_url = (integration.get_config("instanceUrl") or "").strip()
        if not instance_url:
            raise ClientConstructionError("instance URL is required")
        if not instance_url.startswith(("http://", "https://")):
            raise ClientConstructionError(
                "instance URL must start with http:// or https://",
                details={"instance_url": instance_url},
            )

        settings = get_settings()
        headers = {"User-Agent": settings.user_agent}
        auth: tuple[str, str] | None = None

        auth_type = (integration.get_config("authType") or AUTH_TYPE_OAUTH).strip().lower()
        if auth_type == AUTH_TYPE_OAUTH:
            token = integration.get_secret("accessToken")
            if not token:
                raise ClientConstructionError("OAuth access token is missing")
            headers["Authorization"] = f"Bearer {token}"
        elif auth_type == AUTH_TYPE_BASIC:
            username = integration.get_config("username")
            password = integration.get_secret("password")
            if not username or not password:
                raise ClientConstructionError("basic auth requires a username and password")
            auth = (username, password)
        else:
            raise ClientConstructionError(
                f"unsupported auth type '{auth_type}'",
                details={"auth_type": auth_type},
            )

        return cls(http, instance_url, headers=headers, auth=auth, timeout=settings.http_timeout)

    def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        url = f"{self.instance_url}{path}"
        kwargs: dict[str, Any] = {"params": params, "headers": self._headers}
        if self._auth is not None:
            kwargs["auth"] = self._auth
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout

        try:
            response = self._http.get(url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("servicenow_network_error", url=url, error=str(exc))
            raise ServiceNowAPIError(f"request to {path} failed: {exc}") from exc

        if not response.is_success:
            logger.warning("servicenow_http_error", url=url, status=response.status_code)
            raise ServiceNowAPIError(
                f"request got {response.status_code} code: {response.text}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise ServiceNowAPIError("ServiceNow response did not contain JSON") from exc
        if not isinstance(data, dict):
            raise ServiceNowAPIError("ServiceNow response was not a JSON object")
        return data

    def _get_record(self, table: str, sys_id: str) -> ResourceInfo:
        data = self._get(f"/api/now/table/{table}/{sys_id}", params={"sysparm_fields": "sys_id,name"})
        result = data.get("result")
        if not isinstance(result, dict) or not result.get("sys_id"):
            raise ServiceNowAPIError(f"{table} record {sys_id} not found")
        return ResourceInfo(id=str(result["sys_id"]), name=str(result.get("name") or ""))

    def get_assignment_group(self, sys_id: str) -> ResourceInfo:
        return self._get_record(TABLE_USER_GROUP, sys_id)

    def get_user(self, sys_id: str) -> ResourceInfo:
        return self._get_record(TABLE_USER, sys_id)

    def get_incidents(self, query: str, limit: int) -> list[IncidentRecord]:
        """List incidents matching an encoded query, at most ``limit`` of them."""
        params: dict[str, Any] = {"sysparm_limit": limit}
        if query:
            params["sysparm_query"] = query

        data = self._get(f"/api/now/table/{TABLE_INCIDENT}", params=params)
        result = data.get("result") or []
        if not isinstance(result, list):
            raise ServiceNowAPIError("incident response 'result' was not a list")

        try:
            return [IncidentRecord.model_validate(item) for item in result]
        except ValueError as exc:
            raise ServiceNowAPIError("failed to decode incidents") from exc
