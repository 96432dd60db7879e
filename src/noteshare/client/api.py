"""
HTTP client for the NoteShare backend.

Wraps ``httpx.AsyncClient``, attaches the bearer token, parses responses
into the API schemas and maps HTTP failures onto ``noteshare.client.errors``.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

import httpx

from ..config import get_settings
from ..core.schemas.auth import TokenResponse, UserResponse
from ..core.schemas.notes import NoteResponse
from .errors import (
    AccessDeniedError,
    AuthError,
    DuplicateLoginIdError,
    InvalidCredentialsError,
    NoteShareError,
    NotFoundError,
    TransientFetchError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_ERRORS = {
    401: AuthError,
    403: AccessDeniedError,
    404: NotFoundError,
    409: DuplicateLoginIdError,
    422: ValidationError,
}


def _error_message(response: httpx.Response) -> str:
    try:
        detail = response.json().get("detail")
    except (ValueError, AttributeError):
        detail = None

    if isinstance(detail, list):
        # pydantic validation errors
        return "; ".join(str(item.get("msg", item)) for item in detail if item)
    if detail:
        return str(detail)
    return f"HTTP {response.status_code}"


class BackendClient:
    """Async client for the ``/api`` routes."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        settings = get_settings()
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=timeout or settings.client_timeout_seconds,
        )
        self.access_token: Optional[str] = None

    async def __aenter__(self) -> "BackendClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        headers = kwargs.pop("headers", {})
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"

        try:
            response = await self._http.request(method, f"/api{path}", headers=headers, **kwargs)
        except httpx.TransportError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise TransientFetchError(f"Could not reach server: {e}") from e

        logger.debug(f"{method} {path} returned {response.status_code}")
        if response.status_code >= 400:
            message = _error_message(response)
            if response.status_code >= 500:
                raise TransientFetchError(message, response.status_code)
            error_cls = _STATUS_ERRORS.get(response.status_code, NoteShareError)
            raise error_cls(message, response.status_code)
        return response

    # --- auth ---

    async def login(self, login_id: str, password: str) -> TokenResponse:
        try:
            response = await self._request(
                "POST", "/auth/login", json={"login_id": login_id, "password": password}
            )
        except AuthError as e:
            raise InvalidCredentialsError(e.message, e.status_code) from e
        except ValidationError as e:
            # malformed login input can never match an account
            raise InvalidCredentialsError(e.message, e.status_code) from e
        return self._store_session(response)

    async def register(
        self, username: str, login_id: str, password: str, date_of_birth: Union[date, str]
    ) -> TokenResponse:
        payload = {
            "username": username,
            "login_id": login_id,
            "password": password,
            "date_of_birth": str(date_of_birth),
        }
        response = await self._request("POST", "/auth/register", json=payload)
        return self._store_session(response)

    async def logout(self) -> None:
        try:
            if self.access_token:
                await self._request("POST", "/auth/logout")
        finally:
            self.access_token = None

    async def get_me(self) -> UserResponse:
        response = await self._request("GET", "/auth/me")
        return UserResponse.model_validate(response.json())

    def _store_session(self, response: httpx.Response) -> TokenResponse:
        token = TokenResponse.model_validate(response.json())
        self.access_token = token.access_token
        return token

    # --- notes ---

    async def list_notes(
        self,
        owner: Optional[Union[UUID, str]] = None,
        order_by: str = "created_at",
        ascending: bool = False,
        query: Optional[str] = None,
        subject: Optional[str] = None,
    ) -> List[NoteResponse]:
        params: Dict[str, Any] = {"order_by": order_by, "ascending": str(ascending).lower()}
        if owner is not None:
            params["owner"] = str(owner)
        if query:
            params["q"] = query
        if subject:
            params["subject"] = subject

        response = await self._request("GET", "/notes/", params=params)
        return [NoteResponse.model_validate(item) for item in response.json()]

    async def get_note(self, note_id: Union[UUID, str]) -> NoteResponse:
        response = await self._request("GET", f"/notes/{note_id}")
        return NoteResponse.model_validate(response.json())

    async def create_note(self, title: str, subject: str, content: str) -> NoteResponse:
        """Insert a note; the server assigns id, owner and timestamps."""
        response = await self._request(
            "POST", "/notes/", json={"title": title, "subject": subject, "content": content}
        )
        return NoteResponse.model_validate(response.json())

    async def update_note(self, note_id: Union[UUID, str], **changes: str) -> NoteResponse:
        response = await self._request("PUT", f"/notes/{note_id}", json=changes)
        return NoteResponse.model_validate(response.json())

    async def delete_note(self, note_id: Union[UUID, str]) -> None:
        await self._request("DELETE", f"/notes/{note_id}")
