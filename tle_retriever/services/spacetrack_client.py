from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from .. import __version__
from ..config import Settings
from ..schemas import TleRecord, TleRecordList
from .query_builder import DEFAULT_BASE_URL

logger = logging.getLogger(__name__)

LOGIN_PATH = "/ajaxauth/login"


class SpaceTrackError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ResponseDecodeError(SpaceTrackError):
    pass


def decode_records(payload: bytes | str) -> list[TleRecord]:
    """Decode a JSON array body into records, failing on the first bad element."""
    try:
        return TleRecordList.validate_json(payload)
    except ValidationError as exc:
        text = payload.decode("utf-8", errors="replace") if isinstance(payload, bytes) else payload
        preview = text[:200].strip()
        raise ResponseDecodeError(
            f"Unexpected Space-Track response ({exc.error_count()} error(s)): {exc.errors()[0]['msg']}; body: {preview!r}"
        ) from exc


class SpaceTrackClient:
    """Combined login-and-query client for the Space-Track ``ajaxauth`` endpoint.

    Credentials and the query go out in one form POST; no session cookie is
    kept between calls.
    """

    def __init__(
        self,
        username: str,
        password: str,
        base_url: str = DEFAULT_BASE_URL,
        connect_timeout: float = 30,
        read_timeout: float = 30,
        transport: httpx.BaseTransport | None = None,
    ):
        self.username = username
        self.password = password
        self.base_url = base_url.rstrip("/")
        self.timeout = httpx.Timeout(read_timeout, connect=connect_timeout)
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, transport: httpx.BaseTransport | None = None) -> SpaceTrackClient:
        return cls(
            username=settings.username,
            password=settings.password.get_secret_value(),
            base_url=settings.spacetrack_base_url,
            connect_timeout=settings.connection_timeout,
            read_timeout=settings.connection_read_timeout,
            transport=transport,
        )

    @property
    def login_url(self) -> str:
        return self.base_url + LOGIN_PATH

    @staticmethod
    def _http_headers() -> dict[str, str]:
        return {
            "User-Agent": f"tle_retriever/{__version__}",
            "Accept": "application/json",
        }

    def fetch(self, query: str) -> list[TleRecord]:
        form = {"identity": self.username, "password": self.password, "query": query}
        with httpx.Client(
            timeout=self.timeout,
            headers=self._http_headers(),
            follow_redirects=True,
            transport=self.transport,
        ) as client:
            try:
                response = client.post(self.login_url, data=form)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                raise SpaceTrackError(f"Space-Track responded with HTTP {status}", status_code=status) from exc
            except httpx.RequestError as exc:
                raise SpaceTrackError(f"Space-Track request failed: {exc}") from exc

        logger.debug("Received %d bytes from %s", len(response.content), self.login_url)
        records = decode_records(response.content)
        logger.info("Decoded %d TLE records", len(records))
        return records
