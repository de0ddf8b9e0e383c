"""HTTP transport for exchanging OFX documents with a server."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import requests

from ofxcodec.config import default_settings
from ofxcodec.document import count_messages, parse_response
from ofxcodec.errors import TransportError, ValidityError

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from ofxcodec.config import ClientSettings
    from ofxcodec.constants import OfxVersion
    from ofxcodec.document import Request, Response

LOGGER = logging.getLogger(__name__)

CONTENT_TYPE = 'application/x-ofx'


def verify_option(settings: ClientSettings) -> bool | str:
    """Return the ``verify=`` argument for ``requests``: the configured CA bundle or ``True``."""

    ca_path = settings.ca_cert_path
    if ca_path is None:
        return True
    if not ca_path.is_file():
        LOGGER.warning('CA bundle %s not found, using the default trust store', ca_path)
        return True
    return str(ca_path)


class OfxClient:
    """Send requests to an OFX server and parse its responses."""

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        session: requests.Session | None = None,
    ) -> None:
        self.settings = settings or default_settings()
        self.session = session or requests.Session()

    def offer_version(self) -> OfxVersion:
        return self.settings.spec_version

    def set_client_fields(self, request: Request) -> None:
        """Stamp ``request`` with the current time and the client's identity and formatting."""

        if request.signon is None:
            raise ValidityError('request has no signon')
        request.signon.dt_client = datetime.now(UTC)
        request.signon.app_id = self.settings.app_id
        request.signon.app_ver = self.settings.app_ver
        request.version = self.offer_version()
        request.indent = not self.settings.no_indent
        request.carriage_return = self.settings.carriage_return

    def raw_request(self, url: str, data: bytes) -> bytes:
        """POST ``data`` to ``url`` and return the response body."""

        if not url.startswith('https://'):
            raise TransportError(f'refusing to send OFX request over a non-HTTPS URL: {url}')
        headers = {'Content-Type': CONTENT_TYPE}
        if self.settings.user_agent:
            headers['User-Agent'] = self.settings.user_agent
        try:
            response = self.session.post(
                url,
                data=data,
                headers=headers,
                timeout=self.settings.request_timeout,
                verify=verify_option(self.settings),
            )
        except requests.RequestException as exc:
            raise TransportError(f'OFX request to {url} failed: {exc}') from exc
        try:
            if response.status_code != 200:
                raise TransportError(f'OFX server returned HTTP {response.status_code} {response.reason}')
            return response.content
        finally:
            response.close()

    def request_no_parse(self, request: Request, url: str) -> bytes:
        """Send ``request`` and return the raw response body."""

        self.set_client_fields(request)
        body = request.marshal()
        LOGGER.info('Sending OFX %s request to %s: %s', request.version, url, count_messages(request))
        return self.raw_request(url, body)

    def request_and_parse(self, request: Request, url: str) -> Response:
        """Send ``request`` and return the parsed, validated response."""

        return parse_response(self.request_no_parse(request, url))
