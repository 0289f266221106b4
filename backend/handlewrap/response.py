"""
Handlewrap — Response Writer
==============================

What:  The mutable response sink every handler receives.
How:   Buffers status, headers and body; the translator turns it into a
       Starlette Response once the handler chain has finished.
Who:   Created by the translator, once per request.

Write semantics:
    write_header(status)  → sets the status line; only the first call counts
    write(data)           → appends to the body, implying 200 if no status yet
"""

import logging
from typing import Optional, Union

from starlette.datastructures import MutableHeaders
from starlette.responses import Response

from handlewrap.exceptions import validate_status

logger = logging.getLogger(__name__)


class ResponseWriter:
    """Per-request response buffer with send-once status semantics."""

    def __init__(self) -> None:
        self.headers = MutableHeaders()
        self._status: Optional[int] = None
        self._body = bytearray()

    @property
    def header_written(self) -> bool:
        return self._status is not None

    @property
    def status_code(self) -> int:
        return self._status if self._status is not None else 200

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    def write_header(self, status_code: int) -> None:
        """
        Set the response status.

        A second call is ignored: the status line has already been committed
        by the first call or by an earlier write().
        """
        if self._status is not None:
            logger.warning(
                "superfluous write_header call: status %d already written, ignoring %d",
                self._status,
                status_code,
            )
            return
        self._status = validate_status(status_code)

    def write(self, data: Union[str, bytes]) -> int:
        """Append ``data`` (str is UTF-8 encoded) and return the byte count."""
        if self._status is None:
            self.write_header(200)
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._body.extend(data)
        return len(data)

    def reset(self) -> None:
        """
        Discard the buffered status and body, keeping the headers.

        Nothing has reached the client until to_response(), so an error
        response can replace whatever a failing handler had written.
        """
        self._status = None
        self._body.clear()

    def to_response(self) -> Response:
        response = Response(content=bytes(self._body), status_code=self.status_code)
        # Raw headers keep repeated names such as set-cookie.
        own = {key for key, _ in self.headers.raw}
        response.raw_headers = [
            (key, value) for key, value in response.raw_headers if key not in own
        ] + self.headers.raw
        return response
