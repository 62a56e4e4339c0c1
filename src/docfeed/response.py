"""A document response that records what a connector writes to it."""

from __future__ import annotations

import io
from datetime import datetime
from enum import Enum
from typing import BinaryIO

from .core.anchors import AnchorMap, AnchorView
from .errors import ResponseStateError


class ResponseState(Enum):
    SETUP = "SETUP"
    NOT_MODIFIED = "NOT_MODIFIED"
    NOT_FOUND = "NOT_FOUND"
    NO_CONTENT = "NO_CONTENT"
    SEND_BODY = "SEND_BODY"


class RecordingResponse:
    """
    Records the values a connector supplies for one document.

    Setters are only legal while the response is in SETUP; the respond_*
    methods and get_output_stream() move it out of SETUP. Collections are
    returned as copies or read-only views. Not thread-safe.
    """

    def __init__(self, out: BinaryIO | None = None):
        self._out = out if out is not None else io.BytesIO()
        self.state = ResponseState.SETUP
        self.content_type: str | None = None
        self.last_modified: datetime | None = None
        self._metadata: list[tuple[str, str]] = []
        self.secure = False
        self._anchors = AnchorMap()
        self.no_index = False
        self.no_follow = False
        self.no_archive = False
        self.display_url: str | None = None
        self.crawl_once = False
        self.lock = False
        self._params: dict[str, str] = {}

    def _check_setup(self) -> None:
        if self.state is not ResponseState.SETUP:
            raise ResponseStateError(f"Already responded {self.state.value}")

    # Terminal calls

    def respond_not_modified(self) -> None:
        self._check_setup()
        self.state = ResponseState.NOT_MODIFIED

    def respond_not_found(self) -> None:
        self._check_setup()
        self.state = ResponseState.NOT_FOUND

    def respond_no_content(self) -> None:
        self._check_setup()
        self.state = ResponseState.NO_CONTENT

    def get_output_stream(self) -> BinaryIO:
        if self.state is ResponseState.SETUP:
            self.state = ResponseState.SEND_BODY
        elif self.state is not ResponseState.SEND_BODY:
            raise ResponseStateError(f"Already responded {self.state.value}")
        return self._out

    # Setters

    def set_content_type(self, content_type: str) -> None:
        self._check_setup()
        self.content_type = content_type

    def set_last_modified(self, last_modified: datetime) -> None:
        self._check_setup()
        self.last_modified = last_modified

    def add_metadata(self, key: str, value: str) -> None:
        self._check_setup()
        self._metadata.append((key, value))

    def set_secure(self, secure: bool) -> None:
        self._check_setup()
        self.secure = secure

    def add_anchor(self, uri: str, text: str | None = None) -> None:
        self._check_setup()
        self._anchors.add_anchor(uri, text)

    def set_no_index(self, no_index: bool) -> None:
        self._check_setup()
        self.no_index = no_index

    def set_no_follow(self, no_follow: bool) -> None:
        self._check_setup()
        self.no_follow = no_follow

    def set_no_archive(self, no_archive: bool) -> None:
        self._check_setup()
        self.no_archive = no_archive

    def set_display_url(self, display_url: str) -> None:
        self._check_setup()
        self.display_url = display_url

    def set_crawl_once(self, crawl_once: bool) -> None:
        self._check_setup()
        self.crawl_once = crawl_once

    def set_lock(self, lock: bool) -> None:
        self._check_setup()
        self.lock = lock

    def set_param(self, key: str, value: str) -> None:
        self._check_setup()
        self._params[key] = value

    # Views

    @property
    def anchors(self) -> AnchorView:
        return self._anchors.view()

    @property
    def metadata(self) -> list[tuple[str, str]]:
        return list(self._metadata)

    @property
    def params(self) -> dict[str, str]:
        return dict(sorted(self._params.items()))

    def body(self) -> bytes:
        """Bytes written so far, when recording into the default buffer."""
        if isinstance(self._out, io.BytesIO):
            return self._out.getvalue()
        raise ResponseStateError("Response body was written to an external stream")
