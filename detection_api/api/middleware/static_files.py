"""Static file interceptor serving files from a fixed directory."""

from __future__ import annotations

import os

from starlette.exceptions import HTTPException
from starlette.responses import Response
from starlette.staticfiles import StaticFiles
from starlette.types import ASGIApp, Receive, Scope, Send

_STATIC_METHODS = frozenset({"GET", "HEAD"})
_DIRECTORY_INDEX = "index.html"


class StaticFilesMiddleware:
    """Serve `<directory>/<request path>` when it is a regular file, else pass through.

    A path ending in `/` is served from the directory's `index.html` when one
    exists, so `/` answers with `<directory>/index.html`. The directory may be
    absent; every lookup then falls through to routing.
    """

    def __init__(self, app: ASGIApp, directory: str):
        self.app = app
        self._static_files = StaticFiles(directory=directory, check_dir=False)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["method"] not in _STATIC_METHODS:
            await self.app(scope, receive, send)
            return

        response = await self._lookup(scope)
        if response is None:
            await self.app(scope, receive, send)
            return
        await response(scope, receive, send)

    async def _lookup(self, scope: Scope) -> Response | None:
        relative_path = self._static_files.get_path(scope)
        candidates = [relative_path]
        if scope["path"].endswith("/"):
            candidates.append(os.path.join(relative_path, _DIRECTORY_INDEX))

        for candidate in candidates:
            try:
                return await self._static_files.get_response(candidate, scope)
            except HTTPException as error:
                if error.status_code != 404:
                    raise
        return None
