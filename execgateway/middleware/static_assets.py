# -*- coding: utf-8 -*-
"""Location: ./execgateway/middleware/static_assets.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Static asset serving.

Files under the configured static directory are served for ``GET``/``HEAD``
requests whose path names an existing file; every other request falls
through to route dispatch.
"""

# Standard
from pathlib import Path
from typing import Optional

# Third-Party
from starlette.responses import FileResponse
from starlette.types import ASGIApp, Receive, Scope, Send


class StaticAssetsMiddleware:
    """Serve files from ``directory`` ahead of the routers."""

    def __init__(self, app: ASGIApp, directory: str) -> None:
        self.app = app
        self.directory = Path(directory).resolve()

    def lookup(self, path: str) -> Optional[Path]:
        """Resolve a request path to a file inside the static directory.

        Args:
            path: URL path of the request.

        Returns:
            Optional[Path]: The file, or None when missing or outside the directory.
        """
        relative = path.lstrip("/")
        if not relative or not self.directory.is_dir():
            return None
        candidate = (self.directory / relative).resolve()
        if self.directory not in candidate.parents or not candidate.is_file():
            return None
        return candidate

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["method"] not in ("GET", "HEAD"):
            await self.app(scope, receive, send)
            return

        asset = self.lookup(scope.get("path", ""))
        if asset is None:
            await self.app(scope, receive, send)
            return

        await FileResponse(asset)(scope, receive, send)
