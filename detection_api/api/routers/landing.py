"""Landing page router returning a human-readable status document."""

from html import escape
from string import Template

from fastapi import APIRouter, status
from fastapi.responses import HTMLResponse

from detection_api.config import RuntimeContext

from .common import ROUTE_METHODS

LANDING_PAGE_TEMPLATE = Template(
    """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Deepfake Detection - Server</title>
  <style>
    body {
      font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
      display: flex;
      justify-content: center;
      align-items: center;
      min-height: 100vh;
      margin: 0;
      background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
      color: white;
    }
    .container {
      text-align: center;
      padding: 2rem;
      background: rgba(255, 255, 255, 0.1);
      border-radius: 20px;
      box-shadow: 0 8px 32px 0 rgba(31, 38, 135, 0.37);
      max-width: 500px;
    }
    h1 { margin-top: 0; }
    .status {
      display: inline-block;
      padding: 0.5rem 1rem;
      background: #4CAF50;
      border-radius: 25px;
      margin: 1rem 0;
      font-weight: bold;
    }
    .info { margin-top: 1rem; font-size: 0.9rem; opacity: 0.9; }
    .info p { margin: 0.5rem 0; }
    a { color: #fff; text-decoration: underline; }
    .endpoints {
      margin-top: 1.5rem;
      padding-top: 1.5rem;
      border-top: 1px solid rgba(255, 255, 255, 0.2);
    }
    .endpoint-item { margin: 0.5rem 0; font-family: 'Courier New', monospace; font-size: 0.85rem; }
  </style>
</head>
<body>
  <div class="container">
    <h1>Deepfake Detection Server</h1>
    <div class="status">Connected successfully</div>
    <div class="info">
      <p><strong>Port:</strong> $port</p>
      <p><strong>Status:</strong> Running</p>
      <p><strong>Environment:</strong> $environment</p>
    </div>
    <div class="endpoints">
      <h3>API Endpoints:</h3>
      <div class="endpoint-item"><a href="/api/health">GET /api/health</a></div>
      <div class="endpoint-item"><a href="/api/info">GET /api/info</a></div>
    </div>
  </div>
</body>
</html>
"""
)


def api_render_landing_page(port: int, environment: str) -> str:
    """Render the landing page document.

    Args:
        port: Configured listening port.
        environment: Environment label; HTML-escaped before interpolation.

    Returns:
        str: Complete HTML document.
    """

    return LANDING_PAGE_TEMPLATE.substitute(port=port, environment=escape(environment))


def api_create_landing_router(context: RuntimeContext) -> APIRouter:
    """Create the root landing page router.

    Args:
        context: Runtime context providing port and environment label.

    Returns:
        APIRouter: Router exposing `/`.

    Raises:
        ValueError: Raised when context is None.
    """

    if context is None:
        raise ValueError("context must not be None")

    router = APIRouter(tags=["landing"])

    @router.api_route("/", methods=ROUTE_METHODS, response_class=HTMLResponse)
    def api_landing_page() -> HTMLResponse:
        """Render the landing page for the current settings.

        Returns:
            HTMLResponse: HTTP 200 HTML document.
        """

        html_document = api_render_landing_page(
            port=context.settings.application_port,
            environment=context.settings.environment_label,
        )
        return HTMLResponse(content=html_document, status_code=status.HTTP_200_OK)

    return router
