"""Admin API endpoints with simple token auth."""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import HTMLResponse

from fotografia.errors import Unauthorized

if TYPE_CHECKING:
    from fotografia.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])

ADMIN_TOKEN_HEADER = "X-Admin-Token"


def verify_admin_token(request: Request, x_admin_token: str | None) -> None:
    """Raise Unauthorized unless the header matches the configured token."""
    container: AppContainer = request.app.state.container
    expected = container.settings.admin_token
    if not x_admin_token or not secrets.compare_digest(
        x_admin_token.encode(), expected.encode()
    ):
        raise Unauthorized("Admin token required")


async def require_admin(
    request: Request, x_admin_token: str | None = Header(default=None)
) -> None:
    """Ensure requests include a valid admin token."""
    verify_admin_token(request, x_admin_token)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/ui", response_class=HTMLResponse)
async def admin_ui() -> HTMLResponse:
    """Minimal admin console that consumes the submissions API."""
    return HTMLResponse(_ADMIN_UI_HTML)


_ADMIN_UI_HTML = """<!doctype html>
<html lang="pt-BR">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Fotograf-IA Admin</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      h1 { margin-bottom: 0.5rem; }
      .row { margin-bottom: 1rem; }
      input, select { padding: 0.4rem 0.6rem; width: 320px; }
      button { padding: 0.4rem 0.8rem; margin-right: 0.5rem; }
      pre { background: #f6f6f6; padding: 1rem; overflow: auto; }
    </style>
  </head>
  <body>
    <h1>Fotograf-IA Admin</h1>
    <div class="row">
      <label>Admin token</label><br />
      <input id="token" type="password" placeholder="X-Admin-Token" />
    </div>
    <div class="row">
      <button onclick="loadSubmissions()">Submissions</button>
    </div>
    <div class="row">
      <label>Submission id</label><br />
      <input id="submission" type="text" />
    </div>
    <div class="row">
      <label>Status</label><br />
      <select id="status">
        <option value="">(infer from photos)</option>
        <option value="pending">pending</option>
        <option value="processing">processing</option>
        <option value="completed">completed</option>
      </select>
    </div>
    <div class="row">
      <label>Processed photos</label><br />
      <input id="photos" type="file" accept="image/*" multiple />
    </div>
    <div class="row">
      <button onclick="updateSubmission()">Update</button>
    </div>
    <pre id="output">Ready.</pre>
    <script>
      function headers() {
        return { 'X-Admin-Token': document.getElementById('token').value };
      }
      async function show(res) {
        const output = document.getElementById('output');
        if (!res.ok) {
          output.textContent = 'Error: ' + res.status;
          return;
        }
        const data = await res.json();
        output.textContent = JSON.stringify(data, null, 2);
      }
      async function loadSubmissions() {
        document.getElementById('output').textContent = 'Loading...';
        await show(await fetch('/submissions', { headers: headers() }));
      }
      async function updateSubmission() {
        const id = document.getElementById('submission').value;
        const status = document.getElementById('status').value;
        const files = document.getElementById('photos').files;
        const form = new FormData();
        if (status) form.append('status', status);
        Array.from(files).forEach((file, i) => form.append('processed-' + i, file));
        document.getElementById('output').textContent = 'Uploading...';
        await show(await fetch('/submissions/' + id, {
          method: 'PATCH', headers: headers(), body: form
        }));
      }
    </script>
  </body>
</html>
"""
