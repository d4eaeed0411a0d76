"""Inline HTML rendering for the authorization page, one body per view state."""

from __future__ import annotations

import html
import json

from ghtoken.ui.flow import AuthorizationFlow, CopyAcknowledgement
from ghtoken.ui.state import Failed, Idle, Loading, Success

_PAGE_HTML = """\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>GitHub Token Generator</title>
  <style>
    * {{ margin: 0; padding: 0; box-sizing: border-box; }}
    body {{
      font-family: system-ui, -apple-system, sans-serif;
      background: #f9fafb; padding: 3rem 1rem;
    }}
    .card {{
      max-width: 28rem; margin: 0 auto; background: #fff; padding: 2rem;
      border-radius: 12px; box-shadow: 0 2px 8px rgba(0,0,0,.1);
    }}
    h1 {{ font-size: 1.75rem; text-align: center; margin-bottom: .5rem; }}
    .intro {{ color: #4b5563; text-align: center; margin-bottom: 2rem; }}
    .error {{
      margin-bottom: 1.5rem; padding: 1rem; background: #fef2f2;
      border: 1px solid #fecaca; border-radius: 6px; color: #dc2626;
    }}
    .login {{
      display: block; width: 100%; padding: .75rem; background: #000;
      color: #fff; text-align: center; text-decoration: none; border-radius: 6px;
    }}
    .login:hover {{ background: #1f2937; }}
    .ok {{ color: #16a34a; text-align: center; margin-bottom: 1rem; }}
    .token {{ position: relative; }}
    textarea {{
      width: 100%; height: 6rem; padding: .75rem; font-family: monospace;
      background: #f9fafb; border: 1px solid #e5e7eb; border-radius: 6px;
    }}
    .copy {{
      position: absolute; top: .5rem; right: .5rem; padding: .25rem .75rem;
      background: #fff; border: 1px solid #e5e7eb; border-radius: 6px; cursor: pointer;
    }}
    .notes {{ color: #4b5563; font-size: .875rem; margin-top: 1rem; }}
    .notes ul {{ padding-left: 1.25rem; }}
  </style>
</head>
<body>
  <div class="card" data-state="{status}">
    <h1>GitHub Token Generator</h1>
    {body}
  </div>
  {script}
</body>
</html>
"""

_INTRO = (
    '<p class="intro">Generate a GitHub access token for your application by '
    "authenticating with your GitHub account.</p>"
)

_SUCCESS_NOTES = """\
<div class="notes">
      <p>Make sure to:</p>
      <ul>
        <li>Save this token securely - it won't be shown again</li>
        <li>Keep it private and don't share it</li>
        <li>Use it in your application's environment variables</li>
      </ul>
    </div>"""

_COPY_SCRIPT = """\
<script>
    (function () {{
      var button = document.getElementById("copy-token");
      var field = document.getElementById("token");
      button.addEventListener("click", function () {{
        navigator.clipboard.writeText(field.value).then(function () {{
          button.textContent = {copied};
          setTimeout(function () {{ button.textContent = {default}; }}, {delay});
        }});
      }});
      window.history.replaceState({{}}, document.title, {display_url});
    }})();
  </script>"""


def _js_string(value: str) -> str:
    return json.dumps(value).replace("</", "<\\/")


def render_page(flow: AuthorizationFlow, *, login_path: str = "/login") -> str:
    state = flow.state
    script = ""

    if isinstance(state, Idle):
        body = (
            f"{_INTRO}\n"
            f'    <a class="login" href="{html.escape(login_path, quote=True)}">'
            "Login with GitHub</a>"
        )
    elif isinstance(state, Loading):
        body = '<p class="intro">Authenticating with GitHub...</p>'
    elif isinstance(state, Failed):
        body = (
            f"{_INTRO}\n"
            f'    <div class="error"><p>{html.escape(state.message)}</p></div>\n'
            f'    <a class="login" href="{html.escape(login_path, quote=True)}">'
            "Login with GitHub</a>"
        )
    elif isinstance(state, Success):
        body = (
            '<p class="ok">&#10003; Successfully generated token</p>\n'
            '    <div class="token">\n'
            f'      <textarea id="token" readonly>{html.escape(state.access_token)}</textarea>\n'
            f'      <button id="copy-token" class="copy" type="button">'
            f"{CopyAcknowledgement.DEFAULT_LABEL}</button>\n"
            "    </div>\n"
            f"    {_SUCCESS_NOTES}"
        )
        script = _COPY_SCRIPT.format(
            copied=_js_string(CopyAcknowledgement.COPIED_LABEL),
            default=_js_string(CopyAcknowledgement.DEFAULT_LABEL),
            delay=flow.copy_ack.reset_after_ms,
            display_url=_js_string(flow.display_url or "/"),
        )
    else:  # pragma: no cover - exhaustive over ViewState
        raise TypeError(f"Unknown view state: {state!r}")

    return _PAGE_HTML.format(status=state.status, body=body, script=script)


__all__ = ["render_page"]
