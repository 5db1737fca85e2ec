"""
Auth Completion - the page that finishes the Search Console popup flow.

Google redirects the popup to /gsc-auth-complete?code=...; the page posts
the code to /api/gsc/exchange-token and reports the outcome.

State machine:
==============
    PENDING --(no code in URL)------------> ERROR    (terminal)
    PENDING --(exchange answered non-2xx)-> ERROR    (terminal, message verbatim)
    PENDING --(exchange answered 2xx)-----> SUCCESS  (terminal, window closes
                                                      after CLOSE_DELAY_MS)

AuthCompletion encodes these rules in Python; the rendered page carries the
same messages and delay into its script.
"""

import html
import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


EXCHANGE_ENDPOINT = "/api/gsc/exchange-token"
CLOSE_DELAY_MS = 1500

MISSING_CODE_MESSAGE = "Codice di autorizzazione mancante."
EXCHANGE_FAILED_MESSAGE = "Scambio del token fallito."
UNKNOWN_ERROR_MESSAGE = "Errore sconosciuto."


class CompletionStatus(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


class InvalidTransition(Exception):
    """Raised when a terminal state is asked to change."""
    pass


@dataclass
class AuthCompletion:
    """
    One page load's worth of completion state.

    Example:
        completion = AuthCompletion()
        if completion.start(code):
            completion.finish(ok=response.ok, payload=response.json())
    """
    status: CompletionStatus = CompletionStatus.PENDING
    error: Optional[str] = None
    close_after_ms: Optional[int] = None

    @property
    def is_terminal(self) -> bool:
        return self.status is not CompletionStatus.PENDING

    def _require_pending(self) -> None:
        if self.is_terminal:
            raise InvalidTransition(f"Completion already {self.status.value}")

    def start(self, code: Optional[str]) -> bool:
        """
        Enter the flow with the code from the URL.

        Returns:
            True if the exchange should be called, False if the page
            went straight to ERROR
        """
        self._require_pending()
        if not code:
            self.fail(MISSING_CODE_MESSAGE)
            return False
        return True

    def finish(self, ok: bool, payload: Optional[Dict[str, Any]] = None) -> None:
        """Apply the exchange response."""
        self._require_pending()
        if ok:
            self.status = CompletionStatus.SUCCESS
            self.close_after_ms = CLOSE_DELAY_MS
            return

        message = None
        if isinstance(payload, dict):
            message = payload.get("error")
        self.fail(message or EXCHANGE_FAILED_MESSAGE)

    def fail(self, message: Optional[str]) -> None:
        """Transition to ERROR (network failures land here too)."""
        self._require_pending()
        self.status = CompletionStatus.ERROR
        self.error = message or UNKNOWN_ERROR_MESSAGE


def _script_literal(value: Any) -> str:
    """JSON literal safe to embed inside a <script> element."""
    return json.dumps(value).replace("</", "<\\/")


def render_auth_complete_page() -> str:
    """
    Render the completion page.

    The script reads ?code from its own URL, so the HTML is identical
    for every request.
    """
    config = _script_literal(
        {
            "endpoint": EXCHANGE_ENDPOINT,
            "closeDelayMs": CLOSE_DELAY_MS,
            "messages": {
                "missingCode": MISSING_CODE_MESSAGE,
                "exchangeFailed": EXCHANGE_FAILED_MESSAGE,
                "unknown": UNKNOWN_ERROR_MESSAGE,
            },
        }
    )

    return f"""<!DOCTYPE html>
<html lang="it">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{html.escape("Autenticazione Google Search Console")}</title>
    <style>
    body {{
        display: flex;
        align-items: center;
        justify-content: center;
        min-height: 100vh;
        margin: 0;
        background: #f8fafc;
        font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
        color: #1e293b;
    }}
    .card {{
        text-align: center;
        padding: 2rem;
        background: white;
        border-radius: 0.5rem;
        box-shadow: 0 4px 6px -1px rgb(0 0 0 / 0.1);
        max-width: 24rem;
    }}
    .state {{ display: none; }}
    .state.active {{ display: block; }}
    .icon {{ font-size: 3rem; margin-bottom: 1rem; }}
    .hint {{ color: #64748b; }}
    .error-message {{ color: #dc2626; background: #fef2f2; padding: 0.5rem; border-radius: 0.375rem; }}
    </style>
</head>
<body>
    <div class="card">
        <div id="state-pending" class="state active">
            <div class="icon">&#8987;</div>
            <h1>Finalizzazione dell'autenticazione...</h1>
            <p class="hint">Sto verificando le credenziali con Google.</p>
        </div>
        <div id="state-success" class="state">
            <div class="icon">&#9989;</div>
            <h1>Autenticazione Riuscita!</h1>
            <p class="hint">Questa finestra si chiuder&agrave; tra poco.</p>
        </div>
        <div id="state-error" class="state">
            <div class="icon">&#10060;</div>
            <h1>Autenticazione Fallita</h1>
            <p id="error-message" class="error-message"></p>
            <p class="hint">Puoi chiudere questa finestra e riprovare.</p>
        </div>
    </div>
    <script>
    (function () {{
        var config = {config};
        var status = "pending";

        function show(next, message) {{
            if (status !== "pending") {{ return; }}
            status = next;
            document.getElementById("state-pending").classList.remove("active");
            document.getElementById("state-" + next).classList.add("active");
            if (next === "error") {{
                document.getElementById("error-message").textContent = message || config.messages.unknown;
            }}
            if (next === "success") {{
                setTimeout(function () {{ window.close(); }}, config.closeDelayMs);
            }}
        }}

        var code = new URLSearchParams(window.location.search).get("code");
        if (!code) {{
            show("error", config.messages.missingCode);
            return;
        }}

        fetch(config.endpoint, {{
            method: "POST",
            headers: {{ "Content-Type": "application/json" }},
            body: JSON.stringify({{ code: code }})
        }}).then(function (response) {{
            if (response.ok) {{
                show("success");
                return;
            }}
            return response.json().catch(function () {{ return {{}}; }}).then(function (data) {{
                show("error", (data && data.error) || config.messages.exchangeFailed);
            }});
        }}).catch(function (err) {{
            show("error", (err && err.message) || config.messages.unknown);
        }});
    }})();
    </script>
</body>
</html>
"""
