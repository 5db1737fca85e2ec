"""
Diagnostics Router - shows the redirect URI this deployment advertises.

Open GET /api/gsc/auth-debug on a deployment and copy the computed URI into
the "Authorized redirect URIs" list in Google Cloud Console.
"""

import html
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from app.core.config import Settings
from app.deps import get_request_host, get_settings
from app.environments.google.auth import (
    GSC_CALLBACK_PATH,
    resolve_base_url,
    resolve_redirect_uri,
)


logger = logging.getLogger("seo.routers.debug")


router = APIRouter(prefix="/api/gsc", tags=["diagnostics"])

NOT_SET = "(Non impostata)"


def get_debug_html(
    redirect_uri: Optional[str],
    base_url: Optional[str],
    vercel_url: str,
    node_env: str,
    host: Optional[str],
) -> str:
    """
    Build the diagnostics page.

    Every value is HTML-escaped: the Host header is client-controlled.
    """
    def show(value: Optional[str], fallback: str = NOT_SET) -> str:
        return html.escape(value or fallback)

    return f"""<!DOCTYPE html>
<html lang="it">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Debug Configurazione Ambiente</title>
    <style>
    body {{ font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif; line-height: 1.6; background: #f8fafc; color: #1e293b; padding: 2rem; }}
    .container {{ max-width: 800px; margin: 0 auto; background: white; padding: 2rem; border-radius: 0.75rem; border: 1px solid #e2e8f0; }}
    code {{ background: #e2e8f0; padding: 0.2rem 0.4rem; border-radius: 0.25rem; }}
    .highlight {{ background: #fef9c3; padding: 1rem; border-radius: 0.5rem; border: 1px solid #fde047; }}
    .highlight code {{ font-weight: 600; font-size: 1.1rem; }}
    </style>
</head>
<body>
    <div class="container">
        <h1>Diagnostica Ambiente</h1>
        <p>Questa pagina mostra l'URI di reindirizzamento che questo deploy usa per l'autenticazione Google.</p>

        <div class="highlight">
            <h2>URI di Reindirizzamento Calcolato</h2>
            <p>Copia questo valore negli "URI di reindirizzamento autorizzati" della Google Cloud Console.</p>
            <code id="redirect-uri">{show(redirect_uri, "(Impossibile determinarlo)")}</code>
        </div>

        <h2>Dettagli Calcolo</h2>
        <ul>
            <li><strong>URL Base Rilevato:</strong> <code id="base-url">{show(base_url, "(Impossibile determinarlo)")}</code></li>
            <li><strong>Endpoint di Callback:</strong> <code>{html.escape(GSC_CALLBACK_PATH)}</code></li>
        </ul>

        <h2>Variabili di Ambiente Utilizzate</h2>
        <ul>
            <li><code>VERCEL_URL</code>: <code id="vercel-url">{show(vercel_url)}</code></li>
            <li><code>NODE_ENV</code>: <code id="node-env">{show(node_env)}</code></li>
            <li><strong>Header 'host' della Richiesta:</strong> <code id="host">{show(host, "(Nessun header host)")}</code></li>
        </ul>
        <p>GOOGLE_REDIRECT_URI, se impostata, ha la precedenza; poi VERCEL_URL; infine l'header 'host'.</p>
    </div>
</body>
</html>
"""


@router.get("/auth-debug", response_class=HTMLResponse)
async def auth_debug(
    settings: Settings = Depends(get_settings),
    host: Optional[str] = Depends(get_request_host),
):
    """Echo the computed redirect URI and the raw values it came from."""
    redirect_uri = resolve_redirect_uri(settings, host)
    base_url = resolve_base_url(settings, host)

    logger.info(f"Diagnostics requested, redirect URI resolves to {redirect_uri}")
    return HTMLResponse(
        content=get_debug_html(
            redirect_uri=redirect_uri,
            base_url=base_url,
            vercel_url=settings.VERCEL_URL,
            node_env=settings.NODE_ENV,
            host=host,
        )
    )
