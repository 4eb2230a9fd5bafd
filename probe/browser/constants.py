"""
Probe constants: target site, browser context, timings, selector and phrase lists.

Phrase lists are stored already folded (accent-stripped, lower-case) so they
compare directly against text.fold_text() output.
"""

from __future__ import annotations

# --- Target site ---
SITE_ORIGIN = "https://www.latamairlines.com"
SITE_LOCALE_PATH = "/br/pt"
LANDING_URL = f"{SITE_ORIGIN}{SITE_LOCALE_PATH}"
DETAIL_PATH = "/minhas-viagens/second-detail"

# --- Browser context ---
CONTEXT_LOCALE = "pt-BR"
ACCEPT_LANGUAGE = "pt-BR,pt;q=0.9,en-US;q=0.8,en;q=0.7"
DESKTOP_VIEWPORT = {"width": 1366, "height": 768}
DESKTOP_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/131.0.0.0 Safari/537.36"
)

# --- Timings (ms) ---
WARMUP_TIMEOUT_CAP_MS = 12_000
WARMUP_SETTLE_MS = 450
RETRY_BACKOFF_BASE_MS = 650
RETRY_BACKOFF_STEP_MS = 350
SETTLE_AFTER_NAVIGATION_MS = 850
COOKIE_VISIBILITY_TIMEOUT_MS = 700
CLICK_TIMEOUT_MS = 1200
COOKIE_SETTLE_AFTER_CLICK_MS = 250
URL_POLL_INTERVAL_MS = 250
URL_STABLE_FOR_MS = 1000
URL_STABILIZE_WINDOW_MS = 4500
BODY_TEXT_TIMEOUT_MS = 2500
MODAL_TEXT_TIMEOUT_MS = 1500
BOARDING_PASS_VISIBILITY_TIMEOUT_MS = 1500

# Connection-failure reasons are bounded so both legs fit in one note.
CONNECTION_REASON_MAX_CHARS = 160

# --- Navigation failure classification (substring, case-insensitive) ---
RETRIABLE_NAVIGATION_ERRORS = (
    "err_http2_protocol_error",
    "err_connection_reset",
    "err_incomplete_chunked_encoding",
    "navigation timeout",
    "target closed",
)

# --- Cookie consent (id-based handler first, then button text pt-BR / English) ---
COOKIE_CONSENT_SELECTORS = (
    "#onetrust-accept-btn-handler",
    'button:has-text("Aceitar todos os cookies")',
    'button:has-text("Aceitar todos")',
    'button:has-text("Aceitar")',
    'button:has-text("Entendi")',
    'button:has-text("Accept all cookies")',
    'button:has-text("Accept all")',
    'button:has-text("Accept")',
)

# --- Classification patterns ---
CANCELLED_URL_PATTERNS = (
    "/minhas-viagens/error?error=order_not_found",
    "/minhas-viagens/error?error=undefined",
)

CANCELLATION_PHRASES = (
    "precisamos recarregar a informacao",
    "temos um problema",
    "nao podemos carregar suas viagens",
    "nao foi possivel carregar suas viagens",
    "we need to reload the information",
    "we have a problem",
    "can't load your trips",
    "cannot load your trips",
    "order_not_found",
)

# Matched on word boundaries so "bot" does not fire on "botao".
BOT_BLOCK_PHRASES = (
    "captcha",
    "verify you are human",
    "nao sou um robo",
    "access denied",
    "acesso negado",
    "unusual traffic",
    "trafego incomum",
    "blocked",
    "bloqueado",
    "robot",
    "bot",
)

# --- Upsell (extra baggage) modal ---
UPSELL_URL_HINTS = (
    "bagagem",
    "baggage",
    "ancillar",
)
UPSELL_TEXT_PATTERNS = (
    r"adicion\w* bagage",
    r"bagagem extra",
    r"leve mais bagage",
    r"add (?:extra )?baggage",
    r"extra baggage",
)
UPSELL_DISMISS_LABELS = (
    r"agora n[aã]o",
    r"mais tarde",
    r"not now",
    r"no,? thanks",
)

# --- Boarding pass control ---
BOARDING_PASS_LABELS = (
    r"cart[aã]o de embarque",
    r"boarding pass",
)
