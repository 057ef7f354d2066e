# -----------------------------------------------------------------------------
# app/security/headers.py — Hardening headers added to every response
# -----------------------------------------------------------------------------

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
}


def apply_security_headers(headers) -> None:
    for name, value in SECURITY_HEADERS.items():
        headers.setdefault(name, value)
