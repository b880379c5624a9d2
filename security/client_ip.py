from flask import request, current_app

UNKNOWN_CLIENT = "unknown"

DEFAULT_PLATFORM_HEADER = "X-Vercel-Forwarded-For"

# (header, take first comma-separated token)
GENERIC_HEADERS = (
    ("X-Forwarded-For", True),
    ("X-Real-IP", False),
    ("CF-Connecting-IP", False),
    ("X-Client-IP", False),
)


def _lowered(headers) -> dict:
    lowered = {}
    for name, value in headers.items():
        # first occurrence wins for repeated headers
        lowered.setdefault(name.lower(), value)
    return lowered


def resolve_client_ip(headers, remote_addr: str = None,
                      platform_header: str = DEFAULT_PLATFORM_HEADER) -> str:
    """
    Best-effort client identity from proxy headers, then the socket address.

    Header values are trusted as-is. Without a trusted proxy in front of the
    app they are client-controlled.
    """
    lowered = _lowered(headers or {})

    candidates = []
    if platform_header:
        candidates.append((platform_header, True))
    candidates.extend(GENERIC_HEADERS)

    for name, first_token in candidates:
        value = lowered.get(name.lower())
        if not value:
            continue
        if first_token:
            value = value.split(",")[0].strip()
        if value:
            return value

    return remote_addr or UNKNOWN_CLIENT


def client_ip() -> str:
    return resolve_client_ip(
        request.headers,
        request.remote_addr,
        platform_header=current_app.config.get("PLATFORM_FORWARDED_HEADER", DEFAULT_PLATFORM_HEADER),
    )
