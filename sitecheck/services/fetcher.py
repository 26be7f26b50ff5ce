import asyncio
import ipaddress
import socket
from urllib.parse import urljoin, urlparse

import httpx

MAX_CONTENT_SIZE = 2 * 1024 * 1024  # 2 MiB
TIMEOUT = 10  # seconds
MAX_REDIRECTS = 10
ALLOWED_SCHEMES = {"http", "https"}
USER_AGENT = "site-check/1.0"


async def _is_private_address(hostname: str) -> bool:
    """Return True if *hostname* resolves to a private, loopback, or link-local address.

    Resolution runs through the event loop so a slow DNS answer never blocks
    other requests and stays subject to the caller's deadline.
    """
    try:
        infos = await asyncio.get_running_loop().getaddrinfo(hostname, None)
    except socket.gaierror:
        return False

    for info in infos:
        # Strip IPv6 zone IDs (e.g. "::1%eth0" → "::1")
        raw_ip = info[4][0].split("%")[0]
        try:
            addr = ipaddress.ip_address(raw_ip)
        except ValueError:
            continue
        if addr.is_private or addr.is_loopback or addr.is_link_local or addr.is_reserved:
            return True
    return False


async def validate_url(url: str) -> None:
    """Raise ValueError if *url* fails SSRF / scheme validation."""
    parsed = urlparse(url)

    if parsed.scheme not in ALLOWED_SCHEMES:
        raise ValueError(f"Scheme '{parsed.scheme}' is not allowed. Use http or https.")

    hostname = parsed.hostname
    if not hostname:
        raise ValueError("URL must have a valid hostname.")

    if await _is_private_address(hostname):
        raise ValueError("Requests to private/internal addresses are not allowed.")


async def fetch_url(url: str, *, timeout: float = TIMEOUT) -> str:
    """Fetch *url* and return the response body as a string.

    Redirects are followed manually so that every redirect destination is
    validated against the SSRF rules before the next request is made.

    Raises:
        ValueError: if the URL fails SSRF / scheme validation.
        httpx.HTTPError: on network errors, timeouts, or non-2xx responses.
        RuntimeError: if the response body exceeds MAX_CONTENT_SIZE.
    """
    await validate_url(url)

    current_url = url
    async with httpx.AsyncClient(
        follow_redirects=False,
        timeout=timeout,
        headers={"User-Agent": USER_AGENT},
    ) as client:
        for _ in range(MAX_REDIRECTS + 1):
            async with client.stream("GET", current_url) as response:
                if response.is_redirect:
                    location = response.headers.get("location", "")
                    next_url = urljoin(current_url, location)
                    await validate_url(next_url)
                    current_url = next_url
                    continue

                response.raise_for_status()
                body = await _read_capped(response)
                return _decode(body, response.charset_encoding)

    raise RuntimeError("Too many redirects.")


async def _read_capped(response: httpx.Response) -> bytes:
    """Read the streamed body of *response*, refusing anything over MAX_CONTENT_SIZE."""
    declared = response.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > MAX_CONTENT_SIZE:
        raise RuntimeError("Response body exceeds the maximum allowed size.")

    body = bytearray()
    async for chunk in response.aiter_bytes():
        body.extend(chunk)
        if len(body) > MAX_CONTENT_SIZE:
            raise RuntimeError("Response body exceeds the maximum allowed size.")
    return bytes(body)


def _decode(body: bytes, charset: str | None) -> str:
    # Many Russian sites still declare windows-1251 in the Content-Type header.
    try:
        return body.decode(charset or "utf-8", errors="replace")
    except LookupError:
        return body.decode("utf-8", errors="replace")
