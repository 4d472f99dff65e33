"""Public IP discovery and HTTPS reachability probes."""

from __future__ import annotations

import ipaddress
import logging

import httpx

from siteprov.constants import (
    IMDS_PUBLIC_IP_URL,
    IMDS_TOKEN_TTL,
    IMDS_TOKEN_URL,
    IP_ECHO_TIMEOUT,
    IP_ECHO_URL,
    METADATA_TIMEOUT,
    SERVER_NAME_PLACEHOLDER,
)
from siteprov.models import Reachability

log = logging.getLogger(__name__)


def _fetch(
    client: httpx.Client,
    method: str,
    url: str,
    *,
    timeout: float,
    headers: dict[str, str] | None = None,
) -> str:
    """Return the stripped response body, or "" on any HTTP or transport error."""
    try:
        resp = client.request(method, url, headers=headers, timeout=timeout)
        resp.raise_for_status()
    except httpx.HTTPError as exc:
        log.debug("%s %s failed: %s", method, url, exc)
        return ""
    return resp.text.strip()


def _clean_ip(raw: str) -> str:
    try:
        return str(ipaddress.ip_address(raw.strip()))
    except ValueError:
        return ""


def _detect(client: httpx.Client) -> str:
    token = _fetch(
        client,
        "PUT",
        IMDS_TOKEN_URL,
        timeout=METADATA_TIMEOUT,
        headers={"X-aws-ec2-metadata-token-ttl-seconds": IMDS_TOKEN_TTL},
    )
    if token:
        ip = _fetch(
            client,
            "GET",
            IMDS_PUBLIC_IP_URL,
            timeout=METADATA_TIMEOUT,
            headers={"X-aws-ec2-metadata-token": token},
        )
    else:
        ip = _fetch(client, "GET", IMDS_PUBLIC_IP_URL, timeout=METADATA_TIMEOUT)
    ip = _clean_ip(ip)
    if ip:
        log.info("public IP from instance metadata: %s", ip)
        return ip

    ip = _clean_ip(_fetch(client, "GET", IP_ECHO_URL, timeout=IP_ECHO_TIMEOUT))
    if ip:
        log.info("public IP from %s: %s", IP_ECHO_URL, ip)
    else:
        log.warning("could not detect public IP")
    return ip


def detect_public_ip(client: httpx.Client | None = None) -> str:
    """Detect the host's public IPv4/IPv6 address; "" when every source fails.

    Order: IMDSv2 (token), IMDSv1, then the external IP-echo service.
    """
    if client is not None:
        return _detect(client)
    with httpx.Client() as own:
        return _detect(own)


def resolve_server_name(domain: str, ip: str) -> str:
    return domain or ip or SERVER_NAME_PLACEHOLDER


def url_for(host: str) -> str:
    try:
        if ipaddress.ip_address(host).version == 6:
            return f"https://[{host}]"
    except ValueError:
        pass
    return f"https://{host}"


def probe_https(url: str, timeout: float, client: httpx.Client | None = None) -> bool:
    """HEAD ``url`` without verifying TLS or following redirects. Never raises."""
    try:
        if client is not None:
            resp = client.head(url, timeout=timeout)
        else:
            with httpx.Client(verify=False, follow_redirects=False) as own:
                resp = own.head(url, timeout=timeout)
    except httpx.HTTPError as exc:
        log.debug("probe %s failed: %s", url, exc)
        return False
    return resp.status_code < 400


def classify(local_ok: bool, public_ok: bool | None) -> Reachability:
    if public_ok:
        return Reachability.REACHABLE
    if local_ok:
        return Reachability.LOCAL_ONLY
    return Reachability.UNREACHABLE
