"""
Target admission: rejects empty hosts and, when enabled, keeps scan
targets within allowlisted CIDRs/domains.
"""

import ipaddress
import socket
from typing import Iterable, List, Optional

from .config import Settings, settings
from .errors import InvalidTargetError, TargetNotAllowedError


def _resolve_host(host: str) -> List[str]:
    try:
        infos = socket.getaddrinfo(host, None)
        return list({info[4][0] for info in infos})
    except socket.gaierror:
        return []


def _cidr_match(ip: str, cidrs: Iterable[str]) -> bool:
    try:
        ip_obj = ipaddress.ip_address(ip)
    except ValueError:
        return False
    for cidr in cidrs:
        try:
            if ip_obj in ipaddress.ip_network(cidr):
                return True
        except ValueError:
            continue
    return False


def _domain_match(host: str, domains: Iterable[str]) -> bool:
    host = host.lower()
    for d in domains:
        d = d.lower()
        if host == d or host.endswith("." + d):
            return True
    return False


def is_authorized_target(target: str, cfg: Optional[Settings] = None) -> bool:
    """
    Validate target (hostname or IP) against allowlist CIDRs/domains.
    A literal IP is checked directly; names are resolved and bound to the CIDR list.
    """
    cfg = cfg or settings
    cidrs = cfg.allowlist_cidrs
    domains = cfg.allowlist_domains
    if not cidrs and not domains:
        return False

    if _domain_match(target, domains):
        return True
    if _cidr_match(target, cidrs):
        return True
    if cidrs:
        return any(_cidr_match(ip, cidrs) for ip in _resolve_host(target))
    return False


def ensure_scannable_target(host: Optional[str], cfg: Optional[Settings] = None) -> str:
    cfg = cfg or settings
    target = (host or "").strip()
    if not target:
        raise InvalidTargetError("host is required")
    if cfg.enforce_allowlist and not is_authorized_target(target, cfg):
        raise TargetNotAllowedError(f"target {target} not in allowlist or allowlist missing")
    return target
