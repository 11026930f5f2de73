"""
General helper utilities
"""
from typing import Any, Dict, Optional

from fastapi import Request


def extract_ip_address(request: Request) -> Optional[str]:
    """Client IP, honouring proxy headers first"""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    return request.client.host if request.client else None


def request_log_fields(request: Request) -> Dict[str, Any]:
    """Request context attached to system events"""
    return {
        "endpoint": request.url.path,
        "method": request.method,
        "ip_address": extract_ip_address(request),
        "user_agent": request.headers.get("user-agent"),
        "referrer": request.headers.get("referer"),
    }
