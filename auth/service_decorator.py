"""
Service injection for MCP tools.

require_google_service resolves an authenticated Google API client from the
workspace context and passes it to the tool as its first argument. The
`service` parameter is hidden from the tool's public signature so it never
appears in the tool schema.
"""
import asyncio
import inspect
import logging
from functools import wraps

from auth.google_auth import get_workspace_context
from auth.scopes import get_scope_for_group

logger = logging.getLogger(__name__)

SERVICE_CONFIGS = {
    "docs": {"service": "docs", "version": "v1"},
    "drive": {"service": "drive", "version": "v3"},
}


def require_google_service(service_type: str, scope_group: str):
    """
    Decorator that injects an authenticated Google service as `service`.

    Args:
        service_type: Key into SERVICE_CONFIGS (e.g. "docs")
        scope_group: Scope group the tool needs (e.g. "docs_write")
    """
    if service_type not in SERVICE_CONFIGS:
        raise ValueError(f"Unknown service type: {service_type}")
    config = SERVICE_CONFIGS[service_type]
    required_scope = get_scope_for_group(scope_group)

    def decorator(func):
        original_sig = inspect.signature(func)
        params = [p for name, p in original_sig.parameters.items() if name != "service"]
        wrapper_sig = original_sig.replace(parameters=params)

        @wraps(func)
        async def wrapper(*args, **kwargs):
            context = get_workspace_context()
            service = await asyncio.to_thread(
                context.get_service, config["service"], config["version"], required_scope
            )
            return await func(service, *args, **kwargs)

        wrapper.__signature__ = wrapper_sig
        return wrapper

    return decorator
