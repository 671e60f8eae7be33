"""Application entrypoint for the portfolio rebalancer MCP server."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import time
from dataclasses import asdict

from mcp.server.fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from rebalancer.config.settings import Settings, get_settings
from rebalancer.portfolio.catalog import PriceCatalog, default_catalog, load_price_catalog, snapshot
from rebalancer.prompts.portfolio_prompts import register_portfolio_prompts
from rebalancer.resources.catalog_resources import register_catalog_resources
from rebalancer.runtime.limits import RateLimitExceeded, RequestLimiter
from rebalancer.runtime.monitoring import ServerMetrics, log_tool_event
from rebalancer.tools.registry import build_tool_services, register_all_tools

LOGGER = logging.getLogger(__name__)


def resolve_transport_mode(configured_mode: str) -> str:
    if configured_mode in {"stdio", "http"}:
        return configured_mode
    if os.getenv("PORT"):
        return "http"
    return "stdio"


def resolve_http_transport(configured_transport: str) -> str:
    if configured_transport in {"sse", "streamable"}:
        return configured_transport
    return "sse"


def build_catalog(settings: Settings) -> tuple[PriceCatalog, str]:
    if settings.price_catalog_path:
        return load_price_catalog(settings.price_catalog_path), settings.price_catalog_path
    return default_catalog(), "reference"


def _error_code(result_text: str) -> str | None:
    try:
        payload = json.loads(result_text)
    except ValueError:
        return None
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload.get("code"))
    return None


def build_server(settings: Settings) -> FastMCP:
    catalog, catalog_source = build_catalog(settings)
    server_metrics = ServerMetrics()
    request_limiter = RequestLimiter(
        requests_per_minute=settings.default_requests_per_minute,
        queue_limit=settings.request_queue_limit,
    )
    mcp = FastMCP(
        name=settings.app_name,
        host=settings.host,
        port=settings.port,
        streamable_http_path=settings.mcp_path,
    )
    services = build_tool_services(catalog, catalog_source=catalog_source)
    register_all_tools(mcp, services)
    register_portfolio_prompts(mcp)
    register_catalog_resources(mcp, services)
    resolved_mode = resolve_transport_mode(settings.transport_mode)

    @mcp.custom_route(settings.health_path, methods=["GET"])
    async def health_check(_: object) -> Response:
        health = server_metrics.snapshot(catalog_size=len(snapshot(catalog)))
        return JSONResponse(
            {
                "status": "ok",
                "service": settings.app_name,
                "version": settings.app_version,
                "mode": resolved_mode,
                "catalog_source": catalog_source,
                **asdict(health),
            }
        )

    @mcp.custom_route("/tools/{tool_name}", methods=["POST"])
    async def guarded_tool_call(request: Request) -> Response:
        tool_name = request.path_params.get("tool_name", "unknown")
        started = time.perf_counter()
        client_id = str(request.headers.get("x-api-key") or request.headers.get("x-client-id") or request.client or "anonymous")
        try:
            body = await request.json()
        except ValueError:
            latency_ms = (time.perf_counter() - started) * 1000.0
            log_tool_event(
                tool=tool_name,
                portfolio=None,
                latency_ms=latency_ms,
                success=False,
                client_id=client_id,
                error_code="INVALID_REQUEST",
            )
            server_metrics.record(latency_ms=latency_ms, success=False)
            return JSONResponse(
                {"error": True, "code": "INVALID_REQUEST", "message": "Request body must be JSON.", "timestamp": int(time.time())},
                status_code=400,
            )
        arguments = body.get("arguments") if isinstance(body, dict) else {}
        if not isinstance(arguments, dict):
            arguments = {}
        portfolio = arguments.get("portfolio")
        portfolio_name = str(portfolio.get("name") or "") if isinstance(portfolio, dict) else ""
        try:
            with request_limiter.slot(client_id):
                try:
                    content_blocks, metadata = await mcp.call_tool(tool_name, arguments)
                except Exception:
                    LOGGER.exception("tool call failed: tool=%s client_id=%s", tool_name, client_id)
                    latency_ms = (time.perf_counter() - started) * 1000.0
                    log_tool_event(tool=tool_name, portfolio=portfolio_name or None, latency_ms=latency_ms, success=False, client_id=client_id)
                    server_metrics.record(latency_ms=latency_ms, success=False)
                    return JSONResponse(
                        {"error": True, "code": "TOOL_FAILED", "message": "Request failed.", "timestamp": int(time.time())},
                        status_code=500,
                    )
        except RateLimitExceeded as error:
            server_metrics.record_rate_limit_hit(client_id)
            return JSONResponse(
                {"error": True, "code": "RATE_LIMITED", "message": "Rate limit exceeded.", "timestamp": int(time.time())},
                status_code=429,
                headers={"Retry-After": str(max(1, int(error.retry_after_seconds)))},
            )
        result_text = str(metadata.get("result") or "")
        latency_ms = (time.perf_counter() - started) * 1000.0
        error_code = _error_code(result_text)
        log_tool_event(
            tool=tool_name,
            portfolio=portfolio_name or None,
            latency_ms=latency_ms,
            success=error_code is None,
            client_id=client_id,
            error_code=error_code,
        )
        server_metrics.record(latency_ms=latency_ms, success=error_code is None)
        return Response(content=result_text, media_type="application/json")

    return mcp


async def run() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    mcp = build_server(settings)
    resolved_mode = resolve_transport_mode(settings.transport_mode)
    resolved_http_transport = resolve_http_transport(settings.http_transport)
    LOGGER.info("server starting: name=%s mode=%s transport=%s", settings.app_name, resolved_mode, resolved_http_transport)
    if resolved_mode == "stdio":
        await mcp.run_stdio_async()
    elif resolved_http_transport == "streamable":
        await mcp.run_streamable_http_async()
    else:
        await mcp.run_sse_async()


def main() -> None:
    asyncio.run(run())


if __name__ == "__main__":
    main()
