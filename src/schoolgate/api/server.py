"""
Schoolgate API Server

FastAPI host around the Dispatcher. Lists the tools advertised under
the process policy and invokes them. Every dispatch outcome, including
denials and remote failures, is returned as data with status 200.

Usage:
    uvicorn schoolgate.api.server:app
    # or: schoolgate serve --client mypackage.smartschool:client
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from fastapi import Body, FastAPI
from pydantic import BaseModel, Field

from schoolgate import __version__
from schoolgate.config import PolicyConfig, ServerSettings
from schoolgate.core.models import DispatchState, OutcomeKind, RiskTier
from schoolgate.logging import configure_logging, get_logger
from schoolgate.remote.client import OperationTable, RemoteClient
from schoolgate.tools.catalog import OperationCatalog, smartschool_catalog
from schoolgate.tools.dispatcher import Dispatcher
from schoolgate.tools.models import ToolDescriptor

logger = get_logger("schoolgate.api")


# ─── Request/Response Models ────────────────────────────────

class StatusResponse(BaseModel):
    allow_destructive: bool
    require_confirmation: bool
    advertised_tools: int
    total_operations: int
    version: str = __version__


class ToolListResponse(BaseModel):
    tools: list[ToolDescriptor] = Field(default_factory=list)
    total: int = 0


class InvokeResponse(BaseModel):
    tool: str
    operation: str
    kind: OutcomeKind
    state: DispatchState
    tier: RiskTier
    content: str
    is_error: bool
    retryable: bool = False


# ─── Tool Host ──────────────────────────────────────────────

class ToolHost:
    """Holds the catalog and dispatcher for the running process.

    Built from settings, or around an existing dispatcher whose catalog
    and policy configuration it then serves.
    """

    def __init__(
        self,
        settings: ServerSettings | None = None,
        dispatcher: Dispatcher | None = None,
    ) -> None:
        if dispatcher is None:
            self.settings = settings or ServerSettings.from_env()
            dispatcher = Dispatcher(
                smartschool_catalog(tool_prefix=self.settings.tool_prefix),
                OperationTable(),
                self.settings.policy,
                timeout=self.settings.remote_timeout,
            )
        else:
            self.settings = settings or ServerSettings(
                policy=dispatcher.config, remote_timeout=dispatcher.timeout
            )
        self.dispatcher = dispatcher

    @property
    def catalog(self) -> OperationCatalog:
        return self.dispatcher.catalog

    @property
    def policy(self) -> PolicyConfig:
        return self.dispatcher.config

    def attach(self, remote: RemoteClient) -> None:
        """Route dispatches to a remote client."""
        self.dispatcher = Dispatcher(
            self.catalog,
            remote,
            self.policy,
            timeout=self.dispatcher.timeout,
        )

    def attach_client(self, client: Any) -> None:
        """Bind a client object by the catalog's operation names."""
        names = [spec.remote_name for spec in self.catalog.get_all()]
        self.attach(OperationTable.from_client(client, names))

    @property
    def status(self) -> StatusResponse:
        policy = self.policy
        return StatusResponse(
            allow_destructive=policy.allow_destructive,
            require_confirmation=policy.require_confirmation,
            advertised_tools=len(self.catalog.advertised(policy)),
            total_operations=len(self.catalog),
        )

    def log_startup(self) -> None:
        logger.info("Safety settings")
        for line in self.policy.describe():
            logger.info("  %s", line)
        advertised = self.catalog.advertised(self.policy)
        logger.info("Registered %d of %d tools", len(advertised), len(self.catalog))


# ─── App ─────────────────────────────────────────────────────

def create_app(target: Dispatcher | ToolHost | None = None) -> FastAPI:
    """Build the FastAPI app around a dispatcher or a tool host.

    With no argument the host is built from the environment.
    """
    tool_host = target if isinstance(target, ToolHost) else ToolHost(dispatcher=target)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(level=tool_host.settings.log_level, json_output=tool_host.settings.log_json)
        tool_host.log_startup()
        yield

    app = FastAPI(
        title="Schoolgate API",
        description="Safety-gated Smartschool operations for AI agents",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.host = tool_host

    # ─── REST Endpoints ──────────────────────────────────────

    @app.get("/api/status")
    async def get_status() -> StatusResponse:
        return tool_host.status

    @app.get("/api/tools")
    async def list_tools() -> ToolListResponse:
        tools = tool_host.catalog.descriptors(tool_host.policy)
        return ToolListResponse(tools=tools, total=len(tools))

    @app.post("/api/tools/{name}")
    async def invoke_tool(name: str, params: dict[str, Any] | None = Body(default=None)) -> Any:
        if not tool_host.catalog.is_advertised(name, tool_host.policy):
            return {"error": "Tool not found or not enabled", "tool": name}

        outcome = await tool_host.dispatcher.dispatch(name, params or {})
        return InvokeResponse(
            tool=tool_host.catalog.tool_name(outcome.operation),
            operation=outcome.operation,
            kind=outcome.kind,
            state=outcome.state,
            tier=outcome.tier,
            content=outcome.content,
            is_error=outcome.is_error,
            retryable=outcome.retryable,
        )

    return app


host = ToolHost()
app = create_app(host)
