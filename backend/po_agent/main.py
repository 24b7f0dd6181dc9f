import logging

from fastapi import FastAPI

from po_agent.api.routes import agent, health
from po_agent.config import settings as app_settings
from po_agent.middleware.cors import PermissiveCORSMiddleware
from po_agent.middleware.error_handler import register_error_handlers
from po_agent.services.agent.relay import PoAgentRelay

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if app_settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


def create_relay() -> PoAgentRelay:
    """Build the relay once, with the upstream credential injected from settings."""
    relay = PoAgentRelay.from_settings(app_settings)
    if not relay.configured:
        logger.warning("PO_AGENT_LLM_API_KEY is not set; relay calls will fail until it is")
    return relay


app = FastAPI(title=app_settings.app_name, version="0.1.0")

app.add_middleware(PermissiveCORSMiddleware, allow_origins=app_settings.cors_origins)

# Error handlers
register_error_handlers(app)

# Routes
app.include_router(health.router)
app.include_router(agent.router)

app.state.relay = create_relay()
