import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from uni_leaderboard.api import router
from uni_leaderboard.config import settings
from uni_leaderboard.services import subgraph_service

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await subgraph_service.close()


# Create FastAPI app
app = FastAPI(
    title="Uniswap V3 Trader Leaderboard",
    description="Per-trader buy/sell statistics for a token, built from Uniswap v3 subgraph swaps",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(router, prefix="")


@app.get("/")
async def root():
    """Health check endpoint"""
    return {
        "name": "Uniswap V3 Trader Leaderboard",
        "version": "1.0.0",
        "networks": settings.supported_networks,
        "status": "healthy"
    }


@app.get("/health")
async def health():
    """Detailed health check"""
    network_status = {}
    for network in settings.supported_networks:
        network_status[network] = {
            "subgraph_configured": bool(settings.get_subgraph_url(network))
        }

    return {
        "status": "healthy",
        "default_network": settings.default_network,
        "networks": network_status
    }


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.server_host,
        port=settings.default_port,
        reload=True,
        log_level=settings.log_level.lower()
    )
