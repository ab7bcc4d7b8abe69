from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from skillswap.core.config import settings
from skillswap.core.database import engine
from skillswap.core.logging import configure_logging
from skillswap.api.errors import install_error_handlers
from skillswap.api.middleware import RequestIdMiddleware
from skillswap.api.v1.matches import endpoints as matches
from skillswap.api.v1.connections import endpoints as connections
from skillswap.api.v1.skills import endpoints as skills
from skillswap.api.v1.vouches import endpoints as vouches
from skillswap.api.v1.messages import endpoints as messages


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.app_env, settings.log_level, settings.echo_sql)
    yield
    await engine.dispose()


app = FastAPI(
    title="SkillSwap API",
    description="Skill matching and connections backend for the SkillSwap bartering platform",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIdMiddleware)

install_error_handlers(app)

# Include API routers
app.include_router(matches.router, prefix="/api/v1/matches", tags=["Matches"])
app.include_router(connections.router, prefix="/api/v1/connections", tags=["Connections"])
app.include_router(skills.router, prefix="/api/v1/skills", tags=["Skills"])
app.include_router(vouches.router, prefix="/api/v1/vouches", tags=["Vouches"])
app.include_router(messages.router, prefix="/api/v1/messages", tags=["Messages"])


@app.get("/healthz")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "version": "1.0.0"}


@app.get("/")
async def root():
    """Root endpoint"""
    return {"message": "SkillSwap API", "docs": "/docs"}
