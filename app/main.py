# app/main.py
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.json import UTF8JSONResponse
from app.core.config import settings
from app.core.errors import install_error_handlers
from app.db.init_db import init_models

# routers
from app.users.router import router as users_router
from app.auth.router import router as auth_router
from app.profile.router import router as profile_router
from app.posts.router import router as posts_router

log = logging.getLogger("uvicorn")

app = FastAPI(
    title="DevConnector API",
    default_response_class=UTF8JSONResponse,
)

# 400/401/404 con {"msg"} / {"errors"}, 500 en texto plano
install_error_handlers(app)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup():
    log.info("🚀 Iniciando servicio…")
    await init_models()
    log.info("✅ Startup listo.")


@app.get("/api/health")
async def health():
    return {"ok": True, "service": "devconnector-api"}


# routers
app.include_router(users_router)    # /api/users
app.include_router(auth_router)     # /api/auth
app.include_router(profile_router)  # /api/profile/...
app.include_router(posts_router)    # /api/posts/...
