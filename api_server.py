from __future__ import annotations  # FastAPI server exposing AI interview practice

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import assist_router, router
from config.settings import settings

app = FastAPI(title="Interview Practice API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(router)
app.include_router(assist_router)


@app.get("/health")
def health() -> dict:  # Liveness probe
    return {"status": "ok"}
