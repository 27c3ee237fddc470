import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from classbook.api import admin, attendance, auth, catalog, classes, equipment, evaluations, summaries
from classbook.core.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = FastAPI(title="Classbook")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(classes.router, prefix="/api/classes", tags=["classes"])
app.include_router(catalog.router, prefix="/api", tags=["catalog"])
app.include_router(evaluations.router, prefix="/api/evaluations", tags=["evaluations"])
app.include_router(attendance.router, prefix="/api/attendance", tags=["attendance"])
app.include_router(equipment.router, prefix="/api/equipment", tags=["equipment"])
app.include_router(summaries.router, prefix="/api/summaries", tags=["summaries"])
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])


@app.get("/health")
def health():
    return {"status": "ok"}
