"""
Point d'entrée principal de l'API CourseHub.
Démarrage : uvicorn coursehub.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import coursehub.models  # noqa: F401 — enregistre tous les modèles dans Base.metadata avant les routers
from coursehub.config import settings
from coursehub.database import Base, engine, get_db
from coursehub.errors import ErrorKind, ServiceError, StoreError
from coursehub.routers import courses, enrollments, lecturers, students

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Cycle de vie de l'application : crée le schéma en développement si demandé."""
    if settings.CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
        logger.info("Tables créées (CREATE_TABLES=true, env=%s).", settings.ENV)
    yield


app = FastAPI(
    title="CourseHub API",
    description="API de gestion des cours universitaires : élèves, enseignants, cours et inscriptions",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# CORS — autorise tous les ports localhost en développement (à restreindre en production).
app.add_middleware(
    CORSMiddleware,
    allow_origins=[],
    allow_origin_regex=r"https?://(localhost|127\.0\.0\.1)(:\d+)?",
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)


app.include_router(students.router)
app.include_router(lecturers.router)
app.include_router(courses.router)
app.include_router(enrollments.router)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Erreurs métier : le message est renvoyé tel quel pour être affiché à l'utilisateur."""
    return JSONResponse(status_code=STATUS_BY_KIND[exc.kind], content=exc.to_dict())


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error("Erreur base de données (%s) : %s", exc.code, exc.message)
    return JSONResponse(status_code=503, content={"detail": exc.message, "code": exc.code})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Intercepte toutes les exceptions non gérées pour garantir que la réponse 500
    passe bien par CORSMiddleware (qui injecte les headers CORS).
    """
    logger.error("Exception non gérée : %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Une erreur interne est survenue."},
    )


@app.get("/api/health", tags=["Santé"])
def health_check():
    """Vérifie que l'API est opérationnelle."""
    return {"status": "ok", "service": "CourseHub API", "version": "0.1.0"}


@app.get("/api/health/db", tags=["Santé"])
def database_check(db: Session = Depends(get_db)):
    """Vérifie que la base de données répond (SELECT 1)."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error("Base de données injoignable : %s", exc)
        return JSONResponse(status_code=503, content={"status": "error", "detail": str(exc)})
    return {"status": "ok", "database": "reachable"}
