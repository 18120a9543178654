"""Main API router aggregating all module routers."""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    auth,
    certificate_types,
    objections,
    portal,
    results,
    sections,
    settings,
    students,
    subjects,
    uploads,
)

api_router = APIRouter()

# Authentication
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"],
)

# Public portal: release status and result search
api_router.include_router(
    portal.router,
    prefix="/portal",
    tags=["Portal"],
)

# Portal settings (admin)
api_router.include_router(
    settings.router,
    prefix="/settings",
    tags=["Settings"],
)

# Certificate types
api_router.include_router(
    certificate_types.router,
    prefix="/certificate-types",
    tags=["Certificate Types"],
)

# Sections (listing is public)
api_router.include_router(
    sections.router,
    prefix="/sections",
    tags=["Sections"],
)

# Subjects (admin)
api_router.include_router(
    subjects.router,
    prefix="/subjects",
    tags=["Subjects"],
)

# Students and grade entry (admin)
api_router.include_router(
    students.router,
    prefix="/students",
    tags=["Students"],
)

# Single grades (admin)
api_router.include_router(
    results.router,
    prefix="/results",
    tags=["Results"],
)

# Objections (submission is public)
api_router.include_router(
    objections.router,
    prefix="/objections",
    tags=["Objections"],
)

# Uploads (admin)
api_router.include_router(
    uploads.router,
    prefix="/uploads",
    tags=["Uploads"],
)
