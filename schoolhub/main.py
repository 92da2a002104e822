from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
import time

from .core.config import settings
from .core.database import close_db_connections
from .core.exceptions import general_exception_handler
from .core.logging import setup_logging

# Import all routers
from .routers import (
    health, auth, students, staff, approval_requests, fees, announcements, progress_reports
)
from .routers.principal import classes, departments, dashboard as principal_dashboard
from .routers.principal import approvals as principal_approvals
from .routers.hod import approvals as hod_approvals, dashboard as hod_dashboard
from .routers.vp import approvals as vp_approvals
from .routers.teacher import attendance, assignments, exams, student_records
from .routers.student_portal import academics, school_life

setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting SchoolHub API ({settings.environment})")

    yield

    logger.info("Shutting down SchoolHub API")
    await close_db_connections()
    logger.info("Shutdown complete")

app = FastAPI(
    title="SchoolHub API - School Management",
    description="Student, teacher, HOD and principal portals with approval workflow and progress reports",
    version=settings.app_version,
    lifespan=lifespan
)

@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    logger.info(f"{request.method} {request.url.path} - {process_time:.3f}s")
    return response

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600,
)

app.add_exception_handler(Exception, general_exception_handler)

# Include all routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(students.router)
# Fixed path must be registered before /api/v1/staff/{staff_id}
app.include_router(approval_requests.router)
app.include_router(staff.router)
app.include_router(classes.router)
app.include_router(departments.router)
app.include_router(principal_approvals.router)
app.include_router(principal_dashboard.router)
app.include_router(hod_approvals.router)
app.include_router(hod_dashboard.router)
app.include_router(vp_approvals.router)
app.include_router(attendance.router)
app.include_router(assignments.router)
app.include_router(exams.router)
app.include_router(student_records.router)
app.include_router(announcements.router)
app.include_router(fees.router)
app.include_router(progress_reports.router)
app.include_router(academics.router)
app.include_router(school_life.router)

@app.get("/")
async def root():
    return {
        "message": "SchoolHub API",
        "version": settings.app_version,
        "portals": ["Student", "Teacher", "HOD", "Vice Principal", "Principal"],
        "status": "active"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("schoolhub.main:app", host="0.0.0.0", port=8000, reload=True)
