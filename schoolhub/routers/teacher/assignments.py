from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.database import get_db
from ...core.security import TEACHING_ROLES, require_roles
from ...schemas.academic_schemas import AssignmentCreate, AssignmentUpdate, GradeSubmission
from ...services.assignment_service import AssignmentService
from ...utils.serialization import serialize_list, serialize_model

router = APIRouter(prefix="/api/v1/teacher/assignments", tags=["Teacher - Assignments"])

teaching_staff = require_roles(*TEACHING_ROLES)

@router.post("/", response_model=dict, status_code=201)
async def create_assignment(
    assignment_data: AssignmentCreate,
    current_user=Depends(teaching_staff),
    db: AsyncSession = Depends(get_db)
):
    service = AssignmentService(db)
    assignment = await service.create_assignment(current_user, assignment_data.model_dump())
    return {
        "id": str(assignment.id),
        "message": "Assignment created successfully",
        "assignment": serialize_model(assignment)
    }

@router.get("/", response_model=dict)
async def get_my_assignments(
    class_name: Optional[str] = Query(None),
    section: Optional[str] = Query(None),
    current_user=Depends(teaching_staff),
    db: AsyncSession = Depends(get_db)
):
    service = AssignmentService(db)
    assignments = await service.list_for_teacher(current_user, class_name, section)
    return {
        "items": [
            {
                **serialize_model(assignment),
                "submission_count": len([s for s in assignment.submissions if not s.is_deleted])
            }
            for assignment in assignments
        ],
        "total": len(assignments)
    }

@router.put("/submissions/{submission_id}/grade", response_model=dict)
async def grade_submission(
    submission_id: UUID,
    grade: GradeSubmission,
    current_user=Depends(teaching_staff),
    db: AsyncSession = Depends(get_db)
):
    """Score a submission, at most the assignment's max score"""
    service = AssignmentService(db)
    submission = await service.grade_submission(current_user, submission_id, grade.score, grade.feedback)
    return {"message": "Submission graded successfully", "submission": serialize_model(submission)}

@router.get("/{assignment_id}", response_model=dict)
async def get_assignment(
    assignment_id: UUID,
    current_user=Depends(teaching_staff),
    db: AsyncSession = Depends(get_db)
):
    service = AssignmentService(db)
    return serialize_model(await service.get_owned(current_user, assignment_id))

@router.put("/{assignment_id}", response_model=dict)
async def update_assignment(
    assignment_id: UUID,
    assignment_data: AssignmentUpdate,
    current_user=Depends(teaching_staff),
    db: AsyncSession = Depends(get_db)
):
    service = AssignmentService(db)
    assignment = await service.update_assignment(
        current_user, assignment_id, assignment_data.model_dump(exclude_unset=True)
    )
    return {"message": "Assignment updated successfully", "assignment": serialize_model(assignment)}

@router.delete("/{assignment_id}", response_model=dict)
async def delete_assignment(
    assignment_id: UUID,
    current_user=Depends(teaching_staff),
    db: AsyncSession = Depends(get_db)
):
    service = AssignmentService(db)
    await service.delete_assignment(current_user, assignment_id)
    return {"message": "Assignment deleted successfully", "assignment_id": str(assignment_id)}

@router.get("/{assignment_id}/submissions", response_model=dict)
async def get_submissions(
    assignment_id: UUID,
    current_user=Depends(teaching_staff),
    db: AsyncSession = Depends(get_db)
):
    service = AssignmentService(db)
    submissions = await service.get_submissions(current_user, assignment_id)
    return {"items": serialize_list(submissions), "total": len(submissions)}
