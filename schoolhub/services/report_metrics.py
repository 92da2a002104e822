# schoolhub/services/report_metrics.py
"""
Pure reducers behind the comprehensive progress report.

Each ``summarize_*`` function takes already-loaded rows and returns the JSON
section stored on the report, so the thresholds can be exercised without a
database.
"""
import math
from calendar import month_name
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from ..models.attendance import AttendanceStatus
from ..models.fee import PaymentStatus
from ..models.progress_report import ReportPeriod
from ..models.student_record import Severity

IMPROVING = "Improving"
STABLE = "Stable"
DECLINING = "Declining"

GRADE_BANDS = (
    (90, "A+"),
    (80, "A"),
    (70, "B+"),
    (60, "B"),
    (50, "C+"),
    (40, "C"),
    (30, "D"),
)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def percentage_of(value: float, total: float) -> int:
    """Whole-number percentage, 0 when total is 0"""
    if not total:
        return 0
    return round_half_up(value / total * 100)


def grade_from_percentage(percentage: float) -> str:
    for threshold, grade in GRADE_BANDS:
        if percentage >= threshold:
            return grade
    return "F"


def period_start(report_period: str, now: datetime) -> datetime:
    """First instant of the window a report period covers"""
    if report_period == ReportPeriod.MONTHLY.value:
        return datetime(now.year, now.month, 1)
    if report_period == ReportPeriod.QUARTERLY.value:
        return datetime(now.year, (now.month - 1) // 3 * 3 + 1, 1)
    if report_period == ReportPeriod.HALF_YEARLY.value:
        return datetime(now.year, 1 if now.month <= 6 else 7, 1)
    return datetime(now.year, 1, 1)


def summarize_attendance(records: Iterable[Any]) -> Dict[str, Any]:
    records = list(records)
    total = len(records)
    present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT.value)

    by_month: Dict[int, List[Any]] = {}
    for record in records:
        by_month.setdefault(record.date.month, []).append(record)

    monthly_breakdown = []
    for month in sorted(by_month):
        month_records = by_month[month]
        month_present = sum(1 for r in month_records if r.status == AttendanceStatus.PRESENT.value)
        monthly_breakdown.append({
            "month": month_name[month],
            "present": month_present,
            "absent": sum(1 for r in month_records if r.status == AttendanceStatus.ABSENT.value),
            "percentage": percentage_of(month_present, len(month_records)),
        })

    return {
        "total_days": total,
        "days_present": present,
        "days_absent": sum(1 for r in records if r.status == AttendanceStatus.ABSENT.value),
        "percentage": percentage_of(present, total),
        "late_arrivals": sum(1 for r in records if r.late_arrival),
        "early_departures": sum(1 for r in records if r.early_departure),
        "monthly_breakdown": monthly_breakdown,
    }


def summarize_assignments(assignments: Iterable[Any], student_id: Any) -> Dict[str, Any]:
    """Assignment completion for one student; submissions keyed by student_id"""
    details = []
    submitted = 0
    total_score = 0.0

    for assignment in assignments:
        submission = next(
            (s for s in assignment.submissions if s.student_id == student_id and not s.is_deleted),
            None
        )
        if submission:
            submitted += 1
            total_score += submission.score or 0
            status = "Late" if submission.submitted_at > assignment.due_date else "Submitted"
        else:
            status = "Not Submitted"

        details.append({
            "subject": assignment.subject,
            "title": assignment.title,
            "due_date": assignment.due_date.isoformat(),
            "submitted_date": submission.submitted_at.isoformat() if submission else None,
            "score": submission.score or 0 if submission else 0,
            "max_score": assignment.max_score or 100,
            "status": status,
            "teacher_feedback": submission.feedback or "" if submission else "",
        })

    return {
        "total_assignments": len(details),
        "submitted_assignments": submitted,
        "pending_assignments": len(details) - submitted,
        "average_score": round_half_up(total_score / submitted) if submitted else 0,
        "assignments": details,
    }


def summarize_exams(results: Iterable[Any]) -> Dict[str, Any]:
    details = []
    for result in results:
        exam = result.exam
        percentage = percentage_of(result.marks, result.total_marks)
        details.append({
            "exam_name": exam.name if exam else "Unknown",
            "exam_type": exam.exam_type if exam else "Unknown",
            "subject": result.subject,
            "exam_date": exam.exam_date.isoformat() if exam else None,
            "score": result.marks,
            "max_score": result.total_marks,
            "percentage": percentage,
            "grade": grade_from_percentage(percentage),
            "rank": result.rank or 0,
            "total_students": result.total_students or 0,
        })

    percentages = [detail["percentage"] for detail in details]
    return {
        "total_exams": len(details),
        "average_score": round_half_up(sum(percentages) / len(percentages)) if percentages else 0,
        "highest_score": max(percentages, default=0),
        "lowest_score": min(percentages, default=0),
        "exams": details,
    }


def behavior_rating(incidents: List[Any]) -> str:
    if not incidents:
        return "Excellent"
    major = sum(1 for i in incidents if i.severity == Severity.MAJOR.value)
    moderate = sum(1 for i in incidents if i.severity == Severity.MODERATE.value)
    if major > 0:
        return "Poor"
    if moderate > 2:
        return "Needs Improvement"
    if moderate > 0:
        return "Satisfactory"
    return "Good"


def summarize_behavior(incidents: Iterable[Any]) -> Dict[str, Any]:
    incidents = list(incidents)
    rating = behavior_rating(incidents)
    return {
        "overall_rating": rating,
        "punctuality": "Good",
        "discipline": rating,
        "participation": "Good",
        "teamwork": "Good",
        "leadership": "Good",
        "remarks": "Some behavioral incidents noted" if incidents else "Good behavior maintained",
        "disciplinary_incidents": [
            {
                "date": incident.created_at.isoformat(),
                "type": incident.incident_type,
                "description": incident.description,
                "severity": incident.severity,
                "action_taken": incident.action_taken,
                "resolved": incident.status == "Resolved",
            }
            for incident in incidents
        ],
    }


def summarize_fees(payments: Iterable[Any], today: date) -> Dict[str, Any]:
    payments = sorted(payments, key=lambda p: p.payment_date or datetime.min, reverse=True)
    total = sum(float(p.amount) for p in payments)
    paid = sum(float(p.amount) for p in payments if p.status == PaymentStatus.PAID.value)
    pending = round(total - paid, 2)
    pending_payments = [p for p in payments if p.status == PaymentStatus.PENDING.value]

    if pending <= 0:
        payment_status = "Paid"
    elif any(p.due_date and p.due_date < today for p in pending_payments):
        payment_status = "Overdue"
    else:
        payment_status = "Partial"

    history = [
        {
            "date": p.payment_date.isoformat() if p.payment_date else None,
            "amount": float(p.amount),
            "method": p.payment_method,
            "receipt": p.receipt_number,
        }
        for p in payments
        if p.status == PaymentStatus.PAID.value
    ]
    due_dates = sorted(p.due_date for p in pending_payments if p.due_date)

    return {
        "total_fees": round(total, 2),
        "paid_amount": round(paid, 2),
        "pending_amount": pending,
        "payment_status": payment_status,
        "last_payment_date": history[0]["date"] if history else None,
        "next_due_date": due_dates[0].isoformat() if due_dates else None,
        "payment_history": history,
    }


def body_mass_index(height_cm: Optional[float], weight_kg: Optional[float]) -> float:
    if not height_cm or not weight_kg:
        return 0
    return round(weight_kg / (height_cm / 100) ** 2, 2)


def summarize_health(record: Optional[Any]) -> Dict[str, Any]:
    if record is None:
        return {
            "height": 0,
            "weight": 0,
            "bmi": 0,
            "blood_group": "Unknown",
            "allergies": [],
            "medical_conditions": [],
            "last_checkup": None,
            "health_incidents": [],
        }
    return {
        "height": record.height or 0,
        "weight": record.weight or 0,
        "bmi": body_mass_index(record.height, record.weight),
        "blood_group": record.blood_group or "Unknown",
        "allergies": record.allergies or [],
        "medical_conditions": record.medical_conditions or [],
        "last_checkup": record.last_checkup.isoformat() if record.last_checkup else None,
        "health_incidents": record.health_incidents or [],
    }


def _trend(value: float, improving_at: float, stable_at: float) -> str:
    if value >= improving_at:
        return IMPROVING
    if value >= stable_at:
        return STABLE
    return DECLINING


def calculate_trends(attendance: Dict, assignments: Dict, exams: Dict, behavior: Dict) -> Dict[str, str]:
    rating = behavior["overall_rating"]
    if rating in ("Excellent", "Good"):
        behavior_trend = IMPROVING
    elif rating == "Satisfactory":
        behavior_trend = STABLE
    else:
        behavior_trend = DECLINING

    return {
        "academic_progress": _trend(exams["average_score"], 75, 60),
        "attendance_trend": _trend(attendance["percentage"], 90, 75),
        "behavior_trend": behavior_trend,
        "assignment_trend": _trend(assignments["average_score"], 75, 60),
    }


def generate_recommendations(attendance: Dict, assignments: Dict, exams: Dict, behavior: Dict) -> Dict[str, List[str]]:
    recommendations: Dict[str, List[str]] = {
        "academic": [],
        "behavioral": [],
        "co_curricular": [],
        "health": [],
        "general": [],
    }

    if exams["average_score"] < 75:
        recommendations["academic"].append(
            "Focus on improving academic performance through regular study and practice")
    if assignments["pending_assignments"] > 0:
        recommendations["academic"].append(
            "Complete pending assignments to improve overall performance")
    if attendance["percentage"] < 90:
        recommendations["behavioral"].append(
            "Improve attendance to maintain academic progress")
    if behavior["overall_rating"] in ("Needs Improvement", "Poor"):
        recommendations["behavioral"].append(
            "Work on improving behavioral aspects and classroom conduct")
    if exams["average_score"] < 60:
        recommendations["general"].append(
            "Consider seeking additional academic support or tutoring")

    return recommendations
