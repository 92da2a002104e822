"""Request routing, multi-level decisions and the items approvals create."""
from datetime import timedelta, timezone

import pytest

from conftest import ACADEMIC_YEAR, auth_headers
from schoolhub.models.base import utcnow


@pytest.fixture
async def department_setup(make_staff, make_department):
    hod = await make_staff(role="HOD")
    department = await make_department(head=hod, name="Science", code="SCI")
    teacher = await make_staff(department_id=department.id)
    return hod, department, teacher


async def submit(client, requester, request_type, request_data=None, title="Request"):
    response = await client.post("/api/v1/staff/approval-requests/", json={
        "request_type": request_type,
        "title": title,
        "description": "Please review",
        "request_data": request_data or {},
    }, headers=auth_headers(requester))
    assert response.status_code == 201
    return response.json()["approval"]


async def test_teacher_with_hod_is_routed_to_hod(client, department_setup):
    hod, _, teacher = department_setup
    approval = await submit(client, teacher, "Leave")
    assert approval["current_approver"] == "HOD"
    assert approval["status"] == "Pending"

    pending = await client.get("/api/v1/hod/approvals/pending", headers=auth_headers(hod))
    assert [item["id"] for item in pending.json()["items"]] == [approval["id"]]


async def test_requests_without_hod_go_to_principal(client, make_staff, principal):
    teacher = await make_staff()
    accountant = await make_staff(role="Accountant")
    first = await submit(client, teacher, "Resource")
    second = await submit(client, accountant, "Other")
    assert first["current_approver"] == second["current_approver"] == "Principal"

    pending = await client.get("/api/v1/principal/approvals/pending", headers=auth_headers(principal))
    assert pending.json()["total"] == 2


async def test_requester_sees_only_own_requests(client, make_staff):
    teacher = await make_staff()
    colleague = await make_staff()
    approval = await submit(client, teacher, "Leave")

    own = await client.get("/api/v1/staff/approval-requests/", headers=auth_headers(teacher))
    assert own.json()["total"] == 1
    other = await client.get(f"/api/v1/staff/approval-requests/{approval['id']}", headers=auth_headers(colleague))
    assert other.status_code == 403


async def test_fee_approval_creates_structure_once(client, make_staff, principal):
    teacher = await make_staff()
    approval = await submit(client, teacher, "Fee", {
        "academic_year": ACADEMIC_YEAR,
        "class_name": "10",
        "components": [{"name": "Tuition", "amount": 1000}, {"name": "Lab", "amount": 250.5}],
    })
    headers = auth_headers(principal)

    approved = await client.put(f"/api/v1/principal/approvals/{approval['id']}/approve", json={}, headers=headers)
    assert approved.status_code == 200
    body = approved.json()
    assert body["approval"]["status"] == "Approved"
    assert body["approval"]["current_approver"] == "Completed"
    assert body["approval"]["created_item_type"] == "FeeStructure"
    assert body["created_item"]["total_amount"] == 1250.5
    assert body["approval"]["created_item_id"] == body["created_item"]["id"]

    again = await client.put(f"/api/v1/principal/approvals/{approval['id']}/approve", json={}, headers=headers)
    assert again.status_code == 400
    assert again.json()["detail"] == "Request has already been processed"

    structures = await client.get("/api/v1/fees/structures", headers=headers)
    assert structures.json()["total"] == 1


async def test_invalid_fee_request_is_not_approved(client, make_staff, principal):
    teacher = await make_staff()
    approval = await submit(client, teacher, "Fee", {"components": []})
    headers = auth_headers(principal)

    response = await client.put(f"/api/v1/principal/approvals/{approval['id']}/approve", json={}, headers=headers)
    assert response.status_code == 400

    details = await client.get(f"/api/v1/principal/approvals/{approval['id']}", headers=headers)
    assert details.json()["status"] == "Pending"
    assert details.json()["requester"]["id"] == str(teacher.id)


async def test_hod_approves_nested_event_request(client, department_setup):
    hod, _, teacher = department_setup
    approval = await submit(client, teacher, "Event", {"request_data": {
        "title": "Inter-house athletics",
        "venue": "Main ground",
        "event_type": "athletic",
        "start_date": "2030-01-10T09:00:00",
    }})

    response = await client.put(
        f"/api/v1/hod/approvals/{approval['id']}/approve", json={"comments": "Go ahead"}, headers=auth_headers(hod)
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Request approved successfully"
    event = response.json()["created_item"]
    assert event["location"] == "Main ground"
    assert event["event_type"] == "Sports"
    assert event["end_date"] == "2030-01-10T10:00:00"

    history = response.json()["approval"]["approval_history"]
    assert history[0]["role"] == "HOD"
    assert history[0]["comments"] == "Go ahead"

    events = await client.get("/api/v1/announcements/events", headers=auth_headers(hod))
    assert [item["title"] for item in events.json()["items"]] == ["Inter-house athletics"]

    hod_history = await client.get("/api/v1/hod/approvals/history", headers=auth_headers(hod))
    assert hod_history.json()["total"] == 1


async def test_hod_scope_is_enforced(client, department_setup, make_staff, make_department):
    _, _, teacher = department_setup
    approval = await submit(client, teacher, "Leave")

    other_hod = await make_staff(role="HOD")
    await make_department(head=other_hod, name="Arts", code="ART")
    outside = await client.put(f"/api/v1/hod/approvals/{approval['id']}/approve", json={}, headers=auth_headers(other_hod))
    assert outside.status_code == 403
    assert outside.json()["detail"] == "Teacher does not belong to your department"

    headless = await make_staff(role="HOD")
    missing = await client.put(f"/api/v1/hod/approvals/{approval['id']}/approve", json={}, headers=auth_headers(headless))
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Department not found"


async def test_forward_to_vp_then_vp_approves_communication(client, department_setup, make_staff, make_student):
    hod, _, teacher = department_setup
    vp = await make_staff(role="VP")
    student = await make_student()
    approval = await submit(client, teacher, "Communication", {
        "subject": "Science fair",
        "content": "Projects are due next Friday",
        "recipients": ["Students"],
    })

    forwarded = await client.put(
        f"/api/v1/hod/approvals/{approval['id']}/approve", json={"forward_to_vp": True}, headers=auth_headers(hod)
    )
    assert forwarded.json()["message"] == "Request forwarded to Vice Principal"
    assert forwarded.json()["created_item"] is None
    assert forwarded.json()["approval"]["status"] == "Forwarded"
    assert forwarded.json()["approval"]["current_approver"] == "VP"
    assert forwarded.json()["approval"]["approval_history"][0]["status"] == "Forwarded to VP"

    # No longer the HOD's turn
    hod_again = await client.put(f"/api/v1/hod/approvals/{approval['id']}/approve", json={}, headers=auth_headers(hod))
    assert hod_again.status_code == 400

    vp_pending = await client.get("/api/v1/vp/approvals/pending", headers=auth_headers(vp))
    assert vp_pending.json()["total"] == 1

    approved = await client.put(f"/api/v1/vp/approvals/{approval['id']}/approve", json={}, headers=auth_headers(vp))
    assert approved.status_code == 200
    announcement = approved.json()["created_item"]
    assert announcement["title"] == "Science fair"
    assert announcement["status"] == "Published"
    assert len(approved.json()["approval"]["approval_history"]) == 2

    visible = await client.get("/api/v1/student/announcements", headers=auth_headers(student))
    assert [item["title"] for item in visible.json()["items"]] == ["Science fair"]


async def test_forwarded_request_reaches_principal_queue(client, department_setup, principal):
    hod, _, teacher = department_setup
    approval = await submit(client, teacher, "Resource")

    await client.put(
        f"/api/v1/hod/approvals/{approval['id']}/approve", json={"forward_to_principal": True}, headers=auth_headers(hod)
    )

    pending = await client.get("/api/v1/principal/approvals/pending", headers=auth_headers(principal))
    assert [item["status"] for item in pending.json()["items"]] == ["Forwarded"]


async def test_rejected_request_is_closed(client, make_staff, principal):
    teacher = await make_staff()
    approval = await submit(client, teacher, "Event", {"title": "Picnic"})
    headers = auth_headers(principal)

    rejected = await client.put(
        f"/api/v1/principal/approvals/{approval['id']}/reject", json={"comments": "Budget"}, headers=headers
    )
    assert rejected.json()["approval"]["status"] == "Rejected"
    assert rejected.json()["approval"]["approval_history"][-1]["comments"] == "Budget"

    late_approval = await client.put(f"/api/v1/principal/approvals/{approval['id']}/approve", json={}, headers=headers)
    assert late_approval.status_code == 400

    history = await client.get("/api/v1/principal/approvals/history", headers=headers)
    assert history.json()["total"] == 1


async def test_hod_cannot_reject_after_forwarding(client, department_setup, principal):
    hod, _, teacher = department_setup
    approval = await submit(client, teacher, "Leave")
    await client.put(
        f"/api/v1/hod/approvals/{approval['id']}/approve", json={"forward_to_principal": True}, headers=auth_headers(hod)
    )

    response = await client.put(f"/api/v1/hod/approvals/{approval['id']}/reject", json={}, headers=auth_headers(hod))
    assert response.status_code == 400
    assert response.json()["detail"] == "Request is not awaiting HOD approval"

    details = await client.get(f"/api/v1/principal/approvals/{approval['id']}", headers=auth_headers(principal))
    assert details.json()["status"] == "Forwarded"
    assert details.json()["current_approver"] == "Principal"


async def test_hod_rejects_own_level_request(client, department_setup):
    hod, _, teacher = department_setup
    approval = await submit(client, teacher, "Resource")

    response = await client.put(
        f"/api/v1/hod/approvals/{approval['id']}/reject", json={"comments": "No budget"}, headers=auth_headers(hod)
    )
    assert response.status_code == 200
    assert response.json()["approval"]["status"] == "Rejected"
    assert response.json()["approval"]["approval_history"][-1]["role"] == "HOD"


async def test_vp_rejects_only_forwarded_requests(client, department_setup, make_staff):
    hod, _, teacher = department_setup
    vp = await make_staff(role="VP")
    approval = await submit(client, teacher, "Leave")

    early = await client.put(f"/api/v1/vp/approvals/{approval['id']}/reject", json={}, headers=auth_headers(vp))
    assert early.status_code == 400
    assert early.json()["detail"] == "Request is not awaiting VP approval"

    await client.put(
        f"/api/v1/hod/approvals/{approval['id']}/approve", json={"forward_to_vp": True}, headers=auth_headers(hod)
    )
    rejected = await client.put(f"/api/v1/vp/approvals/{approval['id']}/reject", json={}, headers=auth_headers(vp))
    assert rejected.status_code == 200
    assert rejected.json()["approval"]["status"] == "Rejected"
    assert rejected.json()["approval"]["current_approver"] == "Completed"


async def test_principal_history_is_per_approver(client, make_staff, principal):
    teacher = await make_staff()
    colleague = await make_staff(role="Principal")
    approval = await submit(client, teacher, "Leave")
    await client.put(f"/api/v1/principal/approvals/{approval['id']}/reject", json={}, headers=auth_headers(principal))

    own = await client.get("/api/v1/principal/approvals/history", headers=auth_headers(principal))
    assert own.json()["total"] == 1
    other = await client.get("/api/v1/principal/approvals/history", headers=auth_headers(colleague))
    assert other.json()["total"] == 0


async def test_history_date_filter_accepts_offsets(client, make_staff, principal):
    teacher = await make_staff()
    approval = await submit(client, teacher, "Leave")
    await client.put(f"/api/v1/principal/approvals/{approval['id']}/reject", json={}, headers=auth_headers(principal))

    # An hour ago, written in a +05:00 zone
    start = (utcnow() - timedelta(hours=1)).replace(tzinfo=timezone.utc).astimezone(timezone(timedelta(hours=5)))
    history = await client.get(
        "/api/v1/principal/approvals/history", params={"start_date": start.isoformat()}, headers=auth_headers(principal)
    )
    assert history.status_code == 200
    assert history.json()["total"] == 1
