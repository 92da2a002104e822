"""Announcement lifecycle and who gets to see what."""
from datetime import timedelta

from conftest import auth_headers
from schoolhub.models import Announcement
from schoolhub.models.base import utcnow


async def post_announcement(client, author, title, audience, publish=True):
    response = await client.post(
        "/api/v1/announcements/",
        params={"publish": publish},
        json={"title": title, "content": f"{title} details", "audience": audience},
        headers=auth_headers(author),
    )
    assert response.status_code == 201
    return response.json()["announcement"]


async def test_draft_then_publish(client, class_teacher, make_student):
    student = await make_student()
    draft = await post_announcement(client, class_teacher, "Field trip", ["All"], publish=False)
    assert draft["status"] == "Draft"
    assert draft["published_at"] is None

    hidden = await client.get("/api/v1/student/announcements", headers=auth_headers(student))
    assert hidden.json()["total"] == 0

    published = await client.put(f"/api/v1/announcements/{draft['id']}/publish", headers=auth_headers(class_teacher))
    assert published.json()["announcement"]["status"] == "Published"

    visible = await client.get("/api/v1/student/announcements", headers=auth_headers(student))
    assert visible.json()["total"] == 1


async def test_student_sees_audiences_addressed_to_them(client, class_teacher, make_student):
    student = await make_student(class_name="10", section="A")
    await post_announcement(client, class_teacher, "Everyone", ["All"])
    await post_announcement(client, class_teacher, "Pupils", ["Students"])
    await post_announcement(client, class_teacher, "Grade ten", ["10"])
    await post_announcement(client, class_teacher, "Ten A", ["10-A"])
    await post_announcement(client, class_teacher, "Ten B", ["10-B"])
    await post_announcement(client, class_teacher, "Staff room", ["Staff"])

    response = await client.get("/api/v1/student/announcements", headers=auth_headers(student))
    titles = {item["title"] for item in response.json()["items"]}
    assert titles == {"Everyone", "Pupils", "Grade ten", "Ten A"}


async def test_only_author_or_principal_may_edit(client, class_teacher, make_staff, principal):
    announcement = await post_announcement(client, class_teacher, "Sports day", ["All"])
    colleague = await make_staff()

    denied = await client.put(
        f"/api/v1/announcements/{announcement['id']}", json={"title": "Changed"}, headers=auth_headers(colleague)
    )
    assert denied.status_code == 403

    allowed = await client.put(
        f"/api/v1/announcements/{announcement['id']}", json={"priority": "high"}, headers=auth_headers(principal)
    )
    assert allowed.json()["announcement"]["priority"] == "high"


async def test_archived_announcement_is_frozen(client, class_teacher):
    announcement = await post_announcement(client, class_teacher, "Old notice", ["All"])
    headers = auth_headers(class_teacher)

    archived = await client.put(f"/api/v1/announcements/{announcement['id']}/archive", headers=headers)
    assert archived.json()["announcement"]["status"] == "Archived"

    edit = await client.put(f"/api/v1/announcements/{announcement['id']}", json={"title": "New"}, headers=headers)
    assert edit.status_code == 400

    mine = await client.get("/api/v1/announcements/", params={"mine": True}, headers=headers)
    assert mine.json()["total"] == 1

    deleted = await client.delete(f"/api/v1/announcements/{announcement['id']}", headers=headers)
    assert deleted.status_code == 200
    assert (await client.get("/api/v1/announcements/", headers=headers)).json()["total"] == 0


async def test_class_announcement_survives_many_newer_ones_for_others(db, client, class_teacher, make_student):
    student = await make_student(class_name="10", section="A")
    await post_announcement(client, class_teacher, "Grade ten", ["10"])
    # Other audiences, some of whose names contain the student's class as a substring
    db.add_all([
        Announcement(
            title=f"Staff notice {n}", content="Staff only", audience=["Staff", "110", "10-B"],
            status="Published", published_at=utcnow() + timedelta(minutes=n), created_by=class_teacher.id,
        )
        for n in range(1, 211)
    ])
    await db.commit()

    response = await client.get("/api/v1/student/announcements", headers=auth_headers(student))
    assert response.json()["total"] == 1
    assert response.json()["items"][0]["title"] == "Grade ten"
