"""
Tests for club application endpoints
Tests for: apply, duplicate guard, listings, review permissions, approval effects
"""
import pytest
from httpx import AsyncClient

from app.models.club_application import ClubApplication, ApplicationStatus


@pytest.fixture
def make_application(db_session):
    async def _make(student, club, status=ApplicationStatus.PENDING, reason="I love this club"):
        application = ClubApplication(
            club_id=club.id,
            student_id=student.id,
            reason=reason,
            status=status,
        )
        db_session.add(application)
        await db_session.commit()
        await db_session.refresh(application)
        return application

    return _make


class TestApply:
    """POST /api/v1/club-applications"""

    @pytest.mark.asyncio
    async def test_apply(self, client: AsyncClient, student_headers, student_user, club):
        response = await client.post(
            "/api/v1/club-applications",
            json={"club": club.id, "reason": "  I write code  "},
            headers=student_headers,
        )

        assert response.status_code == 201
        application = response.json()["application"]
        assert application["status"] == "pending"
        assert application["reason"] == "I write code"
        assert application["club"]["name"] == "Coding Club"
        assert application["student"]["id"] == student_user.id
        assert application["reviewed_by"] is None

    @pytest.mark.asyncio
    async def test_missing_fields(self, client: AsyncClient, student_headers, club):
        response = await client.post(
            "/api/v1/club-applications", json={"club": club.id}, headers=student_headers
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Please provide club and reason"

    @pytest.mark.asyncio
    async def test_unknown_club(self, client: AsyncClient, student_headers):
        response = await client.post(
            "/api/v1/club-applications",
            json={"club": "missing", "reason": "Please"},
            headers=student_headers,
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_pending_application_blocks_reapply(
        self, client: AsyncClient, student_headers, student_user, club, make_application
    ):
        await make_application(student_user, club)

        response = await client.post(
            "/api/v1/club-applications",
            json={"club": club.id, "reason": "Again"},
            headers=student_headers,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "You have already applied to this club or are already a member"

    @pytest.mark.asyncio
    async def test_approved_application_blocks_reapply(
        self, client: AsyncClient, student_headers, student_user, club, make_application
    ):
        await make_application(student_user, club, status=ApplicationStatus.APPROVED)

        response = await client.post(
            "/api/v1/club-applications",
            json={"club": club.id, "reason": "Again"},
            headers=student_headers,
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_rejected_application_allows_reapply(
        self, client: AsyncClient, student_headers, student_user, club, make_application
    ):
        await make_application(student_user, club, status=ApplicationStatus.REJECTED)

        response = await client.post(
            "/api/v1/club-applications",
            json={"club": club.id, "reason": "Second try"},
            headers=student_headers,
        )

        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_other_club_unaffected(
        self, client: AsyncClient, student_headers, student_user, club, other_club, make_application
    ):
        await make_application(student_user, club)

        response = await client.post(
            "/api/v1/club-applications",
            json={"club": other_club.id, "reason": "Music too"},
            headers=student_headers,
        )

        assert response.status_code == 201


class TestListings:

    @pytest.mark.asyncio
    async def test_admin_sees_all(
        self, client: AsyncClient, admin_headers, make_user, club, other_club, make_application
    ):
        await make_application(await make_user(), club)
        await make_application(await make_user(), other_club)

        response = await client.get("/api/v1/club-applications", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["count"] == 2

    @pytest.mark.asyncio
    async def test_listing_all_is_admin_only(self, client: AsyncClient, student_headers):
        response = await client.get("/api/v1/club-applications", headers=student_headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_my_applications(
        self, client: AsyncClient, student_headers, student_user, make_user, club, other_club,
        make_application
    ):
        mine = await make_application(student_user, club)
        await make_application(await make_user(), other_club)

        response = await client.get("/api/v1/club-applications/my-applications", headers=student_headers)

        assert [a["id"] for a in response.json()["applications"]] == [mine.id]

    @pytest.mark.asyncio
    async def test_club_head_sees_own_club(
        self, client: AsyncClient, make_user, auth_headers_for, club, other_club, make_application
    ):
        head = await make_user(club=club, additional_roles=["club_head"])
        ours = await make_application(await make_user(), club)
        await make_application(await make_user(), other_club)

        response = await client.get("/api/v1/club-applications/club-head", headers=auth_headers_for(head))

        assert response.status_code == 200
        data = response.json()
        assert data["club"]["id"] == club.id
        assert [a["id"] for a in data["applications"]] == [ours.id]

    @pytest.mark.asyncio
    async def test_club_head_route_requires_head(self, client: AsyncClient, student_headers):
        response = await client.get("/api/v1/club-applications/club-head", headers=student_headers)

        assert response.status_code == 403
        assert response.json()["detail"] == "Only club heads can access this route"

    @pytest.mark.asyncio
    async def test_club_head_without_club(self, client: AsyncClient, make_user, auth_headers_for):
        head = await make_user(additional_roles=["club_head"])

        response = await client.get("/api/v1/club-applications/club-head", headers=auth_headers_for(head))

        assert response.status_code == 400
        assert response.json()["detail"] == "You are not assigned to any club"


class TestReview:
    """PATCH /api/v1/club-applications/{id}"""

    @pytest.mark.asyncio
    async def test_head_approves(
        self, client: AsyncClient, make_user, auth_headers_for, student_user, club, make_application
    ):
        head = await make_user(club=club, additional_roles=["club_head"])
        application = await make_application(student_user, club)

        response = await client.patch(
            f"/api/v1/club-applications/{application.id}",
            json={"status": "approved"},
            headers=auth_headers_for(head),
        )

        assert response.status_code == 200
        data = response.json()["application"]
        assert data["status"] == "approved"
        assert data["reviewed_by"]["id"] == head.id
        assert data["reviewed_at"] is not None

        assert student_user.additional_roles == ["club_member"]
        assert student_user.club_id == club.id

    @pytest.mark.asyncio
    async def test_approval_grants_member_once(
        self, client: AsyncClient, admin_headers, make_user, club, make_application
    ):
        student = await make_user(additional_roles=["club_member"])
        application = await make_application(student, club)

        await client.patch(
            f"/api/v1/club-applications/{application.id}",
            json={"status": "approved"},
            headers=admin_headers,
        )

        assert student.additional_roles == ["club_member"]

    @pytest.mark.asyncio
    async def test_rejection_leaves_student_untouched(
        self, client: AsyncClient, admin_headers, student_user, club, make_application
    ):
        application = await make_application(student_user, club)

        response = await client.patch(
            f"/api/v1/club-applications/{application.id}",
            json={"status": "rejected"},
            headers=admin_headers,
        )

        assert response.json()["application"]["status"] == "rejected"
        assert student_user.additional_roles == []
        assert student_user.club_id is None

    @pytest.mark.asyncio
    async def test_head_of_other_club_blocked(
        self, client: AsyncClient, make_user, auth_headers_for, student_user, club, other_club,
        make_application
    ):
        head = await make_user(club=other_club, additional_roles=["club_head"])
        application = await make_application(student_user, club)

        response = await client.patch(
            f"/api/v1/club-applications/{application.id}",
            json={"status": "approved"},
            headers=auth_headers_for(head),
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "Not authorized to review this application"

    @pytest.mark.asyncio
    async def test_faculty_cannot_review(
        self, client: AsyncClient, faculty_headers, student_user, club, make_application
    ):
        application = await make_application(student_user, club)

        response = await client.patch(
            f"/api/v1/club-applications/{application.id}",
            json={"status": "approved"},
            headers=faculty_headers,
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_invalid_status(self, client: AsyncClient, admin_headers, student_user, club, make_application):
        application = await make_application(student_user, club)

        response = await client.patch(
            f"/api/v1/club-applications/{application.id}",
            json={"status": "pending"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid status"

    @pytest.mark.asyncio
    async def test_missing_application(self, client: AsyncClient, admin_headers):
        response = await client.patch(
            "/api/v1/club-applications/missing",
            json={"status": "approved"},
            headers=admin_headers,
        )

        assert response.status_code == 404
