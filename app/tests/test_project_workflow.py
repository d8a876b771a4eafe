import pytest

from app.core.exceptions import (
    AlreadyAppliedError,
    InvalidTransitionError,
    NotFoundError,
    NotProjectMentorError,
)
from app.models.project_models import Project, ProjectStatus, Submission
from app.schemas.backend_schemas.project_schemas import ProgressRecordSchema
from app.services import project_service


def _progress(student_id, percentage=40, milestone="Wireframes done", files=None):
    return ProgressRecordSchema(
        student_id=student_id,
        files=files or [],
        progress_update={
            "percentage_completion": percentage,
            "milestones": milestone,
            "comments": "on track",
        },
    )


# -------------------------
# approve / reject / complete
# -------------------------
def test_approve_pending_project_notifies_every_applicant(db, make_project, make_student):
    alice = make_student(name="Alice")
    bob = make_student(name="Bob")
    project = make_project(applicants=[alice, bob])

    result = project_service.approve_project(db, project.id)

    assert result.project.status == ProjectStatus.approved
    assert sorted(n.to for n in result.notifications) == sorted([alice.email, bob.email])
    assert all("Approved" in n.subject for n in result.notifications)


def test_second_approve_is_an_invalid_transition(db, make_project):
    project = make_project()
    project_service.approve_project(db, project.id)

    with pytest.raises(InvalidTransitionError):
        project_service.approve_project(db, project.id)

    assert db.get(Project, project.id).status == ProjectStatus.approved


def test_reject_pending_project(db, make_project, make_student):
    applicant = make_student()
    project = make_project(applicants=[applicant])

    result = project_service.reject_project(db, project.id)

    assert result.project.status == ProjectStatus.rejected
    assert [n.to for n in result.notifications] == [applicant.email]
    assert "Rejected" in result.notifications[0].subject


@pytest.mark.parametrize(
    "status", [ProjectStatus.approved, ProjectStatus.rejected, ProjectStatus.completed]
)
@pytest.mark.parametrize(
    "transition", [project_service.approve_project, project_service.reject_project]
)
def test_only_pending_projects_can_be_approved_or_rejected(db, make_project, status, transition):
    project = make_project(status=status)

    with pytest.raises(InvalidTransitionError):
        transition(db, project.id)

    assert db.get(Project, project.id).status == status


def test_transition_on_unknown_project_is_not_found(db):
    with pytest.raises(NotFoundError):
        project_service.approve_project(db, "no-such-project")
    with pytest.raises(NotFoundError):
        project_service.reject_project(db, "no-such-project")


def test_complete_requires_approved(db, make_project):
    pending = make_project()
    approved = make_project(status=ProjectStatus.approved)

    with pytest.raises(InvalidTransitionError):
        project_service.complete_project(db, pending.id)

    result = project_service.complete_project(db, approved.id)
    assert result.project.status == ProjectStatus.completed
    assert result.notifications == []


# -------------------------
# mentor assignment
# -------------------------
def test_reassigning_mentor_moves_project_between_mentors(db, make_project, make_mentor):
    m1 = make_mentor()
    m2 = make_mentor()
    project = make_project()

    first = project_service.assign_mentor(db, project.id, m1.id)
    assert [n.to for n in first.notifications] == [m1.email]

    second = project_service.assign_mentor(db, project.id, m2.id)

    db.expire_all()
    assert db.get(Project, project.id).mentor_id == m2.id
    assert project.id in [p.id for p in m2.assigned_projects]
    assert project.id not in [p.id for p in m1.assigned_projects]
    assert sorted(n.to for n in second.notifications) == sorted([m1.email, m2.email])
    assert any("unassigned" in n.subject for n in second.notifications)


def test_reassigning_same_mentor_only_notifies_once(db, make_project, make_mentor):
    mentor = make_mentor()
    project = make_project(mentor=mentor)

    result = project_service.assign_mentor(db, project.id, mentor.id)

    assert [n.to for n in result.notifications] == [mentor.email]
    assert [p.id for p in mentor.assigned_projects] == [project.id]


@pytest.mark.parametrize("status", list(ProjectStatus))
def test_mentor_can_be_assigned_in_any_status(db, make_project, make_mentor, status):
    mentor = make_mentor()
    project = make_project(status=status)

    result = project_service.assign_mentor(db, project.id, mentor.id)

    assert result.project.mentor_id == mentor.id
    assert result.project.status == status


def test_assign_unknown_mentor_or_project_is_not_found(db, make_project, make_mentor):
    project = make_project()
    mentor = make_mentor()

    with pytest.raises(NotFoundError):
        project_service.assign_mentor(db, project.id, "no-such-mentor")
    with pytest.raises(NotFoundError):
        project_service.assign_mentor(db, "no-such-project", mentor.id)

    assert db.get(Project, project.id).mentor_id is None


# -------------------------
# applications
# -------------------------
def test_apply_updates_both_sides(db, make_project, make_student):
    student = make_student()
    project = make_project(status=ProjectStatus.approved)

    project_service.apply_to_project(db, project.id, student)

    db.expire_all()
    assert [s.id for s in db.get(Project, project.id).students_applied] == [student.id]
    assert [p.id for p in student.applied_projects] == [project.id]
    assert student.project_status == {project.id: project_service.APPLIED}


def test_duplicate_apply_is_a_conflict_and_changes_nothing(db, make_project, make_student):
    student = make_student()
    project = make_project(status=ProjectStatus.approved)
    project_service.apply_to_project(db, project.id, student)

    with pytest.raises(AlreadyAppliedError):
        project_service.apply_to_project(db, project.id, student)

    db.expire_all()
    assert len(db.get(Project, project.id).students_applied) == 1
    assert len(student.applied_projects) == 1


@pytest.mark.parametrize(
    "status", [ProjectStatus.pending, ProjectStatus.rejected, ProjectStatus.completed]
)
def test_apply_requires_approved_project(db, make_project, make_student, status):
    student = make_student()
    project = make_project(status=status)

    with pytest.raises(InvalidTransitionError):
        project_service.apply_to_project(db, project.id, student)

    assert student.applied_projects == []


def test_apply_to_unknown_project_is_not_found(db, make_student):
    with pytest.raises(NotFoundError):
        project_service.apply_to_project(db, "no-such-project", make_student())


# -------------------------
# progress
# -------------------------
def test_assigned_mentor_records_progress(db, make_project, make_mentor, make_student):
    mentor = make_mentor()
    student = make_student()
    project = make_project(status=ProjectStatus.approved, mentor=mentor, applicants=[student])

    updated = project_service.record_progress(
        db, project.id, mentor, _progress(student.id, files=["report-v1.pdf"])
    )

    assert updated.status == ProjectStatus.approved
    assert len(updated.submissions) == 1
    submission = updated.submissions[0]
    assert submission.student_id == student.id
    assert submission.files == ["report-v1.pdf"]
    assert len(submission.progress_updates) == 1
    update = submission.progress_updates[0]
    assert update.percentage_completion == 40
    assert update.milestones == "Wireframes done"
    assert update.date is not None
    assert student.project_status[project.id] == project_service.IN_PROGRESS


def test_progress_entries_keep_insertion_order(db, make_project, make_mentor, make_student):
    mentor = make_mentor()
    student = make_student()
    project = make_project(status=ProjectStatus.approved, mentor=mentor, applicants=[student])

    for pct in (10, 50, 30):
        project_service.record_progress(db, project.id, mentor, _progress(student.id, percentage=pct))

    db.expire_all()
    submissions = db.get(Project, project.id).submissions
    assert [s.progress_updates[0].percentage_completion for s in submissions] == [10, 50, 30]


def test_progress_from_unassigned_mentor_is_refused(db, make_project, make_mentor, make_student):
    assigned = make_mentor()
    other = make_mentor()
    student = make_student()
    project = make_project(status=ProjectStatus.approved, mentor=assigned, applicants=[student])

    with pytest.raises(NotProjectMentorError):
        project_service.record_progress(db, project.id, other, _progress(student.id))

    assert db.query(Submission).count() == 0


def test_progress_for_student_who_did_not_apply_is_not_found(
    db, make_project, make_mentor, make_student
):
    mentor = make_mentor()
    applicant = make_student()
    outsider = make_student()
    project = make_project(status=ProjectStatus.approved, mentor=mentor, applicants=[applicant])

    with pytest.raises(NotFoundError):
        project_service.record_progress(db, project.id, mentor, _progress(outsider.id))
    with pytest.raises(NotFoundError):
        project_service.record_progress(db, project.id, mentor, _progress("no-such-student"))

    assert db.query(Submission).count() == 0


def test_list_applicants_checks_mentor(db, make_project, make_mentor, make_student):
    mentor = make_mentor()
    other = make_mentor()
    student = make_student()
    project = make_project(status=ProjectStatus.approved, mentor=mentor, applicants=[student])

    assert [s.id for s in project_service.list_applicants(db, project.id, mentor)] == [student.id]
    with pytest.raises(NotProjectMentorError):
        project_service.list_applicants(db, project.id, other)
