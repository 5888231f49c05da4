from mentorpath.api import check_onboarding_gate
from mentorpath.core.curriculum import CurriculumEngine
from mentorpath.core.mentor_matching import MentorMatchingEngine
from mentorpath.core.onboarding import OnboardingService
from mentorpath.core.repair import RetroactiveRepairJob
from mentorpath.db.repositories import Repository
from mentorpath.db.session import SessionLocal


def test_student_onboarding_to_first_completed_item() -> None:
    with SessionLocal() as db:
        assert check_onboarding_gate("ravi", "/dashboard", session=db).redirect_to == "/onboarding"

        service = OnboardingService(db)
        answers = [
            ("full_name", "Ravi Kumar"),
            ("institution", "State University"),
            ("learning_direction", "I want to learn machine learning with python and pandas"),
            ("skill_level", "beginner"),
            ("time_commitment", "casual"),
            ("motivation", "curiosity"),
            ("role", "student"),
        ]
        for step, value in answers:
            assert service.save_response("ravi", step, value).success, step

        assert service.get_progress("ravi").current_step is None
        assert service.complete_student_onboarding("ravi").success

        gate = check_onboarding_gate("ravi", "/onboarding", session=db)
        assert gate.redirect_to == "/dashboard"
        assert gate.is_student_complete
        assert check_onboarding_gate("ravi", "/dashboard", session=db).redirect_to is None

        mentor = MentorMatchingEngine(db).get_user_mentor("ravi")
        assert mentor.mentor_name == "Michael Zhang"

        curriculum = CurriculumEngine(db)
        items = curriculum.get_user_curriculum("ravi")
        assert [entry.item.title for entry in items] == [
            "Introduction to Data Science",
            "Python for Data Science",
            "Data Visualization with Python",
        ]

        first = curriculum.get_next_item("ravi")
        assert curriculum.start_item("ravi", first.id)
        assert curriculum.complete_item("ravi", first.id)
        assert curriculum.get_progress("ravi").percent_complete == 33
        assert curriculum.get_next_item("ravi").title == "Python for Data Science"

        # Completed students are left alone by the repair job.
        assert RetroactiveRepairJob(db).run() == []
        assert len(Repository(db).list_audit_entries("ravi")) == 0


def test_mentor_onboarding_joins_catalog_and_gets_matched() -> None:
    with SessionLocal() as db:
        service = OnboardingService(db)
        service.save_response("grace", "role", "mentor")
        assert check_onboarding_gate("grace", "/mentor-dashboard", session=db).redirect_to == "/mentor-onboarding"

        service.save_mentor_field("grace", "full_name", "Grace Hopper")
        service.save_mentor_field("grace", "mentor_expertise", ["Cybersecurity", "Computer Science Fundamentals"])
        service.save_mentor_field("grace", "mentor_experience_level", "advanced")
        service.save_mentor_field("grace", "mentor_availability", "casual")
        assert service.complete_mentor_onboarding("grace").success

        assert check_onboarding_gate("grace", "/mentor-onboarding", session=db).redirect_to == "/mentor-dashboard"

        Repository(db).upsert_profile("sec", {"inferred_skill_domain": "Cybersecurity", "motivation_type": "curiosity"})
        assignment = MentorMatchingEngine(db).assign_mentor("sec")
        assert assignment.mentor_name == "Grace Hopper"
        assert assignment.score == 19
