import pytest

from app.core.exceptions import NotFoundError
from app.domains.assessments import services as assessment_services
from app.domains.assessments.schemas import AssessmentCreate, AssessmentDB
from app.domains.branding import services as branding_services
from app.domains.branding.models import DEFAULT_SITE_NAME
from app.domains.branding.schemas import BrandingUpdate
from app.domains.users.services import get_user_by_id
from app.helpers.serialize import model_to_dto
from tests.factories import auth_headers, create_admin, create_user, identity, run

ANSWERS = {
    "full_name": "Jane Doe",
    "date_of_birth": "1994-03-12",
    "gender": "female",
    "region": "Tunis",
    "height": "168",
    "weight": "64",
    "physical_activity_level": "moderate",
    "smoking": "no",
    "alcohol_consumption": "never",
    "sleep_hours": "7",
    "meals_per_day": "3",
    "chronic_diseases": ["none"],
    "medical_treatment": "none",
    "allergies_intolerances": ["lactose"],
    "main_objective": "weight-loss",
}


async def test_submit_assessment_flags_user_and_copies_answers(engine):
    user = await create_user(engine)

    assessment = await assessment_services.submit_assessment(
        engine, actor=identity(user), payload=AssessmentCreate(**ANSWERS)
    )

    assert assessment.user_id == str(user.id)
    assert assessment.user_email == user.email
    refreshed = await get_user_by_id(engine, str(user.id))
    assert refreshed.has_completed_assessment is True
    assert refreshed.assessment.main_objective == "weight-loss"
    assert refreshed.assessment.allergies_intolerances == ["lactose"]


async def test_latest_submission_wins_on_the_snapshot(engine):
    user = await create_user(engine)
    await assessment_services.submit_assessment(engine, actor=identity(user), payload=AssessmentCreate(**ANSWERS))
    await assessment_services.submit_assessment(
        engine, actor=identity(user), payload=AssessmentCreate(**{**ANSWERS, "main_objective": "muscle-gain"})
    )

    refreshed = await get_user_by_id(engine, str(user.id))
    assert refreshed.assessment.main_objective == "muscle-gain"
    assert len(await assessment_services.list_assessments(engine, user_id=str(user.id))) == 2


async def test_submit_for_vanished_user(engine):
    user = await create_user(engine)
    await engine.delete(user)

    with pytest.raises(NotFoundError):
        await assessment_services.submit_assessment(engine, actor=identity(user), payload=AssessmentCreate(**ANSWERS))


async def test_assessment_reports(engine):
    alice = await create_user(engine, name="Alice", email="alice@example.com")
    await create_user(engine, name="Bob", email="bob@example.com")
    await assessment_services.submit_assessment(engine, actor=identity(alice), payload=AssessmentCreate(**ANSWERS))
    await assessment_services.submit_assessment(engine, actor=identity(alice), payload=AssessmentCreate(**ANSWERS))

    stats = await assessment_services.assessment_stats(engine)
    assert stats == {
        "totalAssessments": 2,
        "usersWithAssessment": 1,
        "recentAssessments": 2,
        "percentage": 50,
    }

    synced = await assessment_services.sync_assessments(engine)
    assert synced["totalAssessments"] == 2
    assert synced["assessments"][0]["userData"]["email"] == "alice@example.com"


def test_assessment_http(client, engine):
    user = run(create_user(engine))
    admin = run(create_admin(engine))

    body = {
        "fullName": "Jane Doe",
        "dateOfBirth": "1994-03-12",
        "gender": "female",
        "region": "Tunis",
        "height": "168",
        "weight": "64",
        "physicalActivityLevel": "moderate",
        "smoking": "no",
        "alcoholConsumption": "never",
        "sleepHours": "7",
        "mealsPerDay": "3",
        "medicalTreatment": "none",
        "mainObjective": "weight-loss",
    }
    created = client.post("/api/v1/assessment", json=body, headers=auth_headers(user))
    assert created.status_code == 201
    assert created.json()["assessment"]["userId"] == str(user.id)

    incomplete = client.post("/api/v1/assessment", json={**body, "fullName": "J"}, headers=auth_headers(user))
    assert incomplete.status_code == 400

    assert client.get("/api/v1/assessment", headers=auth_headers(user)).status_code == 403
    listed = client.get("/api/v1/assessment", headers=auth_headers(admin))
    assert len(listed.json()["assessments"]) == 1

    me = client.get("/api/v1/auth/me", headers=auth_headers(user))
    assert me.json()["hasCompletedAssessment"] is True


async def test_branding_defaults_are_created_once(engine):
    first = await branding_services.get_branding(engine)
    second = await branding_services.get_branding(engine)

    assert first.id == second.id
    assert first.site_name == DEFAULT_SITE_NAME
    assert await engine.count(type(first)) == 1


async def test_branding_update_keeps_colours_when_omitted(engine):
    admin = await create_admin(engine)

    branding = await branding_services.update_branding(
        engine,
        actor=identity(admin),
        payload=BrandingUpdate(site_name="NutriCoach", site_description="Coaching nutritionnel", logo_url="https://cdn/logo.png"),
    )

    assert branding.site_name == "NutriCoach"
    assert branding.logo_url == "https://cdn/logo.png"
    assert branding.primary_color == "#4F46E5"
    assert branding.updated_by == str(admin.id)


def test_branding_http(client, engine):
    user = run(create_user(engine))
    admin = run(create_admin(engine))

    public = client.get("/api/v1/admin/branding")
    assert public.status_code == 200
    assert public.json()["branding"]["siteName"] == DEFAULT_SITE_NAME

    body = {"siteName": "NutriCoach", "siteDescription": "Coaching nutritionnel", "primaryColor": "#112233"}
    assert client.put("/api/v1/admin/branding", json=body, headers=auth_headers(user)).status_code == 403

    updated = client.put("/api/v1/admin/branding", json=body, headers=auth_headers(admin))
    assert updated.status_code == 200
    assert updated.json()["branding"]["primaryColor"] == "#112233"

    too_short = client.put(
        "/api/v1/admin/branding", json={**body, "siteDescription": "abc"}, headers=auth_headers(admin)
    )
    assert too_short.status_code == 400


async def test_sync_and_fetch_share_the_camel_case_shape(engine):
    user = await create_user(engine)
    await assessment_services.submit_assessment(engine, actor=identity(user), payload=AssessmentCreate(**ANSWERS))

    synced = (await assessment_services.sync_assessments(engine))["assessments"][0]
    fetched = model_to_dto((await assessment_services.list_assessments(engine))[0], AssessmentDB).model_dump(by_alias=True)

    assert set(synced) - {"userData"} == set(fetched)
    assert synced["alcoholConsumption"] == "never"
    assert "alcohol_consumption" not in synced
    assert synced["userData"]["id"] == str(user.id)
