import httpx
import pytest

from app.core.exceptions import NotFoundError, ValidationError
from app.domains.library import services as library_services
from app.domains.library.schemas import CategoryCreate, ContentCreate, ContentUpdate
from app.domains.translation import services as translation
from tests.factories import auth_headers, create_admin, create_user, run


@pytest.fixture
def fake_translation(monkeypatch):
    async def translate_many(texts, *, client=None):
        return [f"ar:{text}" for text in texts]

    monkeypatch.setattr(library_services.translation, "translate_many", translate_many)


def _mymemory(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.parametrize(
    "name,slug",
    [
        ("Nutrition Basics", "nutrition-basics"),
        ("Meal  Planning", "meal-planning"),
        ("Perte de poids!", "perte-de-poids"),
        ("Régime", "rgime"),
    ],
)
def test_slugify(name, slug):
    assert library_services.slugify(name) == slug


async def test_translate_text_uses_langpair_and_returns_translation():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(200, json={"responseStatus": 200, "responseData": {"translatedText": "تغذية"}})

    async with _mymemory(handler) as client:
        assert await translation.translate_text("Nutrition", client=client) == "تغذية"
    assert seen == {"langpair": "fr|ar", "q": "Nutrition"}


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={}),
        httpx.Response(200, json={"responseStatus": 403, "responseDetails": "quota"}),
        httpx.Response(200, text="not json"),
    ],
)
async def test_translate_text_falls_back_to_source(response):
    async with _mymemory(lambda request: response) as client:
        assert await translation.translate_text("Nutrition", client=client) == "Nutrition"


async def test_translate_text_falls_back_on_network_error():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    async with _mymemory(handler) as client:
        assert await translation.translate_many(["Bonjour", "Merci"], client=client) == ["Bonjour", "Merci"]


async def test_create_category_translates_and_slugs(engine, fake_translation):
    category = await library_services.create_category(
        engine, CategoryCreate(name="Meal Planning", description="Plan your week")
    )

    assert category.slug == "meal-planning"
    assert category.name_ar == "ar:Meal Planning"
    assert category.description_ar == "ar:Plan your week"
    assert category.icon == "📁"
    assert category.color == "#4f46e5"


async def test_duplicate_category_name_is_rejected(engine, fake_translation):
    payload = CategoryCreate(name="Fitness", description="Move more")
    first = await library_services.create_category(engine, payload)

    with pytest.raises(ValidationError):
        await library_services.create_category(engine, payload)

    # Renaming a category to its own name is not a duplicate
    updated = await library_services.update_category(
        engine, str(first.id), CategoryCreate(name="Fitness", description="Move more, sit less")
    )
    assert updated.description == "Move more, sit less"


async def test_categories_are_ordered(engine, fake_translation):
    await library_services.create_category(engine, CategoryCreate(name="Zinc", description="Minerals", order=0))
    await library_services.create_category(engine, CategoryCreate(name="Apples", description="Fruit", order=1))
    await library_services.create_category(engine, CategoryCreate(name="Beans", description="Legumes", order=0))

    names = [c.name for c in await library_services.list_categories(engine)]
    assert names == ["Beans", "Zinc", "Apples"]


async def test_delete_missing_category(engine):
    with pytest.raises(NotFoundError):
        await library_services.delete_category(engine, "0" * 24)


async def test_content_category_is_resolved_to_slug(engine, fake_translation):
    category = await library_services.create_category(
        engine, CategoryCreate(name="Healthy Eating", description="Everyday habits")
    )
    payload = {
        "title": "Top 10 Healthy Snacks",
        "type": "infographic",
        "description": "Discover nutritious snacks to keep you energized.",
        "media_url": "https://example.com/snacks.png",
    }

    by_id = await library_services.create_content(engine, ContentCreate(**payload, category=str(category.id)))
    by_slug = await library_services.create_content(engine, ContentCreate(**payload, category="healthy-eating"))
    assert by_id.category == by_slug.category == "healthy-eating"

    with pytest.raises(ValidationError):
        await library_services.create_content(engine, ContentCreate(**payload, category="unknown"))

    filtered = await library_services.list_content(engine, category="healthy-eating")
    assert len(filtered) == 2


async def test_partial_content_update(engine):
    content = await library_services.create_content(
        engine,
        ContentCreate(
            title="Weekly Meal Planning Guide",
            type="post",
            description="Step-by-step guide to planning your meals.",
            media_url="https://example.com/guide.pdf",
            tags=["meal-planning"],
        ),
    )

    updated = await library_services.update_content(engine, str(content.id), ContentUpdate(title="Meal Planning 101"))
    assert updated.title == "Meal Planning 101"
    assert updated.type == "post"
    assert updated.tags == ["meal-planning"]

    await library_services.delete_content(engine, str(content.id))
    with pytest.raises(NotFoundError):
        await library_services.delete_content(engine, str(content.id))


def test_content_http_permissions(client, engine):
    user = run(create_user(engine))
    admin = run(create_admin(engine))
    body = {
        "title": "Introduction to Nutrition",
        "type": "video",
        "description": "Learn the fundamentals of balanced nutrition.",
        "mediaUrl": "https://example.com/video1.mp4",
    }

    assert client.post("/api/v1/admin/content", json=body, headers=auth_headers(user)).status_code == 403

    created = client.post("/api/v1/admin/content", json=body, headers=auth_headers(admin))
    assert created.status_code == 201
    content_id = created.json()["content"]["_id"]

    bad_url = client.post("/api/v1/admin/content", json={**body, "mediaUrl": "ftp://x"}, headers=auth_headers(admin))
    assert bad_url.status_code == 400

    public = client.get("/api/v1/admin/content")
    assert public.status_code == 200
    assert [c["_id"] for c in public.json()["contents"]] == [content_id]

    updated = client.put(
        "/api/v1/admin/content", params={"id": content_id}, json={"title": "Nutrition 101"}, headers=auth_headers(admin)
    )
    assert updated.json()["content"]["title"] == "Nutrition 101"

    missing = client.delete("/api/v1/admin/content", params={"id": "0" * 24}, headers=auth_headers(admin))
    assert missing.status_code == 404


def test_categories_http(client, engine, fake_translation):
    user = run(create_user(engine))
    admin = run(create_admin(engine))
    body = {"name": "Hydration", "description": "Drinking enough water", "color": "#00AAFF"}

    assert client.get("/api/v1/admin/categories").status_code == 401
    assert client.post("/api/v1/admin/categories", json=body, headers=auth_headers(user)).status_code == 403

    created = client.post("/api/v1/admin/categories", json=body, headers=auth_headers(admin))
    assert created.status_code == 201
    assert created.json()["category"]["nameAr"] == "ar:Hydration"

    duplicate = client.post("/api/v1/admin/categories", json=body, headers=auth_headers(admin))
    assert duplicate.status_code == 400

    bad_color = client.post(
        "/api/v1/admin/categories", json={**body, "name": "Other", "color": "blue"}, headers=auth_headers(admin)
    )
    assert bad_color.status_code == 400

    listed = client.get("/api/v1/admin/categories", headers=auth_headers(user))
    assert [c["slug"] for c in listed.json()["categories"]] == ["hydration"]
