import pytest
from sqlalchemy import func, select

from app.errors import NotFound, ValidationError
from app.models import Form, Theme
from app.schemas.form import FormCreate
from app.services.forms import create_form, get_form, list_forms


async def _row_counts(session):
    forms = await session.scalar(select(func.count(Form.id)))
    themes = await session.scalar(select(func.count(Theme.id)))
    return forms, themes


async def test_form_is_created_with_its_themes(db_session, owner):
    data = FormCreate(
        title=" Friday lunch ",
        description="Pick a cuisine",
        themes=[{"name": " Pizza ", "maxVotes": 4}, {"name": "Ramen", "max_votes": 2}],
    )

    form = await create_form(db_session, owner.id, data)

    assert form.title == "Friday lunch"
    assert form.description == "Pick a cuisine"
    assert form.creator_id == owner.id
    assert [(t.name, t.max_votes, t.vote_count) for t in form.themes] == [
        ("Pizza", 4, 0),
        ("Ramen", 2, 0),
    ]
    assert all(t.form_id == form.id for t in form.themes)
    assert await _row_counts(db_session) == (1, 2)


@pytest.mark.parametrize(
    "payload",
    [
        {"title": "", "themes": [{"name": "Pizza", "maxVotes": 1}]},
        {"title": "Lunch", "themes": []},
        {"title": "Lunch"},
        {"title": "Lunch", "themes": [{"name": "", "maxVotes": 1}]},
        {"title": "Lunch", "themes": [{"name": "   ", "maxVotes": 1}]},
        {"title": "Lunch", "themes": [{"name": "Pizza"}]},
        {"title": "Lunch", "themes": [{"name": "Pizza", "maxVotes": 0}]},
        {"title": "Lunch", "themes": [{"name": "Pizza", "maxVotes": 2}, {"name": "Sushi", "maxVotes": -1}]},
    ],
)
async def test_invalid_form_creates_no_rows(db_session, owner, payload):
    with pytest.raises(ValidationError):
        await create_form(db_session, owner.id, FormCreate(**payload))

    assert await _row_counts(db_session) == (0, 0)


async def test_creating_a_form_invalidates_theme_cache(db_session, owner, theme_repository):
    before = await theme_repository.list_themes(db_session)

    await create_form(
        db_session,
        owner.id,
        FormCreate(title="Lunch", themes=[{"name": "Pizza", "maxVotes": 2}]),
        themes=theme_repository,
    )
    after = await theme_repository.list_themes(db_session)

    assert len(after) == len(before) + 1


async def test_list_forms_is_newest_first_and_scoped_to_creator(db_session, owner):
    older = await create_form(
        db_session, owner.id, FormCreate(title="Older", themes=[{"name": "A", "maxVotes": 1}])
    )
    newer = await create_form(
        db_session, owner.id, FormCreate(title="Newer", themes=[{"name": "B", "maxVotes": 1}])
    )

    forms = await list_forms(db_session, owner.id)

    assert [f.id for f in forms] == [newer.id, older.id]
    assert await list_forms(db_session, "someone-else") == []


async def test_get_form(db_session, owner):
    created = await create_form(
        db_session, owner.id, FormCreate(title="Lunch", themes=[{"name": "A", "maxVotes": 1}])
    )

    fetched = await get_form(db_session, created.id)

    assert fetched.id == created.id
    assert [t.name for t in fetched.themes] == ["A"]

    with pytest.raises(NotFound):
        await get_form(db_session, "missing")
