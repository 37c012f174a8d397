from app.boudoir.core.images import parse_images, serialize_images


def test_parse_images_accepts_json_array():
    raw = '["https://cdn.example.com/a.jpg", "https://cdn.example.com/b.jpg"]'

    assert parse_images(raw) == ["https://cdn.example.com/a.jpg", "https://cdn.example.com/b.jpg"]
    assert parse_images(raw.encode("utf-8")) == parse_images(raw)


def test_parse_images_tolerates_bad_values():
    assert parse_images(None) == []
    assert parse_images("   ") == []
    assert parse_images("not json") == []
    assert parse_images('{"url": "x"}') == []
    assert parse_images('["https://cdn.example.com/a.jpg", 3, null]') == ["https://cdn.example.com/a.jpg"]


def test_serialize_images():
    assert serialize_images(None) == "[]"
    assert serialize_images("https://cdn.example.com/a.jpg") == '["https://cdn.example.com/a.jpg"]'
    assert serialize_images(["https://cdn.example.com/é.jpg"]) == '["https://cdn.example.com/é.jpg"]'


def test_article_with_malformed_stored_images_reads_as_empty_list(client, db_session):
    from sqlalchemy import bindparam, text

    from app.boudoir.db.models import GUID, Article
    from tests.marketplace_helpers import create_article, create_category, create_user

    article = create_article(db_session, create_user(db_session, role="SELLER"), create_category(db_session))
    statement = text("UPDATE articles SET images = :raw WHERE id = :article_id").bindparams(
        bindparam("article_id", type_=GUID())
    )
    db_session.execute(statement, {"raw": "not json", "article_id": article.id})
    db_session.commit()
    db_session.expire_all()

    assert db_session.get(Article, article.id).images == []

    response = client.get(f"/api/articles/{article.id}")
    assert response.status_code == 200
    assert response.json()["article"]["images"] == []
