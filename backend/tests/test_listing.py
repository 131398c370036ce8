"""Tests for the listing service."""
from imagehost.services.ingestion import ingest_file
from imagehost.services.listing import list_file_info, static_url


async def test_list_empty_store(test_db):
    assert await list_file_info(test_db, "http://test/static") == []


async def test_list_derives_static_urls(test_db, storage):
    await ingest_file(test_db, storage, "a.png", b"a")
    await ingest_file(test_db, storage, "b.png", b"b")

    items = await list_file_info(test_db, "http://test/static")

    assert len(items) == 2
    by_name = {item["name"]: item for item in items}
    assert by_name["a.png"]["file_path"] == "http://test/static/a.png"
    assert by_name["b.png"]["file_path"] == "http://test/static/b.png"
    assert all(item["is_favorite"] is False for item in items)


def test_static_url_tolerates_trailing_slash():
    assert static_url("http://cdn.local/static/", "cat.png") == "http://cdn.local/static/cat.png"
    assert static_url("http://cdn.local/static", "cat.png") == "http://cdn.local/static/cat.png"


def test_static_url_quotes_unsafe_names():
    assert static_url("http://test/static", "my cat.png") == "http://test/static/my%20cat.png"
    assert static_url("http://test/static", "a#1.png") == "http://test/static/a%231.png"
