import pytest

from movie_catalog.errors import NotFound
from movie_catalog.queries import MovieQueryService


@pytest.fixture
def service(db):
    return MovieQueryService(db)


def test_list_all_is_most_recent_first_with_associations(service, catalog, make_movie):
    make_movie("Old", catalog["action"], catalog["usa"])
    make_movie("New", catalog["drama"], catalog["korea"])

    result = service.list_all()

    assert [m.name for m in result.items] == ["New", "Old"]
    assert result.items[0].genre.name == "Drama"
    assert result.items[0].country.name == "Korea"
    assert result.total_pages == 1
    assert result.count == 2


def test_list_all_empty_is_not_an_error(service):
    result = service.list_all()
    assert result.items == []
    assert result.total_pages == 0


def test_pagination_windows_and_total_pages(service, make_movie):
    for i in range(25):
        make_movie(f"Movie {i:02d}")

    first = service.list_all(page=1, limit=10)
    third = service.list_all(page=3, limit=10)

    assert first.total_pages == 3
    assert [m.name for m in first.items][:2] == ["Movie 24", "Movie 23"]
    assert [m.name for m in third.items] == [f"Movie {i:02d}" for i in range(4, -1, -1)]


def test_page_past_the_end_is_empty(service, make_movie):
    make_movie("Only")
    result = service.list_all(page=5, limit=10)
    assert result.items == []
    assert result.total_pages == 1


def test_missing_or_invalid_page_params_use_defaults(service, make_movie):
    for i in range(12):
        make_movie(f"M{i}")

    result = service.list_all(page=-2, limit=0)

    assert len(result.items) == 10
    assert result.total_pages == 2


def test_search_is_partial_match(service, make_movie):
    make_movie("The Matrix")
    make_movie("Matrix Reloaded")
    make_movie("Speed")

    result = service.search("Matrix")

    assert sorted(m.name for m in result.items) == ["Matrix Reloaded", "The Matrix"]


def test_search_without_matches(service, make_movie):
    make_movie("Speed")
    result = service.search("zzz")
    assert result.items == []
    assert result.total_pages == 0


def test_search_treats_wildcards_literally(service, make_movie):
    make_movie("100% Love")
    make_movie("1000 Days")
    assert [m.name for m in service.search("100%").items] == ["100% Love"]


def test_search_without_query_lists_everything(service, make_movie):
    make_movie("A")
    make_movie("B")
    assert service.search(None).count == 2


def test_filters_by_foreign_keys(service, catalog, make_movie):
    make_movie("Action USA", catalog["action"], catalog["usa"], catalog["keanu"])
    make_movie("Drama Korea", catalog["drama"], catalog["korea"], catalog["song"])
    make_movie("Action Korea", catalog["action"], catalog["korea"], catalog["song"])

    by_genre = service.list_by_genre(catalog["action"].id)
    by_country = service.list_by_country(catalog["korea"].id)
    by_actor = service.list_by_actor(catalog["keanu"].id)

    assert [m.name for m in by_genre.items] == ["Action Korea", "Action USA"]
    assert [m.name for m in by_country.items] == ["Action Korea", "Drama Korea"]
    assert [m.name for m in by_actor.items] == ["Action USA"]


def test_filter_with_unknown_id_is_empty(service, make_movie):
    make_movie("Anything")
    result = service.list_by_genre(999)
    assert result.items == []
    assert result.total_pages == 0


def test_get_by_id_loads_all_associations(service, catalog, make_movie):
    movie = make_movie("Matrix", catalog["action"], catalog["usa"], catalog["keanu"])

    found = service.get_by_id(movie.id)

    assert found.genre.name == "Action"
    assert found.country.name == "USA"
    assert found.actor.name == "Keanu"


def test_get_by_id_missing(service):
    with pytest.raises(NotFound):
        service.get_by_id(12345)


def test_related_prefers_shared_genre_or_country(service, catalog, make_movie):
    target = make_movie("Target", catalog["action"], catalog["usa"])
    same_genre = make_movie("Same Genre", catalog["action"], catalog["korea"])
    make_movie("Unrelated", catalog["drama"], catalog["korea"])
    same_country = make_movie("Same Country", catalog["drama"], catalog["usa"])

    clicked, related = service.get_related(target.id)

    assert clicked.id == target.id
    assert [m.name for m in related] == [same_country.name, same_genre.name, "Unrelated"]


def test_related_excludes_target_and_caps_at_ten(service, catalog, make_movie):
    target = make_movie("Target", catalog["action"])
    for i in range(15):
        make_movie(f"Other {i}", catalog["action"] if i % 2 else catalog["drama"])

    _, related = service.get_related(target.id)

    assert len(related) == 10
    assert target.id not in [m.id for m in related]
    assert len({m.id for m in related}) == 10


def test_related_missing_movie(service):
    with pytest.raises(NotFound):
        service.get_related(42)


def test_top_viewed_caps_at_fifteen_sorted_desc(service, make_movie):
    for i in range(20):
        make_movie(f"M{i}", view=i * 3 % 17)

    top = service.top_viewed()

    views = [m.view for m in top]
    assert len(top) == 15
    assert views == sorted(views, reverse=True)
