import pytest

from relgraph.architecture.onto_sql import ForeignKey
from relgraph.inference.exceptions import AmbiguousEdgeName
from relgraph.inference.naming import EdgeNamer, pluralize, singularize, type_name


@pytest.mark.parametrize(
    "column, expected",
    [
        ("posterId", "poster"),
        ("fileId", "file"),
        ("thumbnail_id", "thumbnail"),
        ("ownerID", "owner"),
        ("parent_id", "parent"),
        ("author", "author"),
        ("id", "id"),
        ("_id", "_id"),
        ("Id", "Id"),
    ],
)
def test_base_name(column, expected):
    assert EdgeNamer().base_name(column) == expected


def test_base_name_custom_suffixes():
    namer = EdgeNamer(id_suffixes=("_fk", "_id"))
    assert namer.base_name("owner_fk") == "owner"
    assert namer.base_name("ownerId") == "ownerId"


def test_resolve_unused():
    assert EdgeNamer().resolve("file", {"poster"}, ("files", "fk")) == "file"


def test_resolve_qualifies_in_order():
    namer = EdgeNamer()
    assert namer.resolve("file", {"file"}, ("files", "fk")) == "files_file"
    assert namer.resolve("file", {"file", "files_file"}, ("files", "fk")) == "fk_file"


def test_resolve_skips_empty_qualifiers():
    namer = EdgeNamer()
    assert namer.resolve("file", {"file"}, (None, "", "fk")) == "fk_file"


def test_resolve_ambiguous():
    namer = EdgeNamer()
    with pytest.raises(AmbiguousEdgeName) as exc_info:
        namer.resolve(
            "file",
            {"file", "files_file", "fk_file"},
            ("files", "fk"),
            table="videos",
            symbol="fk",
        )
    assert exc_info.value.candidates == ["file", "files_file", "fk_file"]
    assert exc_info.value.table == "videos"
    assert exc_info.value.symbol == "fk"


def test_forward_name_falls_back_to_referenced_table():
    fk = ForeignKey(
        symbol="videos_poster_fkey",
        columns=["poster"],
        ref_table="Files",
        ref_columns=["id"],
    )
    namer = EdgeNamer()
    assert namer.forward_name("videos", fk, set()) == "poster"
    assert namer.forward_name("videos", fk, {"poster"}) == "files_poster"
    assert (
        namer.forward_name("videos", fk, {"poster", "files_poster"})
        == "videos_poster_fkey_poster"
    )


def test_inverse_name():
    fk = ForeignKey(
        symbol="videos_fileId_fkey", columns=["fileId"], ref_table="files", ref_columns=["id"]
    )
    namer = EdgeNamer()
    assert namer.inverse_name("videos", fk, "file", False, set()) == "videos"
    assert namer.inverse_name("videos", fk, "file", True, set()) == "video"
    assert namer.inverse_name("videos", fk, "file", False, {"videos"}) == "file_videos"


def test_inverse_name_self_reference():
    fk = ForeignKey(columns=["parent_id"], ref_table="categories", ref_columns=["id"])
    namer = EdgeNamer()
    assert namer.inverse_name("categories", fk, "parent", False, {"parent"}) == "children"
    assert namer.inverse_name("categories", fk, "parent", True, {"parent"}) == "child"

    fk = ForeignKey(columns=["manager_id"], ref_table="employees", ref_columns=["id"])
    assert namer.inverse_name("employees", fk, "manager", False, set()) == "employees"


@pytest.mark.parametrize(
    "plural, singular",
    [
        ("files", "file"),
        ("videos", "video"),
        ("categories", "category"),
        ("addresses", "address"),
        ("boxes", "box"),
        ("statuses", "status"),
        ("people", "person"),
        ("analyses", "analysis"),
        ("user_profiles", "user_profile"),
        ("metadata", "metadata"),
        ("movies", "movie"),
        ("cookies", "cookie"),
        ("vertices", "vertex"),
        ("caches", "cache"),
        ("niches", "niche"),
        ("aliases", "alias"),
        ("beaches", "beach"),
        ("parties", "party"),
        ("databases", "database"),
        ("knives", "knife"),
        ("alias", "alias"),
        ("movie", "movie"),
    ],
)
def test_singularize(plural, singular):
    assert singularize(plural) == singular


@pytest.mark.parametrize(
    "singular, plural",
    [
        ("file", "files"),
        ("category", "categories"),
        ("key", "keys"),
        ("box", "boxes"),
        ("child", "children"),
        ("person", "people"),
        ("user_profile", "user_profiles"),
        ("movie", "movies"),
        ("cache", "caches"),
        ("alias", "aliases"),
        ("vertex", "vertices"),
    ],
)
def test_pluralize(singular, plural):
    assert pluralize(singular) == plural


def test_singularize_keeps_case():
    assert singularize("People") == "Person"
    assert singularize("Files") == "File"


@pytest.mark.parametrize(
    "table, expected",
    [
        ("files", "File"),
        ("videos", "Video"),
        ("user_profiles", "UserProfile"),
        ("categories", "Category"),
        ("Video", "Video"),
        ("order-items", "OrderItem"),
        ("movies", "Movie"),
        ("cookies", "Cookie"),
        ("graph_vertices", "GraphVertex"),
        ("caches", "Cache"),
        ("aliases", "Alias"),
    ],
)
def test_type_name(table, expected):
    assert type_name(table) == expected
