# tests/database/test_record_repo.py
from datetime import date, timedelta

from sqlalchemy import select, func

from luna.database.models import Link, Record, RecordGenre, IdolParticipation
from luna.database.repos.lookup_repo import LookupRepo
from luna.database.repos.record_repo import RecordRepo
from luna.domain.dataclasses.pagination import PageQuery
from luna.domain.dataclasses.payloads import (
    JunctionRef,
    LinkCreate,
    LookupCandidate,
    RecordCreate,
    RecordFilter,
    RecordUpdate,
)
from luna.domain.enums import LookupKind
from luna.services.clock.system_clock import FixedClock


def _count(db, model, **where):
    stmt = select(func.count()).select_from(model)
    for k, v in where.items():
        stmt = stmt.where(getattr(model, k) == v)
    return db.execute(stmt).scalar_one()


def _update_payload(**overrides):
    base = dict(
        title="New",
        date=date(2001, 1, 1),
        duration=90,
        director_id=1,
        studio_id=1,
        label_id=1,
        series_id=1,
        has_links=False,
        permission=1,
        local_img_count=4,
        modified_by="editor",
    )
    base.update(overrides)
    return RecordUpdate(**base)


def test_create_stamps_dates_and_inserts_children(db, clock):
    g = LookupRepo(db, LookupKind.genre).create_or_dedupe(LookupCandidate(name="G"))
    i = LookupRepo(db, LookupKind.idol).create_or_dedupe(LookupCandidate(name="I"))
    repo = RecordRepo(db, clock)

    rid = repo.create(RecordCreate(
        id="NEW-1",
        genres=[JunctionRef(g, manual=True), JunctionRef(g)],
        idols=[JunctionRef(i)],
        links=[LinkCreate(name="l1", link="u1")],
    ))

    assert rid == "NEW-1"
    row = db.get(Record, "NEW-1")
    assert row.create_time == row.update_time == clock.today()
    # duplicate genre ids collapse to the first occurrence
    assert _count(db, RecordGenre, record_id="NEW-1") == 1
    assert db.execute(select(RecordGenre.manual).where(RecordGenre.record_id == "NEW-1")).scalar_one() is True
    assert _count(db, IdolParticipation, record_id="NEW-1") == 1
    assert _count(db, Link, record_id="NEW-1") == 1
    assert row.has_links is True


def test_create_existing_id_is_a_no_op(db, clock):
    repo = RecordRepo(db, clock)
    repo.create(RecordCreate(id="DUP", title="first"))
    assert repo.create(RecordCreate(id="DUP", title="second", links=[LinkCreate(name="x")])) == "DUP"
    assert repo.load("DUP").title == "first"
    assert _count(db, Link, record_id="DUP") == 0


def test_update_replaces_fields_and_returns_own_write(db, clock):
    repo = RecordRepo(db, clock)
    d = LookupRepo(db, LookupKind.director).create_or_dedupe(LookupCandidate(name="D2"))
    g = LookupRepo(db, LookupKind.genre).create_or_dedupe(LookupCandidate(name="G"))
    repo.create(RecordCreate(id="UPD", genres=[JunctionRef(g)]))

    later = FixedClock(clock.today() + timedelta(days=3))
    agg = RecordRepo(db, later).update("UPD", _update_payload(director_id=d))

    assert agg.title == "New"
    assert agg.director.id == d
    assert agg.modified_by == "editor"
    assert agg.update_time == later.today()
    assert agg.create_time == clock.today()
    # genres=None keeps existing associations
    assert [x.genre.id for x in agg.genres] == [g]


def test_update_can_replace_junctions(db, clock):
    repo = RecordRepo(db, clock)
    g1 = LookupRepo(db, LookupKind.genre).create_or_dedupe(LookupCandidate(name="G1"))
    g2 = LookupRepo(db, LookupKind.genre).create_or_dedupe(LookupCandidate(name="G2"))
    i1 = LookupRepo(db, LookupKind.idol).create_or_dedupe(LookupCandidate(name="I1"))
    repo.create(RecordCreate(id="J", genres=[JunctionRef(g1)], idols=[JunctionRef(i1)]))

    agg = repo.update("J", _update_payload(genres=[JunctionRef(g1), JunctionRef(g2, manual=True)], idols=[]))

    assert [(x.genre.id, x.manual) for x in agg.genres] == [(g1, False), (g2, True)]
    assert agg.idols == []


def test_update_missing_returns_none(db, clock):
    assert RecordRepo(db, clock).update("missing", _update_payload()) is None


def test_delete_cascades(db, clock):
    g = LookupRepo(db, LookupKind.genre).create_or_dedupe(LookupCandidate(name="G"))
    repo = RecordRepo(db, clock)
    repo.create(RecordCreate(id="DEL", genres=[JunctionRef(g)], links=[LinkCreate(name="l")]))

    assert repo.delete("DEL") is True
    db.expire_all()
    assert repo.load("DEL") is None
    assert _count(db, RecordGenre, record_id="DEL") == 0
    assert _count(db, Link, record_id="DEL") == 0
    # the genre itself is shared and survives
    assert LookupRepo(db, LookupKind.genre).find_by_id(g) is not None
    assert repo.delete("DEL") is False


def test_add_links_skips_known_urls(db, clock):
    repo = RecordRepo(db, clock)
    repo.create(RecordCreate(id="L", links=[LinkCreate(name="a", link="u1")]))

    added = repo.add_links("L", [
        LinkCreate(name="a again", link="u1"),
        LinkCreate(name="b", link="u2"),
        LinkCreate(name="b dup", link="u2"),
    ])

    assert added == 1
    agg = repo.load("L")
    assert [x.link for x in agg.links] == ["u1", "u2"]
    assert agg.has_links is True
    assert repo.add_links("missing", [LinkCreate(name="x")]) is None


def test_add_links_marks_has_links(db, clock):
    repo = RecordRepo(db, clock)
    repo.create(RecordCreate(id="NL"))
    assert repo.load("NL").has_links is False
    assert repo.add_links("NL", [LinkCreate(name="x", link="u")]) == 1
    assert repo.load("NL").has_links is True


def test_find_all_ids_and_filters(db, clock):
    d = LookupRepo(db, LookupKind.director).create_or_dedupe(LookupCandidate(name="D"))
    repo = RecordRepo(db, clock)
    repo.create(RecordCreate(id="B-2", title="Night Train", director_id=d))
    repo.create(RecordCreate(id="A-1", title="Day train"))
    repo.create(RecordCreate(id="C-3", title="Night Bus"))

    assert repo.find_all_ids() == ["A-1", "B-2", "C-3"]
    assert [r.id for r in repo.find_list(RecordFilter(title="Night"))] == ["B-2", "C-3"]
    assert [r.id for r in repo.find_list(RecordFilter(title="train"))] == ["A-1"]
    assert [r.id for r in repo.find_list(RecordFilter(director_id=d))] == ["B-2"]
    assert [r.id for r in repo.find_list(RecordFilter(id="C-3"))] == ["C-3"]
    # id matches as a substring, like title
    assert [r.id for r in repo.find_list(RecordFilter(id="-2"))] == ["B-2"]
    assert [r.id for r in repo.find_list(RecordFilter(id="-"))] == ["A-1", "B-2", "C-3"]
    assert len(repo.find_list(RecordFilter(title="  "))) == 3


def test_find_list_paginated(db, clock):
    repo = RecordRepo(db, clock)
    for n in range(5):
        repo.create(RecordCreate(id=f"P-{n}"))

    page = repo.find_list_paginated(None, PageQuery(limit=2, offset=2))
    assert page.count == 5
    assert [r.id for r in page.results] == ["P-2", "P-3"]
    assert page.next == "?limit=2&offset=4"
    assert page.previous == "?limit=2&offset=0"


def test_find_by_lookup_fk_and_junction(db, clock):
    studio = LookupRepo(db, LookupKind.studio).create_or_dedupe(LookupCandidate(name="S"))
    idol = LookupRepo(db, LookupKind.idol).create_or_dedupe(LookupCandidate(name="I"))
    repo = RecordRepo(db, clock)
    repo.create(RecordCreate(id="X1", studio_id=studio, idols=[JunctionRef(idol)]))
    repo.create(RecordCreate(id="X2", studio_id=studio))
    repo.create(RecordCreate(id="X3", idols=[JunctionRef(idol)]))

    by_studio = repo.find_by_lookup(LookupKind.studio, studio, PageQuery(limit=1))
    assert by_studio.count == 2
    assert [r.id for r in by_studio.results] == ["X1"]
    assert by_studio.next == "?limit=1&offset=1"

    by_idol = repo.find_by_lookup("idol", idol, PageQuery())
    assert [r.id for r in by_idol.results] == ["X1", "X3"]
    assert by_idol.next is None and by_idol.previous is None
