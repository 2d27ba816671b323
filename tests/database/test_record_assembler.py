# tests/database/test_record_assembler.py
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import text

from luna.common.errors import RecordIntegrityError
from luna.database.models import RecordGenre as DBRecordGenre
from luna.database.repos.lookup_repo import LookupRepo
from luna.database.repos.record_assembler import RecordAssembler
from luna.database.repos.record_repo import RecordRepo
from luna.domain.dataclasses.payloads import JunctionRef, LinkCreate, LookupCandidate, RecordCreate
from luna.domain.enums import LookupKind


def _lookup(db, kind, name):
    return LookupRepo(db, kind).create_or_dedupe(LookupCandidate(name=name))


def _full_record(db, clock, record_id="ABC-001"):
    ids = {k: _lookup(db, k, f"{k.value} one") for k in LookupKind}
    g2 = _lookup(db, LookupKind.genre, "genre two")
    i2 = _lookup(db, LookupKind.idol, "idol two")
    i3 = _lookup(db, LookupKind.idol, "idol three")

    RecordRepo(db, clock).create(RecordCreate(
        id=record_id,
        title="A Title",
        date=date(2020, 2, 2),
        duration=120,
        director_id=ids[LookupKind.director],
        studio_id=ids[LookupKind.studio],
        label_id=ids[LookupKind.label],
        series_id=ids[LookupKind.series],
        genres=[JunctionRef(ids[LookupKind.genre], manual=True), JunctionRef(g2)],
        idols=[JunctionRef(ids[LookupKind.idol]), JunctionRef(i2, manual=True), JunctionRef(i3)],
        links=[
            LinkCreate(name="part 1", size=Decimal("1.50"), link="magnet:1", star=True),
            LinkCreate(name="part 2"),
        ],
    ))
    return ids


def test_load_missing_record_is_none(db):
    assert RecordAssembler(db).load("nope") is None


def test_load_is_complete_and_threads_manual_flags(db, clock):
    ids = _full_record(db, clock)

    agg = RecordAssembler(db).load("ABC-001")

    assert agg.title == "A Title"
    assert agg.duration == 120
    assert agg.director.id == ids[LookupKind.director]
    assert agg.studio.name == "studio one"
    assert agg.label.id == ids[LookupKind.label]
    assert agg.series.id == ids[LookupKind.series]

    assert len(agg.genres) == 2
    assert agg.genre_ids() == [ids[LookupKind.genre], agg.genres[1].genre.id]
    assert [(g.genre.name, g.manual) for g in agg.genres] == [("genre one", True), ("genre two", False)]

    assert len(agg.idols) == 3
    assert agg.idol_ids()[0] == ids[LookupKind.idol]
    assert [(i.idol.name, i.manual) for i in agg.idols] == [
        ("idol one", False), ("idol two", True), ("idol three", False),
    ]

    assert len(agg.links) == 2
    first, second = agg.links
    assert (first.name, first.size, first.link, first.star) == ("part 1", Decimal("1.50"), "magnet:1", True)
    assert (second.name, second.size, second.link, second.star) == ("part 2", Decimal("-1"), "", False)
    assert second.date == date(1970, 1, 1)
    assert agg.has_links is True


def test_record_without_children(db, clock):
    RecordRepo(db, clock).create(RecordCreate(id="BARE"))
    agg = RecordAssembler(db).load("BARE")
    assert agg.genres == [] and agg.idols == [] and agg.links == []
    assert agg.director.name == "Unknown Director"
    assert agg.series.name == "Unknown Series"
    assert agg.create_time == agg.update_time == clock.today()


def test_missing_director_is_integrity_fault(db, clock, break_fk):
    RecordRepo(db, clock).create(RecordCreate(id="BROKEN"))
    break_fk(db, "BROKEN", missing_id=424242)

    with pytest.raises(RecordIntegrityError) as ei:
        RecordAssembler(db).load("BROKEN")

    err = ei.value
    assert str(err) == "Director not found"
    assert (err.record_id, err.kind, err.missing_id) == ("BROKEN", "director", 424242)


def test_orphan_junction_rows_are_dropped(db, clock):
    g = _lookup(db, LookupKind.genre, "kept")
    RecordRepo(db, clock).create(RecordCreate(id="ORPH", genres=[JunctionRef(g)]))
    db.flush()

    # a junction row pointing at no genre; only reachable with FK checks off
    if db.get_bind().dialect.name == "sqlite":
        db.execute(text("PRAGMA defer_foreign_keys=ON"))
    else:
        db.execute(text("SET LOCAL session_replication_role = replica"))
    db.add(DBRecordGenre(record_id="ORPH", genre_id=555555, manual=True))
    db.flush()

    agg = RecordAssembler(db).load("ORPH")
    assert [x.genre.id for x in agg.genres] == [g]


def test_load_many_assembles_each_row(db, clock):
    _full_record(db, clock, "M-1")
    RecordRepo(db, clock).create(RecordCreate(id="M-2"))

    from luna.database.models import Record
    rows = [db.get(Record, "M-1"), db.get(Record, "M-2")]
    aggs = RecordAssembler(db).load_many(rows)
    assert [a.id for a in aggs] == ["M-1", "M-2"]
    assert len(aggs[0].idols) == 3
    assert aggs[1].idols == []


def test_load_many_propagates_integrity_fault(db, clock, break_fk):
    from luna.database.models import Record
    repo = RecordRepo(db, clock)
    repo.create(RecordCreate(id="OK"))
    repo.create(RecordCreate(id="BAD"))
    break_fk(db, "BAD")

    with pytest.raises(RecordIntegrityError):
        RecordAssembler(db).load_many([db.get(Record, "OK"), db.get(Record, "BAD")])
