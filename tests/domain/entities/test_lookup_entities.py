import pytest

from luna.common.errors import UnknownLookupKind
from luna.domain.dataclasses.payloads import LookupCandidate, LookupPatch
from luna.domain.entities.lookup import Lookup
from luna.domain.enums import LookupKind, RECORD_FK_KINDS


def test_candidate_defaults_link_and_manual():
    assert LookupCandidate(name="Ann").natural_key() == ("Ann", "", False)
    assert LookupCandidate(name="Ann", link="x", manual=True).natural_key() == ("Ann", "x", True)


def test_empty_strings_are_a_valid_key():
    assert LookupCandidate(name="", link="").natural_key() == ("", "", False)


def test_patch_merged_key_keeps_unset_fields():
    patch = LookupPatch(link="new")
    assert patch.merged_key("Ann", "old", True) == ("Ann", "new", True)
    assert LookupPatch(manual=False).merged_key("Ann", "old", True) == ("Ann", "old", False)


def test_lookup_natural_key_ignores_id():
    a = Lookup(id=1, name="Ann")
    b = Lookup(id=2, name="Ann")
    assert a.natural_key == b.natural_key
    assert a != b


@pytest.mark.parametrize("raw,expected", [
    ("director", LookupKind.director),
    (" Genre ", LookupKind.genre),
    ("IDOL", LookupKind.idol),
])
def test_lookup_kind_parse(raw, expected):
    assert LookupKind.parse(raw) is expected


def test_lookup_kind_parse_rejects_unknown():
    with pytest.raises(UnknownLookupKind):
        LookupKind.parse("records")


def test_junction_kinds():
    assert [k for k in LookupKind if k.via_junction] == [LookupKind.genre, LookupKind.idol]
    assert not any(k.via_junction for k in RECORD_FK_KINDS)
    assert LookupKind.series.display_name == "Series"
