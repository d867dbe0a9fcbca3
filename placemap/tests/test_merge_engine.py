from __future__ import annotations

from placemap.merging.engine import MergeEngine, coordinate_bucket, overlay_fields
from placemap.places.models import Place, PlaceData


def test_identical_record_twice_keeps_single_source():
    engine = MergeEngine()
    p = Place(place_id="1", name="A", lat=25.0, lng=121.0)
    engine.add_places([p], "S")
    engine.add_places([p], "S")

    result = engine.get_result()
    assert len(result) == 1
    assert result[0].source == "S"


def test_same_place_id_merges_and_last_write_wins():
    engine = MergeEngine()
    engine.add_places([Place(place_id="1", name="A", lat=25.0, lng=121.0)], "S1")
    engine.add_places([Place(place_id="1", name="A", lat=25.1, lng=121.1)], "S2")

    result = engine.get_result()
    assert len(result) == 1
    assert result[0].source == "S1 · S2"
    assert result[0].lat == 25.1


def test_close_coordinates_merge_across_place_ids():
    engine = MergeEngine()
    engine.add_places([Place(place_id="a", name="Cafe", lat=25.033333, lng=121.566666)], "S1")
    engine.add_places([Place(place_id="b", name="Cafe 2", lat=25.033334, lng=121.566667)], "S2")

    result = engine.get_result()
    assert len(result) == 1
    assert result[0].source == "S1 · S2"
    # the later record's fields win, including its id
    assert result[0].place_id == "b"
    assert result[0].name == "Cafe 2"


def test_coordinates_differing_after_rounding_stay_separate():
    engine = MergeEngine()
    engine.add_places([Place(place_id="a", name="A", lat=25.00001, lng=121.5)], "S1")
    engine.add_places([Place(place_id="b", name="B", lat=25.00009, lng=121.5)], "S1")

    assert len(engine.get_result()) == 2


def test_name_is_key_when_place_id_empty():
    engine = MergeEngine()
    engine.add_places([Place(place_id="", name="Corner Books")], "Sheet")
    engine.add_places([Place(place_id="", name="Corner Books", url="https://x")], "List")

    result = engine.get_result()
    assert len(result) == 1
    assert result[0].source == "Sheet · List"
    assert result[0].url == "https://x"


def test_records_without_coordinates_never_merge_by_bucket():
    engine = MergeEngine()
    engine.add_places(
        [Place(place_id="1", name="Same"), Place(place_id="2", name="Same")], "S"
    )
    assert len(engine.get_result()) == 2


def test_zero_and_unparsable_coordinates_are_ignored():
    engine = MergeEngine()
    engine.add_places(
        [
            Place(place_id="1", name="A", lat=0, lng=0),
            Place(place_id="2", name="B", lat=0, lng=0),
            Place(place_id="3", name="C", lat="abc", lng="def"),
            Place(place_id="4", name="D", lat="nan", lng="nan"),
            Place(place_id="5", name="E", lat="nan", lng="nan"),
        ],
        "S",
    )
    assert len(engine.get_result()) == 5


def test_string_coordinates_share_bucket_with_floats():
    engine = MergeEngine()
    engine.add_places([Place(place_id="1", name="A", lat="25.03331", lng="121.56661")], "S1")
    engine.add_places([Place(place_id="2", name="B", lat=25.03334, lng=121.56664)], "S2")

    assert len(engine.get_result()) == 1


def test_bucket_owner_is_first_key():
    engine = MergeEngine()
    engine.add_places([Place(place_id="first", name="A", lat=24.5, lng=120.5)], "S1")
    engine.add_places([Place(place_id="second", name="B", lat=24.5, lng=120.5)], "S2")
    # a record keyed "first" with no coordinates still lands on the same entry
    engine.add_places([Place(place_id="first", name="A again")], "S3")

    result = engine.get_result()
    assert len(result) == 1
    assert result[0].source == "S1 · S2 · S3"
    assert result[0].name == "A again"


def test_explicit_falsy_values_overlay_but_unset_fields_do_not():
    engine = MergeEngine()
    engine.add_places(
        [Place(place_id="1", name="A", description="Old", city="Taipei", permanently_closed=True)],
        "S1",
    )
    engine.add_places(
        [Place(place_id="1", name="A", description="", permanently_closed=False)], "S2"
    )

    merged = engine.get_result()[0]
    assert merged.description == ""
    assert merged.permanently_closed is False
    assert merged.city == "Taipei"


def test_explicit_none_does_not_blank_existing_value():
    engine = MergeEngine()
    engine.add_places([Place(place_id="1", name="A", city="Taipei")], "S1")
    engine.add_places([Place(place_id="1", name="A", city=None)], "S2")

    assert engine.get_result()[0].city == "Taipei"


def test_source_field_on_input_is_replaced_by_aggregate():
    engine = MergeEngine()
    engine.add_places([Place(place_id="1", name="A", source="ignored")], "S1")
    engine.add_places([Place(place_id="1", name="A", source="also ignored")], "S2")

    assert engine.get_result()[0].source == "S1 · S2"


def test_result_order_is_first_insertion_order():
    engine = MergeEngine()
    engine.add_places([Place(place_id="x", name="X"), Place(place_id="y", name="Y")], "S1")
    engine.add_places([Place(place_id="z", name="Z"), Place(place_id="x", name="X2")], "S2")

    assert [p.place_id for p in engine.get_result()] == ["x", "y", "z"]


def test_get_result_returns_copies_and_is_repeatable():
    engine = MergeEngine()
    engine.add_places([Place(place_id="1", name="A")], "S")

    first = engine.get_result()
    first[0].name = "mutated"
    second = engine.get_result()
    assert second[0].name == "A"
    assert len(engine) == 1


def test_empty_keys_collapse_into_one_slot():
    engine = MergeEngine()
    engine.add_places([Place(), Place(category="Food")], "S")

    result = engine.get_result()
    assert len(result) == 1
    assert result[0].category == "Food"


def test_empty_batch_is_a_no_op():
    engine = MergeEngine()
    engine.add_places([], "S")
    assert engine.get_result() == []


def test_add_document_uses_title_as_source():
    engine = MergeEngine()
    engine.add_document(PlaceData(title="Island", places=[Place(place_id="1", name="A")]))
    assert engine.get_result()[0].source == "Island"


def test_coordinate_bucket_rounds_to_four_decimals():
    assert coordinate_bucket(Place(lat=25.033333, lng=121.566666)) == "25.0333,121.5667"
    assert coordinate_bucket(Place(lat=25.0, lng=None)) is None


def test_overlay_fields_only_includes_set_values():
    incoming = Place(place_id="1", name="A", lat=0)
    assert overlay_fields(incoming) == {"place_id": "1", "name": "A", "lat": 0}


def test_coordinate_bucket_rounds_exact_ties_away_from_zero():
    assert coordinate_bucket(Place(lat=25.03125, lng=121.03125)) == "25.0313,121.0313"
    assert coordinate_bucket(Place(lat=-33.96875, lng=151.21875)) == "-33.9688,151.2188"


def test_tie_coordinates_share_bucket_with_rounded_neighbour():
    engine = MergeEngine()
    engine.add_places([Place(place_id="a", name="A", lat=25.03125, lng=121.03125)], "S1")
    engine.add_places([Place(place_id="b", name="B", lat=25.0313, lng=121.0313)], "S2")

    assert len(engine.get_result()) == 1


def test_null_text_fields_keep_existing_values():
    engine = MergeEngine()
    engine.add_places([Place(place_id="1", name="A", description="Old", url="https://a")], "S1")
    engine.add_places(
        [Place.model_validate({"place_id": "1", "name": "A", "description": None, "url": None})],
        "S2",
    )

    merged = engine.get_result()[0]
    assert merged.description == "Old"
    assert merged.url == "https://a"
