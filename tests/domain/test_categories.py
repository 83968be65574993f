"""Tests for lana.domain.categories pure functions."""

from lana.domain.categories import (
    Category,
    build_lookup,
    category_label,
    find_category,
    normalize_categories,
    normalize_category,
    resolve_category_ref,
)


class TestNormalizeCategories:
    """Tests for category normalization across key aliases."""

    def test_scenario_mixed_shapes(self) -> None:
        """Mixed key spellings normalize to uniform records."""
        raw = [{"ID": 7, "Nombre": "Renta"}, {"id_category": 8, "name": "Luz"}]

        result = normalize_categories(raw)

        assert result == [Category(id=7, name="Renta"), Category(id=8, name="Luz")]

    def test_records_without_id_dropped(self) -> None:
        raw = [{"name": "Sin id"}, {"id": 3, "name": "Comida"}]

        assert normalize_categories(raw) == [Category(id=3, name="Comida")]

    def test_missing_name_falls_back_to_id(self) -> None:
        assert normalize_category({"idCategory": 12}) == Category(id=12, name="12")

    def test_lowercase_nombre(self) -> None:
        assert normalize_category({"Id": "a1", "nombre": "Otros"}) == Category(id="a1", name="Otros")

    def test_id_priority(self) -> None:
        """The plain 'id' key wins over the other aliases."""
        assert normalize_category({"id": 1, "ID": 2, "name": "x"}).id == 1

    def test_non_list_yields_empty(self) -> None:
        assert normalize_categories({"detail": "Unauthorized"}) == []
        assert normalize_categories(None) == []

    def test_non_mapping_entries_skipped(self) -> None:
        assert normalize_categories(["oops", 4, {"id": 1, "name": "A"}]) == [Category(id=1, name="A")]


class TestLookup:
    """Tests for build_lookup and the label helpers."""

    def test_build_lookup(self) -> None:
        lookup = build_lookup([Category(id=7, name="Renta"), Category(id="8", name="Luz")])

        assert lookup.name_to_id == {"Renta": 7, "Luz": "8"}
        assert lookup.id_to_name == {"7": "Renta", "8": "Luz"}

    def test_last_write_wins(self) -> None:
        lookup = build_lookup([Category(id=1, name="A"), Category(id=1, name="B")])

        assert lookup.id_to_name == {"1": "B"}

    def test_label_matches_numeric_and_string_ids(self) -> None:
        id_to_name = {"7": "Renta"}

        assert category_label(7, id_to_name) == "Renta"
        assert category_label("7", id_to_name) == "Renta"

    def test_label_placeholder(self) -> None:
        assert category_label(9, {}) == "Cat 9"

    def test_find_category(self) -> None:
        categories = [Category(id=7, name="Renta"), Category(id=8, name="Luz")]

        assert find_category(categories, "8") == Category(id=8, name="Luz")
        assert find_category(categories, 99) is None
        assert find_category(categories, None) is None


class TestResolveCategoryRef:
    """Tests for resolve_category_ref."""

    def setup_method(self) -> None:
        self.lookup = build_lookup([Category(id=7, name="Renta"), Category(id=8, name="Luz")])

    def test_exact_name(self) -> None:
        assert resolve_category_ref("Renta", self.lookup) == 7

    def test_case_insensitive_name(self) -> None:
        assert resolve_category_ref("  luz ", self.lookup) == 8

    def test_id(self) -> None:
        assert resolve_category_ref("7", self.lookup) == 7

    def test_unknown(self) -> None:
        assert resolve_category_ref("Viajes", self.lookup) is None
        assert resolve_category_ref("", self.lookup) is None


class TestResolverProperties:
    """Properties across normalization and lookup."""

    RAW = [{"ID": 5, "Nombre": "Renta"}, {"id": "6", "name": "Luz"}, {"idCategory": 7}, {"name": "x"}]

    def test_idempotent(self) -> None:
        assert normalize_categories(self.RAW) == normalize_categories(self.RAW)

    def test_ids_round_trip_to_names(self) -> None:
        """Known ids resolve to their names, unknown ids to the placeholder."""
        lookup = build_lookup(normalize_categories(self.RAW))

        assert [category_label(i, lookup.id_to_name) for i in (5, 6, "7", 8)] == ["Renta", "Luz", "7", "Cat 8"]
