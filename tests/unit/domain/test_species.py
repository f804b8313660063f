"""Unit tests for the species list."""

from fieldsync.domain.models import WILDLIFE_SPECIES, is_known_species


class TestSpeciesList:
    """Test WILDLIFE_SPECIES and is_known_species."""

    def test_other_is_last(self) -> None:
        assert WILDLIFE_SPECIES[-1] == "Other"

    def test_known_species_case_insensitive(self) -> None:
        assert is_known_species("red fox")
        assert is_known_species("  Bald Eagle ")

    def test_unlisted_species(self) -> None:
        assert not is_known_species("Jackalope")
